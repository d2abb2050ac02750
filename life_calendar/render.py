import math
import os

try:
    import cairo
except ModuleNotFoundError:  # pragma: no cover - fallback when pycairo isn't available
    import cairocffi as cairo  # type: ignore[no-redef]

from life_calendar.grid import (
    LIFE_EXPECTANCY_MARKS,
    TOTAL_YEARS,
    WEEKS_PER_YEAR,
    GridState,
    row_label,
)

FONT_FAMILY_ENV_VAR = "LIFE_CALENDAR_FONT_FAMILY"
DEFAULT_TITLE: str = "LIFE CALENDAR"
DEFAULT_FILENAME: str = "life_calendar.pdf"
DEFAULT_A_SIZE: int = 2
DEFAULT_FONT_FAMILY: str = "serif"

ELAPSED_CHAR = "■"
REMAINING_CHAR = "□"
ELAPSED_MARK_CHAR = "◆"
REMAINING_MARK_CHAR = "◇"


def default_font_family() -> str:
    return os.environ.get(FONT_FAMILY_ENV_VAR) or DEFAULT_FONT_FAMILY


def describe_mark(year_index: int, week_index: int) -> str:
    return f"{year_index} years {week_index} weeks"


def legend_text() -> str:
    marks = " · ".join(
        f"{mark.label} {describe_mark(mark.year_index, mark.week_index)}"
        for mark in LIFE_EXPECTANCY_MARKS
    )
    return f"outlined: life expectancy, {marks}"


def summary_text(state: GridState) -> str:
    if state.birth is None:
        return "no birth date given"
    return (
        f"born {state.birth.isoformat()} · {state.weeks_lived():,} weeks lived"
        f" · as of {state.now.isoformat()}"
    )


def render_text(state: GridState) -> str:
    """Renders the grid as one line per year-row, labelled every fifth row."""
    label_width = len(str(TOTAL_YEARS))
    lines: list[str] = []
    for year_index in range(TOTAL_YEARS):
        cells: list[str] = []
        for week_index in range(WEEKS_PER_YEAR):
            elapsed = state.is_elapsed(year_index, week_index)
            if state.mark_at(year_index, week_index) is not None:
                cells.append(ELAPSED_MARK_CHAR if elapsed else REMAINING_MARK_CHAR)
            else:
                cells.append(ELAPSED_CHAR if elapsed else REMAINING_CHAR)
        lines.append(f"{row_label(year_index):>{label_width}} {''.join(cells)}")
    return "\n".join(lines)


class LifeCalendar:
    NUM_ROWS: int = TOTAL_YEARS
    NUM_COLUMNS: int = WEEKS_PER_YEAR
    MAX_A_SIZE: int = 6
    AZERO_HEIGHT: float = 2 ** (1 / 4)  # ≈ 1.189m
    MM_PER_PT: float = 0.3528

    def __init__(
        self,
        state: GridState,
        *,
        title: str | None = None,
        subtitle_text: str | None = None,
        filename: str | None = None,
        a_size: int | None = None,
        font_family: str | None = None,
    ) -> None:
        self.STATE: GridState = state
        a_size = DEFAULT_A_SIZE if a_size is None else a_size
        if (a_size < 0) or (a_size > self.MAX_A_SIZE):
            raise ValueError(f"Invalid A size, must be between A0 and A{self.MAX_A_SIZE}")
        # ≈ 594mm / 1683pt for A2 size
        self.DOC_HEIGHT: float = (
            self.AZERO_HEIGHT / (2 ** (1 / 2)) ** a_size * 1000 / self.MM_PER_PT
        )
        self.DOC_WIDTH: float = self.DOC_HEIGHT / 2 ** (1 / 2)
        self.TITLE: str = title or DEFAULT_TITLE
        self.FILENAME: str = filename or DEFAULT_FILENAME
        self.SUBTITLE_TEXT: str | None = subtitle_text
        self.FONT: str = font_family or default_font_family()

        self.SURFACE: cairo.PDFSurface = cairo.PDFSurface(
            self.FILENAME, self.DOC_WIDTH, self.DOC_HEIGHT
        )
        self.CTX: cairo.Context = cairo.Context(self.SURFACE)

        self.BIGFONT_SIZE: float = self.DOC_HEIGHT / 30
        self.SMALLFONT_SIZE: float = self.DOC_HEIGHT / 120
        self.TINYFONT_SIZE: float = self.DOC_HEIGHT / 200

        self.TOP_MARGIN: float = self.DOC_HEIGHT * 0.10
        self.BOTTOM_MARGIN: float = self.DOC_HEIGHT * 0.07
        min_side_margin: float = self.DOC_WIDTH * 0.10

        # Relative to BOX_BOUNDS, i.e. column width and row height
        box_margin_ratio: float = 35 / 100
        gap_size_ratio: float = 1 * box_margin_ratio
        box_line_width_ratio: float = 1 / 6 * (1 - box_margin_ratio)
        corner_radius_ratio: float = 1 / 5 * (1 - box_margin_ratio)

        self.GAP_X_INTERVAL: int = 4
        self.GAP_Y_INTERVAL: int = 5
        self.X_GAPS: int = (self.NUM_COLUMNS - 1) // self.GAP_X_INTERVAL
        self.Y_GAPS: int = (self.NUM_ROWS - 1) // self.GAP_Y_INTERVAL

        grid_bounds_x_ratio = self.NUM_COLUMNS - box_margin_ratio + self.X_GAPS * gap_size_ratio
        grid_bounds_y_ratio = self.NUM_ROWS - box_margin_ratio + self.Y_GAPS * gap_size_ratio
        max_box_bounds_x = (self.DOC_WIDTH - 2 * min_side_margin) / grid_bounds_x_ratio
        max_box_bounds_y = (
            self.DOC_HEIGHT - self.TOP_MARGIN - self.BOTTOM_MARGIN
        ) / grid_bounds_y_ratio
        self.BOX_BOUNDS = min(max_box_bounds_x, max_box_bounds_y)
        self.BOX_MARGIN = box_margin_ratio * self.BOX_BOUNDS
        self.BOX_SIZE = self.BOX_BOUNDS - self.BOX_MARGIN
        self.SIDE_MARGIN = (self.DOC_WIDTH - (self.BOX_BOUNDS * grid_bounds_x_ratio)) / 2
        self.GRID_BOTTOM = self.TOP_MARGIN + self.BOX_BOUNDS * grid_bounds_y_ratio

        self.CORNER_RADIUS = corner_radius_ratio * self.BOX_BOUNDS
        self.BOX_LINE_WIDTH = box_line_width_ratio * self.BOX_BOUNDS
        self.HEAVY_BOX_LINE_WIDTH = 3 * self.BOX_LINE_WIDTH
        self.GAP_SIZE = gap_size_ratio * self.BOX_BOUNDS

        self.BLACK = (0.2, 0.2, 0.2)
        self.WHITE = (1.0, 1.0, 1.0)
        self.LIGHT_GRAY = (0.7, 0.7, 0.7)
        self.DARK_GRAY = (0.5, 0.5, 0.5)
        self.MARK_COLOR = (0.75, 0.2, 0.2)

    def text_size(self, text: str) -> tuple[float, float]:
        _, _, width, height, _, _ = self.CTX.text_extents(text)
        return width, height

    def set_font(self, size: float, *, bold: bool = False) -> None:
        weight = cairo.FONT_WEIGHT_BOLD if bold else cairo.FONT_WEIGHT_NORMAL
        self.CTX.select_font_face(self.FONT, cairo.FONT_SLANT_NORMAL, weight)
        self.CTX.set_font_size(size)

    def show_centered(self, text: str, pos_y: float) -> float:
        """Writes text centered on the page, returning its height."""
        w, h = self.text_size(text)
        self.CTX.move_to(self.DOC_WIDTH / 2 - w / 2, pos_y)
        self.CTX.show_text(text)
        return h

    def draw_square(
        self,
        pos_x: float,
        pos_y: float,
        fillcolor: tuple[float, float, float] | None = None,
        linewidth: float | None = None,
        linecolor: tuple[float, float, float] | None = None,
    ) -> None:
        """Draws one cell as a square with rounded corners."""
        fillcolor = fillcolor or self.WHITE
        linewidth = linewidth or self.BOX_LINE_WIDTH
        self.CTX.set_line_width(linewidth)
        self.CTX.set_source_rgb(*(linecolor or self.BLACK))

        x_1, x_2 = pos_x + self.CORNER_RADIUS, pos_x + self.BOX_SIZE - self.CORNER_RADIUS
        y_1, y_2 = pos_y + self.CORNER_RADIUS, pos_y + self.BOX_SIZE - self.CORNER_RADIUS

        # Arc centres clockwise from top-left, with their quarter-turn start/end angles
        self.CTX.new_sub_path()
        for cx, cy, start in ((x_1, y_1, 2), (x_2, y_1, 3), (x_2, y_2, 0), (x_1, y_2, 1)):
            self.CTX.arc(
                cx, cy, self.CORNER_RADIUS, start * (math.pi / 2), (start + 1) * (math.pi / 2)
            )
        self.CTX.close_path()
        self.CTX.stroke_preserve()

        self.CTX.set_source_rgb(*fillcolor)
        self.CTX.fill()

    def draw_row(self, pos_y: float, year_index: int) -> None:
        """Draws the 52 week cells of one year-row, starting at pos_y."""
        pos_x: float = self.SIDE_MARGIN

        label = row_label(year_index)
        if label:
            self.set_font(self.TINYFONT_SIZE)
            self.CTX.set_source_rgb(*self.DARK_GRAY)
            w, h = self.text_size(label)
            self.CTX.move_to(pos_x - w - self.BOX_SIZE, pos_y + self.BOX_SIZE / 2 + h / 2)
            self.CTX.show_text(label)

        for week_index in range(self.NUM_COLUMNS):
            fill = self.BLACK if self.STATE.is_elapsed(year_index, week_index) else self.WHITE
            if self.STATE.mark_at(year_index, week_index) is None:
                self.draw_square(pos_x, pos_y, fillcolor=fill)
            else:
                self.draw_square(
                    pos_x,
                    pos_y,
                    fillcolor=fill,
                    linewidth=self.HEAVY_BOX_LINE_WIDTH,
                    linecolor=self.MARK_COLOR,
                )
            pos_x += self.BOX_SIZE + self.BOX_MARGIN
            if week_index % self.GAP_X_INTERVAL == self.GAP_X_INTERVAL - 1:
                pos_x += self.GAP_SIZE

    def draw_grid(self) -> None:
        """Draws the whole grid of 52x90 squares."""
        pos_x = self.SIDE_MARGIN
        pos_y = self.TOP_MARGIN

        # Week numbers above the top row
        self.set_font(self.TINYFONT_SIZE)
        self.CTX.set_source_rgb(*self.DARK_GRAY)
        for week_index in range(self.NUM_COLUMNS):
            if week_index % self.GAP_X_INTERVAL == (self.GAP_X_INTERVAL - 1):
                text = str(week_index + 1)
                w, _ = self.text_size(text)
                self.CTX.move_to(pos_x + self.BOX_SIZE / 2 - w / 2, pos_y - self.BOX_SIZE)
                self.CTX.show_text(text)
                pos_x += self.GAP_SIZE
            pos_x += self.BOX_SIZE + self.BOX_MARGIN

        for year_index in range(self.NUM_ROWS):
            self.draw_row(pos_y, year_index)
            pos_y += self.BOX_SIZE + self.BOX_MARGIN
            if year_index % self.GAP_Y_INTERVAL == (self.GAP_Y_INTERVAL - 1):
                pos_y += self.GAP_SIZE

    def gen_calendar(self) -> None:
        self.CTX.set_source_rgb(*self.WHITE)
        self.CTX.rectangle(0, 0, self.DOC_WIDTH, self.DOC_HEIGHT)
        self.CTX.fill()

        self.set_font(self.BIGFONT_SIZE, bold=True)
        self.CTX.set_source_rgb(*self.BLACK)
        h_title = self.show_centered(self.TITLE, self.TOP_MARGIN / 2)

        if self.SUBTITLE_TEXT is not None:
            self.set_font(self.SMALLFONT_SIZE)
            self.CTX.set_source_rgb(*self.LIGHT_GRAY)
            _, h = self.text_size(self.SUBTITLE_TEXT)
            self.show_centered(self.SUBTITLE_TEXT, self.TOP_MARGIN / 2 + h_title - h / 2)

        self.draw_grid()

        # Legend and summary under the grid
        self.set_font(self.TINYFONT_SIZE)
        self.CTX.set_source_rgb(*self.MARK_COLOR)
        legend_y = self.GRID_BOTTOM + self.BOTTOM_MARGIN / 3
        h = self.show_centered(legend_text(), legend_y)
        self.CTX.set_source_rgb(*self.DARK_GRAY)
        self.show_centered(summary_text(self.STATE), legend_y + 2 * h)

        self.CTX.show_page()
        self.SURFACE.finish()
