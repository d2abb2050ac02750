"""Tests for the PDF and text views."""

import datetime

import pytest

from life_calendar.grid import TOTAL_YEARS, WEEKS_PER_YEAR, GridState

try:
    from life_calendar.render import (
        ELAPSED_CHAR,
        ELAPSED_MARK_CHAR,
        REMAINING_CHAR,
        REMAINING_MARK_CHAR,
        LifeCalendar,
        legend_text,
        render_text,
        summary_text,
    )
except (ImportError, OSError) as exc:  # cairo C library missing
    pytest.skip(f"cairo is unavailable: {exc}", allow_module_level=True)

BIRTH = datetime.date(2000, 1, 1)


class TestRenderText:
    def test_shape_and_labels(self):
        lines = render_text(GridState(birth=BIRTH, now=datetime.date(2005, 6, 15))).splitlines()
        assert len(lines) == TOTAL_YEARS
        assert all(len(line) == 3 + WEEKS_PER_YEAR for line in lines)
        assert lines[4].startswith(" 5 ")
        assert lines[89].startswith("90 ")
        assert lines[0].startswith("   ")

    def test_elapsed_cells(self):
        lines = render_text(GridState(birth=BIRTH, now=datetime.date(2005, 6, 15))).splitlines()
        assert lines[4][3:] == ELAPSED_CHAR * WEEKS_PER_YEAR
        assert lines[5][3:] == ELAPSED_CHAR * 23 + REMAINING_CHAR * 29
        assert lines[6][3:] == REMAINING_CHAR * WEEKS_PER_YEAR

    def test_marks(self):
        lines = render_text(GridState(birth=None, now=datetime.date(2005, 6, 15))).splitlines()
        assert lines[81][3 + 15] == REMAINING_MARK_CHAR
        assert lines[76][3 + 10] == REMAINING_MARK_CHAR
        marked = "".join(lines).count(REMAINING_MARK_CHAR)
        assert marked == 2

    def test_elapsed_marks(self):
        lines = render_text(GridState(birth=BIRTH, now=datetime.date(2095, 1, 1))).splitlines()
        assert lines[81][3 + 15] == ELAPSED_MARK_CHAR
        assert lines[76][3 + 10] == ELAPSED_MARK_CHAR


class TestSummary:
    def test_legend_names_both_marks(self):
        text = legend_text()
        assert "women 81 years 15 weeks" in text
        assert "men 76 years 10 weeks" in text

    def test_summary_without_birth(self):
        assert summary_text(GridState(birth=None, now=BIRTH)) == "no birth date given"

    def test_summary_with_birth(self):
        text = summary_text(GridState(birth=BIRTH, now=datetime.date(2005, 6, 15)))
        assert "born 2000-01-01" in text
        assert "284 weeks lived" in text


class TestLifeCalendar:
    """Test PDF generation."""

    def test_generates_pdf(self, tmp_path):
        output = tmp_path / "calendar.pdf"
        state = GridState(birth=BIRTH, now=datetime.date(2030, 6, 15))
        LifeCalendar(state, filename=str(output), a_size=4, subtitle_text="test").gen_calendar()
        assert output.exists()
        assert output.read_bytes().startswith(b"%PDF")

    def test_generates_empty_pdf(self, tmp_path):
        output = tmp_path / "empty.pdf"
        LifeCalendar(GridState(birth=None, now=BIRTH), filename=str(output)).gen_calendar()
        assert output.read_bytes().startswith(b"%PDF")

    def test_font_family_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LIFE_CALENDAR_FONT_FAMILY", "sans-serif")
        calendar = LifeCalendar(
            GridState(birth=None, now=BIRTH), filename=str(tmp_path / "font.pdf")
        )
        assert calendar.FONT == "sans-serif"

    @pytest.mark.parametrize("a_size", [-1, 7])
    def test_invalid_a_size(self, tmp_path, a_size):
        with pytest.raises(ValueError, match="Invalid A size"):
            LifeCalendar(
                GridState(birth=None, now=BIRTH),
                filename=str(tmp_path / "bad.pdf"),
                a_size=a_size,
            )

    def test_page_size_halves_per_a_size(self, tmp_path):
        state = GridState(birth=None, now=BIRTH)
        a2 = LifeCalendar(state, filename=str(tmp_path / "a2.pdf"), a_size=2)
        a4 = LifeCalendar(state, filename=str(tmp_path / "a4.pdf"), a_size=4)
        assert a2.DOC_HEIGHT == pytest.approx(2 * a4.DOC_HEIGHT)
        assert a2.DOC_WIDTH == pytest.approx(a2.DOC_HEIGHT / 2 ** (1 / 2))
