import argparse
import datetime
import os
from pathlib import Path

from life_calendar.dates import parse_date
from life_calendar.grid import GridState
from life_calendar.inputs import DOB_PARAMETER, BirthDateInput
from life_calendar.render import (
    DEFAULT_A_SIZE,
    DEFAULT_FILENAME,
    DEFAULT_TITLE,
    LifeCalendar,
    default_font_family,
    render_text,
)

LOCATION_ENV_VAR = "LIFE_CALENDAR_LOCATION"
PICKER_PROMPT = "Date of birth (YYYY-MM-DD): "


def date_argument(datestr: str) -> datetime.date:
    date = parse_date(datestr)
    if date is None:
        raise argparse.ArgumentTypeError(f"Incorrect date {datestr!r}: must be YYYY-MM-DD")
    return date


def pdf_filename(filename: str) -> str:
    file_path = Path(filename)
    if not file_path.suffix:
        return f"{filename}.pdf"
    if file_path.suffix.lower() != ".pdf":
        print(
            f"Warning: Replacing '{file_path.suffix}' extension with '.pdf'"
            " (cairo only supports PDF output)"
        )
        return str(file_path.with_suffix(".pdf"))
    return filename


def acquire_birth_date(location: str | None, *, interactive: bool) -> BirthDateInput:
    """Reads the location parameter once, falling back to the picker prompt."""
    birth_input = BirthDateInput.from_location(location)
    if birth_input.picker_visible and interactive:
        try:
            text = input(PICKER_PROMPT)
        except EOFError:
            return birth_input
        if birth_input.commit(text) is None:
            print(f"Warning: Ignoring invalid date {text.strip()!r}, the calendar will be empty")
    return birth_input


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='\nGenerate a "Life Calendar" of 90 years in weeks, shading the'
        " weeks already lived and outlining life expectancy for women and men"
    )

    parser.add_argument(
        "location",
        type=str,
        nargs="?",
        default=os.environ.get(LOCATION_ENV_VAR),
        help=(
            f"URL or query string carrying the birth date as '{DOB_PARAMETER}=YYYY-MM-DD'"
            f" (default is ${LOCATION_ENV_VAR}). When missing or invalid you are prompted"
        ),
    )

    parser.add_argument(
        "-f",
        "--filename",
        type=str,
        dest="filename",
        help=f"Output filename (default is '{DEFAULT_FILENAME}')",
        default=DEFAULT_FILENAME,
    )

    parser.add_argument(
        "-s",
        "--a-size",
        type=int,
        dest="a_size",
        choices=range(LifeCalendar.MAX_A_SIZE + 1),
        metavar=f"[0-{LifeCalendar.MAX_A_SIZE}]",
        help=(
            "Output file size in ISO 216 A format (A0 is 0, A1 is 1, etc., default is"
            f" A{DEFAULT_A_SIZE})"
        ),
        default=DEFAULT_A_SIZE,
    )

    parser.add_argument(
        "-t",
        "--title",
        type=str,
        dest="title",
        help=f'Calendar title text (default is "{DEFAULT_TITLE}")',
        default=DEFAULT_TITLE,
    )

    parser.add_argument(
        "-b",
        "--subtitle-text",
        type=str,
        dest="subtitle_text",
        help="Text to show under the calendar title (default is no subtitle text)",
        default=None,
    )

    parser.add_argument(
        "--font-family",
        type=str,
        dest="font_family",
        default=None,
        help=f"Font family to use for rendering text (default is '{default_font_family()}')",
    )

    parser.add_argument(
        "--today",
        type=date_argument,
        dest="today",
        default=None,
        help="Date to count lived weeks up to, as YYYY-MM-DD (default is today)",
    )

    parser.add_argument(
        "--text",
        action="store_true",
        dest="text",
        help="Print the calendar as text instead of writing a PDF",
    )

    parser.add_argument(
        "--no-input",
        action="store_false",
        dest="interactive",
        help="Never prompt for a birth date",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    args: argparse.Namespace = build_parser().parse_args(argv)

    now: datetime.date = args.today or datetime.date.today()  # noqa: DTZ011
    birth_input = acquire_birth_date(args.location, interactive=args.interactive)
    state = GridState(birth=birth_input.birth, now=now)

    if args.text:
        print(render_text(state))
        return

    filename = pdf_filename(args.filename)
    try:
        LifeCalendar(
            state,
            title=args.title,
            subtitle_text=args.subtitle_text,
            filename=filename,
            a_size=args.a_size,
            font_family=args.font_family,
        ).gen_calendar()

    except Exception as e:
        print(f"Error: {e}")
        raise

    print(f"Created {filename}")
