"""SVG badge rendering.

Both renderers are pure: no I/O beyond reading the bundled Jinja2 templates.
Jinja2 autoescaping keeps track and artist names from breaking the SVG markup.
"""

import re
from dataclasses import dataclass
from pathlib import Path

import jinja2
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(
    env=jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
)

# Control characters XML 1.0 does not allow, even escaped
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

BADGE_WIDTH = 300
BADGE_HEIGHT = 100
BADGE_BACKGROUND = "#1DB954"

# Full pixel width of the progress bar inside the 300x100 canvas
PROGRESS_BAR_WIDTH = 180

DEFAULT_MESSAGE = "No song currently playing"


@dataclass(frozen=True)
class ProgressAnimation:
    """Parameters of the one-shot progress bar animation.

    Widths and durations are preformatted for direct use as SVG attributes.
    """

    start_width: str
    remaining_seconds: str
    animated: bool


def format_number(value: float) -> str:
    """Format a number for an SVG attribute: at most 3 decimals, no trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def compute_progress(progress_ms: int, duration_ms: int) -> ProgressAnimation:
    """Compute where the progress bar starts and how long it takes to fill.

    A zero or negative duration cannot be animated; the bar is drawn empty and
    static. Progress is clamped to the track length, and a finished track draws
    a full, static bar.
    """
    if duration_ms <= 0:
        return ProgressAnimation(start_width="0", remaining_seconds="0", animated=False)

    progress_ms = min(max(progress_ms, 0), duration_ms)
    start_width = (progress_ms / duration_ms) * PROGRESS_BAR_WIDTH
    remaining_seconds = (duration_ms - progress_ms) / 1000

    return ProgressAnimation(
        start_width=format_number(start_width),
        remaining_seconds=format_number(remaining_seconds),
        animated=remaining_seconds > 0,
    )


def xml_text(value: str) -> str:
    """Drop characters that cannot appear in an XML document."""
    return INVALID_XML_CHARS.sub("", value)


def render_badge(artwork: str, artist: str, track: str, progress_ms: int, duration_ms: int) -> str:
    """Render the populated badge.

    Args:
        artwork: Inlined album art (data URI)
        artist: Artist names, already joined
        track: Track name
        progress_ms: Playback position in milliseconds
        duration_ms: Track length in milliseconds

    Returns:
        SVG document
    """
    return templates.get_template("badge.svg").render(
        width=BADGE_WIDTH,
        height=BADGE_HEIGHT,
        background=BADGE_BACKGROUND,
        bar_width=PROGRESS_BAR_WIDTH,
        artwork=artwork,
        artist=xml_text(artist),
        track=xml_text(track),
        progress=compute_progress(progress_ms, duration_ms),
    )


def render_default_badge() -> str:
    """Render the static placeholder badge."""
    return templates.get_template("default_badge.svg").render(
        width=BADGE_WIDTH,
        height=BADGE_HEIGHT,
        background=BADGE_BACKGROUND,
        message=DEFAULT_MESSAGE,
    )
