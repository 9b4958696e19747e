"""
Slide layout engine.

Turns one slide-content record into a flat list of positioned primitives
(rectangles, ellipses, text boxes) on a 10 x 7.5 inch canvas. Nothing here
touches python-pptx; `ppt_generator` draws the primitives.
"""
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from models import PresentationMetadata, SlideContent
from theme import ThemePalette


# --- 1. Design Constants (inches) ---
CANVAS_WIDTH = 10.0
CANVAS_HEIGHT = 7.5
MARGIN_LEFT = 0.5
CONTENT_WIDTH = CANVAS_WIDTH - 2 * MARGIN_LEFT

# Chrome shared by every non-title slide
TOP_STRIP_HEIGHT = 0.12
TITLE_TOP = 0.35
TITLE_HEIGHT = 0.8
UNDERLINE_TOP = 1.15
UNDERLINE_WIDTH = 1.5
UNDERLINE_HEIGHT = 0.06
FOOTER_TOP = 6.95

# bullets
BULLET_TOP = 1.6
BULLET_ROW_PITCH = 0.65
MARKER_SIZE = 0.16

# two-column
COLUMN_ROW_PITCH = 0.75
LEFT_COLUMN_X = 0.6
RIGHT_COLUMN_X = 5.3
COLUMN_TEXT_WIDTH = 3.9
DIVIDER_X = CANVAS_WIDTH / 2 - 0.02
DIVIDER_WIDTH = 0.04
DIVIDER_HEIGHT = 5.0

# image-text
IMAGE_BOX = (0.5, 1.6, 4.2, 4.8)
IMAGE_TEXT_X = 5.1
IMAGE_TEXT_ROW_PITCH = 0.95
IMAGE_CAPTION = "[Product Demo]"

# chart
CHART_BOX = (0.5, 1.5, CONTENT_WIDTH, 3.9)
CHART_CAPTION = "[Data Visualization / Chart]"
CHART_STRIP_TOP = 5.65
CHART_STRIP_HEIGHT = 0.9
MAX_CHART_METRICS = 4

# Font sizes (pt)
HEADLINE_SIZE = 40
SUBTITLE_SIZE = 20
SLIDE_TITLE_SIZE = 28
BODY_SIZE = 18
SMALL_BODY_SIZE = 16
METRIC_SIZE = 14
CAPTION_SIZE = 14
FOOTER_SIZE = 10

DEFAULT_LAYOUT = "bullets"


# --- 2. Primitives ---

@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    fill: str
    border: Optional[str] = None


@dataclass(frozen=True)
class Ellipse:
    x: float
    y: float
    w: float
    h: float
    fill: str


@dataclass(frozen=True)
class TextBox:
    x: float
    y: float
    w: float
    h: float
    text: str
    size: int
    color: str
    align: str = "left"
    bold: bool = False
    italic: bool = False


Primitive = Union[Rect, Ellipse, TextBox]


# --- 3. Helpers ---

def split_columns(items: List[str]) -> Tuple[List[str], List[str]]:
    """First ceil(n/2) items go left, the rest right."""
    half = math.ceil(len(items) / 2)
    return list(items[:half]), list(items[half:])


def resolve_layout(layout: Optional[str]) -> str:
    """Maps a layout name onto a known layout, falling back to bullets."""
    key = (layout or "").strip().lower()
    return key if key in LAYOUT_FUNCTIONS else DEFAULT_LAYOUT


def _slide_chrome(slide: SlideContent, slide_index: int, palette: ThemePalette) -> List[Primitive]:
    return [
        Rect(0, 0, CANVAS_WIDTH, TOP_STRIP_HEIGHT, palette.primary),
        TextBox(MARGIN_LEFT, TITLE_TOP, CONTENT_WIDTH, TITLE_HEIGHT, slide.title,
                SLIDE_TITLE_SIZE, palette.text, bold=True),
        Rect(MARGIN_LEFT, UNDERLINE_TOP, UNDERLINE_WIDTH, UNDERLINE_HEIGHT, palette.accent),
        TextBox(CANVAS_WIDTH - 1.3, FOOTER_TOP, 0.8, 0.3, str(slide_index + 1),
                FOOTER_SIZE, palette.lightText, align="right"),
    ]


def _marker_row(x: float, y: float, text: str, width: float, marker_fill: str,
                palette: ThemePalette, size: int = BODY_SIZE) -> List[Primitive]:
    return [
        Ellipse(x, y + 0.17, MARKER_SIZE, MARKER_SIZE, marker_fill),
        TextBox(x + 0.3, y, width, BULLET_ROW_PITCH - 0.1, text, size, palette.text),
    ]


# --- 4. Layouts ---

def layout_title_slide(slide, slide_index, palette, metadata=None):
    """Centered headline, accent bar, subtitle and an author/date footer."""
    if metadata is not None and metadata.subtitle:
        subtitle = metadata.subtitle
    else:
        subtitle = slide.content[0] if slide.content else ""

    primitives = [
        TextBox(MARGIN_LEFT, 2.3, CONTENT_WIDTH, 1.4, slide.title, HEADLINE_SIZE,
                palette.primary, align="center", bold=True),
        Rect(CANVAS_WIDTH / 2 - 1.0, 3.85, 2.0, 0.08, palette.accent),
        TextBox(MARGIN_LEFT, 4.1, CONTENT_WIDTH, 0.8, subtitle, SUBTITLE_SIZE,
                palette.lightText, align="center", italic=True),
    ]

    if metadata is not None:
        footer = " | ".join(part for part in (metadata.author, metadata.date) if part)
        if footer:
            primitives.append(
                TextBox(MARGIN_LEFT, 6.6, CONTENT_WIDTH, 0.4, footer, 12,
                        palette.lightText, align="center")
            )
    return primitives


def layout_bullets_slide(slide, slide_index, palette, metadata=None):
    primitives = _slide_chrome(slide, slide_index, palette)
    for i, point in enumerate(slide.content):
        y = BULLET_TOP + i * BULLET_ROW_PITCH
        primitives.extend(_marker_row(0.7, y, point, 8.5, palette.primary, palette))
    return primitives


def layout_two_column_slide(slide, slide_index, palette, metadata=None):
    """Left column gets the larger half; the divider is drawn even with no content."""
    primitives = _slide_chrome(slide, slide_index, palette)
    left, right = split_columns(slide.content)

    for column_x, items, marker_fill in (
        (LEFT_COLUMN_X, left, palette.primary),
        (RIGHT_COLUMN_X, right, palette.secondary),
    ):
        for i, point in enumerate(items):
            y = BULLET_TOP + i * COLUMN_ROW_PITCH
            primitives.extend(
                _marker_row(column_x, y, point, COLUMN_TEXT_WIDTH - 0.3, marker_fill, palette)
            )

    primitives.append(
        Rect(DIVIDER_X, BULLET_TOP, DIVIDER_WIDTH, DIVIDER_HEIGHT, palette.divider)
    )
    return primitives


def layout_image_text_slide(slide, slide_index, palette, metadata=None):
    primitives = _slide_chrome(slide, slide_index, palette)

    x, y, w, h = IMAGE_BOX
    primitives.append(Rect(x, y, w, h, palette.lightBg, border=palette.divider))
    primitives.append(
        TextBox(x, y + h / 2 - 0.3, w, 0.6, IMAGE_CAPTION, CAPTION_SIZE,
                palette.lightText, align="center", italic=True)
    )

    text_width = CANVAS_WIDTH - MARGIN_LEFT - IMAGE_TEXT_X - 0.25
    for i, point in enumerate(slide.content):
        row_y = BULLET_TOP + i * IMAGE_TEXT_ROW_PITCH
        primitives.append(Rect(IMAGE_TEXT_X, row_y, 0.08, 0.7, palette.accent))
        primitives.append(
            TextBox(IMAGE_TEXT_X + 0.25, row_y, text_width, 0.8, point,
                    SMALL_BODY_SIZE, palette.text)
        )
    return primitives


def layout_chart_slide(slide, slide_index, palette, metadata=None):
    """Chart placeholder plus up to MAX_CHART_METRICS labels sharing the strip width."""
    primitives = _slide_chrome(slide, slide_index, palette)

    x, y, w, h = CHART_BOX
    primitives.append(Rect(x, y, w, h, palette.lightBg, border=palette.divider))
    primitives.append(
        TextBox(x, y + h / 2 - 0.25, w, 0.5, CHART_CAPTION, SMALL_BODY_SIZE,
                palette.lightText, align="center", italic=True)
    )

    metrics = slide.content[:MAX_CHART_METRICS]
    if metrics:
        metric_width = CONTENT_WIDTH / len(metrics)
        for i, metric in enumerate(metrics):
            primitives.append(
                TextBox(MARGIN_LEFT + i * metric_width, CHART_STRIP_TOP, metric_width,
                        CHART_STRIP_HEIGHT, metric, METRIC_SIZE, palette.primary,
                        align="center", bold=True)
            )
    return primitives


LAYOUT_FUNCTIONS: Dict[str, Callable[..., List[Primitive]]] = {
    "title": layout_title_slide,
    "bullets": layout_bullets_slide,
    "two-column": layout_two_column_slide,
    "image-text": layout_image_text_slide,
    "chart": layout_chart_slide,
}


def layout_slide(
    slide: SlideContent,
    slide_index: int,
    palette: ThemePalette,
    metadata: Optional[PresentationMetadata] = None,
) -> List[Primitive]:
    """Lays out one slide. Selection is by `slide.layout` alone."""
    return LAYOUT_FUNCTIONS[resolve_layout(slide.layout)](slide, slide_index, palette, metadata)
