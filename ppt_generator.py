import base64
import io
import logging
import re
from datetime import datetime
from typing import List, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Inches, Pt

from models import PitchDeckOutput, PresentationMetadata, SlideContent
from slide_layout import CANVAS_HEIGHT, CANVAS_WIDTH, Ellipse, Rect, TextBox, layout_slide, resolve_layout
from theme import ThemePalette


# --- 1. Design Constants ---
SLIDE_WIDTH = Inches(CANVAS_WIDTH)
SLIDE_HEIGHT = Inches(CANVAS_HEIGHT)
BLANK_LAYOUT_INDEX = 6
FONT_HEADLINE = 'Calibri'
FONT_BODY = 'Calibri'
BORDER_WIDTH = Pt(1)

ALIGNMENTS = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
}

# --- 2. Helper Functions ---

def add_speaker_notes(slide, notes_text):
    """Adds speaker notes to the slide."""
    if notes_text:
        slide.notes_slide.notes_text_frame.text = notes_text


def apply_formatted_text_to_paragraph(p, text, font_name=FONT_BODY):
    """
    Parses text with **bold** syntax and adds it as runs to a paragraph object.
    Returns the runs so the caller can style them.
    """
    runs = []
    if not text:
        return runs
    for part in re.split(r'(\*\*.*?\*\*)', text):
        if not part:
            continue
        run = p.add_run()
        if part.startswith('**') and part.endswith('**') and len(part) > 4:
            run.text = part[2:-2]
            run.font.bold = True
        else:
            run.text = part
        run.font.name = font_name
        runs.append(run)
    return runs


# --- 3. Primitive Drawing Functions ---

def draw_rect(slide, rect: Rect):
    shape = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE, Inches(rect.x), Inches(rect.y), Inches(rect.w), Inches(rect.h)
    )
    shape.fill.solid()
    shape.fill.fore_color.rgb = RGBColor.from_string(rect.fill)
    if rect.border:
        shape.line.color.rgb = RGBColor.from_string(rect.border)
        shape.line.width = BORDER_WIDTH
    else:
        shape.line.fill.background()  # No border
    return shape


def draw_ellipse(slide, ellipse: Ellipse):
    shape = slide.shapes.add_shape(
        MSO_SHAPE.OVAL, Inches(ellipse.x), Inches(ellipse.y), Inches(ellipse.w), Inches(ellipse.h)
    )
    shape.fill.solid()
    shape.fill.fore_color.rgb = RGBColor.from_string(ellipse.fill)
    shape.line.fill.background()
    return shape


def draw_text_box(slide, box: TextBox):
    shape = slide.shapes.add_textbox(Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h))
    tf = shape.text_frame
    tf.word_wrap = True
    tf.vertical_anchor = MSO_ANCHOR.TOP
    p = tf.paragraphs[0]
    p.alignment = ALIGNMENTS.get(box.align, PP_ALIGN.LEFT)

    font_name = FONT_HEADLINE if box.bold else FONT_BODY
    for run in apply_formatted_text_to_paragraph(p, box.text, font_name):
        run.font.size = Pt(box.size)
        run.font.color.rgb = RGBColor.from_string(box.color)
        run.font.italic = box.italic
        if box.bold:
            run.font.bold = True
    return shape


PRIMITIVE_DRAW_FUNCTIONS = {
    Rect: draw_rect,
    Ellipse: draw_ellipse,
    TextBox: draw_text_box,
}


# --- 4. Main Execution Logic ---

def _document_timestamp(metadata: PresentationMetadata) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(metadata.date)
    except (TypeError, ValueError):
        return None


def create_presentation(
    slides: List[SlideContent],
    metadata: PresentationMetadata,
    palette: Optional[ThemePalette] = None,
):
    """Creates a new presentation from slide records, in the order given."""
    palette = palette or ThemePalette()

    prs = Presentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT

    props = prs.core_properties
    props.author = metadata.author
    props.title = metadata.title
    props.subject = metadata.subtitle
    props.revision = 1
    stamp = _document_timestamp(metadata)
    if stamp is not None:
        # Pin both stamps so repeated builds produce the same document parts.
        props.created = stamp
        props.modified = stamp

    logging.info(f"Building presentation '{metadata.title}' with {len(slides)} slides")
    for i, slide_data in enumerate(slides):
        layout_name = resolve_layout(slide_data.layout)
        logging.debug(f"Processing slide {i+1}: layout='{slide_data.layout}' -> '{layout_name}'")

        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT_INDEX])
        slide.name = f"Slide_{i+1}_{layout_name}"

        for primitive in layout_slide(slide_data, i, palette, metadata):
            PRIMITIVE_DRAW_FUNCTIONS[type(primitive)](slide, primitive)

        add_speaker_notes(slide, slide_data.speakerNotes)

    return prs


def assemble(
    slides: List[SlideContent],
    metadata: PresentationMetadata,
    palette: Optional[ThemePalette] = None,
) -> str:
    """Renders the slides and returns the .pptx file as base64 text."""
    prs = create_presentation(slides, metadata, palette)
    buffer = io.BytesIO()
    prs.save(buffer)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def render_pitch_deck(deck: PitchDeckOutput, palette: Optional[ThemePalette] = None) -> PitchDeckOutput:
    """
    Attaches the rendered deck to the pitch-deck record.

    A rendering failure never discards the slide content: the record comes back
    with an empty `pptxBase64` and the reason in `pptxError`.
    """
    try:
        encoded = assemble(deck.slides, deck.metadata, palette)
    except Exception as e:
        logging.error(f"Failed to render pitch deck '{deck.metadata.title}': {e}", exc_info=True)
        return deck.model_copy(update={
            "pptxBase64": "",
            "pptxError": f"Presentation rendering failed: {e}",
        })
    return deck.model_copy(update={"pptxBase64": encoded, "pptxError": None})
