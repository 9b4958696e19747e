import base64
import binascii
import json
import logging
import re
from typing import NamedTuple, Optional, Union
from urllib.parse import quote

from errors import DeckUnavailableError
from models import GenerationResult, PitchDeckOutput
from ppt_generator import assemble
from theme import resolve_palette


PPTX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.presentationml.presentation'


class ExportFile(NamedTuple):
    content: Union[str, bytes]
    filename: str
    media_type: str


def content_disposition(filename: str) -> str:
    """
    Builds an attachment header that survives any project id.

    The quoted `filename` keeps only `[A-Za-z0-9._-]`; the full name travels
    percent-encoded in `filename*`.
    """
    fallback = re.sub(r"[^A-Za-z0-9._-]", "", filename) or "download"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def pitch_deck_to_markdown(pitch_deck: PitchDeckOutput) -> str:
    """Flattens a pitch deck into a Markdown document."""
    meta = pitch_deck.metadata
    lines = [
        f"# {meta.title}",
        "",
        f"## {meta.subtitle}",
        "",
        f"**Author:** {meta.author}",
        f"**Date:** {meta.date}",
        "",
        "---",
        "",
    ]
    for slide in pitch_deck.slides:
        lines.append(f"## Slide {slide.slideNumber}: {slide.title}")
        lines.append("")
        lines.extend(f"- {point}" for point in slide.content)
        lines.append("")
        lines.append("**Speaker Notes:**")
        lines.append(slide.speakerNotes or "")
        lines.append("")
        lines.append("---")
        lines.append("")
    return "\n".join(lines)


def _pptx_bytes(pitch_deck: PitchDeckOutput) -> bytes:
    if pitch_deck.pptxBase64:
        try:
            return base64.b64decode(pitch_deck.pptxBase64, validate=True)
        except (binascii.Error, ValueError):
            logging.warning("Stored pptxBase64 is not valid base64; re-rendering the deck.")
    elif pitch_deck.pptxError:
        raise DeckUnavailableError(pitch_deck.pptxError)
    brand = pitch_deck.brandColors.model_dump() if pitch_deck.brandColors else None
    return base64.b64decode(assemble(pitch_deck.slides, pitch_deck.metadata, resolve_palette(brand)))


def build_export(export_type: str, data: GenerationResult) -> Optional[ExportFile]:
    """Returns the file for the requested export, or None when that section is empty."""
    project_id = data.projectId

    if export_type == "landing-page":
        if data.landingPage and data.landingPage.htmlCode:
            return ExportFile(data.landingPage.htmlCode, f"{project_id}-landing-page.html", "text/html")
        return None

    if export_type == "pitch-deck":
        if data.pitchDeck:
            return ExportFile(pitch_deck_to_markdown(data.pitchDeck), f"{project_id}-pitch-deck.md", "text/markdown")
        return None

    if export_type == "pitch-deck-pptx":
        if data.pitchDeck:
            return ExportFile(_pptx_bytes(data.pitchDeck), f"{project_id}-pitch-deck.pptx", PPTX_MEDIA_TYPE)
        return None

    if export_type == "marketing":
        if data.marketing:
            content = json.dumps(data.marketing.model_dump(exclude_none=True), indent=2, ensure_ascii=False)
            return ExportFile(content, f"{project_id}-marketing.json", "application/json")
        return None

    if export_type == "all":
        content = json.dumps(data.model_dump(), indent=2, ensure_ascii=False)
        return ExportFile(content, f"{project_id}-complete.json", "application/json")

    raise ValueError(f"Unknown export type: {export_type}")
