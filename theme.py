import re
from dataclasses import dataclass
from typing import Dict, Optional


# --- Brand defaults (used when the user gives no colour or an unusable one) ---
DEFAULT_PRIMARY = "3B82F6"
DEFAULT_SECONDARY = "8B5CF6"
DEFAULT_ACCENT = "F59E0B"

# --- Fixed neutrals ---
TEXT = "1F2937"
LIGHT_TEXT = "6B7280"
BACKGROUND = "FFFFFF"
LIGHT_BG = "F3F4F6"
DIVIDER = "E5E7EB"

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


@dataclass(frozen=True)
class ThemePalette:
    """Resolved colours for one presentation build. Values are 6-char hex, no '#'."""
    primary: str = DEFAULT_PRIMARY
    secondary: str = DEFAULT_SECONDARY
    accent: str = DEFAULT_ACCENT
    text: str = TEXT
    lightText: str = LIGHT_TEXT
    background: str = BACKGROUND
    lightBg: str = LIGHT_BG
    divider: str = DIVIDER


def normalize_hex(value: Optional[str]) -> Optional[str]:
    """Returns 'RRGGBB' for '#rgb', 'rgb', '#rrggbb' or 'rrggbb', else None."""
    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return digits.upper()


def resolve_palette(brand_colors: Optional[Dict[str, str]] = None) -> ThemePalette:
    """
    Builds the palette for a presentation from user brand colours.

    Each of primary/secondary/accent is taken from `brand_colors` when it is a
    valid hex colour and defaulted otherwise. Neutrals are never overridden.
    """
    brand_colors = brand_colors or {}
    return ThemePalette(
        primary=normalize_hex(brand_colors.get("primary")) or DEFAULT_PRIMARY,
        secondary=normalize_hex(brand_colors.get("secondary")) or DEFAULT_SECONDARY,
        accent=normalize_hex(brand_colors.get("accent")) or DEFAULT_ACCENT,
    )
