"""
Color parsing and shade derivation for the custom color scheme.
"""

import re
from typing import List, Optional, Tuple

from ..config import CUSTOM_SHADE_MIX

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r'^#([0-9a-f]{3}|[0-9a-f]{6})$', re.IGNORECASE)
_RGB_RE = re.compile(
    r'^rgba?\(\s*([-+\d.]+)\s*,\s*([-+\d.]+)\s*,\s*([-+\d.]+)\s*(?:,\s*[-+\d.]+%?\s*)?\)$',
    re.IGNORECASE,
)


def _clamp_channel(value: float) -> int:
    return int(min(255, max(0, round(value))))


def parse_color(text: Optional[str]) -> Optional[RGB]:
    """
    Parse '#RGB', '#RRGGBB', 'rgb(r, g, b)' or 'rgba(r, g, b, a)'.
    
    The alpha channel is ignored.
    
    Returns:
        (r, g, b) tuple, or None when the text is not a supported color
    """
    if not text or not isinstance(text, str):
        return None
    
    s = text.strip()
    
    match = _HEX_RE.match(s)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = ''.join(ch * 2 for ch in digits)
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    
    match = _RGB_RE.match(s)
    if match:
        try:
            return tuple(_clamp_channel(float(g)) for g in match.groups())
        except ValueError:
            return None
    
    return None


def mix(color: RGB, target: RGB, weight: float) -> RGB:
    """Linearly interpolate `color` toward `target` by `weight` (0..1)."""
    return tuple(
        _clamp_channel(c + (t - c) * weight)
        for c, t in zip(color, target)
    )


def to_hex(color: RGB) -> str:
    return '#{:02x}{:02x}{:02x}'.format(*color)


def derive_custom_shades(text: Optional[str]) -> Optional[List[str]]:
    """
    Derive 4 shades (lightest first) from a base color.
    
    The two lighter levels mix toward white, the two darker toward black.
    
    Returns:
        Hex colors, or None when the base color cannot be parsed
    """
    base = parse_color(text)
    if base is None:
        return None
    return [to_hex(mix(base, target, weight)) for target, weight in CUSTOM_SHADE_MIX]
