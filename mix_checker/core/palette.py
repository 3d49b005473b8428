"""Named colour palette, hex parsing and RGB distance helpers.

Names follow the CSS basic colour keywords. In recipes a name may be written
bare (`navy`) or with the `css.` prefix (`css.navy`).
"""

import re

import numpy as np

CSS_BASIC: dict[str, str] = {
    'black': '#000000',
    'silver': '#c0c0c0',
    'gray': '#808080',
    'white': '#ffffff',
    'maroon': '#800000',
    'red': '#ff0000',
    'purple': '#800080',
    'fuchsia': '#ff00ff',
    'green': '#008000',
    'lime': '#00ff00',
    'olive': '#808000',
    'yellow': '#ffff00',
    'navy': '#000080',
    'blue': '#0000ff',
    'teal': '#008080',
    'aqua': '#00ffff',
    'orange': '#ffa500',
    'brown': '#a52a2a',
    'pink': '#ffc0cb',
}

MAX_RGB_DISTANCE = float(np.sqrt(3 * 255**2))  # ~441.67

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Parse '#rrggbb' or '#rgb' into an (r, g, b) tuple. Invalid input gives black."""
    m = _HEX_RE.match(hex_str.strip())
    if not m:
        return (0, 0, 0)
    digits = m.group(1)
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def is_hex(value: str) -> bool:
    return _HEX_RE.match(value.strip()) is not None


def resolve_name(name: str) -> str | None:
    """Resolve 'navy' or 'css.navy' to its hex value. Unknown names give None."""
    key = name.strip().lower()
    if key.startswith('css.'):
        key = key[4:]
    return CSS_BASIC.get(key)


def rgb_distance(a: tuple[float, float, float], b: tuple[float, float, float]) -> float:
    """Euclidean distance between two RGB triples.

    Works on float arrays so fractional blends and uint8 pixels both
    subtract without wrapping. Squares are summed red, green, blue in that
    order so comparison scores reproduce to the last bit.
    """
    dr, dg, db = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.sqrt(dr * dr + dg * dg + db * db))


def nearest_colour(rgb: tuple[float, float, float], threshold: float | None = None) -> tuple[str | None, float]:
    """Return (name, distance) of the closest palette colour.

    If threshold is given and the closest colour is further away, name is None.
    """
    best_name = None
    best_dist = float('inf')
    for name, hex_val in CSS_BASIC.items():
        dist = rgb_distance(rgb, hex_to_rgb(hex_val))
        if dist < best_dist:
            best_name, best_dist = name, dist
    if threshold is not None and best_dist > threshold:
        return None, best_dist
    return best_name, best_dist
