"""RGB colour helpers for servers and the coverage map.

Colours are plain ``(r, g, b)`` tuples of ints in ``[0, 255]``. Parsing accepts
anything matplotlib understands (CSS names such as ``"red"`` or
``"darkorange"``, ``"#rrggbb"`` hex strings). Lightness adjustments work in HSL
space on a 0-255 lightness scale.
"""

import colorsys

from matplotlib.colors import to_rgb

Color = tuple[int, int, int]


def parse_color(text: str) -> Color:
    """Parse a colour name or hex string into an RGB tuple.

    Raises:
        ValueError: If matplotlib does not recognise the colour.
    """
    r, g, b = to_rgb(text)
    return round(r * 255), round(g * 255), round(b * 255)


def lightness(color: Color) -> int:
    """HSL lightness of ``color`` on a 0-255 scale."""
    return (max(color) + min(color) + 1) // 2


def adjust_lightness(color: Color, delta: int) -> Color:
    """Return ``color`` with its HSL lightness shifted by ``delta``.

    Hue and saturation are kept; the resulting lightness is clamped to [0, 255].
    """
    r, g, b = (c / 255.0 for c in color)
    h, _, s = colorsys.rgb_to_hls(r, g, b)
    value = min(max(lightness(color) + delta, 0), 255)
    r, g, b = colorsys.hls_to_rgb(h, value / 255.0, s)
    return round(r * 255), round(g * 255), round(b * 255)


def to_hex(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)
