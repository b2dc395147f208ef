"""SVG Normalizer — rewrites a stored thumbnail's root tag so it scales to its container.

Invariants:
    - Only the first <svg ...> opening tag is touched; the rest of the markup is byte-identical
    - Rewrite happens only when the tag carries BOTH width and height
    - Anything the pattern does not match passes through unchanged
    - A rewritten tag has no width/height, so a second pass is a no-op

Design Decisions:
    - Regex over an XML parser: input is trusted admin content, and a parser would
      reserialize (and possibly reorder) the whole document
    - Existing viewBox wins over a synthesized one: the author's coordinate system is kept
"""

import re

_SVG_TAG = re.compile(r"<svg([^>]*)>")
_WIDTH = re.compile(r'(?<![\w-])width="([^"]+)"')
_HEIGHT = re.compile(r'(?<![\w-])height="([^"]+)"')
_VIEWBOX = re.compile(r'viewBox="([^"]+)"')

RESPONSIVE_STYLE = "max-width: 100%; height: auto;"


def normalize_svg(svg_markup: str) -> str:
    """Return svg_markup with a responsive root tag, or unchanged if not applicable."""
    match = _SVG_TAG.search(svg_markup)
    if not match:
        return svg_markup

    attributes = match.group(1)
    width = _WIDTH.search(attributes)
    height = _HEIGHT.search(attributes)
    if not (width and height):
        return svg_markup

    existing = _VIEWBOX.search(attributes)
    view_box = (
        existing.group(1) if existing
        else f"0 0 {width.group(1)} {height.group(1)}"
    )
    tag = (
        f'<svg viewBox="{view_box}" preserveAspectRatio="xMidYMid meet" '
        f'style="{RESPONSIVE_STYLE}">'
    )
    return svg_markup[:match.start()] + tag + svg_markup[match.end():]
