"""SVG export of vector nodes placed on the drawing surface."""

from xml.sax.saxutils import quoteattr

# Padding around the nodes' combined extent, in canvas units
_MARGIN = 10.0

_LINECAPS = {"NONE": "butt", "ROUND": "round", "SQUARE": "square"}


def _extent(nodes) -> tuple[float, float, float, float]:
    """Combined (min_x, min_y, max_x, max_y) of all nodes."""
    min_x = min(n.x for n in nodes)
    min_y = min(n.y for n in nodes)
    max_x = max(n.x + n.width for n in nodes)
    max_y = max(n.y + n.height for n in nodes)
    return min_x, min_y, max_x, max_y


def generate_route_svg(nodes: list) -> str:
    """Render vector nodes as an SVG document.

    Each node's path data is drawn in its own coordinate space and moved
    into place with a translate transform, so the path strings are emitted
    exactly as the drawing surface received them.
    """
    if nodes:
        min_x, min_y, max_x, max_y = _extent(nodes)
    else:
        min_x = min_y = max_x = max_y = 0.0
    vb_x = min_x - _MARGIN
    vb_y = min_y - _MARGIN
    vb_w = (max_x - min_x) + 2 * _MARGIN
    vb_h = (max_y - min_y) + 2 * _MARGIN

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{vb_w:.1f}" height="{vb_h:.1f}" '
        f'viewBox="{vb_x:.1f} {vb_y:.1f} {vb_w:.1f} {vb_h:.1f}">',
    ]

    for node in nodes:
        style = node.style
        for vp in node.vector_paths:
            fill_rule = "nonzero" if vp.winding_rule == "NONZERO" else "evenodd"
            parts.append(
                f'<path id={quoteattr(node.name)} d="{vp.data}" '
                f'transform="translate({node.x} {node.y})" '
                f'fill="none" fill-rule="{fill_rule}" '
                f'stroke="{style.stroke_color}" stroke-opacity="{style.opacity}" '
                f'stroke-width="{style.stroke_weight}" '
                f'stroke-linecap="{_LINECAPS[style.stroke_cap]}" '
                f'stroke-linejoin="{style.stroke_join.lower()}"/>'
            )

    parts.append("</svg>")
    return "\n".join(parts)


def export_svg(nodes: list, output_path: str) -> None:
    """Write the drawing surface's vector nodes to an SVG file."""
    svg_content = generate_route_svg(nodes)
    with open(output_path, "w") as f:
        f.write(svg_content)
