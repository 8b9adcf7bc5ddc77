"""SVG trend graph of violation counts across builds.

One polyline per category, x axis = build number (oldest left),
y axis = violation count. Built with ElementTree so labels are escaped.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

SVG_MEDIA_TYPE = "image/svg+xml"

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 200

_MARGIN_LEFT = 40
_MARGIN_RIGHT = 110  # room for the legend
_MARGIN_TOP = 10
_MARGIN_BOTTOM = 25

_COLORS = [
    "#d62728", "#1f77b4", "#2ca02c", "#ff7f0e", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
]

# (build number, category -> count)
TrendPoint = Tuple[int, Dict[str, int]]


@dataclass(frozen=True)
class GraphImage:
    """Rendered graph body and its media type."""

    content: bytes
    media_type: str = SVG_MEDIA_TYPE


def _svg_root(width: int, height: int) -> ET.Element:
    return ET.Element("svg", {
        "xmlns": "http://www.w3.org/2000/svg",
        "width": str(width),
        "height": str(height),
        "viewBox": f"0 0 {width} {height}",
        "font-family": "sans-serif",
        "font-size": "10",
    })


def _text(parent: ET.Element, x: float, y: float, label: str, **attrs: str) -> None:
    el = ET.SubElement(parent, "text", {"x": f"{x:.1f}", "y": f"{y:.1f}", **attrs})
    el.text = label


def render_trend_svg(
    points: Sequence[TrendPoint],
    categories: Optional[List[str]] = None,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> str:
    """Render the trend of per-category counts as an SVG document.

    Args:
        points: (build number, counts) pairs, in any order
        categories: Categories to draw; defaults to every category seen
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        SVG markup. Empty input renders a "No data" placeholder.
    """
    root = _svg_root(width, height)
    points = sorted(points, key=lambda p: p[0])
    if categories is None:
        categories = sorted({name for _, counts in points for name in counts})

    # Negative counts mean "no report files found"; they are not plotted.
    values = [
        max(counts.get(c, 0), 0)
        for _, counts in points
        for c in categories
    ]
    if not points or not categories:
        _text(root, width / 2, height / 2, "No data", **{"text-anchor": "middle"})
        return ET.tostring(root, encoding="unicode")

    plot_w = max(width - _MARGIN_LEFT - _MARGIN_RIGHT, 1)
    plot_h = max(height - _MARGIN_TOP - _MARGIN_BOTTOM, 1)
    y_max = max(max(values, default=0), 1)

    def x_at(index: int) -> float:
        if len(points) == 1:
            return _MARGIN_LEFT + plot_w / 2
        return _MARGIN_LEFT + plot_w * index / (len(points) - 1)

    def y_at(value: int) -> float:
        return _MARGIN_TOP + plot_h - plot_h * value / y_max

    # Axes
    ET.SubElement(root, "line", {
        "x1": str(_MARGIN_LEFT), "y1": str(_MARGIN_TOP),
        "x2": str(_MARGIN_LEFT), "y2": str(_MARGIN_TOP + plot_h),
        "stroke": "#000",
    })
    ET.SubElement(root, "line", {
        "x1": str(_MARGIN_LEFT), "y1": str(_MARGIN_TOP + plot_h),
        "x2": str(_MARGIN_LEFT + plot_w), "y2": str(_MARGIN_TOP + plot_h),
        "stroke": "#000",
    })
    _text(root, _MARGIN_LEFT - 4, _MARGIN_TOP + 8, str(y_max), **{"text-anchor": "end"})
    _text(root, _MARGIN_LEFT - 4, _MARGIN_TOP + plot_h, "0", **{"text-anchor": "end"})
    for index, (number, _) in enumerate(points):
        _text(root, x_at(index), height - 8, f"#{number}", **{"text-anchor": "middle"})

    for i, category in enumerate(categories):
        color = _COLORS[i % len(_COLORS)]
        coords = " ".join(
            f"{x_at(index):.1f},{y_at(max(counts.get(category, 0), 0)):.1f}"
            for index, (_, counts) in enumerate(points)
        )
        ET.SubElement(root, "polyline", {
            "points": coords,
            "fill": "none",
            "stroke": color,
            "stroke-width": "2",
            "data-category": category,
        })
        legend_y = _MARGIN_TOP + 12 * (i + 1)
        legend_x = width - _MARGIN_RIGHT + 10
        ET.SubElement(root, "rect", {
            "x": str(legend_x), "y": str(legend_y - 8),
            "width": "8", "height": "8", "fill": color,
        })
        _text(root, legend_x + 12, legend_y, category)

    return ET.tostring(root, encoding="unicode")
