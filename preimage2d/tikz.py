"""TikZ rendering of constraint pairs and their preimage."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .predicates import StraightLine
from .preimage import Preimage

Point = Tuple[int, int]
Pair = Tuple[Point, Point]
BBox = Tuple[float, float, float, float]

BBOX_MARGIN = 0.5

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage{tikz}
\tikzset{
  %% global sizes (scale-aware; override per drawing if needed)
  pi/dot radius/.store in=\piDotR,       pi/dot radius=2.2pt,
  pi/line width/.store in=\piLW,         pi/line width=0.8pt,
  pi/aux width/.store  in=\piLWaux,      pi/aux width=0.6pt,
  grid/.style={line width=0.2pt, gray!40},
  inner/.style={fill=black},
  outer/.style={draw=black, fill=white, line width=0.4pt},
  leaning/.style={draw=red, line width=\piLW},
  critical/.style={line width=\piLWaux, dash pattern=on 3pt off 2pt, blue},
}
%% optional layers
\pgfdeclarelayer{bg}\pgfdeclarelayer{fg}\pgfsetlayers{bg,main,fg}
\begin{document}
%s
\end{document}
"""


def generate_tikz_document(
    pairs: Sequence[Pair],
    preimage: Optional[Preimage] = None,
    *,
    scale: float = 1.0,
) -> str:
    """Render a standalone LaTeX document around :func:`generate_tikz_code`."""

    return standalone_tpl % generate_tikz_code(pairs, preimage, scale=scale)


def generate_tikz_code(
    pairs: Sequence[Pair],
    preimage: Optional[Preimage] = None,
    *,
    scale: float = 1.0,
) -> str:
    if scale <= 0 or not math.isfinite(scale):
        raise ValueError(f"scale must be a positive finite number, got {scale!r}")

    points: List[Point] = [p for pair in pairs for p in pair]
    if preimage is not None:
        points.extend(preimage.inner_hull)
        points.extend(preimage.outer_hull)
    bbox = _coords_bbox(points)

    lines: List[str] = [f"\\begin{{tikzpicture}}[scale={_format_float(scale)}]"]
    if points:
        min_x, max_x, min_y, max_y = bbox
        lines.append("  \\begin{pgfonlayer}{bg}")
        lines.append(
            "    \\draw[grid] ({x0}, {y0}) grid ({x1}, {y1});".format(
                x0=_format_float(min_x),
                y0=_format_float(min_y),
                x1=_format_float(max_x),
                y1=_format_float(max_y),
            )
        )
        lines.append("  \\end{pgfonlayer}")
        lines.append("")

    lines.append("  \\begin{pgfonlayer}{main}")
    for inner, outer in pairs:
        lines.append(f"    \\draw[gray] {_coord(inner)} -- {_coord(outer)};")
    for inner, _ in pairs:
        lines.append(f"    \\fill[inner] {_coord(inner)} circle (\\piDotR);")
    for _, outer in pairs:
        lines.append(f"    \\filldraw[outer] {_coord(outer)} circle (\\piDotR);")
    lines.append("  \\end{pgfonlayer}")

    if preimage is not None:
        lines.append("")
        lines.append("  \\begin{pgfonlayer}{fg}")
        for line in preimage.critical_lines():
            clipped = _clip_line(line, bbox)
            if clipped is None:
                continue
            start, end = clipped
            lines.append(
                "    \\draw[critical] ({}, {}) -- ({}, {});".format(
                    _format_float(start[0]),
                    _format_float(start[1]),
                    _format_float(end[0]),
                    _format_float(end[1]),
                )
            )
        for point in _unique(preimage.inner_hull + preimage.outer_hull):
            lines.append(f"    \\draw[leaning] {_coord(point)} circle (1.6\\piDotR);")
        lines.append("  \\end{pgfonlayer}")

    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def _unique(points: Iterable[Point]) -> List[Point]:
    seen = set()
    ordered = []
    for point in points:
        if point not in seen:
            seen.add(point)
            ordered.append(point)
    return ordered


def _coords_bbox(points: Iterable[Point]) -> BBox:
    xs = [pt[0] for pt in points]
    ys = [pt[1] for pt in points]
    if not xs or not ys:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        min(xs) - BBOX_MARGIN,
        max(xs) + BBOX_MARGIN,
        min(ys) - BBOX_MARGIN,
        max(ys) + BBOX_MARGIN,
    )


def _clip_line(
    line: StraightLine, bbox: BBox
) -> Optional[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """Clip the infinite ``line`` to ``bbox`` (Liang-Barsky on the parameter)."""

    min_x, max_x, min_y, max_y = bbox
    ox, oy = float(line.first[0]), float(line.first[1])
    dx, dy = (float(c) for c in line.direction)
    t_min, t_max = -math.inf, math.inf
    for origin, delta, low, high in ((ox, dx, min_x, max_x), (oy, dy, min_y, max_y)):
        if delta == 0.0:
            if origin < low or origin > high:
                return None
            continue
        t0 = (low - origin) / delta
        t1 = (high - origin) / delta
        if t0 > t1:
            t0, t1 = t1, t0
        t_min = max(t_min, t0)
        t_max = min(t_max, t1)
    if t_min > t_max:
        return None
    return (ox + t_min * dx, oy + t_min * dy), (ox + t_max * dx, oy + t_max * dy)


def _coord(point: Point) -> str:
    return f"({point[0]}, {point[1]})"


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


__all__ = ["generate_tikz_code", "generate_tikz_document", "standalone_tpl"]
