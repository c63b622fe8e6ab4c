"""SVG drawing of bids and a price trajectory for two-good auctions."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from typing import Union
from xml.sax.saxutils import escape

import numpy as np

from dcauction.auction import Auction

PathType = Union[str, "PathLike[str]"]

_WIDTH = 500
_HEIGHT = 500
_MARGIN = 0
_POS_BID_RADIUS = 7
_NEG_BID_RADIUS = 5


def svg_header(width: int, height: int) -> str:
    """Return the opening of an SVG document of ``width`` by ``height`` millimetres."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?> \n'
        '<svg xmlns="http://www.w3.org/2000/svg" \n'
        'version = "1.1" baseProfile = "full" '
        f'width = "{int(width)}mm" height = "{int(height)}mm" '
        f'viewBox = "-20 -20 {int(width)} {int(height)}" > \n'
        "<title>Title</title><desc>Description</desc>"
    )


def svg_footer() -> str:
    """Return the closing tag of an SVG document."""
    return "</svg>"


def svg_point(x: float, y: float, r: float, fill: str = "black", stroke: str = "black") -> str:
    """Return a circle element; coordinates are truncated to integers."""
    return (
        f'<circle cx="{int(x)}" cy="{int(y)}" r="{int(r)}" '
        f'fill="{escape(fill)}" stroke="{escape(stroke)}" /> \n'
    )


def svg_line(
    x1: float, y1: float, x2: float, y2: float, stroke: str = "black", width: int = 1
) -> str:
    """Return a line element; coordinates are truncated to integers."""
    return (
        f'<line x1="{int(x1)}" y1="{int(y1)}" x2="{int(x2)}" y2="{int(y2)}" '
        f'stroke="{escape(stroke)}" stroke-width="{int(width)}" /> \n'
    )


def svg_text(x: float, y: float, text: str, stroke: str = "black", size: int = 10) -> str:
    """Return a text element with its content escaped."""
    return (
        f'<text x="{int(x)}" y="{int(y)}" fill="{escape(stroke)}" '
        f'font-size="{int(size)}px" >{escape(text)}</text> \n'
    )


def svg_cross(x: float, y: float, l: float) -> str:
    """Return two diagonal lines of extent ``l`` crossing at ``(x, y)``."""
    x, y, half = int(x), int(y), int(int(l) / 2)
    x1, x2 = x - half, x + half
    y1, y2 = y - half, y + half
    return (
        f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" /> \n'
        f'<line x1="{x1}" y1="{y2}" x2="{x2}" y2="{y1}" /> \n'
    )


def _bid_marks(valuations: np.ndarray, unit: int, colour: str, radius: int, width: int) -> list[str]:
    parts = []
    for row in np.asarray(valuations, dtype=float):
        x = int(row[0] * unit)
        y = int(_HEIGHT - row[1] * unit)
        parts.append(svg_point(x, y, radius, colour, colour))
        parts.append(svg_line(x, y, _WIDTH, y, colour, width))
        parts.append(svg_line(x, y, x, 0, colour, width))
        parts.append(svg_line(x, y, x - _HEIGHT + y, _HEIGHT, colour, width))
    return parts


def price_trajectory_svg(auction: Auction, price_trajectory: Sequence[np.ndarray]) -> str:
    """Return an SVG drawing of the bids of a two-good auction and a numbered price path."""
    pos_valuation = np.asarray(auction.pos_valuation, dtype=float)
    max_price = int(pos_valuation.max()) if pos_valuation.size else 0
    if max_price <= 0:
        raise ValueError("positive valuations must contain a positive value")
    unit = (_WIDTH - _MARGIN) // max_price

    parts = [svg_header(_WIDTH, _HEIGHT)]
    parts += _bid_marks(pos_valuation, unit, "red", _POS_BID_RADIUS, 3)
    parts += _bid_marks(auction.neg_valuation, unit, "blue", _NEG_BID_RADIUS, 1)
    for number, prices in enumerate(price_trajectory, start=1):
        x = unit * prices[0]
        y = _HEIGHT - unit * prices[1]
        parts.append(svg_point(x, y, 3, "green", "green"))
        parts.append(svg_text(x, y + 15, str(number), "green", 20))
    parts.append(svg_footer())
    return "".join(parts)


def write_price_trajectory_svg(
    auction: Auction, price_trajectory: Sequence[np.ndarray], filename: PathType
) -> None:
    """Write :func:`price_trajectory_svg` output to ``filename``."""
    with open(filename, "w", encoding="utf-8") as out:
        out.write(price_trajectory_svg(auction, price_trajectory))