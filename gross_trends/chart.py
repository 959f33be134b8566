from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import ticker

from .aggregator import MIN_YEAR, AggregatedPoint

TITLE = "Trends in Gross Movie Revenue Over Time"
X_LABEL = "Year"
Y_LABEL = "Total Gross (Billion $)"
LINE_COLOR = "steelblue"


@dataclass(frozen=True)
class Margin:
    """Space in pixels between the figure edge and the plotting area."""
    top: int = 50
    right: int = 30
    bottom: int = 60
    left: int = 70


@dataclass(frozen=True)
class ChartLayout:
    """Figure size in pixels; the plotting area is what remains inside the margin."""
    width: int = 800
    height: int = 400
    margin: Margin = field(default_factory=Margin)
    dpi: int = 100

    def __post_init__(self) -> None:
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}")
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Chart {self.width}x{self.height} leaves no room inside margin {self.margin}"
            )

    @property
    def inner_width(self) -> int:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin.top - self.margin.bottom

    @property
    def figsize(self) -> Tuple[float, float]:
        return self.width / self.dpi, self.height / self.dpi


def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)


def format_billions(value: float, _pos=None) -> str:
    return f"{value / 1_000_000_000:g}B"


def format_year(value: float, _pos=None) -> str:
    return f"{value:.0f}"


def render_line_chart(
    points: Sequence[AggregatedPoint],
    layout: ChartLayout = ChartLayout(),
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    min_year: int = MIN_YEAR,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """
    Draw total gross per year as a single line.

    The x axis starts at min_year and the y axis at zero, each running up to
    the largest value present. With no points the labelled axes are still drawn.
    """
    fig = plt.figure(figsize=layout.figsize, dpi=layout.dpi)
    m = layout.margin
    fig.subplots_adjust(
        left=m.left / layout.width,
        right=1 - m.right / layout.width,
        top=1 - m.top / layout.height,
        bottom=m.bottom / layout.height,
    )
    ax = fig.add_subplot(1, 1, 1)

    years = [p.year for p in points]
    totals = [p.total_gross for p in points]

    ax.plot(years, totals, color=LINE_COLOR, linewidth=2)

    # Degenerate domains are left to autoscaling
    if years and max(years) > min_year:
        ax.set_xlim(min_year, max(years))
    if totals and max(totals) > 0:
        ax.set_ylim(0, max(totals))

    ax.xaxis.set_major_locator(ticker.MaxNLocator(integer=True))
    ax.xaxis.set_major_formatter(ticker.FuncFormatter(format_year))
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(format_billions))

    ax.set_title(TITLE)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)

    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=layout.dpi)
        saved = out_path

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig, ax, saved
