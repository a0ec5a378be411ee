"""Scatter-plot rendering for a set of related words."""

from __future__ import annotations

import html
import io
import math
import re
from typing import Iterable, List, NamedTuple, Sequence

from matplotlib.figure import Figure

from .models import RelatedWord

RELATED_COLOR = "#8884d8"
TARGET_COLOR = "#ff7300"
TARGET_LABEL_COLOR = "#d95f00"
LABEL_LIMIT = 10

_POINT_GROUP = re.compile(r'<g id="word-(\d+)">')


class AxisDomain(NamedTuple):
    low: int
    high: int


class PlotSplit(NamedTuple):
    target: List[RelatedWord]
    others: List[RelatedWord]


def axis_domain(
    values: Iterable[float],
    floor: float = -50,
    ceiling: float = 50,
    padding: float = 10,
) -> AxisDomain:
    """Range covering ``values`` and at least ``[floor, ceiling]``, padded on both sides."""
    values = list(values)
    low = min(values + [floor])
    high = max(values + [ceiling])
    return AxisDomain(math.floor(low - padding), math.ceil(high + padding))


def split_target(words: Sequence[RelatedWord], target_word: str) -> PlotSplit:
    key = target_word.strip().lower()
    target = [w for w in words if w.word.lower() == key]
    others = [w for w in words if w.word.lower() != key]
    return PlotSplit(target, others)


def shorten_label(word: str, limit: int = LABEL_LIMIT) -> str:
    if len(word) > limit:
        return f"{word[:limit - 1]}..."
    return word


def point_title(word: RelatedWord) -> str:
    return f"{word.word} (x: {word.x:g}, y: {word.y:g})"


def add_point_titles(svg: str, words: Sequence[RelatedWord]) -> str:
    """Insert a hover ``<title>`` into each point group of a rendered SVG."""

    def _titled(match: re.Match) -> str:
        index = int(match.group(1))
        if index >= len(words):
            return match.group(0)
        title = html.escape(point_title(words[index]), quote=False)
        return f"{match.group(0)}<title>{title}</title>"

    return _POINT_GROUP.sub(_titled, svg)


def render_plot(
    words: Sequence[RelatedWord],
    target_word: str,
    fmt: str = "png",
    figsize=(10, 6),
    dpi: int = 100,
) -> bytes:
    """Render the words as a labeled scatter plot and return the encoded image.

    Related words are drawn as circles, the target word as a star. ``fmt`` is
    anything ``savefig`` accepts; the service uses ``png`` and ``svg``. SVG
    output carries a ``word (x, y)`` tooltip on every point.

    Uses a standalone ``Figure`` so concurrent renders share no pyplot state.
    """
    fig = Figure(figsize=figsize)
    ax = fig.subplots()
    if not words:
        ax.text(0.5, 0.5, "No data to display", ha="center", va="center",
                transform=ax.transAxes, color="#64748b")
        ax.set_axis_off()
    else:
        _draw_words(ax, words, target_word)

    buffer = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buffer, format=fmt, dpi=dpi, facecolor="white", edgecolor="none")
    image = buffer.getvalue()
    if fmt == "svg":
        image = add_point_titles(image.decode("utf-8"), words).encode("utf-8")
    return image


def _draw_words(ax, words: Sequence[RelatedWord], target_word: str) -> None:
    target_ids = {id(w) for w in split_target(words, target_word).target}
    legend_done = set()

    # One collection per point so each gets its own SVG group id.
    for index, w in enumerate(words):
        is_target = id(w) in target_ids
        group = "Input word" if is_target else "Related words"
        label = group if group not in legend_done else None
        legend_done.add(group)
        if is_target:
            ax.scatter([w.x], [w.y], c=TARGET_COLOR, marker="*", s=200,
                       label=label, zorder=5, gid=f"word-{index}")
            ax.annotate(shorten_label(w.word), (w.x, w.y), fontsize=10, fontweight="bold",
                        color=TARGET_LABEL_COLOR, xytext=(0, 8),
                        textcoords="offset points", ha="center")
        else:
            ax.scatter([w.x], [w.y], c=RELATED_COLOR, s=30,
                       label=label, zorder=3, gid=f"word-{index}")
            ax.annotate(shorten_label(w.word), (w.x, w.y), fontsize=8, color="#555555",
                        xytext=(0, 6), textcoords="offset points", ha="center")

    ax.set_xlim(*axis_domain(w.x for w in words))
    ax.set_ylim(*axis_domain(w.y for w in words))
    ax.grid(True, linestyle="--", color="#e0e0e0")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.legend(loc="upper center", bbox_to_anchor=(0.5, 1.12), ncol=2, frameon=False)
