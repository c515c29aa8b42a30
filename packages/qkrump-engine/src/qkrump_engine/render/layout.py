# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Vertical flow layout.

Reports are a stack of sections. Each section (a :class:`Block`) knows
its own height from the data it renders; :class:`VerticalFlow` sums the
heights first, so the document size is known before anything is drawn,
then hands every block its absolute Y offset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

from qkrump_engine.render.svg import SvgDocument


@runtime_checkable
class Block(Protocol):
    """A vertically stacked report section."""

    def height(self, width: float) -> float:
        """Height the block occupies at the given document width."""
        ...

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        """Draw the block with its top edge at ``y``."""
        ...


@dataclass
class Placement:
    """Resolved position of a block."""

    block: Block
    y: float
    height: float


@dataclass
class VerticalFlow:
    """
    Stack blocks top to bottom.

    Attributes
    ----------
    width : float
        Document width shared by all blocks.
    top : float
        Margin above the first block.
    bottom : float
        Margin below the last block.
    gap : float
        Space inserted between consecutive blocks.
    """

    width: float
    top: float = 0.0
    bottom: float = 0.0
    gap: float = 0.0
    blocks: list[Block] = field(default_factory=list)

    def add(self, block: Block) -> VerticalFlow:
        """Append a block; returns ``self`` for chaining."""
        self.blocks.append(block)
        return self

    def extend(self, blocks: Sequence[Block]) -> VerticalFlow:
        """Append several blocks."""
        self.blocks.extend(blocks)
        return self

    def place(self) -> list[Placement]:
        """Compute the absolute offset of every block."""
        placements = []
        y = self.top
        for i, block in enumerate(self.blocks):
            if i:
                y += self.gap
            h = float(block.height(self.width))
            if h < 0:
                raise ValueError(f"{type(block).__name__} reported negative height")
            placements.append(Placement(block=block, y=y, height=h))
            y += h
        return placements

    def measure(self) -> float:
        """Total document height including margins."""
        placements = self.place()
        if not placements:
            return self.top + self.bottom
        last = placements[-1]
        return last.y + last.height + self.bottom

    def render(self, doc: SvgDocument) -> None:
        """Draw every block at its offset."""
        for placement in self.place():
            placement.block.draw(doc, placement.y, self.width)


def scale(value: float, maximum: float, extent: float) -> float:
    """
    Scale ``value`` against the local ``maximum`` into ``[0, extent]``.

    A non-positive maximum yields 0, so an all-zero dataset draws
    zero-width bars rather than dividing by zero.
    """
    if maximum <= 0 or value <= 0:
        return 0.0
    return min(extent, extent * value / maximum)
