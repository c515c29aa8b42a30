# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Static move tables.

A :class:`MoveTable` maps every ``n``-bit measurement outcome to a move.
Entries are stored in a tuple indexed by the integer value of the
bitstring, so a table is total over its width by construction and a
lookup never yields a half-populated record.

The built-in :data:`KRUMP_TABLE` covers 3-bit outcomes. Bit positions
read left to right:

======  ==============
Bit     Component
======  ==============
0       jab / stomp
1       arm swing
2       chest pop
======  ==============

Energy equals the number of active components.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from qkrump_engine.errors import UnknownOutcomeError


MOVE_BITS = 3

COMPONENT_NAMES = ("jab_stomp", "arm_swing", "chest_pop")


@dataclass(frozen=True)
class MoveComponents:
    """Body components active in a move, one flag per bit."""

    jab_stomp: bool
    arm_swing: bool
    chest_pop: bool

    @classmethod
    def from_bitstring(cls, bitstring: str) -> MoveComponents:
        """Build flags from the first three characters of a bitstring."""
        bits = (bitstring + "000")[:MOVE_BITS]
        return cls(**{name: bit == "1" for name, bit in zip(COMPONENT_NAMES, bits)})

    def to_dict(self) -> dict[str, bool]:
        """Convert to dictionary."""
        return {name: getattr(self, name) for name in COMPONENT_NAMES}


@dataclass(frozen=True)
class KrumpMove:
    """
    A named move decoded from a bitstring.

    Attributes
    ----------
    bitstring : str
        Outcome this move is keyed by.
    name : str
        Display name.
    description : str
        One-line description.
    energy : int
        Intensity level in 0..3.
    emoji : str
        Icon shown next to the name.
    components : MoveComponents
        Active body components.
    """

    bitstring: str
    name: str
    description: str
    energy: int
    emoji: str
    components: MoveComponents

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "bitstring": self.bitstring,
            "name": self.name,
            "description": self.description,
            "energy": self.energy,
            "emoji": self.emoji,
            "components": self.components.to_dict(),
        }


class MoveTable:
    """
    Immutable bitstring-indexed move table.

    Parameters
    ----------
    width : int
        Bitstring length covered by the table.
    moves : sequence of KrumpMove
        Exactly ``2 ** width`` moves ordered by bitstring value.

    Raises
    ------
    ValueError
        If the table is not total over ``width`` bits or an entry sits
        at the wrong index.
    """

    __slots__ = ("_width", "_moves")

    def __init__(self, width: int, moves: Sequence[KrumpMove]) -> None:
        if width < 1:
            raise ValueError("width must be positive")
        if len(moves) != 2**width:
            raise ValueError(
                f"a {width}-bit table needs {2**width} moves, got {len(moves)}"
            )
        for index, move in enumerate(moves):
            if len(move.bitstring) != width or int(move.bitstring, 2) != index:
                raise ValueError(
                    f"move {move.bitstring!r} is not at index {index} of a "
                    f"{width}-bit table"
                )
            if move.energy not in (0, 1, 2, 3):
                raise ValueError(f"move {move.bitstring!r} has energy {move.energy}")
        self._width = width
        self._moves = tuple(moves)

    @property
    def width(self) -> int:
        return self._width

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[KrumpMove]:
        return iter(self._moves)

    def __getitem__(self, index: int) -> KrumpMove:
        return self._moves[index]

    def __contains__(self, bitstring: object) -> bool:
        return isinstance(bitstring, str) and self.is_valid(bitstring)

    def __repr__(self) -> str:
        return f"MoveTable(width={self._width})"

    def is_valid(self, bitstring: str) -> bool:
        """Whether ``bitstring`` has the table width and only 0/1 characters."""
        return len(bitstring) == self._width and all(c in "01" for c in bitstring)

    def lookup(self, bitstring: str) -> KrumpMove:
        """
        Return the move for a bitstring.

        Raises
        ------
        UnknownOutcomeError
            If the bitstring is not a pattern of the table width.
        """
        if not isinstance(bitstring, str) or not self.is_valid(bitstring):
            raise UnknownOutcomeError(str(bitstring))
        return self._moves[int(bitstring, 2)]


def make_move(bitstring: str, name: str, description: str, emoji: str) -> KrumpMove:
    """Build a move whose energy and components follow from its bits."""
    return KrumpMove(
        bitstring=bitstring,
        name=name,
        description=description,
        energy=min(3, bitstring.count("1")),
        emoji=emoji,
        components=MoveComponents.from_bitstring(bitstring),
    )


KRUMP_TABLE = MoveTable(
    MOVE_BITS,
    (
        make_move("000", "The Stillness", "Neutral stance, ready to move", "🕴️"),
        make_move("001", "Chest Pop", "Sharp chest isolation, controlled power", "💢"),
        make_move("010", "Arm Swing", "Dynamic arm motion, expressing emotion", "🙌"),
        make_move(
            "011", "Upper Body Flow", "Swing and pop combined, fluid movement", "🤸"
        ),
        make_move("100", "Stomp", "Ground connection, powerful foundation", "👟"),
        make_move(
            "101", "Stomp & Pop", "Ground to chest, explosive vertical energy", "💥"
        ),
        make_move("110", "Stomp & Swing", "Grounded power with reaching motion", "⚡"),
        make_move(
            "111", "Full Krump", "Maximum intensity, all elements unleashed", "🔥"
        ),
    ),
)

MOVES: tuple[KrumpMove, ...] = tuple(KRUMP_TABLE)


def is_valid_bitstring(bitstring: str, table: MoveTable = KRUMP_TABLE) -> bool:
    """Whether ``bitstring`` can be decoded by ``table``."""
    return bitstring in table


def lookup_move(bitstring: str, table: MoveTable = KRUMP_TABLE) -> KrumpMove:
    """
    Return the move for a bitstring.

    Parameters
    ----------
    bitstring : str
        Outcome such as ``"110"``.
    table : MoveTable, optional
        Table to consult. Defaults to the 3-bit krump table.

    Returns
    -------
    KrumpMove
        The table entry.

    Raises
    ------
    UnknownOutcomeError
        If the bitstring has no entry.
    """
    return table.lookup(bitstring)
