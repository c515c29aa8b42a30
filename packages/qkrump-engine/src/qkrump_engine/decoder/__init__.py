# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Measurement decoding into krump moves."""

from __future__ import annotations

from qkrump_engine.decoder.decode import (
    ENERGY_LEVELS,
    ENERGY_NAMES,
    DecodedMove,
    average_energy,
    decode,
    decode_result,
    energy_distribution,
    energy_label,
    top_n,
)
from qkrump_engine.decoder.moves import (
    KRUMP_TABLE,
    MOVE_BITS,
    MOVES,
    KrumpMove,
    MoveComponents,
    MoveTable,
    is_valid_bitstring,
    lookup_move,
    make_move,
)


__all__ = [
    "DecodedMove",
    "ENERGY_LEVELS",
    "ENERGY_NAMES",
    "KRUMP_TABLE",
    "KrumpMove",
    "MOVES",
    "MOVE_BITS",
    "MoveComponents",
    "MoveTable",
    "average_energy",
    "decode",
    "decode_result",
    "energy_distribution",
    "energy_label",
    "is_valid_bitstring",
    "lookup_move",
    "make_move",
    "top_n",
]
