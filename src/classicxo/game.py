"""Core rules for ClassicXO: the 3x3 board, win/tie detection, and move simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

Player = str  # "X" or "O"
Outcome = Optional[str]  # "X", "O", TIE, or None while in progress

EMPTY = ""
MARKERS: Tuple[Player, Player] = ("X", "O")
TIE = "tie"

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def other_marker(player: Player) -> Player:
    return "O" if player == "X" else "X"


def available_indices(cells: Sequence[str]) -> List[int]:
    """Every empty index, in ascending order."""
    return [i for i, c in enumerate(cells) if c == EMPTY]


def evaluate(cells: Sequence[str]) -> Outcome:
    """Result of any board, live or hypothetical.

    The first entry of ``WINNING_LINES`` held by a single marker decides the
    winner; a full board without one is a tie; anything else is still in
    progress (``None``).
    """
    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v != EMPTY and v == cells[b] == cells[c]:
            return v
    if all(c != EMPTY for c in cells):
        return TIE
    return None


def marker_to_move(cells: Sequence[str]) -> Player:
    x = sum(1 for c in cells if c == "X")
    o = sum(1 for c in cells if c == "O")
    if x == o:
        return "X"
    if x == o + 1:
        return "O"
    raise ValueError(f"Unreachable position: {x} X markers against {o} O markers")


def apply_move(cells: Sequence[str], index: int, marker: Player) -> Tuple[str, ...]:
    """Return a copy of ``cells`` with ``marker`` at ``index``; ``cells`` is untouched."""
    if not 0 <= index < 9:
        raise ValueError(f"Cell index {index} is outside the board")
    if cells[index] != EMPTY:
        raise ValueError("Cell already occupied")
    out = list(cells)
    out[index] = marker
    return tuple(out)


@dataclass
class Board:
    """The live game board. Mutated only via ``fill_cell`` and ``reset``."""

    cells: List[str] = field(default_factory=lambda: [EMPTY] * 9)

    def __post_init__(self) -> None:
        if len(self.cells) != 9:
            raise ValueError("A board has exactly 9 cells")

    def fill_cell(self, index: int, marker: Player) -> None:
        if marker not in MARKERS:
            raise ValueError(f"Unknown marker {marker!r}")
        if not 0 <= index < 9:
            raise ValueError(f"Cell index {index} is outside the board")
        if self.cells[index] != EMPTY:
            raise ValueError("Cell already occupied")
        self.cells[index] = marker

    def available_indices(self) -> List[int]:
        return available_indices(self.cells)

    def result(self) -> Outcome:
        return evaluate(self.cells)

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def reset(self) -> None:
        self.cells[:] = [EMPTY] * 9

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self.cells)
