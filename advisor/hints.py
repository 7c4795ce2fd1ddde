from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from klondike.Core import (
    WASTE,
    GameState,
    Location,
    canBuildOnTableau,
    foundationIndexFor,
    foundationAt,
    tableauAt,
    willRevealAfterRemoving,
)

TABLEAU_TO_FOUNDATION = "tableau-to-foundation"
TABLEAU_TO_TABLEAU = "tableau-to-tableau"
WASTE_TO_TABLEAU = "waste-to-tableau"


@dataclass(frozen=True, slots=True)
class HintMove:
    """A suggested move. Pure description; applying it is up to the caller."""

    move_type: str
    source: Location
    destination: Location
    card_id: int
    will_reveal_card: bool = False

    def to_notation(self) -> str:
        flip = " (reveals)" if self.will_reveal_card else ""
        return f"{self.source} -> {self.destination}{flip}"


def will_reveal_card(state: GameState, column_index: int, count: int = 1) -> bool:
    """True if taking `count` cards off the column would leave a face-down top."""
    if column_index < 0 or column_index >= len(state.tableau):
        return False
    return willRevealAfterRemoving(state, column_index, count)


def _first_tableau_destination(state: GameState, card, exclude: int = -1) -> Optional[int]:
    for col in range(len(state.tableau)):
        if col != exclude and canBuildOnTableau(state, [card], col):
            return col
    return None


def compute_hint(state: Optional[GameState]) -> Optional[HintMove]:
    """
    Best visible move, by tier:
    1) tableau moves that reveal a face-down card
    2) tableau -> foundation
    3) waste -> tableau
    4) other tableau -> tableau
    Columns are scanned left to right; the first candidate of the best tier wins.
    """
    if state is None:
        return None

    revealing: list[HintMove] = []
    to_foundation: list[HintMove] = []
    from_waste: list[HintMove] = []
    between_columns: list[HintMove] = []

    for col, column in enumerate(state.tableau):
        if not column or not column[-1].faceUp:
            continue
        card = column[-1]
        source = tableauAt(col)
        reveals = will_reveal_card(state, col, 1)

        foundation_index = foundationIndexFor(state, card)
        if foundation_index is not None:
            move = HintMove(TABLEAU_TO_FOUNDATION, source, foundationAt(foundation_index), card.id, reveals)
            (revealing if reveals else to_foundation).append(move)

        target = _first_tableau_destination(state, card, exclude=col)
        if target is not None:
            move = HintMove(TABLEAU_TO_TABLEAU, source, tableauAt(target), card.id, reveals)
            (revealing if reveals else between_columns).append(move)

    if state.waste:
        top = state.waste[-1]
        target = _first_tableau_destination(state, top)
        if target is not None:
            from_waste.append(HintMove(WASTE_TO_TABLEAU, WASTE, tableauAt(target), top.id, False))

    for tier in (revealing, to_foundation, from_waste, between_columns):
        if tier:
            return tier[0]
    return None
