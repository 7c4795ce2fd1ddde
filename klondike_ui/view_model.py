from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    id: int
    suit: int
    rank: int
    face_up: bool


@dataclass(frozen=True)
class PileView:
    cards: tuple[CardView, ...]

    @property
    def top(self):
        return self.cards[-1] if self.cards else None


@dataclass(frozen=True)
class GameViewModel:
    stock: PileView
    waste: PileView
    foundations: tuple[PileView, ...]
    tableau: tuple[PileView, ...]
    move_count: int
    score: int
    won: bool

    @property
    def stock_count(self) -> int:
        return len(self.stock.cards)


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
