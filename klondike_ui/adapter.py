from klondike.Core import CardMove, GameEvent, GameState, RevealTop, StockDraw, StockRecycle, DECK_SIZE
from klondike_ui.view_model import AnimationEvent, CardView, GameViewModel, PileView


class CoreAdapter:
    """Copies live engine state/events into immutable renderer-friendly values."""

    @staticmethod
    def pile(cards) -> PileView:
        return PileView(
            cards=tuple(CardView(id=c.id, suit=c.suit, rank=c.rank, face_up=c.faceUp) for c in cards)
        )

    @staticmethod
    def snapshot(state: GameState) -> GameViewModel:
        return GameViewModel(
            stock=CoreAdapter.pile(state.stock),
            waste=CoreAdapter.pile(state.waste),
            foundations=tuple(CoreAdapter.pile(f) for f in state.foundations),
            tableau=tuple(CoreAdapter.pile(col) for col in state.tableau),
            move_count=state.moveCount,
            score=state.score,
            won=state.foundationTotal() == DECK_SIZE,
        )

    @staticmethod
    def event_to_animation(event: GameEvent) -> AnimationEvent:
        if isinstance(event, CardMove):
            return AnimationEvent(
                type="MOVE",
                payload={"src": str(event.src), "dest": str(event.dest), "card_ids": event.cardIds},
            )
        if isinstance(event, StockDraw):
            return AnimationEvent(type="DRAW", payload={"count": event.count, "card_ids": event.cardIds})
        if isinstance(event, StockRecycle):
            return AnimationEvent(type="RECYCLE", payload={"count": event.count})
        if isinstance(event, RevealTop):
            return AnimationEvent(type="REVEAL", payload={"column": event.column, "card_id": event.cardId})
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})
