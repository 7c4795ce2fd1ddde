from klondike.Core import DECK_SIZE, Card, GameState
from klondike.Interface import Interface


def up(suit, rank):
    return Card(suit, rank, faceUp=True)


def down(suit, rank):
    return Card(suit, rank, faceUp=False)


def build_state(tableau=(), waste=(), foundations=None, stock=None, moveCount=0, score=0):
    """
    A GameState holding exactly the given cards; with stock=None every card not
    placed elsewhere goes to the stock, face down.
    """
    state = GameState(moveCount=moveCount, score=score)
    for col, cards in enumerate(tableau):
        state.tableau[col] = list(cards)
    state.waste = list(waste)
    if foundations is not None:
        for idx, cards in enumerate(foundations):
            state.foundations[idx] = list(cards)
    if stock is None:
        used = {c.id for pile in state.allPiles() for c in pile}
        stock = [Card.fromId(i) for i in range(DECK_SIZE) if i not in used]
    state.stock = list(stock)
    return state


def full_foundation(suit, upto=13):
    return [up(suit, rank) for rank in range(1, upto + 1)]


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingInterface(Interface):
    def __init__(self):
        super().__init__()
        self.events = []
        self.moves = []
        self.undos = []
        self.wins = []
        self.first_moves = 0
        self.resets = 0

    def onReset(self):
        self.resets += 1

    def onEvent(self, event):
        self.events.append(event)

    def onFirstMove(self):
        self.first_moves += 1

    def onMove(self, payload):
        self.moves.append(payload)

    def onUndo(self, payload):
        self.undos.append(payload)

    def onWin(self, payload):
        self.wins.append(payload)
