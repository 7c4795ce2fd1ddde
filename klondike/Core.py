import logging
import random
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

NUM_SUITS = 4
NUM_RANKS = 13
DECK_SIZE = NUM_SUITS * NUM_RANKS
TABLEAU_COLUMNS = 7
DRAW_COUNT = 3

ACE = 1
KING = 13

# Foundation index == suit index.
HEARTS, DIAMONDS, CLUBS, SPADES = range(NUM_SUITS)

SCORE_TO_FOUNDATION = 10
SCORE_WASTE_TO_TABLEAU = 5
SCORE_FOUNDATION_TO_TABLEAU = -15
SCORE_REVEAL = 5


@dataclass
class Card:
    suit: int
    rank: int
    faceUp: bool = False
    id: int = -1

    SUITS = "♥♦♣♠"
    RANKS = ("A ", "2 ", "3 ", "4 ", "5 ", "6 ", "7 ", "8 ", "9 ", "10", "J ", "Q ", "K ")

    def __post_init__(self):
        if self.id < 0:
            self.id = Card.idOf(self.suit, self.rank)

    @staticmethod
    def idOf(suit, rank):
        return suit * NUM_RANKS + rank - 1

    @staticmethod
    def fromId(cardId):
        return Card(cardId // NUM_RANKS, cardId % NUM_RANKS + 1)

    def isRed(self):
        return isRedSuit(self.suit)

    def color(self):
        return "red" if self.isRed() else "black"

    def gameStr(self):
        if not self.faceUp:
            return "---"
        return Card.SUITS[self.suit] + Card.RANKS[self.rank - 1]

    def __str__(self):
        return self.gameStr() if self.faceUp else str(self.id) + "H"


def isRedSuit(suit):
    return suit == HEARTS or suit == DIAMONDS


def isOppositeColor(a: Card, b: Card):
    return a.isRed() != b.isRed()


def isOneRankBelow(lower: Card, upper: Card):
    return lower.rank == upper.rank - 1


def createDeck():
    """52 face-down cards, suit-major, aces first."""
    return [Card(suit, rank) for suit in range(NUM_SUITS) for rank in range(ACE, KING + 1)]


def shuffleDeck(deck, rng=None):
    (rng or random).shuffle(deck)
    return deck


@dataclass
class GameState:
    stock: list = field(default_factory=list)
    waste: list = field(default_factory=list)
    foundations: list = field(default_factory=lambda: [[] for _ in range(NUM_SUITS)])
    tableau: list = field(default_factory=lambda: [[] for _ in range(TABLEAU_COLUMNS)])
    moveCount: int = 0
    score: int = 0

    def allPiles(self):
        yield self.stock
        yield self.waste
        yield from self.foundations
        yield from self.tableau

    def foundationTotal(self):
        return sum(len(f) for f in self.foundations)


def dealTableau(deck, state: GameState):
    """Column i gets i+1 cards, the last one face up. Pops from the end of `deck`."""
    for col in range(TABLEAU_COLUMNS):
        for row in range(col + 1):
            card = deck.pop()
            card.faceUp = row == col
            state.tableau[col].append(card)


def dealNewGame(rng=None):
    deck = shuffleDeck(createDeck(), rng)
    state = GameState()
    dealTableau(deck, state)
    for card in deck:
        card.faceUp = False
    state.stock = deck
    checkInvariants(state)
    return state


def checkInvariants(state: GameState):
    ids = [card.id for pile in state.allPiles() for card in pile]
    assert len(ids) == DECK_SIZE, f"deck has {len(ids)} cards"
    assert sorted(ids) == list(range(DECK_SIZE)), "duplicate or foreign card ids"
    assert not any(card.faceUp for card in state.stock), "face-up card in stock"
    assert all(card.faceUp for card in state.waste), "face-down card in waste"
    for suit, foundation in enumerate(state.foundations):
        for pos, card in enumerate(foundation):
            assert card.suit == suit and card.rank == pos + 1, f"foundation {suit} out of order"
    for col, column in enumerate(state.tableau):
        seenFaceUp = False
        for card in column:
            if card.faceUp:
                seenFaceUp = True
            else:
                assert not seenFaceUp, f"face-down card above face-up card in column {col}"


# Read-only legality predicates, shared with the hint engine.

def foundationIndexFor(state: GameState, card: Card):
    foundation = state.foundations[card.suit]
    if len(foundation) == 0:
        return card.suit if card.rank == ACE else None
    return card.suit if card.rank == foundation[-1].rank + 1 else None


def canBuildOnTableau(state: GameState, cards, columnIndex):
    if not cards or columnIndex < 0 or columnIndex >= len(state.tableau):
        return False
    column = state.tableau[columnIndex]
    first = cards[0]
    if len(column) == 0:
        return first.rank == KING
    top = column[-1]
    if not top.faceUp:
        return False
    return isOppositeColor(first, top) and isOneRankBelow(first, top)


def willRevealAfterRemoving(state: GameState, columnIndex, count):
    column = state.tableau[columnIndex]
    if len(column) <= count:
        return False
    return not column[len(column) - 1 - count].faceUp


@dataclass(frozen=True)
class Location:
    zone: str
    index: int = 0

    ZONES = ("stock", "waste", "foundation", "tableau")

    def __str__(self):
        if self.zone in ("stock", "waste"):
            return self.zone
        return f"{self.zone}-{self.index}"

    @staticmethod
    def parse(text):
        if isinstance(text, Location):
            return text
        zone, _, idx = str(text).partition("-")
        if zone not in Location.ZONES:
            raise ValueError(f"unknown location: {text!r}")
        if zone in ("stock", "waste"):
            return Location(zone)
        try:
            return Location(zone, int(idx))
        except ValueError:
            raise ValueError(f"bad pile index in location: {text!r}") from None


STOCK = Location("stock")
WASTE = Location("waste")


def tableauAt(col):
    return Location("tableau", col)


def foundationAt(idx):
    return Location("foundation", idx)


class GameConfig:
    def __init__(self, seed=None, maxHistory=None):
        self.seed = seed
        self.maxHistory = maxHistory

    def makeRng(self):
        if self.seed is None:
            return random.Random()
        return random.Random(self.seed)


class GameEvent:
    pass


class StockDraw(GameEvent):
    def __init__(self, count: int, cardIds=()):
        self.count = count
        self.cardIds = tuple(cardIds)


class StockRecycle(GameEvent):
    def __init__(self, count: int):
        self.count = count


class CardMove(GameEvent):
    def __init__(self, src: Location, dest: Location, cardIds):
        self.src = src
        self.dest = dest
        self.cardIds = tuple(cardIds)


class RevealTop(GameEvent):
    def __init__(self, column: int, cardId: int):
        self.column = column
        self.cardId = cardId


class Core:
    """
    The Move Engine: the only writer of `state` once a deal is made.

    can*** : read-only legality checks
    move*** / draw*** : validated, snapshotted, scored mutations
    try*** : orchestration choosing a destination, then delegating to move***
    """
    DEFAULT_CONFIG = GameConfig()

    def __init__(self, history=None, clock=time.time):
        self.interface = None
        self.history = history
        self.clock = clock
        self.state: GameState = None
        self.firstMoveTimestamp = None
        self.lastRevealedIds = []

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def _emit(self, event):
        if self.interface is not None:
            self.interface.onEvent(event)

    def startGame(self, gameConfig: GameConfig = DEFAULT_CONFIG):
        if self.history is not None:
            self.history.reset()
            if gameConfig.maxHistory is not None:
                self.history.setMaxHistory(gameConfig.maxHistory)
        self.state = dealNewGame(gameConfig.makeRng())
        self.firstMoveTimestamp = None
        self.lastRevealedIds = []
        logger.info("new deal, %d cards in stock", len(self.state.stock))
        if self.interface is not None:
            self.interface.onReset()
        return self.state

    def captureSnapshot(self):
        if self.history is not None:
            self.history.pushSnapshot(self.state)

    # ---- legality ----

    def canMoveToFoundation(self, card: Card):
        return foundationIndexFor(self.state, card)

    def canMoveToTableau(self, cards, columnIndex):
        return canBuildOnTableau(self.state, cards, columnIndex)

    # ---- stock ----

    def drawFromStock(self) -> bool:
        state = self.state
        if state.stock:
            self.captureSnapshot()
            drawn = []
            for _ in range(min(DRAW_COUNT, len(state.stock))):
                card = state.stock.pop()
                card.faceUp = True
                state.waste.append(card)
                drawn.append(card.id)
            logger.debug("drew %d from stock", len(drawn))
            self.registerMove(StockDraw(len(drawn), drawn))
            return True
        if state.waste:
            self.captureSnapshot()
            count = len(state.waste)
            while state.waste:
                card = state.waste.pop()
                card.faceUp = False
                state.stock.append(card)
            logger.debug("recycled %d waste cards into stock", count)
            self.registerMove(StockRecycle(count))
            return True
        return False

    # ---- source handling ----

    def pileAt(self, location: Location):
        if location.zone == "waste":
            return self.state.waste
        if location.zone == "stock":
            return self.state.stock
        if location.zone == "foundation":
            piles = self.state.foundations
        else:
            piles = self.state.tableau
        if location.index < 0 or location.index >= len(piles):
            return None
        return piles[location.index]

    def resolveCards(self, location, cardIds):
        """
        The owned run at `location` matching `cardIds` exactly, or None.
        Waste and foundation give at most their top card; a tableau run must be a
        face-up suffix of the column.
        """
        location = Location.parse(location)
        pile = self.pileAt(location)
        cardIds = list(cardIds)
        if pile is None or location.zone == "stock" or not cardIds or len(cardIds) > len(pile):
            return None
        if location.zone != "tableau" and len(cardIds) != 1:
            return None
        run = pile[len(pile) - len(cardIds):]
        if [c.id for c in run] != cardIds:
            return None
        if not all(c.faceUp for c in run):
            return None
        return run

    def _detach(self, location: Location, cards):
        """Remove `cards` from the top of their source; returns the revealed card, if any."""
        pile = self.pileAt(location)
        del pile[len(pile) - len(cards):]
        self.lastRevealedIds = []
        if location.zone == "tableau" and pile and not pile[-1].faceUp:
            revealed = pile[-1]
            revealed.faceUp = True
            self.state.score += SCORE_REVEAL
            self.lastRevealedIds.append(revealed.id)
            return revealed
        return None

    # ---- moves ----

    def moveCardToFoundation(self, fromLocation, foundationIndex, card: Card) -> bool:
        fromLocation = Location.parse(fromLocation)
        if fromLocation.zone not in ("waste", "tableau"):
            return False
        run = self.resolveCards(fromLocation, [card.id])
        if run is None:
            return False
        owned = run[0]
        if self.canMoveToFoundation(owned) != foundationIndex:
            return False

        self.captureSnapshot()
        revealed = self._detach(fromLocation, run)
        self.state.foundations[foundationIndex].append(owned)
        self.state.score += SCORE_TO_FOUNDATION
        dest = foundationAt(foundationIndex)
        logger.debug("moved %s from %s to %s", owned.gameStr().strip(), fromLocation, dest)
        self.registerMove(CardMove(fromLocation, dest, [owned.id]), revealed, fromLocation)
        self.checkWinCondition()
        return True

    def moveCardsToTableau(self, fromLocation, toColumnIndex, cardsToMove) -> bool:
        fromLocation = Location.parse(fromLocation)
        if fromLocation.zone == "stock":
            return False
        if fromLocation.zone == "tableau" and fromLocation.index == toColumnIndex:
            return False
        # Place the cards the state owns, never the caller's objects.
        run = self.resolveCards(fromLocation, [c.id for c in cardsToMove])
        if run is None:
            return False
        if not self.canMoveToTableau(run, toColumnIndex):
            return False

        self.captureSnapshot()
        revealed = self._detach(fromLocation, run)
        if fromLocation.zone == "waste":
            self.state.score += SCORE_WASTE_TO_TABLEAU
        elif fromLocation.zone == "foundation":
            self.state.score += SCORE_FOUNDATION_TO_TABLEAU
        self.state.tableau[toColumnIndex].extend(run)
        dest = tableauAt(toColumnIndex)
        logger.debug("moved %d card(s) from %s to %s", len(run), fromLocation, dest)
        self.registerMove(CardMove(fromLocation, dest, [c.id for c in run]), revealed, fromLocation)
        return True

    def attemptMove(self, fromLocation, toLocation, cards) -> bool:
        toLocation = Location.parse(toLocation)
        if not cards:
            return False
        if toLocation.zone == "tableau":
            return self.moveCardsToTableau(fromLocation, toLocation.index, cards)
        if toLocation.zone == "foundation" and len(cards) == 1:
            return self.moveCardToFoundation(fromLocation, toLocation.index, cards[0])
        return False

    def _firstTableauTarget(self, cards, exclude=-1):
        for col in range(len(self.state.tableau)):
            if col != exclude and self.canMoveToTableau(cards, col):
                return col
        return None

    def tryAutoMoveFromWaste(self) -> bool:
        if not self.state.waste:
            return False
        card = self.state.waste[-1]
        idx = self.canMoveToFoundation(card)
        if idx is not None:
            return self.moveCardToFoundation(WASTE, idx, card)
        col = self._firstTableauTarget([card])
        if col is not None:
            return self.moveCardsToTableau(WASTE, col, [card])
        return False

    def tryAutoMoveFromTableau(self, columnIndex) -> bool:
        if columnIndex < 0 or columnIndex >= len(self.state.tableau):
            return False
        column = self.state.tableau[columnIndex]
        if not column or not column[-1].faceUp:
            return False
        card = column[-1]
        src = tableauAt(columnIndex)
        idx = self.canMoveToFoundation(card)
        if idx is not None:
            return self.moveCardToFoundation(src, idx, card)
        col = self._firstTableauTarget([card], exclude=columnIndex)
        if col is not None:
            return self.moveCardsToTableau(src, col, [card])
        return False

    def tryMoveRunFromTableau(self, columnIndex, cardIndex) -> bool:
        if columnIndex < 0 or columnIndex >= len(self.state.tableau):
            return False
        column = self.state.tableau[columnIndex]
        if cardIndex < 0 or cardIndex >= len(column):
            return False
        run = column[cardIndex:]
        if not all(c.faceUp for c in run):
            return False
        col = self._firstTableauTarget(run, exclude=columnIndex)
        if col is None:
            return False
        return self.moveCardsToTableau(tableauAt(columnIndex), col, run)

    def tryMoveFoundationToTableau(self, foundationIndex) -> bool:
        if foundationIndex < 0 or foundationIndex >= len(self.state.foundations):
            return False
        foundation = self.state.foundations[foundationIndex]
        if not foundation:
            return False
        card = foundation[-1]
        col = self._firstTableauTarget([card])
        if col is None:
            return False
        return self.moveCardsToTableau(foundationAt(foundationIndex), col, [card])

    # ---- bookkeeping ----

    def registerMove(self, event: GameEvent, revealed: Card = None, revealedFrom: Location = None):
        if isinstance(event, (StockDraw, StockRecycle)):
            self.lastRevealedIds = []
        self.state.moveCount += 1
        checkInvariants(self.state)
        self._emit(event)
        if revealed is not None:
            self._emit(RevealTop(revealedFrom.index, revealed.id))

        firstMove = self.firstMoveTimestamp is None
        if firstMove:
            self.firstMoveTimestamp = self.clock()
        if self.interface is not None:
            if firstMove:
                self.interface.onFirstMove()
            self.interface.onMove(self.movePayload())

    def movePayload(self):
        return {
            "moves": self.state.moveCount,
            "score": self.state.score,
            "stockCount": len(self.state.stock),
        }

    def isWon(self):
        return self.state.foundationTotal() == DECK_SIZE

    def checkWinCondition(self):
        if not self.isWon():
            return False
        elapsed = 0
        if self.firstMoveTimestamp is not None:
            elapsed = int(self.clock() - self.firstMoveTimestamp)
        payload = {"moves": self.state.moveCount, "score": self.state.score, "timeSeconds": elapsed}
        logger.info("game won: %s", payload)
        if self.interface is not None:
            self.interface.onWin(payload)
        return True

    def undoLastMove(self) -> bool:
        if self.history is None or not self.history.canUndo():
            return False
        previous = self.history.undo()
        if previous is None:
            return False
        self.state = previous
        self.lastRevealedIds = []
        checkInvariants(self.state)
        logger.debug("undo, back to move %d", self.state.moveCount)
        if self.interface is not None:
            self.interface.onUndo(self.movePayload())
        return True

    # ---- lookups ----

    def findCardById(self, cardId):
        for pile in self.state.allPiles():
            for card in pile:
                if card.id == cardId:
                    return card
        return None

    def locate(self, cardId):
        """(Location, index within pile) of a card, or None."""
        state = self.state
        for location, pile in [(STOCK, state.stock), (WASTE, state.waste)]:
            for i, card in enumerate(pile):
                if card.id == cardId:
                    return location, i
        for zone, piles in (("foundation", state.foundations), ("tableau", state.tableau)):
            for p, pile in enumerate(piles):
                for i, card in enumerate(pile):
                    if card.id == cardId:
                        return Location(zone, p), i
        return None

    def isCardDraggable(self, location, cardId):
        location = Location.parse(location)
        pile = self.pileAt(location)
        if not pile or location.zone == "stock":
            return False
        if location.zone in ("waste", "foundation"):
            return pile[-1].id == cardId
        for i, card in enumerate(pile):
            if card.id == cardId:
                return all(c.faceUp for c in pile[i:])
        return False
