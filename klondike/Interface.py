from klondike.Core import Core, GameEvent


class Interface:

    def __init__(self):
        self.core: Core = None

    def onReset(self):
        """
        Invoked after a new deal has replaced the game state.
        """
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked when a game event is performed, after the state has been mutated.
        :param event:
        :return:
        """
        pass

    def onFirstMove(self):
        pass

    def onMove(self, payload: dict):
        """
        Invoked once per registered move with {moves, score, stockCount}.
        """
        pass

    def onUndo(self, payload: dict):
        """
        Invoked when the state was restored from a snapshot; same payload as onMove.
        """
        pass

    def onWin(self, payload: dict):
        pass
