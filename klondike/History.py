import copy
import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 500


class UndoManager:
    """
    A bounded stack of pre-move snapshots. One logical move = one snapshot.

    Snapshots are deep copies; nothing stored here aliases the live state, and a
    popped snapshot is handed over to the caller, who then owns it.
    """

    def __init__(self, maxHistory=DEFAULT_MAX_HISTORY):
        self.lst = []
        self.maxHistory = DEFAULT_MAX_HISTORY
        self.setMaxHistory(maxHistory)

    def reset(self):
        self.lst = []

    def setMaxHistory(self, limit):
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            logger.warning("ignoring invalid history limit %r", limit)
            return
        self.maxHistory = limit
        self.__trim()

    def __trim(self):
        overflow = len(self.lst) - self.maxHistory
        if overflow > 0:
            del self.lst[:overflow]

    def pushSnapshot(self, state):
        if state is None:
            return
        self.lst.append(copy.deepcopy(state))
        self.__trim()

    def canUndo(self):
        return len(self.lst) > 0

    def undo(self):
        if not self.canUndo():
            return None
        return self.lst.pop()

    def getHistorySize(self):
        return len(self.lst)
