import unittest

from klondike.Core import GameConfig, dealNewGame
from klondike.History import UndoManager
from tests.builders import build_state


class UndoManagerTestCase(unittest.TestCase):
    def test_snapshot_is_independent_of_live_state(self):
        history = UndoManager()
        state = dealNewGame(GameConfig(seed=3).makeRng())
        history.pushSnapshot(state)
        state.tableau[0][0].faceUp = False
        state.stock.pop()
        state.score = 99

        restored = history.undo()
        self.assertTrue(restored.tableau[0][0].faceUp)
        self.assertEqual(24, len(restored.stock))
        self.assertEqual(0, restored.score)
        self.assertIsNot(restored.stock, state.stock)

    def test_undo_returns_most_recent_first(self):
        history = UndoManager()
        for score in (1, 2, 3):
            history.pushSnapshot(build_state(score=score))
        self.assertEqual([3, 2, 1], [history.undo().score for _ in range(3)])
        self.assertFalse(history.canUndo())
        self.assertIsNone(history.undo())

    def test_cap_evicts_oldest_entries(self):
        history = UndoManager(maxHistory=3)
        for score in range(5):
            history.pushSnapshot(build_state(score=score))
        self.assertEqual(3, history.getHistorySize())
        self.assertEqual([4, 3, 2], [history.undo().score for _ in range(3)])

    def test_default_cap_is_500(self):
        self.assertEqual(500, UndoManager().maxHistory)

    def test_push_none_is_silent_noop(self):
        history = UndoManager()
        history.pushSnapshot(None)
        self.assertFalse(history.canUndo())

    def test_reset_clears_history(self):
        history = UndoManager()
        history.pushSnapshot(build_state())
        history.reset()
        self.assertEqual(0, history.getHistorySize())
        self.assertIsNone(history.undo())

    def test_set_max_history_trims_and_ignores_invalid(self):
        history = UndoManager()
        for score in range(6):
            history.pushSnapshot(build_state(score=score))
        history.setMaxHistory(2)
        self.assertEqual(2, history.getHistorySize())
        with self.assertLogs("klondike.History", level="WARNING"):
            history.setMaxHistory(0)
        self.assertEqual(2, history.maxHistory)
        self.assertEqual(5, history.undo().score)


if __name__ == "__main__":
    unittest.main()
