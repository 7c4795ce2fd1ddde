import copy
import unittest

from advisor.hints import (
    TABLEAU_TO_FOUNDATION,
    TABLEAU_TO_TABLEAU,
    WASTE_TO_TABLEAU,
    compute_hint,
    will_reveal_card,
)
from klondike.Core import CLUBS, DIAMONDS, HEARTS, SPADES, WASTE, foundationAt, tableauAt
from tests.builders import build_state, down, up


class HintTestCase(unittest.TestCase):
    def test_only_tableau_to_tableau_move(self):
        seven = up(HEARTS, 7)
        state = build_state(tableau=[[up(SPADES, 8)], [seven]])
        hint = compute_hint(state)
        self.assertEqual(TABLEAU_TO_TABLEAU, hint.move_type)
        self.assertEqual(tableauAt(1), hint.source)
        self.assertEqual(tableauAt(0), hint.destination)
        self.assertEqual(seven.id, hint.card_id)
        self.assertFalse(hint.will_reveal_card)

    def test_revealing_move_beats_foundation_move(self):
        state = build_state(
            tableau=[[up(HEARTS, 1)], [down(DIAMONDS, 9), up(CLUBS, 5)], [up(HEARTS, 6)]],
        )
        hint = compute_hint(state)
        self.assertEqual(TABLEAU_TO_TABLEAU, hint.move_type)
        self.assertEqual(tableauAt(1), hint.source)
        self.assertEqual(tableauAt(2), hint.destination)
        self.assertTrue(hint.will_reveal_card)

    def test_revealing_foundation_move_comes_before_revealing_column_move(self):
        state = build_state(tableau=[[down(CLUBS, 9), up(SPADES, 1)]])
        hint = compute_hint(state)
        self.assertEqual(TABLEAU_TO_FOUNDATION, hint.move_type)
        self.assertEqual(foundationAt(SPADES), hint.destination)
        self.assertTrue(hint.will_reveal_card)

    def test_foundation_beats_waste(self):
        state = build_state(
            tableau=[[up(SPADES, 13)], [up(SPADES, 1)]],
            waste=[up(HEARTS, 12)],
        )
        hint = compute_hint(state)
        self.assertEqual(TABLEAU_TO_FOUNDATION, hint.move_type)
        self.assertEqual(tableauAt(1), hint.source)

    def test_waste_beats_plain_column_move(self):
        state = build_state(
            tableau=[[up(SPADES, 8)], [up(HEARTS, 7)], [up(CLUBS, 13)]],
            waste=[up(DIAMONDS, 12)],
        )
        hint = compute_hint(state)
        self.assertEqual(WASTE_TO_TABLEAU, hint.move_type)
        self.assertEqual(WASTE, hint.source)
        self.assertEqual(tableauAt(2), hint.destination)

    def test_destination_is_lowest_other_column(self):
        state = build_state(
            tableau=[[up(HEARTS, 5)], [up(CLUBS, 9)], [up(SPADES, 9)], [up(DIAMONDS, 8)]],
        )
        hint = compute_hint(state)
        self.assertEqual(tableauAt(3), hint.source)
        self.assertEqual(tableauAt(1), hint.destination)

    def test_no_hint_available(self):
        state = build_state(tableau=[[up(HEARTS, 5)], [up(CLUBS, 9)]], waste=[up(SPADES, 3)])
        self.assertIsNone(compute_hint(state))
        self.assertIsNone(compute_hint(None))

    def test_hint_search_does_not_touch_state(self):
        state = build_state(tableau=[[down(CLUBS, 9), up(SPADES, 1)], [down(HEARTS, 3), up(HEARTS, 8)]])
        before = copy.deepcopy(state)
        compute_hint(state)
        self.assertTrue(will_reveal_card(state, 0, 1))
        self.assertFalse(will_reveal_card(state, 0, 2))
        self.assertFalse(will_reveal_card(state, 9, 1))
        self.assertEqual(before, state)


if __name__ == "__main__":
    unittest.main()
