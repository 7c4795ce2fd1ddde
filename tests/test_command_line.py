import io
import unittest

from klondike.Core import HEARTS, SPADES, Location
from klondike_ui.command_line import TextSurface, parse_args, parse_location, run_command
from klondike_ui.coordinator import InteractionCoordinator
from klondike_ui.options_store import Options
from tests.builders import build_state, up


class CommandLineTestCase(unittest.TestCase):
    def make(self):
        self.out = io.StringIO()
        co = InteractionCoordinator(surface=TextSurface(self.out), options=Options(animations_enabled=False))
        return co

    def test_parse_location_shorthand(self):
        self.assertEqual(Location("waste"), parse_location("w"))
        self.assertEqual(Location("tableau", 3), parse_location("t3"))
        self.assertEqual(Location("foundation", 0), parse_location("F0"))
        self.assertEqual(Location("tableau", 6), parse_location("tableau-6"))
        with self.assertRaises(ValueError):
            parse_location("x9")

    def test_new_deal_is_printed(self):
        co = self.make()
        co.initialize_new_deal(seed=3)
        text = self.out.getvalue()
        self.assertIn("Moves: 0    Score: 0    Stock: 24", text)
        self.assertIn(" 6:  ", text)

    def test_commands_drive_the_coordinator(self):
        co = self.make()
        co.initialize_new_deal(seed=3)
        self.assertIsNone(run_command(co, "d"))
        self.assertEqual(21, len(co.state.stock))
        self.assertIsNone(run_command(co, "undo"))
        self.assertEqual(24, len(co.state.stock))
        self.assertEqual("Cannot undo!", run_command(co, "undo"))
        self.assertEqual("Invalid command!", run_command(co, "fly"))
        self.assertEqual("Invalid index!", run_command(co, "t 42"))
        self.assertIsNone(run_command(co, ""))

    def test_move_and_hint_commands(self):
        co = self.make()
        seven = up(HEARTS, 7)
        co.core.state = build_state(tableau=[[up(SPADES, 8)], [seven]])
        self.assertIsNone(run_command(co, "hint"))
        self.assertIn("Hint: tableau-1 -> tableau-0", self.out.getvalue())
        self.assertEqual("Cannot move!", run_command(co, "mv t1 t2"))
        self.assertIsNone(run_command(co, "mv t1 t0"))
        self.assertEqual(2, len(co.state.tableau[0]))
        self.assertEqual("No hint available.", run_command(co, "hint"))

    def test_parse_args(self):
        args = parse_args(["--seed", "5", "--speed", "fast", "--no-animations", "-v"])
        self.assertEqual(5, args.seed)
        self.assertEqual("fast", args.speed)
        self.assertTrue(args.no_animations)
        self.assertTrue(args.verbose)


if __name__ == "__main__":
    unittest.main()
