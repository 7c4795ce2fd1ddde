import argparse
import logging
import sys
import time

from klondike.Core import Location
from klondike_ui.board_image import BoardImageSurface
from klondike_ui.coordinator import InteractionCoordinator
from klondike_ui.options_store import Options, load_options
from klondike_ui.surface import HostCallbacks, RenderSurface, TeeSurface
from klondike_ui.ui_config import ANIMATION_SPEED_ORDER, NUMS, SUIT_SYMBOLS
from klondike_ui.view_model import CardView, GameViewModel

logger = logging.getLogger(__name__)

HELP = """commands:
  d                 draw from stock (recycles the waste when stock is empty)
  w                 play the top waste card
  t COL [ROW]       play the top card of a column, or the run starting at ROW
  f IDX             move a foundation card back to the tableau
  mv SRC DEST [N]   move N cards (default 1), e.g. "mv t2 t5 3", "mv w f0"
  hint | undo | new | help | q"""


def card_str(card: CardView) -> str:
    if card is None:
        return "[   ]"
    if not card.face_up:
        return "[---]"
    return f"[{SUIT_SYMBOLS[card.suit]}{NUMS[card.rank - 1]:>2}]"


class TextSurface(RenderSurface):

    def __init__(self, out=None):
        self.out = out or sys.stdout

    def write(self, line=""):
        print(line, file=self.out)

    def render(self, vm: GameViewModel):
        self.write(f"Moves: {vm.move_count}    Score: {vm.score}    Stock: {vm.stock_count}")
        waste = " ".join(card_str(c) for c in vm.waste.cards[-3:]) or card_str(None)
        foundations = " ".join(card_str(f.top) for f in vm.foundations)
        self.write(f"S {card_str(vm.stock.top)}  W {waste:<17}  F {foundations}")
        self.write("     " + "".join(f"  {i}   " for i in range(len(vm.tableau))))
        row = 0
        while True:
            cells = []
            has = False
            for pile in vm.tableau:
                if row < len(pile.cards):
                    has = True
                    cells.append(card_str(pile.cards[row]))
                else:
                    cells.append("     ")
            if not has:
                break
            self.write(f"{row:>2}:  " + " ".join(cells))
            row += 1
        self.write()

    def show_hint(self, hint):
        self.write(f"Hint: {hint.to_notation()}")

    def no_move(self, location):
        self.write(f"No move from {location}.")


def parse_location(text: str) -> Location:
    text = text.strip().lower()
    if text in ("w", "waste"):
        return Location("waste")
    if len(text) >= 2 and text[0] in "tf" and text[1:].isdigit():
        zone = "tableau" if text[0] == "t" else "foundation"
        return Location(zone, int(text[1:]))
    return Location.parse(text)


def run_command(coordinator: InteractionCoordinator, line: str):
    """Apply one command line. Returns a message for the player, or None."""
    parts = line.split()
    if not parts:
        return None
    cmd, args = parts[0].lower(), parts[1:]
    logger.debug("command %s %s", cmd, args)
    state = coordinator.state
    try:
        if cmd in ("d", "draw"):
            if not coordinator.handle_stock_action():
                return "Nothing left to draw!"
        elif cmd == "w":
            if not coordinator.handle_waste_action():
                return "Cannot move!"
        elif cmd == "t":
            col = int(args[0])
            column = state.tableau[col]
            if not column:
                return "Empty column!"
            row = int(args[1]) if len(args) > 1 else len(column) - 1
            if not coordinator.handle_tableau_action(col, column[row].id):
                return "Cannot move!"
        elif cmd == "f":
            if not coordinator.handle_foundation_action(int(args[0])):
                return "Cannot move!"
        elif cmd == "mv":
            src = parse_location(args[0])
            dest = parse_location(args[1])
            count = int(args[2]) if len(args) > 2 else 1
            pile = coordinator.core.pileAt(src)
            if not pile or count < 1:
                return "Cannot move!"
            ids = [c.id for c in pile[-count:]]
            if not coordinator.handle_drop_action(src, dest, ids):
                return "Cannot move!"
        elif cmd == "hint":
            if coordinator.request_hint() is None:
                return "No hint available."
        elif cmd == "undo":
            if not coordinator.undo_last_move():
                return "Cannot undo!"
        elif cmd == "new":
            coordinator.initialize_new_deal()
        elif cmd == "help":
            return HELP
        else:
            return "Invalid command!"
    except (IndexError, ValueError):
        return "Invalid index!"
    return None


def settle(coordinator: InteractionCoordinator, step=0.01):
    while coordinator.tick():
        time.sleep(step)
    coordinator.tick()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Klondike (draw three) in the terminal")
    parser.add_argument("--config", default=None, help="INI file with a [klondike] section")
    parser.add_argument("--seed", type=int, default=None, help="deal seed for a reproducible game")
    parser.add_argument("--speed", choices=ANIMATION_SPEED_ORDER, default=None)
    parser.add_argument("--no-animations", action="store_true")
    parser.add_argument("--snapshot", default=None, help="also paint the board to this PNG after every move")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)

    options = load_options(args.config) if args.config else Options()
    if args.seed is not None:
        options.seed = args.seed
    if args.speed is not None:
        options.animation_speed = args.speed
    if args.no_animations:
        options.animations_enabled = False

    text = TextSurface()
    image = BoardImageSurface() if args.snapshot else None
    surface = TeeSurface(text, image) if image else text
    callbacks = HostCallbacks(
        on_win=lambda p: text.write(f"You win! {p['moves']} moves, score {p['score']}, {p['timeSeconds']}s"),
        on_reset=lambda: text.write("New deal."),
    )
    coordinator = InteractionCoordinator(surface=surface, callbacks=callbacks, options=options)
    coordinator.initialize_new_deal()
    text.write(HELP)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if line.strip().lower() in ("q", "quit", "exit"):
            break
        message = run_command(coordinator, line)
        if message:
            text.write(message)
        settle(coordinator)
        if image is not None:
            image.save(args.snapshot)
    coordinator.destroy()


if __name__ == "__main__":
    main()
