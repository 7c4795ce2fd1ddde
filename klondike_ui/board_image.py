from PIL import Image, ImageDraw

from klondike_ui.surface import RenderSurface
from klondike_ui.ui_config import (
    BOARD_THEME,
    CARD_H,
    CARD_W,
    FACE_DOWN_STEP,
    FACE_UP_STEP,
    MARGIN,
    NUMS,
    PILE_GAP,
    SUIT_LETTERS,
    WASTE_FAN_STEP,
)
from klondike_ui.view_model import CardView, GameViewModel

COLUMNS = 7
# Deepest possible column: six face-down cards under a full king-to-ace run.
MAX_FACE_DOWN = 6
MAX_FACE_UP = 13


def pile_x(slot: int) -> int:
    return MARGIN + slot * (CARD_W + PILE_GAP)


def tableau_y() -> int:
    return MARGIN + CARD_H + 2 * PILE_GAP


def board_size() -> tuple[int, int]:
    width = 2 * MARGIN + COLUMNS * CARD_W + (COLUMNS - 1) * PILE_GAP
    height = tableau_y() + MAX_FACE_DOWN * FACE_DOWN_STEP + (MAX_FACE_UP - 1) * FACE_UP_STEP + CARD_H + MARGIN
    return width, height


def slot_origin(zone: str, index: int = 0) -> tuple[int, int]:
    if zone == "stock":
        return pile_x(0), MARGIN
    if zone == "waste":
        return pile_x(1), MARGIN
    if zone == "foundation":
        return pile_x(3 + index), MARGIN
    return pile_x(index), tableau_y()


def draw_slot(draw, x, y, outline):
    draw.rectangle([x, y, x + CARD_W - 1, y + CARD_H - 1], outline=outline, width=2)


def draw_card(draw, x, y, card: CardView, theme=BOARD_THEME):
    box = [x, y, x + CARD_W - 1, y + CARD_H - 1]
    if not card.face_up:
        draw.rectangle(box, fill=theme["card_back"], outline=theme["card_border"])
        draw.rectangle([x + 6, y + 6, x + CARD_W - 7, y + CARD_H - 7], outline=theme["slot_outline"])
        return
    draw.rectangle(box, fill=theme["card_front"], outline=theme["card_border"])
    ink = theme["red"] if card.suit in (0, 1) else theme["black"]
    label = f"{NUMS[card.rank - 1]}{SUIT_LETTERS[card.suit]}"
    draw.text((x + 5, y + 3), label, fill=ink)


def draw_board(vm: GameViewModel, hint=None, theme=BOARD_THEME) -> Image.Image:
    img = Image.new("RGB", board_size(), theme["table"])
    draw = ImageDraw.Draw(img)

    x, y = slot_origin("stock")
    draw_slot(draw, x, y, theme["slot_outline"])
    if vm.stock.top is not None:
        draw_card(draw, x, y, vm.stock.top, theme)

    x, y = slot_origin("waste")
    draw_slot(draw, x, y, theme["slot_outline"])
    fanned = vm.waste.cards[-3:]
    for i, card in enumerate(fanned):
        draw_card(draw, x + i * WASTE_FAN_STEP, y, card, theme)

    for idx, pile in enumerate(vm.foundations):
        x, y = slot_origin("foundation", idx)
        draw_slot(draw, x, y, theme["slot_outline"])
        if pile.top is not None:
            draw_card(draw, x, y, pile.top, theme)

    for col, pile in enumerate(vm.tableau):
        x, y = slot_origin("tableau", col)
        draw_slot(draw, x, y, theme["slot_outline"])
        for card in pile.cards:
            draw_card(draw, x, y, card, theme)
            y += FACE_UP_STEP if card.face_up else FACE_DOWN_STEP

    if hint is not None:
        for loc in (hint.source, hint.destination):
            x, y = slot_origin(loc.zone, loc.index)
            draw.rectangle([x - 3, y - 3, x + CARD_W + 2, y + CARD_H + 2], outline=theme["hint"], width=2)
    return img


class BoardImageSurface(RenderSurface):
    """Paints every rendered state onto a Pillow image."""

    def __init__(self, theme=BOARD_THEME):
        self.theme = theme
        self.vm = None
        self.hint = None
        self.image = None

    def render(self, vm: GameViewModel):
        self.vm = vm
        self.image = draw_board(vm, self.hint, self.theme)

    def show_hint(self, hint):
        self.hint = hint
        if self.vm is not None:
            self.render(self.vm)

    def clear_hint(self):
        self.hint = None
        if self.vm is not None:
            self.render(self.vm)

    def save(self, path):
        if self.image is None:
            return False
        self.image.save(path)
        return True
