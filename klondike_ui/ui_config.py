ANIMATION_SPEED_ORDER = ("slow", "normal", "fast")
# Base time unit in seconds per preset; every animation duration scales from it.
ANIMATION_BASE_SEC = {"fast": 0.04, "normal": 0.08, "slow": 0.4}
DEFAULT_ANIMATION_SPEED = "normal"

MOVE_FACTOR = 2.0
FLIP_FACTOR = 2.5
FLIP_MIDPOINT_FACTOR = 1.25
STOCK_FACTOR = 1.0

MAX_HISTORY = 500

NUMS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUIT_SYMBOLS = ("♥", "♦", "♣", "♠")
SUIT_LETTERS = ("H", "D", "C", "S")

# Board image layout, in pixels.
CARD_W = 60
CARD_H = 84
PILE_GAP = 12
MARGIN = 16
FACE_DOWN_STEP = 8
FACE_UP_STEP = 20
WASTE_FAN_STEP = 14

BOARD_THEME = {
    "table": "#1b4332",
    "slot_outline": "#99f6e4",
    "card_front": "#f7e8bc",
    "card_back": "#334155",
    "card_border": "#0f172a",
    "red": "#dc2626",
    "black": "#111827",
    "hint": "#fde047",
}
