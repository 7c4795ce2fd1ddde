import time
from dataclasses import dataclass

from klondike_ui.ui_config import (
    ANIMATION_BASE_SEC,
    DEFAULT_ANIMATION_SPEED,
    FLIP_FACTOR,
    FLIP_MIDPOINT_FACTOR,
    MOVE_FACTOR,
    STOCK_FACTOR,
)


@dataclass(frozen=True)
class AnimationTimings:
    move: float
    flip: float
    flip_midpoint: float
    stock: float

    @staticmethod
    def from_base(base: float) -> "AnimationTimings":
        return AnimationTimings(
            move=MOVE_FACTOR * base,
            flip=FLIP_FACTOR * base,
            flip_midpoint=FLIP_MIDPOINT_FACTOR * base,
            stock=STOCK_FACTOR * base,
        )

    @staticmethod
    def for_options(speed: str, enabled: bool) -> "AnimationTimings":
        if not enabled:
            return AnimationTimings.from_base(0.0)
        base = ANIMATION_BASE_SEC.get(speed, ANIMATION_BASE_SEC[DEFAULT_ANIMATION_SPEED])
        return AnimationTimings.from_base(base)


class AnimationGate:
    """
    Two independent busy windows, a card travelling (move) and a card turning
    (flip), each a deadline on `clock`. A zero duration opens no window.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.move_until = 0.0
        self.flip_until = 0.0

    @property
    def is_move_animating(self) -> bool:
        return self.clock() < self.move_until

    @property
    def is_flip_animating(self) -> bool:
        return self.clock() < self.flip_until

    @property
    def is_animating(self) -> bool:
        return self.is_move_animating or self.is_flip_animating

    def start_move(self, duration: float):
        if duration > 0:
            self.move_until = max(self.move_until, self.clock() + duration)

    def start_flip(self, duration: float, delay: float = 0.0):
        if duration > 0:
            self.flip_until = max(self.flip_until, self.clock() + max(0.0, delay) + duration)

    def cancel(self):
        self.move_until = 0.0
        self.flip_until = 0.0
