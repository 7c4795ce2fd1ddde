import logging
import time

from advisor.hints import compute_hint
from klondike.Core import Core, GameConfig, GameEvent, Location, WASTE, foundationAt, tableauAt
from klondike.History import UndoManager
from klondike.Interface import Interface
from klondike_ui.adapter import CoreAdapter
from klondike_ui.animation import AnimationGate, AnimationTimings
from klondike_ui.options_store import Options
from klondike_ui.surface import HostCallbacks, RenderSurface

logger = logging.getLogger(__name__)


class InteractionCoordinator(Interface):
    """
    Serializes user actions against the engine.

    Every action mutates state synchronously; the animation gate only delays the
    next accepted action and the re-render of the result. While it is open,
    stock/card/drop actions are dropped, not queued.
    """

    def __init__(
        self,
        surface: RenderSurface = None,
        callbacks: HostCallbacks = None,
        options: Options = None,
        clock=time.monotonic,
        wall_clock=time.time,
    ):
        super().__init__()
        self.surface = surface or RenderSurface()
        self.callbacks = callbacks or HostCallbacks()
        self.options = options or Options()
        self.timings = AnimationTimings.for_options(self.options.animation_speed, self.options.animations_enabled)
        self.gate = AnimationGate(clock)
        self.history = UndoManager(self.options.max_history)
        self.current_hint = None
        self.pending_render = False
        self.pending_events = []

        core = Core(history=self.history, clock=wall_clock)
        core.registerInterface(self)

    @property
    def state(self):
        return self.core.state

    @property
    def is_animating(self) -> bool:
        return self.gate.is_animating

    def update_options(self, animation_speed=None, animations_enabled=None, max_history=None):
        if animation_speed is not None:
            self.options.animation_speed = animation_speed
        if animations_enabled is not None:
            self.options.animations_enabled = bool(animations_enabled)
        if max_history is not None:
            self.history.setMaxHistory(max_history)
            self.options.max_history = self.history.maxHistory
        self.timings = AnimationTimings.for_options(self.options.animation_speed, self.options.animations_enabled)
        logger.debug("options now %s", self.options)

    # ---- engine listener ----

    def onEvent(self, event: GameEvent):
        self.pending_events.append(event)

    def onFirstMove(self):
        if self.callbacks.on_first_move:
            self.callbacks.on_first_move()

    def onMove(self, payload: dict):
        self._invalidate_hint()
        if self.callbacks.on_move:
            self.callbacks.on_move(payload)

    def onUndo(self, payload: dict):
        self._invalidate_hint()
        if self.callbacks.on_move:
            self.callbacks.on_move(payload)

    def onWin(self, payload: dict):
        if self.callbacks.on_win:
            self.callbacks.on_win(payload)

    def onReset(self):
        self._invalidate_hint()
        if self.callbacks.on_reset:
            self.callbacks.on_reset()

    # ---- public contract ----

    def initialize_new_deal(self, seed=None):
        self.gate.cancel()
        self.pending_events.clear()
        self.pending_render = False
        if seed is None:
            seed = self.options.seed
        state = self.core.startGame(GameConfig(seed=seed, maxHistory=self.history.maxHistory))
        self.render_now()
        return state

    def _accepting(self, action) -> bool:
        if self.core.state is None:
            return False
        if self.is_animating:
            logger.debug("%s ignored while animating", action)
            return False
        self.pending_events.clear()
        return True

    def handle_stock_action(self) -> bool:
        if not self._accepting("stock"):
            return False
        changed = self.core.drawFromStock()
        if changed:
            self._settle(self.timings.stock)
        return changed

    def handle_waste_action(self) -> bool:
        if not self._accepting("waste"):
            return False
        if not self.core.state.waste:
            return False
        moved = self.core.tryAutoMoveFromWaste()
        if moved:
            self._settle(self.timings.move)
        else:
            self.surface.no_move(WASTE)
        return moved

    def handle_tableau_action(self, column_index: int, card_id: int) -> bool:
        if not self._accepting("tableau"):
            return False
        tableau = self.core.state.tableau
        column = tableau[column_index] if 0 <= column_index < len(tableau) else None
        if not column:
            return False
        index = next((i for i, c in enumerate(column) if c.id == card_id), -1)
        if index == -1 or not column[index].faceUp:
            return False
        if index == len(column) - 1:
            moved = self.core.tryAutoMoveFromTableau(column_index)
        else:
            moved = self.core.tryMoveRunFromTableau(column_index, index)
        if moved:
            self._settle(self.timings.move)
        else:
            self.surface.no_move(tableauAt(column_index))
        return moved

    def handle_foundation_action(self, foundation_index: int) -> bool:
        if not self._accepting("foundation"):
            return False
        moved = self.core.tryMoveFoundationToTableau(foundation_index)
        if moved:
            self._settle(self.timings.move)
        elif 0 <= foundation_index < len(self.core.state.foundations):
            self.surface.no_move(foundationAt(foundation_index))
        return moved

    def handle_drop_action(self, from_locator, to_locator, card_ids) -> bool:
        if not self._accepting("drop"):
            return False
        try:
            src = Location.parse(from_locator)
            dest = Location.parse(to_locator)
        except ValueError:
            logger.debug("drop with bad locators %r -> %r", from_locator, to_locator)
            return False
        cards = self.core.resolveCards(src, card_ids)
        if cards is None:
            return False
        moved = self.core.attemptMove(src, dest, cards)
        if moved:
            self._settle(self.timings.move)
        return moved

    def request_hint(self):
        self._invalidate_hint()
        hint = compute_hint(self.core.state)
        if hint is None:
            logger.debug("no hint available")
            return None
        self.current_hint = hint
        self.surface.show_hint(hint)
        return hint

    def clear_hint(self):
        self._invalidate_hint()

    def undo_last_move(self) -> bool:
        if self.core.state is None:
            return False
        if not self.core.undoLastMove():
            return False
        self.gate.cancel()
        self.pending_events.clear()
        self.render_now()
        return True

    def can_undo(self) -> bool:
        return self.history.canUndo()

    def tick(self) -> bool:
        """Pump from the host loop. Delivers a due re-render; returns whether still animating."""
        if self.pending_render and not self.gate.is_move_animating:
            self.render_now()
        return self.is_animating

    def render_now(self):
        self.pending_render = False
        if self.core.state is not None:
            self.surface.render(CoreAdapter.snapshot(self.core.state))

    def destroy(self):
        self.gate.cancel()
        self.pending_events.clear()
        self.surface = RenderSurface()
        self.callbacks = HostCallbacks()
        self.current_hint = None

    # ---- internals ----

    def _invalidate_hint(self):
        if self.current_hint is not None:
            self.current_hint = None
            self.surface.clear_hint()

    def _settle(self, duration: float):
        events, self.pending_events = self.pending_events, []
        for event in events:
            self.surface.animate(CoreAdapter.event_to_animation(event))
        self.gate.start_move(duration)
        if self.core.lastRevealedIds:
            self.gate.start_flip(self.timings.flip, delay=duration)
        if duration > 0:
            self.pending_render = True
        else:
            self.render_now()
