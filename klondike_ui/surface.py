from dataclasses import dataclass
from typing import Callable, Optional

from klondike_ui.view_model import AnimationEvent, GameViewModel


class RenderSurface:
    """What the coordinator pushes to; every hook is optional."""

    def render(self, vm: GameViewModel):
        pass

    def animate(self, event: AnimationEvent):
        pass

    def show_hint(self, hint):
        pass

    def clear_hint(self):
        pass

    def no_move(self, location):
        """Transient "nothing to do here" feedback."""
        pass


@dataclass
class HostCallbacks:
    on_first_move: Optional[Callable[[], None]] = None
    on_move: Optional[Callable[[dict], None]] = None
    on_win: Optional[Callable[[dict], None]] = None
    on_reset: Optional[Callable[[], None]] = None


class TeeSurface(RenderSurface):
    """Fans every call out to several surfaces."""

    def __init__(self, *surfaces):
        self.surfaces = surfaces

    def render(self, vm):
        for s in self.surfaces:
            s.render(vm)

    def animate(self, event):
        for s in self.surfaces:
            s.animate(event)

    def show_hint(self, hint):
        for s in self.surfaces:
            s.show_hint(hint)

    def clear_hint(self):
        for s in self.surfaces:
            s.clear_hint()

    def no_move(self, location):
        for s in self.surfaces:
            s.no_move(location)
