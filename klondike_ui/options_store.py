import configparser
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from klondike_ui.ui_config import ANIMATION_SPEED_ORDER, DEFAULT_ANIMATION_SPEED, MAX_HISTORY

logger = logging.getLogger(__name__)

SECTION = "klondike"

DEFAULT_OPTIONS = {
    "animation_speed": DEFAULT_ANIMATION_SPEED,
    "animations_enabled": "true",
    "max_history": str(MAX_HISTORY),
    "seed": "",
}


@dataclass
class Options:
    animation_speed: str = DEFAULT_ANIMATION_SPEED
    animations_enabled: bool = True
    max_history: int = MAX_HISTORY
    seed: Optional[int] = None


def _as_bool(raw: str, default: bool) -> bool:
    value = str(raw).strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    logger.warning("bad boolean option %r, using %s", raw, default)
    return default


def _sanitize(settings: dict) -> Options:
    data = dict(DEFAULT_OPTIONS)
    data.update({k: v for k, v in settings.items() if v is not None})

    speed = str(data["animation_speed"]).strip().lower()
    if speed not in ANIMATION_SPEED_ORDER:
        logger.warning("unknown animation speed %r", data["animation_speed"])
        speed = DEFAULT_ANIMATION_SPEED

    try:
        max_history = int(data["max_history"])
    except (TypeError, ValueError):
        max_history = MAX_HISTORY
    if max_history < 1:
        logger.warning("max_history must be positive, got %r", data["max_history"])
        max_history = MAX_HISTORY

    seed = None
    raw_seed = str(data["seed"]).strip()
    if raw_seed:
        try:
            seed = int(raw_seed)
        except ValueError:
            logger.warning("ignoring non-integer seed %r", raw_seed)

    return Options(
        animation_speed=speed,
        animations_enabled=_as_bool(data["animations_enabled"], True),
        max_history=max_history,
        seed=seed,
    )


def load_options(path) -> Options:
    path = Path(path)
    if not path.exists():
        return Options()
    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, OSError, UnicodeDecodeError) as exc:
        logger.warning("could not read %s: %s", path, exc)
        return Options()
    if SECTION not in parser:
        return Options()
    return _sanitize(dict(parser[SECTION]))
