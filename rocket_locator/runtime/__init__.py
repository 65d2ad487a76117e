"""Runtime wiring: observable state cells and the message-driven engine."""

from rocket_locator.runtime.engine import LocatorEngine
from rocket_locator.runtime.state_cell import StateCell

__all__ = [
    "LocatorEngine",
    "StateCell",
]
