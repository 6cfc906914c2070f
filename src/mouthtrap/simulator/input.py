"""
Debounced input for the activate button.

Keyboard, mouse and touch each get their own ActivateButton so a held
key or a long press only ever counts once.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ActivateButton:
    """
    A press/release button that fires on the press edge only.

    Press state is driven by the window from pygame events.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._pressed = False
        self._press_callbacks: list[Callable[[], None]] = []

    def is_pressed(self) -> bool:
        return self._pressed

    def on_press(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._press_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._press_callbacks:
                self._press_callbacks.remove(callback)

        return unsubscribe

    def press(self) -> bool:
        """Register a press. Returns True if this was a new press."""
        if self._pressed:
            return False
        self._pressed = True
        for callback in self._press_callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in {self.name} press handler: {e}")
        return True

    def release(self) -> None:
        self._pressed = False
