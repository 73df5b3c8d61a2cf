"""
Notifier implementations for terminal use.
"""
import logging
import sys
from typing import Callable, TextIO

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Warnings go to stderr; destructive actions need an explicit 'y'."""

    def __init__(self, stream: TextIO = None, ask: Callable[[str], str] = input):
        self.stream = stream or sys.stderr
        self._ask = ask

    def warn(self, message: str) -> None:
        print(f"WARNING: {message}", file=self.stream)

    def confirm_destructive(self, prompt: str) -> bool:
        try:
            answer = self._ask(f"{prompt} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")


class AutoConfirmNotifier:
    """Non-interactive notifier: logs warnings, confirms everything."""

    def warn(self, message: str) -> None:
        logger.warning(message)

    def confirm_destructive(self, prompt: str) -> bool:
        logger.info(f"Auto-confirmed: {prompt}")
        return True
