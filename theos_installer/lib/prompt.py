from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

AFFIRMATIVE = frozenset({"y", "Y", "yes", "Yes", "YES"})


def is_affirmative(answer: str) -> bool:
    """Exact allow-list match; anything else (including "") means no."""
    return answer in AFFIRMATIVE


class DecisionSource(Protocol):
    def confirm(self, question: str) -> bool:
        ...


class InteractivePrompt:
    def __init__(self, input_fn: Callable[[str], str] = input):
        self._input = input_fn

    def confirm(self, question: str) -> bool:
        try:
            answer = self._input(f"{question} [y/N] ")
        except EOFError:
            answer = ""
        return is_affirmative(answer)


class FixedAnswer:
    """Answers every question with the same value (used under CI)."""

    def __init__(self, value: bool):
        self.value = value

    def confirm(self, question: str) -> bool:
        logger.info("%s -> %s (non-interactive)", question, "yes" if self.value else "no")
        return self.value
