from __future__ import annotations

from typing import Iterable, List


class ValidationError(ValueError):
    def __init__(self, messages: Iterable[str]) -> None:
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages) or "invalid calculation input")
