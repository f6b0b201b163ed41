"""Formatters turning the picked value into the text shown in the wheel."""

from __future__ import annotations

from typing import Protocol


class ValueFormatter(Protocol):
    def format(self, value: float) -> str: ...


class SimpleValueFormatter:
    """printf-style formatting, e.g. ``SimpleValueFormatter("%.2f s")``."""

    def __init__(self, fmt: str = "%.0f") -> None:
        self._fmt = fmt

    def format(self, value: float) -> str:
        return self._fmt % value


class DecimalValueFormatter:
    """Thousands-grouped decimal with a fixed number of fraction digits."""

    def __init__(self, digits: int = 0) -> None:
        if digits < 0:
            raise ValueError(f"digits must be >= 0, got {digits!r}")
        self._spec = f",.{int(digits)}f"

    def format(self, value: float) -> str:
        return format(value, self._spec)


class PercentValueFormatter(DecimalValueFormatter):
    def __init__(self) -> None:
        super().__init__(1)

    def format(self, value: float) -> str:
        return super().format(value) + " %"


__all__ = [
    "ValueFormatter",
    "SimpleValueFormatter",
    "DecimalValueFormatter",
    "PercentValueFormatter",
]
