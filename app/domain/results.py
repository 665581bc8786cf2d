# app/domain/results.py
"""Tagged outcomes shared by the normalizer and the persistence layer.

``Ok`` / ``Failed`` replace "falsy means failure" on writes, so a record can
never be mistaken for a failure. ``Valid`` / ``Invalid`` are what parsing a
loosely-typed integer yields before any default or clamp is applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class _Missing:
    """Sentinel for an input that was never supplied (as opposed to ``None``)."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    reason: str | None = None

    def __bool__(self) -> bool:
        return False


WriteResult = Union[Ok[T], Failed]


@dataclass(frozen=True)
class Valid:
    value: int


@dataclass(frozen=True)
class Invalid:
    # Todos los Invalid son iguales: el valor crudo solo sirve para logs.
    raw: Any = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"Invalid({self.raw!r})"


ParsedInt = Union[Valid, Invalid]
