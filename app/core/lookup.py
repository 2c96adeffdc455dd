# app/core/lookup.py
"""
Tagged result for single-row lookups.

Repositories return ``Found(value)`` or ``NotFound()`` so callers never have
to guess whether ``None`` meant "no such row" or "query went wrong".
A store failure is not a lookup outcome: it is raised (SQLAlchemyError)
and handled by the caller or the global 500 handler.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


Lookup = Union[Found[T], NotFound]


def lookup_of(row: T | None) -> "Lookup[T]":
    """Wrap the result of ``session.get`` / ``.first()``."""
    if row is None:
        return NotFound()
    return Found(row)
