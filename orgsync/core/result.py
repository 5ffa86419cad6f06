"""Ok/Err values for operations that can fail in expected ways.

A git command exiting non-zero, a page the API refused, or a malformed
config file is ordinary control flow here, so those functions return
``Ok(value)`` or ``Err(error)`` and leave raising to programming mistakes.
Both sides are frozen dataclasses and work with ``match``:

    match clone(url, dest):
        case Ok(repo):
            ...
        case Err(error):
            report(error.returncode)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeGuard

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err"]


@dataclass(frozen=True, slots=True, repr=False)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or[D](self, default: D) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Err[E]:
    error: E

    def unwrap(self) -> None:
        """Fail loudly; reaching this is a bug in the caller.

        Raises:
            ValueError: Always, quoting the error.
        """
        raise ValueError(f"unwrap() on Err({self.error!r})")

    def unwrap_or[D](self, default: D) -> D:
        return default

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
