from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from lunch_places.errors import UpstreamError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: UpstreamError


Result = Union[Ok[T], Failure]
