"""Slice predicates: which columns of each row a range slice returns."""

from __future__ import annotations

import base64
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import ValidationError

DEFAULT_SLICE_COUNT = 2**31 - 1


@dataclass(slots=True, frozen=True)
class SlicePredicate:
    """Either an explicit list of column names or a slice range over names.

    Names and bounds are raw bytes; encoding typed names is the column
    family's job. An empty ``start``/``finish`` leaves that end open.
    """

    column_names: Sequence[bytes] | None = None
    start: bytes = b""
    finish: bytes = b""
    reversed: bool = False
    count: int = DEFAULT_SLICE_COUNT

    def __post_init__(self) -> None:
        if self.column_names is not None:
            if isinstance(self.column_names, (bytes, str)):
                raise ValidationError("column_names must be a sequence of bytes, not a scalar")
            normalized: list[bytes] = []
            for name in self.column_names:
                if not isinstance(name, bytes):
                    raise ValidationError("column_names entries must be bytes")
                normalized.append(name)
            object.__setattr__(self, "column_names", tuple(normalized))

    @classmethod
    def names(cls, column_names: Sequence[bytes]) -> "SlicePredicate":
        return cls(column_names=column_names)

    @classmethod
    def full_row(cls) -> "SlicePredicate":
        return cls()

    @property
    def is_name_list(self) -> bool:
        return self.column_names is not None

    def validate(self) -> None:
        if self.column_names is not None:
            if not self.column_names:
                raise ValidationError("column_names must not be empty")
            if self.start or self.finish or self.reversed or self.count != DEFAULT_SLICE_COUNT:
                raise ValidationError("column_names cannot be combined with a slice range")
            return
        if not isinstance(self.start, bytes) or not isinstance(self.finish, bytes):
            raise ValidationError("slice range bounds must be bytes")
        if not isinstance(self.count, int) or isinstance(self.count, bool) or self.count < 1:
            raise ValidationError("slice range count must be >= 1")


def build_predicate_payload(predicate: SlicePredicate) -> dict[str, object]:
    """Render a predicate in the gateway's JSON form."""

    predicate.validate()
    if predicate.column_names is not None:
        return {"column_names": [_b64(name) for name in predicate.column_names]}
    return {
        "slice_range": {
            "start": _b64(predicate.start),
            "finish": _b64(predicate.finish),
            "reversed": predicate.reversed,
            "count": predicate.count,
        }
    }


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


__all__ = [
    "DEFAULT_SLICE_COUNT",
    "SlicePredicate",
    "build_predicate_payload",
]
