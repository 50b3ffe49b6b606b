"""Immutable trace metadata carried across process boundaries."""

from dataclasses import dataclass

from b3propagation.errors import ValidationError

MAX_ID = (1 << 64) - 1


@dataclass(frozen=True)
class SpanContext:
    trace_id: int
    span_id: int
    parent_id: int = 0  # 0 = root span
    sampled: bool = False

    def __post_init__(self) -> None:
        for name in ("trace_id", "span_id", "parent_id"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an int", {name: value})
            if not 0 <= value <= MAX_ID:
                raise ValidationError(f"{name} must fit in an unsigned 64-bit integer", {name: value})

    def is_valid(self) -> bool:
        return self.trace_id != 0

    def is_root(self) -> bool:
        return self.parent_id == 0
