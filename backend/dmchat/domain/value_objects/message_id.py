"""
MessageId Value Object - store-assigned, monotonically increasing message identity.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MessageId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"MessageId must be an integer: {self.value!r}")
        if self.value <= 0:
            raise ValueError("MessageId must be positive")

    def __str__(self) -> str:
        return str(self.value)
