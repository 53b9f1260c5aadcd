"""
UserId Value Object - the identity a connection and a message are bound to.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any

# "7", " 7 ", "7.0", "7." all denote 7; "7.5" and "7e0" do not
_INTEGRAL_REFERENCE = re.compile(r"(\d+)(?:\.0*)?")


@dataclass(frozen=True)
class UserId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"UserId must be an integer: {self.value!r}")
        if self.value <= 0:
            raise ValueError("UserId must be positive")

    @classmethod
    def from_reference(cls, raw: Any) -> UserId:
        """
        Parse a client-supplied identity reference.

        Accepts positive ints, floats with no fractional part, and strings
        denoting one of those (surrounding whitespace allowed). Everything
        else raises ValueError.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            raise ValueError(f"Invalid identity reference: {raw!r}")
        if isinstance(raw, int):
            return cls(raw)
        if isinstance(raw, float) and raw.is_integer():
            return cls(int(raw))
        if isinstance(raw, str):
            match = _INTEGRAL_REFERENCE.fullmatch(raw.strip())
            if match:
                return cls(int(match.group(1)))
        raise ValueError(f"Invalid identity reference: {raw!r}")

    def __str__(self) -> str:
        return str(self.value)
