"""
Base Domain Classes

Value objects are immutable and compared by value. They carry no identity and
no persistence concerns; Django models own those.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Two value objects are equal if all their attributes are equal.
    """
    pass
