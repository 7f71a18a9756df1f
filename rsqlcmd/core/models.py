"""
Result set models shared by the renderers and the database adapters.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Column:
    """
    Describes one column of a result set.

    Attributes:
        position: 1-based position of the column in the result set
        name: Name reported by the driver, may be empty or None
        type_name: Driver type name (e.g. "int", "nvarchar", "decimal")
        size: Storage size, None when unknown or unbounded
        precision: Numeric precision, only set for decimal-like types
        scale: Numeric scale, only set for decimal-like types
    """
    position: int
    name: Optional[str]
    type_name: str
    size: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
