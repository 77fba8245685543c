"""
Models - Core data types for contribution grids and mesh triangles
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from typing import Any, Dict, List, Tuple

from .errors import ValidationError

Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class ContributionDay:
    """A single day of the contribution calendar"""
    date: date
    count: int

    def __post_init__(self):
        if self.count < 0:
            raise ValidationError(f"contribution count cannot be negative (got {self.count} on {self.date})")

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ContributionDay":
        """
        Build a day from the GraphQL payload shape.

        Args:
            data: {"date": "YYYY-MM-DD", "contributionCount": int}
        """
        try:
            day = date.fromisoformat(str(data["date"])[:10])
            count = int(data["contributionCount"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError("malformed contribution day", e) from e
        return cls(date=day, count=count)


# One calendar week (1-7 days, chronological) and one year of weeks
Week = List[ContributionDay]
ContributionGrid = List[Week]


class HeightLevel(IntEnum):
    """Discrete building height derived from a normalized count"""
    SKY = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class StackRole(Enum):
    """Position of a contributing day within its week's stack"""
    FOUNDATION = "foundation"
    MIDDLE = "middle"
    TOP = "top"


@dataclass(frozen=True)
class Triangle:
    """One facet in millimetre space: face normal plus three vertices (CCW from outside)"""
    normal: Vector3
    v1: Vector3
    v2: Vector3
    v3: Vector3

    @property
    def vertices(self) -> Tuple[Vector3, Vector3, Vector3]:
        return (self.v1, self.v2, self.v3)
