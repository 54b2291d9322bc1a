"""Movement roles and input directions."""

from enum import Enum


class Role(Enum):
    """The two cooperating movement agents."""

    A = "A"
    B = "B"

    @property
    def index(self) -> int:
        """Slot of this role in fixed two-element structures."""
        return 0 if self is Role.A else 1


class Direction(Enum):
    """Single-cell orthogonal move. Value is the (dcol, drow) offset."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dcol(self) -> int:
        return self.value[0]

    @property
    def drow(self) -> int:
        return self.value[1]
