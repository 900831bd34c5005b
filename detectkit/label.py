"""Object types, rectangles and labels."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from detectkit.errors import InvalidArgumentError


class ObjectType(enum.IntEnum):
    """The kinds of object the dataset holds, ordered by their numeric code."""

    SUGAR_BOX = 4
    MUSTARD_BOTTLE = 6
    POWER_DRILL = 35

    @classmethod
    def parse(cls, text):
        """Return the object type named by text, e.g. "004_sugar_box"."""
        try:
            return _BY_NAME[text]
        except KeyError:
            raise InvalidArgumentError("type", f"unknown object type: {text!r}") from None

    def __str__(self):
        return _NAMES[self]

    def __format__(self, spec):
        return format(str(self), spec)


_NAMES = {
    ObjectType.SUGAR_BOX: "004_sugar_box",
    ObjectType.MUSTARD_BOTTLE: "006_mustard_bottle",
    ObjectType.POWER_DRILL: "035_power_drill",
}
_BY_NAME = {name: object_type for object_type, name in _NAMES.items()}


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def from_corners(cls, x1, y1, x2, y2):
        """Build a rectangle from its top-left and bottom-right corners."""
        return cls(x1, y1, x2 - x1, y2 - y1)

    def area(self):
        return self.width * self.height

    def is_empty(self):
        return self.width <= 0 or self.height <= 0

    def intersect(self, other):
        """Return the overlap of two rectangles, or an all-zero rectangle."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        width = min(self.x + self.width, other.x + other.width) - x1
        height = min(self.y + self.height, other.y + other.height) - y1
        if width <= 0 or height <= 0:
            return Rect()
        return Rect(x1, y1, width, height)

    def __and__(self, other):
        return self.intersect(other)

    def __str__(self):
        return f"[{self.width} x {self.height} from ({self.x}, {self.y})]"


@dataclass
class Label:
    """An object type together with its bounding box in an image."""

    object_type: ObjectType
    bounding_box: Rect = field(default_factory=Rect)

    def __str__(self):
        return f"{self.object_type} {self.bounding_box}"