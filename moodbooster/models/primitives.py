"""
Shared primitive data types for the simulation.

This module provides basic geometric types used by the state machine,
the physics step, the input mapper and the renderer.
"""

from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions and coordinates.

    Used both for window (surface) coordinates coming from input devices
    and for logical stage coordinates after scaling.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> pos = Point2D(x=270.0, y=1400.0)
        >>> pos.x
        270.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


# Alias used by input code
Vector2D = Point2D


class Resolution(BaseModel):
    """Window or stage resolution.

    Attributes:
        width: Width in pixels (must be positive)
        height: Height in pixels (must be positive)
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    def as_tuple(self) -> tuple:
        """Return (width, height) for pygame calls."""
        return (self.width, self.height)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Resolution({self.width}x{self.height})"


class Rectangle(BaseModel):
    """Immutable rectangle defined by position and dimensions.

    Used for hitboxes and the consume button. Position is at the
    top-left corner (pygame convention).

    Attributes:
        x: X coordinate of top-left corner
        y: Y coordinate of top-left corner
        width: Width of rectangle (must be positive)
        height: Height of rectangle (must be positive)

    Examples:
        >>> rect = Rectangle(x=465.0, y=1600.0, width=150.0, height=150.0)
        >>> rect.contains_point(Point2D(x=540.0, y=1675.0))
        True
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @classmethod
    def from_center(cls, cx: float, cy: float, half_width: float, half_height: float) -> 'Rectangle':
        """Build a rectangle from its center and half extents."""
        return cls(
            x=cx - half_width,
            y=cy - half_height,
            width=half_width * 2,
            height=half_height * 2,
        )

    @computed_field
    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(
            x=self.x + self.width / 2,
            y=self.y + self.height / 2
        )

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains_point(self, point: Point2D) -> bool:
        """Check if a point is inside the rectangle.

        Points on the boundary count as inside.

        Args:
            point: The point to check

        Returns:
            True if point is inside or on the boundary of the rectangle
        """
        return (self.left <= point.x <= self.right and
                self.top <= point.y <= self.bottom)

    def overlaps(self, other: 'Rectangle') -> bool:
        """Check if this rectangle overlaps another one.

        Rectangles that only touch along an edge do not overlap.

        Examples:
            >>> a = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
            >>> a.overlaps(Rectangle(x=5.0, y=5.0, width=10.0, height=10.0))
            True
            >>> a.overlaps(Rectangle(x=10.0, y=0.0, width=10.0, height=10.0))
            False
        """
        return (self.left < other.right and other.left < self.right and
                self.top < other.bottom and other.top < self.bottom)

    def as_tuple(self) -> tuple:
        """Return (x, y, width, height) with integer pixels for pygame.Rect."""
        return (int(self.x), int(self.y), int(self.width), int(self.height))

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
