"""
Integer 2D geometry used by the sampler.

Points live on the integer lattice of a map whose origin is (0, 0).
Map sections describe areas that must end up free of generated points;
they are applied as a post-filter once sampling is done.
"""

from enum import Enum
from typing import Iterable, List, NamedTuple, Sequence, Tuple

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = structlog.get_logger()

Point = Tuple[int, int]

# Marks an unset grid cell. Never a valid in-map point.
EMPTY_POINT: Point = (-1, -1)


class UnsupportedShapeError(NotImplementedError):
    """Raised for map section shapes that have no containment test."""


class MapDimensions(NamedTuple):
    """Width and height of a map, in lattice units."""

    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class SectionShape(str, Enum):
    """Shapes a map section can take."""

    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"


class MapSection(BaseModel):
    """A section of the map, described by shape, center and dimensions."""

    model_config = ConfigDict(frozen=True)

    shape: SectionShape = Field(
        default=SectionShape.RECTANGLE, description="Outline of the section"
    )
    center: Tuple[int, int] = Field(description="Center tile of the section")
    dimensions: Tuple[int, int] = Field(description="Width and height of the section")

    @field_validator("dimensions")
    @classmethod
    def _non_negative(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        if value[0] < 0 or value[1] < 0:
            raise ValueError(f"Section dimensions must be non-negative, got {value}")
        return value

    @classmethod
    def rectangle(cls, center: Point, dimensions: Tuple[int, int]) -> "MapSection":
        return cls(shape=SectionShape.RECTANGLE, center=center, dimensions=dimensions)

    @classmethod
    def ellipse(cls, center: Point, dimensions: Tuple[int, int]) -> "MapSection":
        return cls(shape=SectionShape.ELLIPSE, center=center, dimensions=dimensions)

    @property
    def offset(self) -> Point:
        """Top left corner, derived from center and halved dimensions."""
        return (
            self.center[0] - self.dimensions[0] // 2,
            self.center[1] - self.dimensions[1] // 2,
        )


def inside_rectangle(point: Sequence[int], offset: Sequence[int],
                     dimensions: Sequence[int]) -> bool:
    """
    Check whether a point lies inside a rectangle.

    The rectangle is half-open: ``offset`` is included, ``offset + dimensions``
    is not, on both axes.
    """
    return (offset[0] <= point[0] < offset[0] + dimensions[0] and
            offset[1] <= point[1] < offset[1] + dimensions[1])


def check_supported(section: MapSection) -> None:
    """Raise UnsupportedShapeError unless the section shape can be tested."""
    if section.shape is not SectionShape.RECTANGLE:
        raise UnsupportedShapeError(
            f"{section.shape.value} map sections are not supported yet"
        )


def inside_section(point: Sequence[int], section: MapSection) -> bool:
    """
    Check whether a point falls within a map section.

    Raises:
        UnsupportedShapeError: for shapes without a containment test. The
            caller must not read that as "not inside".
    """
    check_supported(section)
    return inside_rectangle(point, section.offset, section.dimensions)


def exclude_sections(points: Iterable[Point],
                     sections: Iterable[MapSection]) -> List[Point]:
    """
    Remove all points that fall within any of the given sections.

    Order of the remaining points is preserved.
    """
    remaining = list(points)
    for section in sections:
        check_supported(section)
        before = len(remaining)
        remaining = [p for p in remaining if not inside_section(p, section)]
        logger.debug(
            "Excluded map section",
            shape=section.shape.value,
            center=section.center,
            dimensions=section.dimensions,
            removed=before - len(remaining),
        )
    return remaining
