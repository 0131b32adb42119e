"""Value types shared by the raster, spatial and utility helpers."""

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence, Tuple


class Vector2D(NamedTuple):
    """A point in pixel/line or georeferenced 2D space."""
    x: float
    y: float


class Vector3D(NamedTuple):
    """A point in 3D space (z is height, 0 when unknown)."""
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class GeoTransform:
    """Six-coefficient affine map between pixel/line and georeferenced space.

    Coefficients are stored in GDAL order::

        Xgeo = origin_x + pixel * pixel_width + line * row_rotation
        Ygeo = origin_y + pixel * column_rotation + line * pixel_height
    """
    origin_x: float
    pixel_width: float
    row_rotation: float
    origin_y: float
    column_rotation: float
    pixel_height: float

    @classmethod
    def from_gdal(cls, coefficients: Sequence[float]) -> 'GeoTransform':
        if len(coefficients) != 6:
            raise ValueError(f"A geo-transform needs 6 coefficients, got {len(coefficients)}")
        return cls(*(float(c) for c in coefficients))

    def to_gdal(self) -> Tuple[float, float, float, float, float, float]:
        return (self.origin_x, self.pixel_width, self.row_rotation,
                self.origin_y, self.column_rotation, self.pixel_height)

    def __iter__(self):
        return iter(self.to_gdal())

    def __len__(self):
        return 6

    def __getitem__(self, index):
        return self.to_gdal()[index]

    @property
    def is_north_up(self) -> bool:
        """True when the transform has no rotation terms."""
        return self.row_rotation == 0.0 and self.column_rotation == 0.0


@dataclass
class RasterCornerCoordinates:
    """Corner coordinates of a GDAL raster dataset."""
    upper_left: Vector2D
    lower_right: Vector2D

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(west, south, east, north) regardless of axis direction."""
        xs = (self.upper_left.x, self.lower_right.x)
        ys = (self.upper_left.y, self.lower_right.y)
        return (min(xs), min(ys), max(xs), max(ys))


@dataclass
class RasterMinMax:
    """Minimum and maximum values from a GDAL raster band."""
    min: float = field(default=math.inf)
    max: float = field(default=math.inf)

    @property
    def is_set(self) -> bool:
        """True once both fields have moved off their +inf defaults."""
        return self.min != math.inf and self.max != math.inf

    @property
    def range(self) -> float:
        return self.max - self.min
