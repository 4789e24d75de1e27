"""
PLANETSEARCH Coordinate Normalization

Gazetteer rows carry their own coordinate-system tag, and a single body's
file may mix conventions from row to row. Everything returned to callers is
expressed in one canonical convention: east-positive longitude in the
signed range (-180, 180], latitude unchanged.

Only the longitude direction and offset are corrected. Planetographic and
planetocentric latitudes differ on non-spherical bodies, but converting
between them needs the body's ellipsoid and is out of scope here.
"""

from enum import Enum
from typing import Optional

from planetsearch.constants import FULL_CIRCLE_DEG, HALF_CIRCLE_DEG
from planetsearch.types import Degrees, GeoPosition


class CoordinateSystem(Enum):
    """Longitude/latitude conventions found in gazetteer sources.

    Values are the source tags with all whitespace removed, lowercased.
    """
    PLANETOGRAPHIC_WEST_0_360 = "planetographic,+west,0-360"
    PLANETOGRAPHIC_EAST_0_360 = "planetographic,+east,0-360"
    PLANETOCENTRIC_EAST_0_360 = "planetocentric,+east,0-360"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, tag: Optional[str]) -> "CoordinateSystem":
        """Map a free-text tag such as "Planetographic, +West, 0 - 360".

        Unknown, empty and missing tags map to UNSPECIFIED.
        """
        if not isinstance(tag, str):
            return cls.UNSPECIFIED
        key = "".join(tag.split()).lower()
        if not key:
            return cls.UNSPECIFIED
        try:
            return cls(key)
        except ValueError:
            return cls.UNSPECIFIED

    @property
    def is_west_positive(self) -> bool:
        return self is CoordinateSystem.PLANETOGRAPHIC_WEST_0_360


def to_east_positive(longitude: Degrees) -> Degrees:
    """Flip a west-positive longitude to east-positive in [0, 360).

    Python's % takes the sign of the divisor, so negative inputs still land
    in [0, 360).
    """
    return (FULL_CIRCLE_DEG - longitude) % FULL_CIRCLE_DEG


def wrap_longitude(longitude: Degrees) -> Degrees:
    """Shift a 0-360 longitude into (-180, 180]. 180 itself is kept."""
    if longitude > HALF_CIRCLE_DEG:
        return longitude - FULL_CIRCLE_DEG
    return longitude


def normalize(
    latitude: Degrees,
    longitude: Degrees,
    system: CoordinateSystem,
) -> GeoPosition:
    """Convert a raw source position to the canonical convention.

    Never raises: unrecognized systems skip the west flip but still get the
    wraparound, and NaN values pass through untouched.

    Args:
        latitude: Source latitude in degrees
        longitude: Source longitude in degrees, in the source's convention
        system: Coordinate system the source row declares

    Returns:
        GeoPosition with east-positive longitude in (-180, 180]

    Example:
        >>> normalize(10.0, 30.0, CoordinateSystem.PLANETOGRAPHIC_WEST_0_360)
        GeoPosition(latitude=10.0, longitude=-30.0)
    """
    if system.is_west_positive:
        longitude = to_east_positive(longitude)
    return GeoPosition(latitude=latitude, longitude=wrap_longitude(longitude))
