"""
Facade geometry helpers: aspect-ratio classification and area.

The aspect ratio (L/H) is the facade width divided by its height. Tables
3.2.3.1-B and 3.2.3.1-C carry one block of rows per ratio category.
"""

import math
from enum import Enum

from .errors import InvalidGeometryError


# ============================================================================
# ASPECT RATIO LIMITS
# ============================================================================

# Below this ratio the facade is "narrow" (< 3:1)
NARROW_RATIO_LIMIT = 3.0

# Above this ratio the facade is "wide" (> 10:1); both limits are inclusive to "mid"
WIDE_RATIO_LIMIT = 10.0


class AspectRatioCategory(Enum):
    """
    Ordinal facade aspect-ratio categories

    NARROW: L/H < 3:1
    MID: 3:1 <= L/H <= 10:1
    WIDE: L/H > 10:1
    """
    NARROW = "narrow"
    MID = "mid"
    WIDE = "wide"

    @property
    def label(self) -> str:
        """Label as printed in the code tables"""
        return _LABELS[self]

    @staticmethod
    def from_ratio(ratio: float) -> 'AspectRatioCategory':
        if ratio < NARROW_RATIO_LIMIT:
            return AspectRatioCategory.NARROW
        if ratio <= WIDE_RATIO_LIMIT:
            return AspectRatioCategory.MID
        return AspectRatioCategory.WIDE


_LABELS = {
    AspectRatioCategory.NARROW: "< 3:1",
    AspectRatioCategory.MID: "3:1 to 10:1",
    AspectRatioCategory.WIDE: "> 10:1",
}


def _check_dimensions(width: float, height: float) -> None:
    if not (math.isfinite(width) and math.isfinite(height)):
        raise InvalidGeometryError(f"Facade dimensions must be finite (got {width} x {height})")
    if height <= 0:
        raise InvalidGeometryError(f"Facade height must be positive (got {height})")
    if width <= 0:
        raise InvalidGeometryError(f"Facade width must be positive (got {width})")


def aspect_ratio(width: float, height: float) -> float:
    """Return width / height for a facade with positive dimensions."""
    _check_dimensions(width, height)
    return width / height


def classify_aspect_ratio(width: float, height: float) -> AspectRatioCategory:
    """
    Classify a facade by its L/H ratio

    Args:
        width: Facade width (m)
        height: Facade height (m)

    Returns:
        AspectRatioCategory for the exact ratio (never rounded)

    Raises:
        InvalidGeometryError: If either dimension is not positive
    """
    return AspectRatioCategory.from_ratio(aspect_ratio(width, height))


def determine_aspect_ratio_category(width: float, height: float) -> str:
    """Label of the aspect-ratio category, e.g. '< 3:1'."""
    return classify_aspect_ratio(width, height).label


def facade_area(width: float, height: float) -> float:
    _check_dimensions(width, height)
    return width * height
