"""
Reference table selection

Maps occupancy metadata and sprinkler protection to one of the four
unprotected-opening tables of CNB 2015 Subsection 3.2.3:

    B: not sprinklered - groups A, B, C, D and F div. 3
    C: not sprinklered - group E and F div. 1 and 2
    D: sprinklered     - groups A, B, C, D and F div. 3
    E: sprinklered     - group E and F div. 1 and 2
"""

import logging
from enum import Enum
from typing import Union

from .errors import UnknownSelectorError

logger = logging.getLogger(__name__)


class TableCode(Enum):
    """Table 3.2.3.1 variants"""
    B = "B"
    C = "C"
    D = "D"
    E = "E"

    @property
    def keyed_by_aspect_ratio(self) -> bool:
        """Tables B and C carry one block of rows per L/H category"""
        return self in (TableCode.B, TableCode.C)

    @property
    def sprinklered(self) -> bool:
        return self in (TableCode.D, TableCode.E)


class OccupancyGroup(Enum):
    """Major occupancy groups"""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


# Group F divisions (1: high hazard, 2: medium hazard, 3: low hazard)
F_DIVISIONS = (1, 2, 3)

# Divisions of group F that share the stricter tables with group E
HIGH_HAZARD_F_DIVISIONS = (1, 2)


def parse_group(group: Union[str, OccupancyGroup]) -> OccupancyGroup:
    if isinstance(group, OccupancyGroup):
        return group
    try:
        return OccupancyGroup(str(group).strip().upper())
    except ValueError:
        raise UnknownSelectorError(f"Unknown occupancy group {group!r} (expected A-F)") from None


def uses_mercantile_industrial_tables(group: OccupancyGroup, division: int) -> bool:
    """True for group E and for group F divisions 1 and 2."""
    if group == OccupancyGroup.F:
        if division not in F_DIVISIONS:
            raise UnknownSelectorError(
                f"Group F requires division 1, 2 or 3 (got {division!r})"
            )
        return division in HIGH_HAZARD_F_DIVISIONS
    return group == OccupancyGroup.E


def select_table(group: Union[str, OccupancyGroup], division: int, sprinklered: bool) -> TableCode:
    """
    Pick the reference table for an occupancy

    Args:
        group: Occupancy group letter A-F (or OccupancyGroup)
        division: Division number, only meaningful for group F
        sprinklered: Building fully protected by automatic sprinklers

    Returns:
        TableCode B, C, D or E

    Raises:
        UnknownSelectorError: Unrecognized group, or group F outside divisions 1-3
    """
    occupancy = parse_group(group)
    stricter = uses_mercantile_industrial_tables(occupancy, division)
    if sprinklered:
        code = TableCode.E if stricter else TableCode.D
    else:
        code = TableCode.C if stricter else TableCode.B
    logger.debug("Group %s div %s sprinklered=%s -> table %s",
                 occupancy.value, division, sprinklered, code.value)
    return code
