"""
Exception hierarchy for the unprotected openings calculator.

Every error is a local precondition violation: it is raised at the point of
detection and propagated to the caller unchanged. The UI layer catches
UnprotectedOpeningsError and turns the message into a validation notice.
"""


class UnprotectedOpeningsError(Exception):
    """Base class for all calculator errors"""


class InvalidGeometryError(UnprotectedOpeningsError, ValueError):
    """Non-positive facade dimension/area or negative limiting distance"""


class UnknownSelectorError(UnprotectedOpeningsError, ValueError):
    """Occupancy group/division/sprinkler combination maps to no table"""


class MalformedTableError(UnprotectedOpeningsError, ValueError):
    """Reference table data is missing breakpoints or breaks an invariant"""


class DivisionByZeroError(UnprotectedOpeningsError, ZeroDivisionError):
    """Zero total facade area in a conformity check"""
