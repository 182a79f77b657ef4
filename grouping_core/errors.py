# FILE: grouping_core/errors.py
"""
Caller errors only. A roster whose separation rules cannot all be honoured is
not an error: it comes back as a degraded strategy or an unassigned count.
"""


class GroupingError(ValueError):
    """Base class for invalid input handed to the grouping engine."""

    pass


class InvalidRosterError(GroupingError):
    """Raised when the roster has blank or duplicate student ids."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class RosterFileError(GroupingError):
    """Raised when a roster CSV cannot be read or lacks required columns."""

    pass


class ConfigError(GroupingError):
    """Raised when grouping options loaded from YAML are not valid."""

    pass
