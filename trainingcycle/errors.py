"""
Error types for TrainingCycle

DataUnavailable is raised by data sources when matches or training sessions
cannot be fetched. ParseError is raised when a date (or a whole record)
cannot be read. Neither is retried here.
"""

from typing import Any, Optional


class TimelineError(Exception):
    """Base class for all timeline errors"""


class DataUnavailable(TimelineError):
    """Upstream fetch of matches/training sessions failed"""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class ParseError(TimelineError):
    """A date field (or record) could not be parsed"""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
