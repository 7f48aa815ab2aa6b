"""
Error types raised by the MapReduce engine.
Every stage raises one of these; only the CLI turns them into an exit status.
"""

from typing import Optional


class MapReduceError(Exception):
    """Base class for all engine failures"""

    def __init__(self, message: str, stage: Optional[str] = None,
                 identifier: Optional[str] = None):
        """
        Args:
            message: Human readable description of the failure
            stage: Stage that failed ('load', 'map', 'reduce', 'write', ...)
            identifier: Input name, key or module that triggered the failure
        """
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.identifier = identifier

    def __str__(self):
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class ConfigurationError(MapReduceError):
    """Transform module cannot be resolved or configuration is invalid"""


class InputError(MapReduceError):
    """An input file cannot be opened, read or decoded"""


class TransformError(MapReduceError):
    """The user's map or reduce function raised or returned bad data"""


class OutputError(MapReduceError):
    """The output file could not be written"""
