"""
Sequential MapReduce engine.
Runs a user-supplied map/reduce pair over a set of input files in a single process.
"""

from mrsequential.errors import (
    MapReduceError,
    ConfigurationError,
    InputError,
    TransformError,
    OutputError,
)
from mrsequential.types import KeyValue, Group, OutputRecord, TransformPair
from mrsequential.job_runner import JobRunner, JobResult, JobStatus

__version__ = "0.1.0"

__all__ = [
    "MapReduceError",
    "ConfigurationError",
    "InputError",
    "TransformError",
    "OutputError",
    "KeyValue",
    "Group",
    "OutputRecord",
    "TransformPair",
    "JobRunner",
    "JobResult",
    "JobStatus",
]
