#!/usr/bin/env python3
"""
Job Runner for the sequential MapReduce engine
Sequences map, grouping, reduce and output hand-off for one invocation
and tracks the job state and run statistics
"""

import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

import psutil

from mrsequential.errors import MapReduceError
from mrsequential.grouping import group_by_key
from mrsequential.input_reader import read_inputs
from mrsequential.map_executor import MapExecutor
from mrsequential.output_writer import OutputWriter
from mrsequential.reduce_executor import ReduceExecutor
from mrsequential.types import OutputRecord, TransformPair

logger = logging.getLogger(__name__)

InputReader = Callable[[Iterable[str]], Iterator[Tuple[str, str]]]


class JobStatus(Enum):
    """Status of a MapReduce run"""
    INIT = "init"
    MAPPING = "mapping"
    GROUPING = "grouping"
    REDUCING = "reducing"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class JobResult:
    """Output and statistics of a completed run"""
    records: List[OutputRecord] = field(default_factory=list)
    num_inputs: int = 0
    num_intermediate: int = 0
    num_keys: int = 0
    execution_time_ms: int = 0
    peak_memory_bytes: int = 0
    output_path: Optional[str] = None

    def summary(self) -> str:
        return (f"{self.num_inputs} inputs, {self.num_intermediate} intermediate pairs, "
                f"{self.num_keys} keys in {self.execution_time_ms}ms "
                f"(peak RSS {self.peak_memory_bytes / (1024 * 1024):.1f} MB)")


class JobRunner:
    """Runs one map/reduce job from start to finish"""

    def __init__(self, transforms: TransformPair, writer: Optional[OutputWriter] = None,
                 input_reader: InputReader = read_inputs):
        """
        Args:
            transforms: The map and reduce callables
            writer: Output collaborator, or None to only return the records
            input_reader: Callable turning input paths into (name, content) pairs
        """
        self.transforms = transforms
        self.writer = writer
        self.input_reader = input_reader
        self.status = JobStatus.INIT
        self.error: Optional[MapReduceError] = None
        self.process = psutil.Process()
        self._peak_memory = 0

    def _enter(self, status: JobStatus):
        logger.debug(f"Job state {self.status.value} -> {status.value}")
        self.status = status

    def _fail(self, error: MapReduceError):
        logger.debug(f"Job failed while {self.status.value}: {error}")
        self.error = error
        self._enter(JobStatus.FAILED)

    def _sample_memory(self):
        self._peak_memory = max(self._peak_memory, self.process.memory_info().rss)

    def run(self, input_paths: Iterable[str]) -> JobResult:
        """
        Execute the job exactly once

        Args:
            input_paths: Input identifiers, processed in the order given

        Returns:
            JobResult with the output records in ascending key order

        Raises:
            MapReduceError: Any stage failure; status is left at FAILED.
                Errors not raised by the engine itself are wrapped, with the
                original as __cause__
        """
        if self.status is not JobStatus.INIT:
            raise RuntimeError(f"JobRunner already used (status {self.status.value})")

        start_time = time.time()
        try:
            self._enter(JobStatus.MAPPING)
            mapper = MapExecutor(self.transforms.map_function)
            intermediate = mapper.execute(self.input_reader(input_paths))
            num_intermediate = len(intermediate)
            self._sample_memory()

            # Frozen from here on
            self._enter(JobStatus.GROUPING)
            groups = group_by_key(tuple(intermediate))
            del intermediate
            self._sample_memory()

            self._enter(JobStatus.REDUCING)
            records = ReduceExecutor(self.transforms.reduce_function).execute(groups)
            self._sample_memory()

            output_path = None
            if self.writer is not None:
                self._enter(JobStatus.WRITING)
                self.writer.write(records)
                output_path = self.writer.output_path

        except MapReduceError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = MapReduceError(f"{type(e).__name__}: {e}", stage=self.status.value)
            self._fail(error)
            raise error from e

        self._enter(JobStatus.DONE)
        return JobResult(
            records=records,
            num_inputs=mapper.units_processed,
            num_intermediate=num_intermediate,
            num_keys=len(groups),
            execution_time_ms=int((time.time() - start_time) * 1000),
            peak_memory_bytes=self._peak_memory,
            output_path=output_path,
        )
