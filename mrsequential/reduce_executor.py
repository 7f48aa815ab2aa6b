#!/usr/bin/env python3
"""
Reduce Stage Executor
Applies the reduce function once per key group and collects the
output records in ascending key order
"""

import time
import logging
from typing import Iterable, List

from mrsequential.errors import TransformError
from mrsequential.types import Group, OutputRecord, ReduceFunction

logger = logging.getLogger(__name__)


class ReduceExecutor:
    """Executes the reduce stage over all key groups of a job"""

    def __init__(self, reduce_function: ReduceFunction):
        """
        Initialize the reduce executor

        Args:
            reduce_function: Callable taking (key, values) and returning one value
        """
        self.reduce_function = reduce_function
        self.execution_time_ms = 0

    def reduce_group(self, group: Group) -> OutputRecord:
        """
        Reduce a single key group

        Raises:
            TransformError: If reduce raises for this key
        """
        try:
            result = self.reduce_function(group.key, list(group.values))
        except Exception as e:
            raise TransformError(f"reduce failed on key {group.key!r}: {e}",
                                 stage='reduce', identifier=group.key) from e
        return OutputRecord(group.key, str(result))

    def execute(self, groups: Iterable[Group]) -> List[OutputRecord]:
        """
        Execute the reduce stage

        Args:
            groups: Key groups in ascending key order

        Returns:
            One OutputRecord per group, same order
        """
        start_time = time.time()
        results = [self.reduce_group(group) for group in groups]

        self.execution_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Reduce: generated {len(results)} output pairs "
                    f"in {self.execution_time_ms}ms")
        return results
