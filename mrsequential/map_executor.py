#!/usr/bin/env python3
"""
Map Stage Executor
Applies the map function to every input unit and concatenates the
emitted records, in input order, into one intermediate collection
"""

import time
import logging
from typing import Iterable, List, Tuple

from mrsequential.errors import TransformError
from mrsequential.types import KeyValue, MapFunction

logger = logging.getLogger(__name__)


def to_key_value(record, source: str) -> KeyValue:
    """
    Normalise one record emitted by map into a KeyValue

    Args:
        record: Whatever map yielded, expected to be a (key, value) pair
        source: Input name, used in the error message

    Raises:
        TransformError: If the record is not a two-item sequence
    """
    try:
        key, value = record
    except (TypeError, ValueError) as e:
        raise TransformError(f"map emitted malformed record {record!r} for {source}",
                             stage='map', identifier=source) from e
    # Keys are compared as strings when grouping
    return KeyValue(str(key), str(value))


class MapExecutor:
    """Executes the map stage over all inputs of a job"""

    def __init__(self, map_function: MapFunction):
        """
        Initialize the map executor

        Args:
            map_function: Callable taking (name, content) and returning (key, value) pairs
        """
        self.map_function = map_function
        self.units_processed = 0
        self.execution_time_ms = 0

    def map_unit(self, name: str, content: str) -> List[KeyValue]:
        """
        Apply map to a single input unit

        Returns:
            List of KeyValue records for this unit

        Raises:
            TransformError: If map raises or emits a malformed record
        """
        try:
            emitted = self.map_function(name, content)
            records = [to_key_value(record, name) for record in emitted]
        except TransformError:
            raise
        except Exception as e:
            raise TransformError(f"map failed on {name}: {e}",
                                 stage='map', identifier=name) from e
        logger.debug(f"Map: {name} produced {len(records)} records")
        return records

    def execute(self, inputs: Iterable[Tuple[str, str]]) -> List[KeyValue]:
        """
        Execute the map stage

        Args:
            inputs: (name, content) pairs; InputError from the reader propagates

        Returns:
            The intermediate collection, in input order
        """
        start_time = time.time()
        intermediate: List[KeyValue] = []

        for name, content in inputs:
            intermediate.extend(self.map_unit(name, content))
            self.units_processed += 1

        self.execution_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Map: processed {self.units_processed} inputs, "
                    f"generated {len(intermediate)} intermediate pairs "
                    f"in {self.execution_time_ms}ms")
        return intermediate
