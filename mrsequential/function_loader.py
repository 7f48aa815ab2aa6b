"""
Dynamic Function Loader for MapReduce User Functions
Resolves a job module, by file path or dotted name, into a TransformPair
"""

import os
import sys
import logging
import importlib
import importlib.util

from mrsequential.errors import ConfigurationError
from mrsequential.types import TransformPair

logger = logging.getLogger(__name__)

MAP_SYMBOL = 'map_function'
REDUCE_SYMBOL = 'reduce_function'


class FunctionLoader:
    """Loads user-provided map/reduce functions from a Python file or module"""

    def __init__(self, identifier: str):
        """
        Initialize the function loader

        Args:
            identifier: Path to a .py file, or an importable dotted module name
        """
        self.identifier = identifier
        self.module = None

    def _is_path(self) -> bool:
        return self.identifier.endswith('.py') or '/' in self.identifier or os.sep in self.identifier

    def load_module(self):
        """
        Load the job module once and cache it

        Returns:
            The loaded module object

        Raises:
            ConfigurationError: If the file is missing or the module fails to import
        """
        if self.module is not None:
            return self.module

        if self._is_path():
            self.module = self._load_from_file()
        else:
            self.module = self._import_by_name()
        logger.debug(f"Loaded job module {self.identifier}")
        return self.module

    def _load_from_file(self):
        if not os.path.isfile(self.identifier):
            raise ConfigurationError(f"Map/Reduce file not found: {self.identifier}",
                                     stage='load', identifier=self.identifier)

        module_name = "mr_job_" + os.path.splitext(os.path.basename(self.identifier))[0]
        spec = importlib.util.spec_from_file_location(module_name, self.identifier)
        if spec is None or spec.loader is None:
            raise ConfigurationError(f"Cannot load job file: {self.identifier}",
                                     stage='load', identifier=self.identifier)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            raise ConfigurationError(f"Cannot load job file {self.identifier}: {e}",
                                     stage='load', identifier=self.identifier) from e
        return module

    def _import_by_name(self):
        try:
            return importlib.import_module(self.identifier)
        except Exception as e:
            raise ConfigurationError(f"Cannot import job module {self.identifier}: {e}",
                                     stage='load', identifier=self.identifier) from e

    def _get_callable(self, name: str):
        module = self.load_module()
        func = getattr(module, name, None)
        if func is None:
            raise ConfigurationError(f"Cannot find {name} in {self.identifier}",
                                     stage='load', identifier=self.identifier)
        if not callable(func):
            raise ConfigurationError(f"{name} in {self.identifier} is not callable",
                                     stage='load', identifier=self.identifier)
        return func

    def get_map_function(self):
        """
        Get map function from loaded module

        Raises:
            ConfigurationError: If module doesn't define a callable 'map_function'
        """
        return self._get_callable(MAP_SYMBOL)

    def get_reduce_function(self):
        """
        Get reduce function from loaded module

        Raises:
            ConfigurationError: If module doesn't define a callable 'reduce_function'
        """
        return self._get_callable(REDUCE_SYMBOL)

    def load(self) -> TransformPair:
        """Resolve both functions, failing before any stage runs"""
        return TransformPair(
            map_function=self.get_map_function(),
            reduce_function=self.get_reduce_function(),
            source=self.identifier,
        )
