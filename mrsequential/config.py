"""
Job configuration.
Defaults come from the environment; command line flags override them.
"""

import os
import codecs
import logging
from dataclasses import dataclass, replace

from mrsequential.errors import ConfigurationError

# Defaults, overridden by MR_* environment variables
OUTPUT_FILE = 'mr-out-0'
INPUT_ENCODING = 'utf-8'
LOG_LEVEL = 'INFO'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class JobConfig:
    """Resolved settings for a single run"""
    output_path: str = OUTPUT_FILE
    encoding: str = INPUT_ENCODING
    log_level: str = LOG_LEVEL

    def __post_init__(self):
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding: {self.encoding}",
                                     stage='config', identifier=self.encoding) from e

    @classmethod
    def from_env(cls, environ=None) -> "JobConfig":
        """
        Build a config from MR_* environment variables

        Args:
            environ: Mapping to read from, defaults to os.environ
        """
        env = os.environ if environ is None else environ
        return cls(
            output_path=env.get('MR_OUTPUT_FILE', OUTPUT_FILE),
            encoding=env.get('MR_INPUT_ENCODING', INPUT_ENCODING),
            log_level=env.get('MR_LOG_LEVEL', LOG_LEVEL),
        )

    def override(self, **changes) -> "JobConfig":
        """Return a copy with every non-None value in changes applied"""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def numeric_log_level(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}",
                                     stage='config', identifier=self.log_level)
        return level
