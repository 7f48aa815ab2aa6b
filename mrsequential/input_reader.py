"""Reads whole input files as named text units for the map stage."""

import logging
from typing import Iterable, Iterator, Tuple

from mrsequential.errors import InputError

logger = logging.getLogger(__name__)


def read_input(path: str, encoding: str = 'utf-8') -> str:
    """Return the full text of one input file, or raise InputError."""
    try:
        with open(path, 'r', encoding=encoding) as f:
            return f.read()
    except FileNotFoundError as e:
        raise InputError(f"cannot open {path}", stage='read', identifier=path) from e
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise InputError(f"cannot read {path}: {e}", stage='read', identifier=path) from e


def read_inputs(paths: Iterable[str], encoding: str = 'utf-8') -> Iterator[Tuple[str, str]]:
    """Yield (path, content) pairs in the order given."""
    for path in paths:
        content = read_input(path, encoding)
        logger.debug(f"Read {len(content)} characters from {path}")
        yield path, content
