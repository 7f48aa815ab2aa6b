"""
Output writer.
Writes reduce output as "<key> <value>" lines to a single destination file.
"""

import os
import codecs
import logging
import tempfile
from typing import Iterable

from mrsequential.errors import OutputError
from mrsequential.types import OutputRecord

logger = logging.getLogger(__name__)


class OutputWriter:
    """Creates or overwrites one output file"""

    def __init__(self, output_path: str = 'mr-out-0', encoding: str = 'utf-8'):
        self.output_path = output_path
        self.encoding = encoding

    def write(self, records: Iterable[OutputRecord]) -> int:
        """
        Write records in the order given

        The file is written next to its destination under a temporary name and
        renamed into place, so readers never see a partial output.

        Returns:
            Number of lines written
        """
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise OutputError(f"cannot write {self.output_path}: {e}",
                              stage='write', identifier=self.output_path) from e

        output_dir = os.path.dirname(os.path.abspath(self.output_path))
        count = 0
        try:
            os.makedirs(output_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.mr-out-', dir=output_dir)
        except OSError as e:
            raise OutputError(f"cannot create {self.output_path}: {e}",
                              stage='write', identifier=self.output_path) from e

        written = False
        try:
            with open(fd, 'w', encoding=self.encoding, newline='\n') as f:
                for record in records:
                    f.write(record.format_line())
                    count += 1
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.output_path)
            written = True
        except (OSError, UnicodeEncodeError) as e:
            raise OutputError(f"cannot write {self.output_path}: {e}",
                              stage='write', identifier=self.output_path) from e
        finally:
            if not written:
                os.unlink(tmp_path)

        logger.info(f"Wrote {count} records to {self.output_path}")
        return count
