from typing import Any, Optional, TextIO

from loxi.errors import LoxRuntimeError
from loxi.types import to_string


class BasicIO:
    """Line-oriented access to the interpreter's output sink and line source."""

    def __init__(self, writer: TextIO, reader: Any):
        self.writer = writer
        self.reader = reader

    def write_values(self, values: list) -> None:
        line = ' '.join(to_string(v) for v in values)
        try:
            self.writer.write(line + '\n')
            self.writer.flush()
        except OSError:
            raise LoxRuntimeError('error writing output')

    def read_line(self) -> Optional[str]:
        try:
            line = self.reader.readline()
        except OSError:
            raise LoxRuntimeError('error reading input')
        if line == '':
            return None  # end of input
        return line.rstrip('\r\n')
