"""
Writer Module

Output sink for query answers. A query emits a sequence of objects, each
made of named fields:

    writer.write_new_object()
    writer.write_new_field("name", "%s", user.name)

Delimited mode (default) prints one line per object with the values
joined by ';'. Formatted mode prints a "--- N ---" header per object and
one "key: value" line per field, with a blank line between objects.

A writer either streams to a file or, without a path, keeps its output
lines in memory.
"""

from typing import List, Optional, TextIO

# Constants
DELIMITER = ';'


class QueryWriter:
    """Formats query objects into a file or into memory."""

    def __init__(self, path: Optional[str] = None, formatted: bool = False):
        """
        Args:
            path: Output file (truncated), or None to collect lines in memory
            formatted: Use the "key: value" layout instead of delimited rows
        """
        self.formatted = formatted
        self.object_count = 0
        self.lines: List[str] = []
        self.current: Optional[List[str]] = None
        self.file: Optional[TextIO] = open(path, 'w', encoding='utf-8') if path else None

    def _emit(self, line: str):
        if self.file is not None:
            self.file.write(line + '\n')
        else:
            self.lines.append(line)

    def _finish_object(self):
        if self.current is not None and not self.formatted:
            self._emit(DELIMITER.join(self.current))
        self.current = None

    def write_new_object(self):
        """Start a new output object."""
        self._finish_object()
        self.object_count += 1
        self.current = []
        if self.formatted:
            if self.object_count > 1:
                self._emit('')
            self._emit(f"--- {self.object_count} ---")

    def write_new_field(self, key: str, fmt: str, *args):
        """
        Append a field to the current object.

        Args:
            key: Field name (only printed in formatted mode)
            fmt: printf-style format for the value
            *args: Values for the format
        """
        if self.current is None:
            raise ValueError("write_new_field called before write_new_object")
        value = fmt % args if args else fmt
        if self.formatted:
            self._emit(f"{key}: {value}")
        else:
            self.current.append(value)

    def flush(self):
        self._finish_object()
        if self.file is not None:
            self.file.flush()

    def close(self):
        """Finish the last object and release the file, if any."""
        self.flush()
        if self.file is not None:
            self.file.close()
            self.file = None

    def get_lines(self) -> List[str]:
        """Lines collected by an in-memory writer, including a pending object."""
        self._finish_object()
        return list(self.lines)
