"""An emulated sequential tape whose contents live in a binary file.

A tape file holds two little-endian 32-bit integers (the number of cells
and the size of the in-memory window in bytes) followed by the cells, each a
32-bit signed integer. Only a window of cells is kept in memory; moving past
either end of it pages a cell in from the file.
"""

from __future__ import annotations

import struct
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

_HEADER = struct.Struct("<ii")
_CELL = struct.Struct("<i")


class TapeError(Exception):
    """Raised when a tape or its configuration cannot be used."""


@dataclass(frozen=True)
class DelayConfig:
    """Delays in milliseconds for read/write, rewind and move operations."""

    read_write: int = 0
    rewind: int = 0
    move: int = 0

    @classmethod
    def from_file(cls, path) -> "DelayConfig":
        """Read three whitespace-separated integers from a file."""
        try:
            text = Path(path).read_text()
        except OSError as exc:
            raise TapeError("Can't open the file with configuration!") from exc
        fields = text.split()
        if len(fields) < 3:
            raise TapeError("Configuration file is invalid!")
        try:
            read_write, rewind, move = (int(field) for field in fields[:3])
        except ValueError as exc:
            raise TapeError("Configuration file is invalid!") from exc
        return cls(read_write, rewind, move)


def _pause(milliseconds: int) -> None:
    if milliseconds > 0:
        time.sleep(milliseconds / 1000)


class Tape:
    """A tape with a single head, keeping only a window of cells in memory."""

    def __init__(self, file_name, config: Optional[DelayConfig] = None):
        self.path = Path(file_name)
        self.config = config if config is not None else DelayConfig()
        try:
            self._file = open(self.path, "rb")
        except OSError as exc:
            raise TapeError("Can't open the file with the tape!") from exc
        try:
            header = self._file.read(_HEADER.size)
            if len(header) < _HEADER.size:
                raise TapeError("Tape is invalid!")
            length, visible_bytes = _HEADER.unpack(header)
            max_elements = int(visible_bytes / _CELL.size)
            if length <= 0 or max_elements <= 0:
                raise TapeError("Tape is invalid!")
            self._length = length
            self._max_elements = max_elements
            self._load_window()
        except BaseException:
            self._file.close()
            raise

    @property
    def length(self) -> int:
        """Number of cells on the tape."""
        return self._length

    @property
    def max_elements(self) -> int:
        """Number of cells kept in memory at once."""
        return self._max_elements

    @property
    def position(self) -> int:
        """Index of the cell under the head."""
        return self._pos

    @property
    def closed(self) -> bool:
        return self._file.closed

    def _load_window(self) -> None:
        self._file.seek(_HEADER.size)
        size = self._max_elements * _CELL.size
        data = self._file.read(size)
        if len(data) < size:
            raise TapeError("Unexpected end of tape!")
        self._window = deque(
            (value for (value,) in _CELL.iter_unpack(data)), maxlen=self._max_elements
        )
        self._pos = 0
        self._bound_min = 0
        self._read_flag = False

    def _cell(self, index: int) -> int:
        self._file.seek(_HEADER.size + index * _CELL.size)
        data = self._file.read(_CELL.size)
        if len(data) < _CELL.size:
            raise TapeError("Error in tape file!")
        return _CELL.unpack(data)[0]

    def read(self) -> int:
        """Return the value under the head."""
        value = self._window[self._pos - self._bound_min]
        _pause(self.config.read_write)
        self._read_flag = True
        return value

    def read_move(self) -> Optional[int]:
        """Return the value under the head and advance, or None past the end."""
        if self.is_end():
            return None
        value = self._window[self._pos - self._bound_min]
        _pause(self.config.read_write)
        self._read_flag = True
        if self._pos < self._length - 1:
            self.move_forward()
        return value

    def write(self, value: int) -> None:
        """Store a value in the in-memory cell under the head."""
        self._window[self._pos - self._bound_min] = value
        _pause(self.config.read_write)

    def move_forward(self) -> None:
        """Advance the head by one cell; does nothing on the last cell."""
        if self._pos + 1 >= self._length:
            return
        self._pos += 1
        self._read_flag = False
        if self._pos >= self._bound_min + self._max_elements:
            self._window.append(self._cell(self._pos))
            self._bound_min += 1
        _pause(self.config.move)

    def move_backward(self) -> None:
        """Move the head back by one cell."""
        if self._pos == 0:
            raise ValueError("Illegal backward move!")
        self._pos -= 1
        self._read_flag = False
        if self._pos < self._bound_min:
            self._window.appendleft(self._cell(self._pos))
            self._bound_min -= 1

    def rewind(self) -> None:
        """Return the head to the first cell and reload the window from file."""
        self._load_window()
        _pause(self.config.rewind)

    def is_begin(self) -> bool:
        return self._pos == 0 and self._read_flag

    def is_end(self) -> bool:
        return self._pos == self._length - 1 and self._read_flag

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "Tape":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __iter__(self) -> Iterator[int]:
        """Rewind, then yield every cell from first to last."""
        self.rewind()
        while not self.is_end():
            yield self.read()
            self.move_forward()


def write_tape(path, values: Iterable[int], visible_bytes: int) -> int:
    """Write values as a tape file and return the number of cells written."""
    count = 0
    with open(path, "wb") as out:
        out.write(_HEADER.pack(0, visible_bytes))
        for value in values:
            try:
                out.write(_CELL.pack(value))
            except struct.error as exc:
                raise ValueError(f"value {value!r} does not fit in a tape cell") from exc
            count += 1
        out.seek(0)
        out.write(_CELL.pack(count))
    return count