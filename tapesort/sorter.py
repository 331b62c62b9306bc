"""External merge sort of a tape using temporary tape files."""

from __future__ import annotations

import os
from itertools import islice
from pathlib import Path
from typing import Iterator, List, Optional

from .tape import DelayConfig, Tape, write_tape

RESULT_NAME = "result.bin"


def _merge_streams(first: Tape, second: Tape) -> Iterator[int]:
    x = first.read_move()
    y = second.read_move()
    while x is not None and y is not None:
        if x < y:
            yield x
            x = first.read_move()
        else:
            yield y
            y = second.read_move()
    while x is not None:
        yield x
        x = first.read_move()
    while y is not None:
        yield y
        y = second.read_move()


class TapeSorter:
    """Sorts a tape by splitting it into window-sized runs and merging them."""

    def __init__(self, tape: Tape, tmp_dir="tmp", config: Optional[DelayConfig] = None):
        self._input = tape
        self._tmp_dir = Path(tmp_dir)
        self._config = config if config is not None else tape.config
        tape.rewind()

    def sort(self) -> Tape:
        """Sort the input and return a tape over the result file in the temp dir."""
        self._tmp_dir.mkdir(parents=True, exist_ok=True)
        created: List[Path] = []
        result = self._tmp_dir / RESULT_NAME
        try:
            runs = self._split(created)
            os.replace(self._merge(runs, created), result)
        finally:
            for path in created:
                path.unlink(missing_ok=True)
        return Tape(result, self._config)

    def _values(self) -> Iterator[int]:
        tape = self._input
        while True:
            yield tape.read()
            if tape.is_end():
                return
            tape.move_forward()

    def _split(self, created: List[Path]) -> List[Path]:
        runs = []
        values = self._values()
        size = self._input.max_elements
        while chunk := list(islice(values, size)):
            path = self._tmp_dir / f"tape{len(runs)}.bin"
            created.append(path)
            write_tape(path, sorted(chunk), len(chunk) * 4)
            runs.append(path)
        return runs

    def _merge(self, runs: List[Path], created: List[Path]) -> Path:
        level = 0
        while len(runs) > 1:
            merged = []
            for index, (first, second) in enumerate(zip(runs[::2], runs[1::2])):
                dest = self._tmp_dir / f"merge_{level}_{index}.bin"
                created.append(dest)
                self._merge_pair(first, second, dest)
                merged.append(dest)
            if len(runs) % 2:
                merged.append(runs[-1])
            runs = merged
            level += 1
        return runs[0]

    def _merge_pair(self, first_path: Path, second_path: Path, dest: Path) -> None:
        with Tape(first_path, self._config) as first, Tape(second_path, self._config) as second:
            visible = max(first.max_elements, second.max_elements) * 4
            write_tape(dest, _merge_streams(first, second), visible)