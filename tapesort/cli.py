"""Command-line entry point: view, sort, or generate and sort a test tape."""

from __future__ import annotations

import random
import shutil
import sys
from pathlib import Path

from .sorter import TapeSorter
from .tape import DelayConfig, Tape, TapeError, write_tape

CONFIG_FILE = "config.ini"
TMP_DIR = Path("tmp")
TEST_TAPE = Path("tapes") / "test.bin"
KEEP_FILE = ".gitkeep"
RAND_MAX = 32767

USAGE = (
    "Incorrect usage!\n"
    "Usage: tape <input file> <output file>\n"
    "Or: tape (if u want to do test for yourself)\n"
    "Or: tape <input file> -view"
)


def generate_tape(path, length, visible_bytes, rng=None) -> int:
    """Write a tape of random non-negative values; return the cell count."""
    rng = rng if rng is not None else random.Random()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    values = (
        rng.randint(0, RAND_MAX) * (rng.randint(0, RAND_MAX) % 30) for _ in range(length)
    )
    return write_tape(path, values, visible_bytes)


def _print_tape(tape: Tape) -> None:
    for value in tape:
        print(value)


def _clear_dir(directory: Path) -> None:
    if not directory.is_dir():
        return
    for entry in directory.iterdir():
        if entry.name != KEEP_FILE and entry.is_file():
            entry.unlink()


def _self_test() -> int:
    length = int(input("Input tape size in elements: "))
    view = int(input("Input visible size in BYTES (1 element = 4 bytes): "))
    generate_tape(TEST_TAPE, length, view)
    config = DelayConfig.from_file(CONFIG_FILE)
    with Tape(TEST_TAPE, config) as tape:
        print("Input tape:")
        _print_tape(tape)
        print()
        with TapeSorter(tape, TMP_DIR, config).sort() as result:
            print("Output tape:")
            _print_tape(result)
    _clear_dir(TMP_DIR)
    return 0


def _process_file(source: str, target: str) -> int:
    config = DelayConfig.from_file(CONFIG_FILE)
    with Tape(source, config) as tape:
        if target == "-view":
            _print_tape(tape)
            print()
            return 0
        result = TapeSorter(tape, TMP_DIR, config).sort()
    result.close()
    shutil.move(str(result.path), target)
    return 0


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) not in (0, 2):
        print(USAGE)
        return 1
    try:
        return _self_test() if not args else _process_file(*args)
    except (TapeError, OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())