# tapesort

`tapesort` emulates a sequential storage tape that keeps only a small window
of its cells in memory, and sorts such tapes with an external merge sort:
the input is cut into runs no larger than the window, each run is sorted and
written to a temporary tape, and the runs are merged pairwise until one
sorted tape remains.

Tape operations can wait for configurable delays, so the cost of reads,
writes, moves and rewinds behaves as it would on slow sequential media.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Tape file format

A tape file is binary, made of little-endian 32-bit signed integers:

| Field         | Meaning                                                     |
|---------------|-------------------------------------------------------------|
| length        | number of cells on the tape (must be positive)              |
| visible bytes | size of the in-memory window in bytes (4 bytes per cell)    |
| cells...      | `length` integers                                           |

The window holds `visible bytes / 4` cells (truncated); it must be at least
one cell, and the file must contain at least that many cells. Otherwise
opening the tape raises `TapeError`.

## Delay configuration

`DelayConfig.from_file` reads three whitespace-separated integers, all in
milliseconds:

```
<read/write delay> <rewind delay> <move delay>
```

A configuration with no delays at all:

```
0 0 0
```

A `Tape` created without a configuration uses no delays.

## Command line

The `tapesort` command works in the current directory and reads its delays
from `config.ini` there. Temporary tapes are written to `tmp/`.

Sort a tape into a new file:

```
tapesort input.bin output.bin
```

Print the contents of a tape, one cell per line, followed by an empty line:

```
tapesort input.bin -view
```

Run without arguments to generate a random test tape. You are asked for the
number of cells and the window size in bytes; the tape is written to
`tapes/test.bin`, then printed, sorted, and the sorted result printed.
Afterwards every file in `tmp/` except `.gitkeep` is removed:

```
tapesort
```

Any other number of arguments prints a usage message and exits with status 1.
Errors with tape or configuration files, and invalid numbers typed in, are
reported on standard error with exit status 1.

## Library use

```python
from tapesort.tape import DelayConfig, Tape, write_tape
from tapesort.sorter import TapeSorter

config = DelayConfig(read_write=0, rewind=0, move=0)

# 6 cells, a window of 8 bytes (2 cells)
write_tape("input.bin", [5, 3, 9, 1, 7, 2], 8)

with Tape("input.bin", config) as tape:
    print(list(tape))              # [5, 3, 9, 1, 7, 2]
    with TapeSorter(tape, "tmp", config).sort() as result:
        print(list(result))        # [1, 2, 3, 5, 7, 9]
```

- `write_tape(path, values, visible_bytes)` writes a tape file and returns the
  number of cells; a value outside the 32-bit signed range raises
  `ValueError`.
- `Tape` offers cell-level access: `read`, `write`, `read_move` (returns
  `None` past the end), `move_forward` (does nothing on the last cell),
  `move_backward` (raises `ValueError` on the first cell), `rewind`,
  `is_begin` and `is_end`, plus the `length`, `max_elements`, `position` and
  `closed` properties. Iterating a tape rewinds it and yields every cell.
- `TapeSorter(tape, tmp_dir, config).sort()` rewinds the input, sorts it,
  removes its intermediate files and returns a `Tape` open on
  `<tmp_dir>/result.bin`. Without a `config`, the input tape's delays are used.
- `tapesort.cli.generate_tape(path, length, visible_bytes, rng)` writes a tape
  of random non-negative values, as the command does without arguments.

## Limitations

`Tape.write` changes only the cell held in memory; it is never stored in the
tape file, and the change is lost when that cell leaves the window or the
tape is rewound.