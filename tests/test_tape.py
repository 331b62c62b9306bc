import struct

import pytest

from tapesort import tape as tape_module
from tapesort.tape import DelayConfig, Tape, TapeError, write_tape

VALUES = [5, -3, 17, 0, 42, 9, -8, 11, 2, 100]


@pytest.fixture
def make_tape(tmp_path):
    def _make(values, visible_bytes):
        path = tmp_path / "tape.bin"
        write_tape(path, values, visible_bytes)
        return path

    return _make


def test_write_tape_layout(tmp_path):
    path = tmp_path / "one.bin"
    assert write_tape(path, [1], 4) == 1
    assert path.read_bytes() == b"\x01\x00\x00\x00\x04\x00\x00\x00\x01\x00\x00\x00"


@pytest.mark.parametrize("visible", [4, 8, 20, 40])
def test_iteration_round_trip(make_tape, visible):
    with Tape(make_tape(VALUES, visible)) as tape:
        assert list(tape) == VALUES
        assert list(tape) == VALUES


def test_sizes(make_tape):
    with Tape(make_tape(VALUES, 9)) as tape:
        assert tape.length == len(VALUES)
        assert tape.max_elements == 2


def test_read_move_yields_all_then_none(make_tape):
    with Tape(make_tape(VALUES, 12)) as tape:
        seen = []
        while (value := tape.read_move()) is not None:
            seen.append(value)
        assert seen == VALUES
        assert tape.read_move() is None


def test_begin_and_end_flags(make_tape):
    with Tape(make_tape(VALUES, 8)) as tape:
        assert not tape.is_begin()
        assert not tape.is_end()
        tape.read()
        assert tape.is_begin()
        for _ in range(len(VALUES) - 1):
            tape.move_forward()
        assert not tape.is_end()
        assert tape.read() == VALUES[-1]
        assert tape.is_end()


def test_move_forward_stops_at_last_cell(make_tape):
    with Tape(make_tape(VALUES, 8)) as tape:
        for _ in range(len(VALUES) + 3):
            tape.move_forward()
        assert tape.position == len(VALUES) - 1
        assert tape.read() == VALUES[-1]


def test_move_backward_at_start_raises(make_tape):
    with Tape(make_tape(VALUES, 8)) as tape:
        with pytest.raises(ValueError):
            tape.move_backward()


def test_backward_paging(make_tape):
    with Tape(make_tape(VALUES, 8)) as tape:
        for _ in range(len(VALUES) - 1):
            tape.move_forward()
        seen = [tape.read()]
        for _ in range(len(VALUES) - 1):
            tape.move_backward()
            seen.append(tape.read())
        assert seen == VALUES[::-1]


def test_write_is_visible_until_rewind(make_tape):
    with Tape(make_tape(VALUES, 8)) as tape:
        tape.write(99)
        assert tape.read() == 99
        tape.rewind()
        assert tape.read() == VALUES[0]


def test_write_lost_after_paging_out(make_tape):
    with Tape(make_tape(VALUES, 4)) as tape:
        tape.write(99)
        tape.move_forward()
        tape.move_backward()
        assert tape.read() == VALUES[0]


@pytest.mark.parametrize("values, visible", [([], 4), ([1, 2], 3), ([1, 2], -8)])
def test_invalid_header(make_tape, values, visible):
    with pytest.raises(TapeError, match="invalid"):
        Tape(make_tape(values, visible))


def test_truncated_header(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"\x01\x00\x00")
    with pytest.raises(TapeError):
        Tape(path)


def test_window_larger_than_file(make_tape):
    with pytest.raises(TapeError, match="Unexpected end"):
        Tape(make_tape([1, 2], 40))


def test_truncated_body(tmp_path):
    path = tmp_path / "truncated.bin"
    path.write_bytes(struct.pack("<ii", 5, 4) + struct.pack("<ii", 1, 2))
    with Tape(path) as tape:
        assert tape.read() == 1
        tape.move_forward()
        assert tape.read() == 2
        with pytest.raises(TapeError, match="Error in tape file"):
            tape.move_forward()


def test_missing_file(tmp_path):
    with pytest.raises(TapeError, match="Can't open the file with the tape"):
        Tape(tmp_path / "absent.bin")


def test_close_via_context(make_tape):
    with Tape(make_tape(VALUES, 8)) as tape:
        assert tape.closed is False
    assert tape.closed is True


def test_config_from_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("10 20\n30\n")
    assert DelayConfig.from_file(path) == DelayConfig(10, 20, 30)


@pytest.mark.parametrize("text", ["1 2", "a b c", ""])
def test_config_invalid(tmp_path, text):
    path = tmp_path / "config.ini"
    path.write_text(text)
    with pytest.raises(TapeError, match="invalid"):
        DelayConfig.from_file(path)


def test_config_missing(tmp_path):
    with pytest.raises(TapeError, match="configuration"):
        DelayConfig.from_file(tmp_path / "absent.ini")


def test_delays_are_applied(make_tape, monkeypatch):
    calls = []
    monkeypatch.setattr(tape_module.time, "sleep", calls.append)
    with Tape(make_tape(VALUES, 8), DelayConfig(read_write=5, rewind=0, move=0)) as tape:
        first = tape.read()
        tape.move_forward()
        moved_to = tape.position
        tape.rewind()
        rewound_to = tape.position
    assert first == VALUES[0]
    assert moved_to == 1
    assert rewound_to == 0
    assert calls == [0.005]