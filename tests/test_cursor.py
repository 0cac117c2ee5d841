import pytest

from gifframes import BufferCursor, FileCursor, TruncatedInputError

DATA = bytes(range(32))


@pytest.fixture(params=["buffer", "file"])
def cursor(request, tmp_path):
    if request.param == "buffer":
        yield BufferCursor(DATA)
    else:
        path = tmp_path / "data.bin"
        path.write_bytes(DATA)
        with FileCursor(str(path)) as file_cursor:
            yield file_cursor


def test_sequential_reads(cursor):
    assert cursor.size == len(DATA)
    assert cursor.read(3) == b"\x00\x01\x02"
    assert cursor.read_byte() == 3
    assert cursor.unpack("<H") == 0x0504
    assert cursor.unpack("2B") == (6, 7)
    assert cursor.position == 8


def test_seeking(cursor):
    cursor.seek_forward(10)
    assert cursor.read_byte() == 10
    cursor.seek_backward(5)
    assert cursor.position == 6
    assert cursor.read_byte() == 6


def test_slice_leaves_position_alone(cursor):
    cursor.seek_forward(4)
    assert cursor.slice(20, 3) == b"\x14\x15\x16"
    assert cursor.position == 4
    assert cursor.read_byte() == 4


def test_peek(cursor):
    cursor.seek_forward(30)
    assert cursor.peek(5) == b"\x1e\x1f"
    assert cursor.position == 30


def test_at_end(cursor):
    assert not cursor.at_end()
    cursor.seek_forward(len(DATA))
    assert cursor.at_end()
    assert cursor.peek(2) == b""


def test_reading_past_the_end(cursor):
    cursor.seek_forward(30)
    with pytest.raises(TruncatedInputError):
        cursor.read(3)
    #Failed reads do not move the cursor
    assert cursor.position == 30


def test_seeking_outside_the_input(cursor):
    with pytest.raises(TruncatedInputError):
        cursor.seek_forward(len(DATA) + 1)
    with pytest.raises(TruncatedInputError):
        cursor.seek_backward(1)
    with pytest.raises(TruncatedInputError):
        cursor.slice(30, 5)


def test_both_cursors_agree(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(DATA)
    memory = BufferCursor(bytearray(DATA))
    with FileCursor(str(path)) as disk:
        for amount in (1, 5, 0, 9, 2):
            assert memory.read(amount) == disk.read(amount)
        memory.seek_backward(4)
        disk.seek_backward(4)
        assert memory.unpack("<2H") == disk.unpack("<2H")
        assert memory.slice(0, 32) == disk.slice(0, 32)


def test_buffer_requires_bytes():
    with pytest.raises(TypeError):
        BufferCursor("GIF89a")
