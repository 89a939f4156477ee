import pytest

from fifoirc.transport.framing import LineBuffer


def test_complete_lines():

    buffer = LineBuffer()

    lines = buffer.feed(b'one\ntwo\n')
    assert lines == [b'one\n', b'two\n']
    assert len(buffer) == 0


def test_partial_line_resumes():

    buffer = LineBuffer()

    assert buffer.feed(b'hel') == []
    assert len(buffer) == 3

    # The bytes belonging to the next line stay behind for the next call.

    assert buffer.feed(b'lo\nwor') == [b'hello\n']
    assert buffer.feed(b'ld\n') == [b'world\n']


def test_empty_lines():

    buffer = LineBuffer()
    assert buffer.feed(b'\n\n') == [b'\n', b'\n']


def test_truncation():

    buffer = LineBuffer(limit=4)

    lines = buffer.feed(b'abcdefgh\nxy\n')
    assert lines == [b'abcd\n', b'xy\n']

    # Once the buffer is full, bytes are discarded until a terminator
    # arrives, even when that takes several calls.

    assert buffer.feed(b'12345') == []
    assert buffer.feed(b'6789') == []
    assert buffer.feed(b'0\nok\n') == [b'1234\n', b'ok\n']


def test_exact_limit():

    buffer = LineBuffer(limit=3)
    assert buffer.feed(b'abc\n') == [b'abc\n']
    assert buffer.feed(b'abc') == []
    assert buffer.feed(b'd\n') == [b'abc\n']


def test_truncation_keeps_characters_whole():

    # Two-byte characters against an odd limit: the cut backs off to the
    # start of the character rather than splitting it.

    buffer = LineBuffer(limit=5)
    lines = buffer.feed('ééé\n'.encode('utf-8'))

    assert lines == ['éé\n'.encode('utf-8')]
    lines[0].decode('utf-8')

    # Same again when the character straddles two reads.

    buffer = LineBuffer(limit=4)
    data = 'aéé\n'.encode('utf-8')
    assert buffer.feed(data[:2]) == []
    assert buffer.feed(data[2:]) == ['aé\n'.encode('utf-8')]


def test_flush():

    buffer = LineBuffer()
    assert buffer.flush() is None

    buffer.feed(b'no terminator')
    assert buffer.flush() == b'no terminator'
    assert buffer.flush() is None
    assert len(buffer) == 0


def test_clear():

    buffer = LineBuffer(limit=2)
    buffer.feed(b'abc')
    buffer.clear()

    assert len(buffer) == 0
    assert buffer.feed(b'x\n') == [b'x\n']


def test_bad_limit():

    with pytest.raises(ValueError):
        LineBuffer(limit=0)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
