import decimal
import io
import logging

import numpy as np
import pytest

from ggformat import (
    ArgumentCountError,
    FormatBuffer,
    ParseError,
    format_to,
    ggformat,
    ggformat_impl,
    ggprint,
    sformat,
)


def test_scenarios():
    assert sformat("{-5}:", "world") == "world:"
    assert sformat("{-10}:", "hi") == "hi        :"
    assert sformat("{04x}", np.int32(123)) == "007b"
    assert sformat("{04x}", 123) == "007b"
    assert sformat("{4.2}", 1.23) == "1.23"
    assert sformat("{+}", 1) == "+1"
    assert sformat("{b}", np.uint8(123)) == "1111011"
    assert sformat("{08b}", np.uint8(123)) == "01111011"
    assert sformat("{{ }}") == "{ }"


def test_bit_pattern():
    for dtype in (
        np.int8,
        np.int16,
        np.int32,
        np.int64,
        np.uint8,
        np.uint16,
        np.uint32,
        np.uint64,
    ):
        info = np.iinfo(dtype)
        unsigned = np.dtype(f"u{np.dtype(dtype).itemsize}")

        for value in {int(info.min), int(info.max), 0, 1, 123, int(info.min) + 1}:
            x = dtype(value)
            pattern = int(np.array([x]).view(unsigned)[0])
            assert int(sformat("{x}", x), 16) == pattern
            assert int(sformat("{b}", x), 2) == pattern
            assert len(sformat("{b}", x)) <= info.bits


def test_width():
    for width in range(12):
        for value in (0, 7, 123, 99999):
            natural = str(value)
            right = sformat(f"{{0{width}}}", value)
            left = sformat(f"{{-{width}}}", value)
            assert len(right) == len(left) == max(width, len(natural))
            assert right == natural.rjust(width, "0")
            assert left == natural.ljust(width)


def test_truncation():
    buf = bytearray(6)
    assert ggformat(buf, "hello {}", "world") == 11
    assert bytes(buf) == b"hello\x00"

    buf = bytearray(12)
    assert ggformat(buf, "hello {}", "world") == 11
    assert bytes(buf) == b"hello world\x00"

    buf = bytearray(11)
    assert ggformat(buf, "hello {}", "world") == 11
    assert bytes(buf) == b"hello worl\x00"


def test_long_output():
    text = sformat("{}|{-5000}|", "a" * 5000, "b")
    assert len(text) == 10002
    assert text.startswith("a" * 5000 + "|b ")


def test_argument_count():
    with pytest.raises(ArgumentCountError) as e:
        sformat("{} {}", 1)

    assert e.value.placeholder == 1 and e.value.nargs == 1

    buf = bytearray(16)

    with pytest.raises(ArgumentCountError):
        ggformat(buf, "a{}b{}c", 1)

    assert buf.startswith(b"a1b\x00")
    assert sformat("{}", 1, 2, 3) == "1"


def test_parse_failure():
    buf = bytearray(16)

    with pytest.raises(ParseError):
        ggformat(buf, "ab{}cd{q}", 1)

    assert buf.startswith(b"ab1cd\x00")

    with pytest.raises(ParseError):
        sformat("{")

    with pytest.raises(TypeError):
        sformat("{}", object())


def test_recursion():
    cursors = []

    class Node:
        def __init__(self, label, *children):
            self.label = label
            self.children = children

        def _ggformat_(self, fb, opts):
            cursors.append(fb.cursor)
            ggformat_impl(fb, "{}(", self.label)

            for child in self.children:
                cursors.append(fb.cursor)
                format_to(fb, child, opts)
                cursors.append(fb.cursor)

            fb.write(")")
            cursors.append(fb.cursor)

    tree = Node("a", Node("b", Node("c")), Node("d"))
    assert sformat("{}", tree) == "a(b(c())d())"

    for capacity in (1, 5, 9, 64):
        cursors.clear()
        fb = FormatBuffer.fromcapacity(capacity)
        format_to(fb, tree)
        assert cursors == sorted(cursors)
        assert all(x <= capacity for x in cursors)
        assert fb.getvalue() == "a(b(c())d())"[: capacity - 1]
        assert fb.length == 12


def test_ggprint(capsys):
    assert ggprint("{} {}\n", "x", 1) == 4
    assert capsys.readouterr().out == "x 1\n"

    stream = io.StringIO()
    assert ggprint("{-3}|", "é", file=stream, flush=True) == 4
    assert stream.getvalue() == "é  |"


def test_large_numbers():
    assert sformat("{}", 10**5000) == "1" + "0" * 5000
    assert sformat("{+}", 10**5000 + 7).endswith("0" * 4999 + "7")
    assert sformat("{}", -(10**4400)) == "-1" + "0" * 4400
    assert sformat("{.0}", decimal.Decimal("1e5000")) == "1" + "0" * 5000
    assert sformat("{.1000}", 1.0) == "1." + "0" * 1000

    with pytest.raises(ParseError):
        sformat("{.5000}", 1.0)


def test_second_pass():
    calls = []

    class Counted:
        def _ggformat_(self, fb, opts):
            calls.append(fb.capacity)
            fb.write("z" * opts.width)

    assert sformat("{10}", Counted()) == "z" * 10
    assert calls == [4096]

    calls.clear()
    assert sformat("{5000}", Counted()) == "z" * 5000
    assert calls == [4096, 5000]


def test_nested_failure_logged_once(caplog):
    class Broken:
        def _ggformat_(self, fb, opts):
            ggformat_impl(fb, "{} {}", 1)

    caplog.set_level(logging.DEBUG, logger="ggformat.core")

    with pytest.raises(ArgumentCountError):
        sformat("[{}]", Broken())

    records = [x for x in caplog.records if x.name == "ggformat.core"]
    assert len(records) == 1
    assert "'[{}]'" in records[0].getMessage()

    caplog.clear()

    with pytest.raises(ParseError):
        sformat("{q}")

    assert len([x for x in caplog.records if x.name == "ggformat.core"]) == 1
