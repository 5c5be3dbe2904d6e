from ggformat import FormatBuffer, FormatOpts, format_to, ggformat, sformat


class FixedStr:
    """String of at most ``capacity - 1`` bytes built with :func:`ggformat`."""

    def __init__(self, capacity, template=None, *args):
        self.buf = bytearray(capacity)
        self.length = 0

        if template is not None:
            self.sprintf(template, *args)

    def sprintf(self, template, *args):
        copied = ggformat(self.buf, template, *args)
        self.length = min(copied, len(self.buf) - 1)

    def appendf(self, template, *args):
        view = memoryview(self.buf)[self.length :]
        copied = ggformat(view, template, *args)
        self.length += min(copied, len(view) - 1)

    def __iadd__(self, value):
        self.appendf("{}", value)
        return self

    def __str__(self):
        return self.buf[: self.length].decode("utf-8")

    def _ggformat_(self, fb: FormatBuffer, opts: FormatOpts) -> None:
        format_to(fb, str(self), opts)


def test_append():
    a = FixedStr(256, "hello {-10}:", "world")
    a += " "
    a += 1
    a += " "
    a += 1.2345
    a += " "
    a += False
    a.appendf(". {} w{}rld", "goodbye", 0)
    assert str(a) == "hello world     : 1 1.234500 false. goodbye w0rld"
    assert sformat("{}", a) == str(a)
    assert sformat("[{-8.3}]", a) == "[hel     ]"


def test_overflow():
    a = FixedStr(8, "hello {}", "world")
    assert str(a) == "hello w"
    assert a.buf[7] == 0

    a += "!"
    assert str(a) == "hello w"

    b = FixedStr(8, "ab")
    b.appendf("{}", 12345678)
    assert str(b) == "ab12345"
