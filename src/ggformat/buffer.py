from typing import Self


class FormatBuffer:
    """Bounded, append-only UTF-8 sink.

    The sink writes into a caller-owned writable buffer and never grows it. Text
    that does not fit is dropped silently, while :attr:`length` keeps counting so
    that callers can detect truncation afterwards.

    Parameters
    ----------
    buf : bytearray | memoryview | None, optional
        Writable destination. If omitted, a zeroed :class:`bytearray` of `capacity`
        bytes is allocated once.
    capacity : int | None, optional
        Number of usable bytes in `buf`. Defaults to the size of `buf`.
    terminate : bool, default=True
        Whether the last byte is reserved for a NUL terminator written by
        :meth:`finish`.

    Attributes
    ----------
    capacity : int
    cursor : int
        Number of bytes stored so far. It never decreases and never exceeds
        `capacity`.
    length : int
        Number of bytes that would have been stored given unlimited capacity.
    truncated : bool

    Warnings
    --------
    Instances are not internally synchronized.

    Examples
    --------
    >>> fb = FormatBuffer(capacity=6)
    >>> fb.write("hello world")
    >>> fb.finish()
    5
    >>> fb.getvalue(), fb.length
    ('hello', 11)
    """

    __slots__ = ("_buf", "_capacity", "_limit", "_cursor", "_length", "_full")
    _buf: memoryview
    _capacity: int
    _limit: int
    _cursor: int
    _length: int
    _full: bool

    def __init__(
        self,
        buf: bytearray | memoryview | None = None,
        capacity: int | None = None,
        *,
        terminate: bool = True,
    ):
        if buf is None:
            if capacity is None:
                raise TypeError("either buf or capacity must be given")

            if capacity < 0:
                raise ValueError("capacity must be non-negative")

            buf = bytearray(capacity)

        view = memoryview(buf).cast("B")

        if view.readonly:
            raise TypeError("buffer must be writable")

        if capacity is None:
            capacity = view.nbytes
        elif not 0 <= capacity <= view.nbytes:
            raise ValueError("capacity exceeds the size of the buffer")

        self._buf = view
        self._capacity = capacity
        self._limit = capacity - 1 if terminate and capacity > 0 else capacity
        self._cursor = 0
        self._length = 0
        self._full = False

    @classmethod
    def fromcapacity(cls, capacity: int, *, terminate: bool = True) -> Self:
        return cls(None, capacity, terminate=terminate)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        return self._length

    @property
    def truncated(self) -> bool:
        return self._length > self._cursor

    def remaining(self) -> int:
        """Return the number of bytes that can still be stored."""
        if self._full:
            return 0

        return self._limit - self._cursor

    def write(self, text: str) -> None:
        """Append `text`, dropping whatever does not fit.

        A multi-byte character is never split. Once anything has been dropped, later
        writes are only counted, so the stored bytes are always a prefix of the
        requested output.
        """
        data = text.encode("utf-8")
        self._length += len(data)

        if self._full:
            return

        end = len(data)
        room = self._limit - self._cursor

        if end > room:
            self._full = True
            end = room

            while end > 0 and data[end] & 0xC0 == 0x80:
                end -= 1

        self._buf[self._cursor : self._cursor + end] = data[:end]
        self._cursor += end

    def finish(self) -> int:
        """Write the terminator, if reserved, and return the number of bytes
        stored."""
        if self._limit < self._capacity:
            self._buf[self._cursor] = 0

        return self._cursor

    def getvalue(self) -> str:
        return self.tobytes().decode("utf-8")

    def tobytes(self) -> bytes:
        return self._buf[: self._cursor].tobytes()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}"
            f"(capacity={self._capacity}, cursor={self._cursor}, length={self._length})"
        )
