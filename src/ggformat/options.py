import enum
import re
from typing import Self, TypedDict, Unpack

from ggformat.errors import ParseError

_PATTERN = re.compile(
    r"(?P<align>-)?"
    r"(?P<zfill>0)?"
    r"(?P<width>[0-9]+)?"
    r"(?:\.(?P<prec>[0-9]+))?"
    r"(?P<base>[xb])?"
    r"(?P<sign>\+)?"
)


class Align(enum.Enum):
    """Field alignment.

    Attributes
    ----------
    LEFT
    RIGHT
    """

    LEFT = enum.auto()
    RIGHT = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


class Base(enum.Enum):
    """Numeric base of integer conversions.

    The value of each member is the radix.

    Attributes
    ----------
    DECIMAL
    HEX
    BINARY
    """

    DECIMAL = 10
    HEX = 16
    BINARY = 2

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


_BASE_MARKERS = {"x": Base.HEX, "b": Base.BINARY}

MAX_WIDTH = 65535
"""Largest field width a placeholder may request."""

MAX_PRECISION = 1000
"""Largest precision a placeholder may request."""


def _count(digits: str, limit: int, name: str) -> int:
    significant = digits.lstrip("0") or "0"

    if len(significant) > len(str(limit)) or int(significant) > limit:
        raise ParseError(f"{name} {significant} exceeds the maximum of {limit}")

    return int(significant)


class _FormatOptsDict(TypedDict, total=False):
    align: Align
    zero_fill: bool
    width: int | None
    precision: int | None
    base: Base
    force_sign: bool


class FormatOpts:
    """Formatting directives of one placeholder.

    Parameters
    ----------
    body : str, default=""
        Text between the braces of a placeholder, for example ``"04x"``.
    align : Align, default=Align.RIGHT
    zero_fill : bool, default=False
    width : int | None, default=None
    precision : int | None, default=None
    base : Base, default=Base.DECIMAL
    force_sign : bool, default=False

    Attributes
    ----------
    align : Align
    zero_fill : bool
    width : int | None
        Minimum field width. ``None`` means no padding.
    precision : int | None
        Digits after the decimal point for floating-point values, maximum number of
        characters for strings.
    base : Base
    force_sign : bool
        Whether a ``+`` is prepended to non-negative numbers.

    Raises
    ------
    ParseError
        If `body` does not follow the placeholder grammar or requests a width above
        :data:`MAX_WIDTH` or a precision above :data:`MAX_PRECISION`.
    TypeError
        If a keyword argument has the wrong type.
    ValueError
        If a keyword width or precision is negative or above its maximum.

    Notes
    -----
    The placeholder grammar is ``['-'] ['0'] [width] ['.' precision] ['x' | 'b']
    ['+']``; every element is optional and the order is fixed.

    Examples
    --------
    >>> x = FormatOpts("04x")
    >>> x
    FormatOpts('04x')
    >>> x.width, x.zero_fill, x.base
    (4, True, <Base.HEX>)
    >>> FormatOpts("-10", precision=2)
    FormatOpts('-10.2')
    """

    __slots__ = ("align", "zero_fill", "width", "precision", "base", "force_sign")

    align: Align
    zero_fill: bool
    width: int | None
    precision: int | None
    base: Base
    force_sign: bool

    def __init__(self, body: str = "", **kwargs: Unpack[_FormatOptsDict]):
        self.align = Align.RIGHT
        self.zero_fill = False
        self.width = None
        self.precision = None
        self.base = Base.DECIMAL
        self.force_sign = False

        if body:
            if (match := _PATTERN.fullmatch(body)) is None:
                raise ParseError(f"malformed placeholder '{{{body}}}'")

            if match.group("align") is not None:
                self.align = Align.LEFT

            self.zero_fill = match.group("zfill") is not None

            if (width := match.group("width")) is not None:
                self.width = _count(width, MAX_WIDTH, "width")

            if (prec := match.group("prec")) is not None:
                self.precision = _count(prec, MAX_PRECISION, "precision")

            if (base := match.group("base")) is not None:
                self.base = _BASE_MARKERS[base]

            self.force_sign = match.group("sign") is not None

        for key, value in kwargs.items():
            setattr(self, key, value)

        if kwargs:
            self._check()

    def _check(self) -> None:
        if not isinstance(self.align, Align):
            raise TypeError(f"align must be an Align, not {self.align!r}")

        if not isinstance(self.base, Base):
            raise TypeError(f"base must be a Base, not {self.base!r}")

        for name in ("zero_fill", "force_sign"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a bool")

        for name, limit in (("width", MAX_WIDTH), ("precision", MAX_PRECISION)):
            if (value := getattr(self, name)) is None:
                continue

            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int or None, not {value!r}")

            if not 0 <= value <= limit:
                raise ValueError(f"{name} must be between 0 and {limit}")

    @property
    def fill(self) -> str:
        """Padding character. Zero fill is ignored for left-aligned fields."""
        if self.zero_fill and self.align is Align.RIGHT:
            return "0"

        return " "

    def copy(self) -> Self:
        result = self.__class__()
        result.align = self.align
        result.zero_fill = self.zero_fill
        result.width = self.width
        result.precision = self.precision
        result.base = self.base
        result.force_sign = self.force_sign
        return result

    def replace(self, **changes: Unpack[_FormatOptsDict]) -> Self:
        """Create a new :class:`FormatOpts`, replacing fields with values from
        `changes`.

        Raises the same errors as the keyword arguments of :class:`FormatOpts`.
        """
        result = self.copy()

        for key, value in changes.items():
            setattr(result, key, value)

        result._check()
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__str__()!r})"

    def __str__(self) -> str:
        result = ""

        if self.align is Align.LEFT:
            result += "-"

        if self.zero_fill:
            result += "0"

        if self.width is not None:
            result += str(self.width)

        if self.precision is not None:
            result += f".{self.precision}"

        match self.base:
            case Base.HEX:
                result += "x"

            case Base.BINARY:
                result += "b"

        if self.force_sign:
            result += "+"

        return result

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return (
            other.align == self.align  # type: ignore
            and other.zero_fill == self.zero_fill  # type: ignore
            and other.width == self.width  # type: ignore
            and other.precision == self.precision  # type: ignore
            and other.base == self.base  # type: ignore
            and other.force_sign == self.force_sign  # type: ignore
        )

    def __bool__(self) -> bool:
        return (
            self.align is not Align.RIGHT
            or self.zero_fill
            or self.width is not None
            or self.precision is not None
            or self.base is not Base.DECIMAL
            or self.force_sign
        )

    def __copy__(self) -> Self:
        return self.copy()

    def __replace__(self, **changes: Unpack[_FormatOptsDict]) -> Self:
        return self.replace(**changes)
