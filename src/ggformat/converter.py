"""
######################################
Converters (:mod:`ggformat.converter`)
######################################

.. currentmodule:: ggformat.converter

This module renders built-in values to text under a :class:`~ggformat.FormatOpts`.
Every function returns the complete field; clipping is left to the sink.

.. autosummary::
    :toctree: generated/

    format_bool
    format_float
    format_int
    format_text
    int_width
    pad

"""

import decimal
import fractions
import math

import mpmath

from ggformat.context import getcontext
from ggformat.options import Align, Base, FormatOpts

_SIGNS = ("-", "+")

_CHUNK_DIGITS = 1000
_CHUNK = 10**_CHUNK_DIGITS


def pad(text: str, opts: FormatOpts, *, numeric: bool = False) -> str:
    """Pad `text` to the width of `opts`.

    Right-aligned fields are padded on the left with :attr:`FormatOpts.fill`;
    left-aligned fields are padded on the right with spaces. If `numeric` is ``True``,
    zeros are inserted after a leading sign.

    Examples
    --------
    >>> pad("-12", FormatOpts("05"), numeric=True)
    '-0012'
    >>> pad("hi", FormatOpts("-5")) + "|"
    'hi   |'
    """
    if opts.width is None or len(text) >= opts.width:
        return text

    count = opts.width - len(text)

    if opts.align is Align.LEFT:
        return text + " " * count

    fill = opts.fill

    if numeric and fill == "0" and text.startswith(_SIGNS):
        return text[0] + fill * count + text[1:]

    return fill * count + text


def _digits(value: int) -> str:
    # str() refuses integers above sys.get_int_max_str_digits()
    if value < _CHUNK:
        return str(value)

    chunks: list[str] = []

    while value >= _CHUNK:
        value, rem = divmod(value, _CHUNK)
        chunks.append(str(rem).rjust(_CHUNK_DIGITS, "0"))

    chunks.append(str(value))
    return "".join(reversed(chunks))


def int_width(value: int, bits: int) -> tuple[int | None, bool]:
    """Return the declared width and signedness of a plain integer.

    The width is `bits` if `value` fits a signed integer of that width, 64 bits
    otherwise, and ``None`` if even 64 bits cannot hold it. Values only representable
    as unsigned 64-bit integers are reported as unsigned.
    """
    for width in (bits, 64):
        if -(1 << (width - 1)) <= value < 1 << (width - 1):
            return width, True

    if 0 <= value < 1 << 64:
        return 64, False

    return None, value >= 0


def format_int(
    value: int, opts: FormatOpts, *, bits: int | None = None, signed: bool = True
) -> str:
    """Render an integer.

    Decimal output is a sign followed by the magnitude. Hexadecimal (lowercase) and
    binary output carry no prefix, and negative values are rendered as the
    two's-complement bit pattern of a `bits`-wide integer.

    Parameters
    ----------
    value : int
    opts : FormatOpts
    bits : int | None, optional
        Declared width of `value`. Required to render negative values in hexadecimal
        or binary.
    signed : bool, default=True
        Declared signedness of `value`.

    Raises
    ------
    OverflowError
        If `value` does not fit the declared type, or if a negative value is
        rendered in hexadecimal or binary without a declared width.

    Examples
    --------
    >>> format_int(123, FormatOpts("04x"))
    '007b'
    >>> format_int(-123, FormatOpts("x"), bits=8)
    '85'
    """
    if bits is not None:
        lo, hi = (-(1 << (bits - 1)), 1 << (bits - 1)) if signed else (0, 1 << bits)

        if not lo <= value < hi:
            raise OverflowError(f"value does not fit a {bits}-bit integer")
    elif not signed and value < 0:
        raise OverflowError("negative value declared unsigned")

    sign = "+" if opts.force_sign and value >= 0 else ""

    match opts.base:
        case Base.DECIMAL:
            if value < 0:
                sign = "-"

            digits = _digits(abs(value))

        case Base.HEX | Base.BINARY:
            if value < 0:
                if bits is None:
                    raise OverflowError(
                        "cannot render the bit pattern of a negative integer "
                        "without a declared width"
                    )

                value += 1 << bits

            digits = format(value, "x" if opts.base is Base.HEX else "b")

    return pad(sign + digits, opts, numeric=True)


def _tofraction(value) -> fractions.Fraction | None:
    match value:
        case mpmath.mpf():
            if not mpmath.isfinite(value):
                return None

            man, exp = value.man_exp
            return fractions.Fraction(man) * fractions.Fraction(2) ** exp

        case decimal.Decimal():
            return fractions.Fraction(value) if value.is_finite() else None

        case fractions.Fraction():
            return value

        case _:
            value = float(value)
            return fractions.Fraction(value) if math.isfinite(value) else None


def _isnan(value) -> bool:
    match value:
        case mpmath.mpf():
            return mpmath.isnan(value)

        case decimal.Decimal():
            return value.is_nan()

        case fractions.Fraction():
            return False

        case _:
            return math.isnan(float(value))


def _isnegative(value) -> bool:
    match value:
        case mpmath.mpf():
            return value < 0

        case decimal.Decimal():
            return value.is_signed()

        case fractions.Fraction():
            return value < 0

        case _:
            return math.copysign(1.0, float(value)) < 0.0


def format_float(value, opts: FormatOpts) -> str:
    """Render a real number in fixed-point notation.

    The exact value is rounded half to even at ``opts.precision`` digits after the
    decimal point, or at :attr:`Context.precision` digits if the placeholder has no
    precision. The decimal point is omitted when the precision is zero. Infinities and
    NaN are rendered as ``inf`` and ``nan`` and never zero-filled.

    Parameters
    ----------
    value : float | numpy.floating | fractions.Fraction | decimal.Decimal | mpmath.mpf
    opts : FormatOpts

    Examples
    --------
    >>> format_float(1.23, FormatOpts("4.2"))
    '1.23'
    >>> format_float(1.23, FormatOpts("-10")) + "|"
    '1.230000  |'
    """
    prec = opts.precision

    if prec is None:
        prec = getcontext().precision

    negative = _isnegative(value)

    if negative:
        sign = "-"
    else:
        sign = "+" if opts.force_sign else ""

    if (frac := _tofraction(value)) is None:
        if _isnan(value):
            return pad("nan", opts.replace(zero_fill=False))

        return pad(sign + "inf", opts.replace(zero_fill=False))

    scaled = round(abs(frac) * 10**prec)
    digits = _digits(scaled)

    if prec > 0:
        digits = digits.rjust(prec + 1, "0")
        digits = f"{digits[:-prec]}.{digits[-prec:]}"

    return pad(sign + digits, opts, numeric=True)


def format_bool(value: bool, opts: FormatOpts) -> str:
    """Render ``true`` or ``false``. Only the width and alignment are honored."""
    return pad("true" if value else "false", opts.replace(zero_fill=False))


def format_text(value: str, opts: FormatOpts) -> str:
    """Render a string, taking at most ``opts.precision`` characters.

    Numeric directives are ignored.
    """
    if opts.precision is not None:
        value = value[: opts.precision]

    return pad(value, opts)
