import decimal
import fractions
import logging
import threading
from typing import Any, TypeVar

import mpmath
import numpy as np

from ggformat import converter as cv
from ggformat.buffer import FormatBuffer
from ggformat.context import getcontext
from ggformat.options import FormatOpts
from ggformat.typing import Converter

logger = logging.getLogger(__name__)

_registry: dict[type, Converter[Any]] = {}
_lock = threading.Lock()


T = TypeVar("T")


def register(cls: type[T], converter: Converter[T] | None = None) -> Any:
    """Register `converter` as the conversion of `cls` and its subclasses.

    If `converter` is omitted, return a decorator that registers the decorated
    function.

    Parameters
    ----------
    cls : type
    converter : Callable[[FormatBuffer, T, FormatOpts], None], optional
        Function writing the text of a value into the buffer. It may ignore the
        options and may call :func:`format_to` or :func:`~ggformat.ggformat_impl` on
        the same buffer.

    Examples
    --------
    >>> from ggformat import sformat
    >>> class Point:
    ...     def __init__(self, x, y):
    ...         self.x, self.y = x, y
    >>> @register(Point)
    ... def _(fb, value, opts):
    ...     fb.write("(")
    ...     format_to(fb, value.x, opts)
    ...     fb.write(", ")
    ...     format_to(fb, value.y, opts)
    ...     fb.write(")")
    >>> sformat("{.1}", Point(1.0, 2.5))
    '(1.0, 2.5)'
    """
    if converter is None:

        def decorator(fun: Converter[T]) -> Converter[T]:
            register(cls, fun)
            return fun

        return decorator

    if not isinstance(cls, type):
        raise TypeError(f"{cls!r} is not a type")

    if not callable(converter):
        raise TypeError(f"{converter!r} is not callable")

    global _registry

    with _lock:
        registry = dict(_registry)
        registry[cls] = converter
        _registry = registry

    logger.debug("registered converter %r for %s", converter, cls.__qualname__)
    return converter


def unregister(cls: type) -> None:
    """Remove the converter registered for `cls`.

    Raises
    ------
    KeyError
        If no converter is registered for `cls` itself.
    """
    global _registry

    with _lock:
        registry = dict(_registry)
        del registry[cls]
        _registry = registry


def converter_for(cls: type) -> Converter[Any] | None:
    """Return the converter registered for `cls` or its nearest base class."""
    registry = _registry

    for base in cls.__mro__:
        if (converter := registry.get(base)) is not None:
            return converter

    return None


def format_to(fb: FormatBuffer, value: object, opts: FormatOpts | None = None) -> None:
    """Write the text of `value` into `fb`.

    The conversion is resolved in the following order:

    1. ``_ggformat_`` of the type of `value` (see :class:`~ggformat.typing.Formattable`);
    2. a converter registered by :func:`register`;
    3. the built-in conversions of :class:`bool`, :class:`int`, numpy scalars, real
       numbers, :class:`str`, and bytes-like objects.

    User conversions receive a copy of `opts`.

    Raises
    ------
    TypeError
        If no conversion applies to `value`.
    """
    if opts is None:
        opts = FormatOpts()

    if fun := getattr(type(value), "_ggformat_", None):
        if fun(value, fb, opts.copy()) is not NotImplemented:
            return

    if (converter := converter_for(type(value))) is not None:
        converter(fb, value, opts.copy())
        return

    fb.write(_builtin(value, opts))


def _builtin(value: object, opts: FormatOpts) -> str:
    match value:
        case bool() | np.bool_():
            return cv.format_bool(bool(value), opts)

        case np.integer():
            info = np.iinfo(value.dtype)
            return cv.format_int(int(value), opts, bits=info.bits, signed=info.min < 0)

        case int():
            bits, signed = cv.int_width(value, getcontext().int_bits)
            return cv.format_int(value, opts, bits=bits, signed=signed)

        case (
            float()
            | np.floating()
            | fractions.Fraction()
            | decimal.Decimal()
            | mpmath.mpf()
        ):
            return cv.format_float(value, opts)

        case str():
            return cv.format_text(value, opts)

        case bytes() | bytearray() | memoryview():
            return cv.format_text(bytes(value).decode("utf-8", "replace"), opts)

        case _:
            raise TypeError(f"cannot format object of type '{type(value).__name__}'")
