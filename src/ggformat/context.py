"""
#################################
Context (:mod:`ggformat.context`)
#################################

.. currentmodule:: ggformat.context

This module holds the defaults the engine falls back to when a placeholder leaves a
directive unspecified.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Literal, Self, TypeAlias

from ggformat.options import MAX_PRECISION

IntBits: TypeAlias = Literal[8, 16, 32, 64]

_INT_BITS = (8, 16, 32, 64)


class Context:
    """Create a new context.

    Parameters
    ----------
    precision : int, default=6
        Digits after the decimal point used for floating-point values whose
        placeholder has no precision. At most :data:`~ggformat.options.MAX_PRECISION`.
    int_bits : Literal[8, 16, 32, 64], default=32
        Declared width of plain :class:`int` arguments. It determines the
        two's-complement pattern of negative values in hexadecimal and binary. Values
        that do not fit are widened to 64 bits.
    """

    __slots__ = ("_precision", "_int_bits")
    _precision: int
    _int_bits: IntBits

    def __init__(self, precision: int = 6, int_bits: IntBits = 32):
        if not 0 <= precision <= MAX_PRECISION:
            raise ValueError(f"precision must be between 0 and {MAX_PRECISION}")

        if int_bits not in _INT_BITS:
            raise ValueError(f"int_bits must be one of {_INT_BITS}")

        self._precision = precision
        self._int_bits = int_bits

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def int_bits(self) -> IntBits:
        return self._int_bits

    def copy(self) -> Self:
        return self.__class__(self._precision, self._int_bits)

    def __repr__(self):
        return (
            f"{type(self).__name__}"
            f"(precision={self._precision}, int_bits={self._int_bits})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("ggformat")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    precision: int | None = None,
    int_bits: IntBits | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> from ggformat import sformat
    >>> with localcontext(precision=2):
    ...     sformat("{}", 3.14159)
    '3.14'
    >>> sformat("{}", 3.14159)
    '3.141590'
    """
    if ctx is None:
        ctx = getcontext()

    if precision is None:
        precision = ctx._precision

    if int_bits is None:
        int_bits = ctx._int_bits

    ctx = Context(precision, int_bits)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
