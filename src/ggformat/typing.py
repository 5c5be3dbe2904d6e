"""
###############################
Typing (:mod:`ggformat.typing`)
###############################

This module provides type definitions commonly used between modules.

.. autoclass:: Formattable
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from collections.abc import Callable
from typing import Any, Protocol, TypeAlias, TypeVar

from ggformat.buffer import FormatBuffer
from ggformat.options import FormatOpts


class Formattable(Protocol):
    """Protocol for types that render themselves.

    :func:`~ggformat.format_to` calls ``_ggformat_(value, fb, opts)`` on the type of a
    value before consulting registered converters and built-in conversions. The method
    writes into `fb` and may return ``NotImplemented`` to decline, in which case the
    lookup continues.
    """

    __slots__ = ()

    @abstractmethod
    def _ggformat_(self, fb: FormatBuffer, opts: FormatOpts) -> Any: ...


T = TypeVar("T")

Converter: TypeAlias = Callable[[FormatBuffer, T, FormatOpts], None]
