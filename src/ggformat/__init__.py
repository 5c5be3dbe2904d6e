"""
##################
ggformat reference
##################

.. currentmodule:: ggformat

Type-safe, printf-style formatting into bounded buffers.

A template holds ``{...}`` placeholders, each of which consumes the next argument::

    >>> from ggformat import sformat
    >>> sformat("ints: {-5}|{04}|{+}|{}", 1, 1, 1, 1)
    'ints: 1    |0001|+1|1'

Entry points
============

.. autosummary::
    :toctree: generated/

    ggformat
    ggformat_impl
    ggprint
    sformat

Options and parsing
===================

.. autosummary::
    :toctree: generated/

    Align
    Base
    FormatOpts
    LiteralRun
    Placeholder
    iterparse
    parse
    parse_opts

Output and conversion
=====================

.. autosummary::
    :toctree: generated/

    FormatBuffer
    converter_for
    format_to
    register
    unregister

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    ArgumentCountError
    FormatError
    ParseError
    MAX_PRECISION
    MAX_WIDTH

"""

from .buffer import FormatBuffer
from .core import ggformat, ggformat_impl, ggprint, sformat
from .dispatch import converter_for, format_to, register, unregister
from .errors import ArgumentCountError, FormatError, ParseError
from .options import MAX_PRECISION, MAX_WIDTH, Align, Base, FormatOpts
from .parser import LiteralRun, Placeholder, iterparse, parse, parse_opts

__all__ = [
    "FormatBuffer",
    "ggformat",
    "ggformat_impl",
    "ggprint",
    "sformat",
    "converter_for",
    "format_to",
    "register",
    "unregister",
    "ArgumentCountError",
    "FormatError",
    "ParseError",
    "MAX_PRECISION",
    "MAX_WIDTH",
    "Align",
    "Base",
    "FormatOpts",
    "LiteralRun",
    "Placeholder",
    "iterparse",
    "parse",
    "parse_opts",
]
