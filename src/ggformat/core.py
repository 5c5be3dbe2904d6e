import contextvars
import logging
import sys
from typing import TextIO

from ggformat.buffer import FormatBuffer
from ggformat.dispatch import format_to
from ggformat.errors import ArgumentCountError, FormatError
from ggformat.parser import LiteralRun, Placeholder, iterparse

logger = logging.getLogger(__name__)

_SCRATCH_SIZE = 4096

_depth: contextvars.ContextVar[int] = contextvars.ContextVar("depth", default=0)


def ggformat_impl(fb: FormatBuffer, template: str, *args: object) -> None:
    """Format `template` with `args` into `fb`.

    Literal runs are written verbatim and each placeholder consumes the next
    argument. Surplus arguments are ignored. On failure, whatever precedes the
    offending placeholder stays in `fb`. User conversions may call this function
    recursively on the same buffer; a failure is logged once, by the outermost call.

    Raises
    ------
    ParseError
        If `template` is malformed.
    ArgumentCountError
        If `template` has more placeholders than `args`.
    TypeError
        If an argument has no conversion.
    """
    depth = _depth.get()
    token = _depth.set(depth + 1)

    try:
        for part in iterparse(template):
            match part:
                case LiteralRun(text=text):
                    fb.write(text)

                case Placeholder(opts=opts, position=position):
                    if position >= len(args):
                        raise ArgumentCountError(position, len(args))

                    format_to(fb, args[position], opts)
    except FormatError as e:
        if depth == 0:
            logger.debug("failed to format %r: %s", template, e)

        raise
    finally:
        _depth.reset(token)


def ggformat(buf: bytearray | memoryview, template: str, *args: object) -> int:
    """Format `template` with `args` into the fixed-size buffer `buf`.

    The UTF-8 result is clipped to ``len(buf) - 1`` bytes and always followed by a
    NUL byte, also when an exception propagates.

    Returns
    -------
    int
        Length in bytes of the unclipped result, excluding the terminator. The result
        was truncated if this is not less than ``len(buf)``.

    Examples
    --------
    >>> buf = bytearray(8)
    >>> ggformat(buf, "hex: 0x{04x}", 123)
    11
    >>> bytes(buf)
    b'hex: 0x\\x00'
    """
    fb = FormatBuffer(buf)

    try:
        ggformat_impl(fb, template, *args)
    finally:
        fb.finish()

    return fb.length


def _render(template: str, args: tuple[object, ...]) -> FormatBuffer:
    fb = FormatBuffer.fromcapacity(_SCRATCH_SIZE, terminate=False)
    ggformat_impl(fb, template, *args)

    if fb.truncated:
        fb = FormatBuffer.fromcapacity(fb.length, terminate=False)
        ggformat_impl(fb, template, *args)

    return fb


def sformat(template: str, *args: object) -> str:
    """Format `template` with `args` and return the text.

    The text is rendered into a 4096-byte scratch buffer. If it does not fit, it is
    rendered a second time into a buffer of the exact length, so user conversions run
    twice for such output and must render the same text on both passes.

    Examples
    --------
    >>> sformat("{-10}:", "hi")
    'hi        :'
    """
    return _render(template, args).getvalue()


def ggprint(
    template: str, *args: object, file: TextIO | None = None, flush: bool = False
) -> int:
    """Format `template` with `args` and write the text to `file`.

    Rendering follows :func:`sformat`, including the second pass of user conversions
    for output longer than 4096 bytes.

    Parameters
    ----------
    template : str
    *args
    file : TextIO | None, optional
        Destination stream. Defaults to :data:`sys.stdout`.
    flush : bool, default=False

    Returns
    -------
    int
        Number of characters written.
    """
    if file is None:
        file = sys.stdout

    text = _render(template, args).getvalue()
    file.write(text)

    if flush:
        file.flush()

    return len(text)
