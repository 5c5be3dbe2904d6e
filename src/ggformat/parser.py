import dataclasses
import re
from collections.abc import Iterator

from ggformat.errors import ParseError
from ggformat.options import FormatOpts

_BRACE = re.compile(r"[{}]")


@dataclasses.dataclass(frozen=True, slots=True)
class LiteralRun:
    """Template text copied verbatim, with escaped braces already collapsed.

    Attributes
    ----------
    text : str
    """

    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class Placeholder:
    """A ``{...}`` occurrence in a template.

    Attributes
    ----------
    opts : FormatOpts
    source : str
        Raw text of the placeholder, braces included.
    start : int
        Offset of the opening brace in the template.
    position : int
        Zero-based index of the argument the placeholder consumes.
    """

    opts: FormatOpts
    source: str
    start: int
    position: int


def parse_opts(body: str) -> FormatOpts:
    """Parse the text between the braces of a placeholder.

    Raises
    ------
    ParseError
        If `body` does not follow the placeholder grammar.
    """
    return FormatOpts(body)


def iterparse(template: str) -> Iterator[LiteralRun | Placeholder]:
    """Split `template` into literal runs and placeholders, lazily and in order.

    ``{{`` and ``}}`` stand for single braces. Everything preceding a malformed part
    is yielded before the error is raised.

    Raises
    ------
    ParseError
        If a brace is unmatched or a placeholder body is malformed.

    Examples
    --------
    >>> list(iterparse("x = {04x}{{"))  # doctest: +NORMALIZE_WHITESPACE
    [LiteralRun(text='x = '),
     Placeholder(opts=FormatOpts('04x'), source='{04x}', start=4, position=0),
     LiteralRun(text='{')]
    """
    chunks: list[str] = []
    position = 0
    i = 0

    while (match := _BRACE.search(template, i)) is not None:
        j = match.start()
        brace = match.group()
        chunks.append(template[i:j])

        if template.startswith(brace * 2, j):
            chunks.append(brace)
            i = j + 2
            continue

        if text := "".join(chunks):
            yield LiteralRun(text)

        chunks.clear()

        if brace == "}":
            raise ParseError("unmatched '}'", template, j)

        if (end := template.find("}", j + 1)) == -1:
            raise ParseError("unmatched '{'", template, j)

        try:
            opts = FormatOpts(template[j + 1 : end])
        except ParseError as e:
            raise ParseError(e.message, template, j) from None

        yield Placeholder(opts, template[j : end + 1], j, position)
        position += 1
        i = end + 1

    chunks.append(template[i:])

    if text := "".join(chunks):
        yield LiteralRun(text)


def parse(template: str) -> list[LiteralRun | Placeholder]:
    """Return the literal runs and placeholders of `template` as a list.

    Raises
    ------
    ParseError
        If a brace is unmatched or a placeholder body is malformed.
    """
    return list(iterparse(template))
