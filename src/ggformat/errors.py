"""
###############################
Errors (:mod:`ggformat.errors`)
###############################

.. currentmodule:: ggformat.errors

Exceptions raised while formatting. Truncation of the output is not an error and has
no exception of its own.

.. autosummary::
    :toctree: generated/

    FormatError
    ParseError
    ArgumentCountError

"""


class FormatError(ValueError):
    """Base class of all formatting failures.

    Parameters
    ----------
    message : str
    """

    message: str

    def __init__(self, message: str, *args):
        super().__init__(message, *args)
        self.message = message


class ParseError(FormatError):
    """Raised when a template contains an unmatched brace or a malformed placeholder.

    Parameters
    ----------
    message : str
    template : str | None, optional
        Template being parsed.
    index : int | None, optional
        Offset of the offending character in `template`.

    Attributes
    ----------
    message : str
    template : str | None
    index : int | None
    """

    template: str | None
    index: int | None

    def __init__(
        self, message: str, template: str | None = None, index: int | None = None
    ):
        super().__init__(message)
        self.template = template
        self.index = index

    def __str__(self) -> str:
        if self.template is None or self.index is None:
            return self.message

        return f"{self.message} at index {self.index} in {self.template!r}"


class ArgumentCountError(FormatError):
    """Raised when a template has more placeholders than supplied arguments.

    Parameters
    ----------
    placeholder : int
        Zero-based ordinal of the first placeholder left without an argument.
    nargs : int
        Number of supplied arguments.
    """

    placeholder: int
    nargs: int

    def __init__(self, placeholder: int, nargs: int):
        super().__init__(
            f"placeholder #{placeholder} has no argument ({nargs} supplied)"
        )
        self.placeholder = placeholder
        self.nargs = nargs
