"""
Errors raised by tot. Every one of these is caused by user input, and the message is
meant to be shown to the user as-is.
"""

from pathlib import Path
from typing import Sequence, Union


class TotError(Exception):
    """Base class for tot errors"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SeriesNotDefined(TotError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Series "{name}" hasn\'t been defined. Use tot add to define it.'
        )


class SeriesAlreadyDefined(TotError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Series "{name}" has already been defined.')


def _expects(name: str, expected: Sequence[str]) -> str:
    if not expected:
        return f'Series "{name}" expects none.'
    return f'Series "{name}" expects values for: {",".join(expected)}'


class TooManyValues(TotError):
    def __init__(self, name: str, expected: Sequence[str]) -> None:
        self.name = name
        self.expected = list(expected)
        super().__init__(f"Too many values specified. {_expects(name, expected)}")


class TooFewValues(TotError):
    def __init__(self, name: str, expected: Sequence[str]) -> None:
        self.name = name
        self.expected = list(expected)
        super().__init__(f"Too few values specified. {_expects(name, expected)}")


class InvalidValue(TotError):
    """
    A value (or column name) contains a character that would break the storage format
    """

    def __init__(
        self, value: str, reason: str = "commas", kind: str = "Values"
    ) -> None:
        self.value = value
        super().__init__(f'{kind} can\'t contain {reason} but this does: "{value}"')


class UnrecognizedTime(TotError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f'Couldn\'t figure out what time "{token}" refers to.')


class StorageDirectoryMissing(TotError):
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"Directory does not exist: {path}")
