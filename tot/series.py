from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Sequence

from tot.constants import DEFAULT_EXTENSION, FIELD_DELIMITER, TIME_COLUMN
from tot.errors import TooFewValues, TooManyValues
from tot.util import check_fields, format_timestamp


def storage_key(name: str) -> str:
    """
    The file name (or map key) a series is stored under. Names without an extension
    get the default one.
    """
    if Path(name).suffix.strip() == "":
        return name + DEFAULT_EXTENSION
    return name


@dataclass
class SeriesDefinition:
    name: str

    # All columns, including the leading time column
    columns: list[str] = field(default_factory=lambda: [TIME_COLUMN])

    @classmethod
    def create(cls, name: str, columns: Sequence[str] = ()) -> "SeriesDefinition":
        """
        Build a new definition from user-supplied column names. The time column is
        added here and must not be supplied.
        """
        check_fields(columns, kind="Column names")
        return cls(name, [TIME_COLUMN, *columns])

    @classmethod
    def from_header(cls, name: str, header: str) -> "SeriesDefinition":
        """
        Build a definition from the header line of a stored series
        """
        return cls(name, header.rstrip("\r\n").split(FIELD_DELIMITER))

    @property
    def key(self) -> str:
        return storage_key(self.name)

    @property
    def value_columns(self) -> list[str]:
        return self.columns[1:]

    @property
    def arity(self) -> int:
        return len(self.columns) - 1

    def validate_values(self, values: Sequence[str]) -> None:
        if len(values) > self.arity:
            raise TooManyValues(self.name, self.value_columns)
        if len(values) < self.arity:
            raise TooFewValues(self.name, self.value_columns)
        check_fields(values)

    def format_header(self) -> str:
        return FIELD_DELIMITER.join(self.columns)

    def format_row(self, timestamp: datetime, values: Sequence[str]) -> str:
        return FIELD_DELIMITER.join([format_timestamp(timestamp), *values])
