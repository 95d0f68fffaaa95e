import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from tot.clock import SYSTEM_CLOCK, Clock
from tot.constants import DEFAULT_EXTENSION
from tot.errors import SeriesAlreadyDefined, SeriesNotDefined
from tot.series import SeriesDefinition, storage_key

logger = logging.getLogger(__name__)


class DataAccessor(ABC):
    """
    Reads and writes series. Subclasses decide where lines are kept; this class makes
    sure whatever is written follows the series definition.

    A series exists if its storage key exists, and the first line stored under that
    key is its header. There's nowhere else definitions are kept.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock if clock is not None else SYSTEM_CLOCK

    # Storage primitives, implemented by each backend
    @abstractmethod
    def _exists(self, key: str) -> bool:
        ...

    @abstractmethod
    def _read_header(self, key: str) -> str:
        ...

    @abstractmethod
    def _write_new(self, key: str, header: str) -> None:
        ...

    @abstractmethod
    def _append_line(self, key: str, line: str) -> None:
        ...

    @abstractmethod
    def _keys(self) -> Iterable[str]:
        ...

    @abstractmethod
    def read_lines(self, name: str) -> Iterable[str]:
        """
        Return all stored lines of a series, header first. Raises SeriesNotDefined.
        """

    def get_series_definition(self, name: str) -> SeriesDefinition:
        key = storage_key(name)
        if not self._exists(key):
            raise SeriesNotDefined(name)
        return SeriesDefinition.from_header(name, self._read_header(key))

    def create_series(self, name: str, columns: Sequence[str] = ()) -> None:
        definition = SeriesDefinition.create(name, columns)
        if self._exists(definition.key):
            raise SeriesAlreadyDefined(name)

        logger.debug(f"Creating series {name} with columns {definition.columns}")
        self._write_new(definition.key, definition.format_header())

    def append_values(
        self,
        name: str,
        timestamp: Optional[datetime] = None,
        values: Sequence[str] = (),
    ) -> datetime:
        """
        Append a row to a series, returning the timestamp it was recorded with. If no
        timestamp is given, the clock's current time is used.
        """
        definition = self.get_series_definition(name)
        definition.validate_values(values)

        if timestamp is None:
            timestamp = self.clock.now()

        line = definition.format_row(timestamp, values)
        logger.debug(f"Appending to {definition.key}: {line}")
        self._append_line(definition.key, line)
        return timestamp

    def list_series(self) -> set[str]:
        # Only keys with the default extension are series names; any other file is
        # left out, the same for every backend
        return {
            Path(key).stem for key in self._keys() if key.endswith(DEFAULT_EXTENSION)
        }

    def read_csv(self, name: str) -> str:
        """
        The whole stored series as text, one line per record
        """
        return "".join(line + "\n" for line in self.read_lines(name))
