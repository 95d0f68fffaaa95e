import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from tot.clock import Clock
from tot.constants import DEFAULT_EXTENSION
from tot.errors import StorageDirectoryMissing
from tot.storage.base import DataAccessor

logger = logging.getLogger(__name__)


class FileDataAccessor(DataAccessor):
    """
    Keeps each series in its own CSV file in a directory
    """

    def __init__(self, directory: Union[str, Path], clock: Optional[Clock] = None):
        super().__init__(clock)
        directory = Path(directory)
        if not directory.is_dir():
            raise StorageDirectoryMissing(directory)
        self.directory = directory

    def _path(self, key: str) -> Path:
        return Path(self.directory, key)

    def _exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def _read_header(self, key: str) -> str:
        with self._path(key).open() as f:
            return f.readline().rstrip("\r\n")

    def _write_new(self, key: str, header: str) -> None:
        # Fails if the file already exists
        with self._path(key).open("x") as f:
            f.write(header + "\n")

    def _append_line(self, key: str, line: str) -> None:
        with self._path(key).open("a") as f:
            f.write(line + "\n")

    def _keys(self) -> Iterable[str]:
        return (p.name for p in self.directory.glob(f"*{DEFAULT_EXTENSION}"))

    def read_lines(self, name: str) -> Iterator[str]:
        definition = self.get_series_definition(name)
        path = self._path(definition.key)
        logger.debug(f"Reading {path}")
        return self._iter_lines(path)

    @staticmethod
    def _iter_lines(path: Path) -> Iterator[str]:
        """
        Read a file a line at a time, skipping blank lines. The file is closed when
        the generator is exhausted or closed.
        """
        with path.open() as f:
            for line in f:
                line = line.rstrip("\r\n")
                if line:
                    yield line
