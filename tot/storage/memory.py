from typing import Iterable, Optional

from tot.clock import Clock
from tot.storage.base import DataAccessor


class MemoryDataAccessor(DataAccessor):
    """
    Keeps series in a dict of storage key -> lines. Nothing is persisted; this is for
    tests and for trying things out.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        super().__init__(clock)
        self.files: dict[str, list[str]] = {}

    def _exists(self, key: str) -> bool:
        return key in self.files

    def _read_header(self, key: str) -> str:
        return self.files[key][0]

    def _write_new(self, key: str, header: str) -> None:
        self.files[key] = [header]

    def _append_line(self, key: str, line: str) -> None:
        self.files[key].append(line)

    def _keys(self) -> Iterable[str]:
        return self.files.keys()

    def read_lines(self, name: str) -> list[str]:
        return self.files[self.get_series_definition(name).key]
