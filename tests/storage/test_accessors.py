from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, TextIO

import pytest

from tot.clock import SYSTEM_CLOCK, TestClock
from tot.errors import (
    InvalidValue,
    SeriesAlreadyDefined,
    SeriesNotDefined,
    StorageDirectoryMissing,
    TooFewValues,
    TooManyValues,
)
from tot.storage import DataAccessor, FileDataAccessor, MemoryDataAccessor


@pytest.fixture(params=["file", "memory"])
def accessor(
    request: pytest.FixtureRequest, tmp_path: Path, clock: TestClock
) -> DataAccessor:
    """
    Every test using this runs against both backends, which should behave the same
    """
    if request.param == "file":
        return FileDataAccessor(tmp_path, clock)
    return MemoryDataAccessor(clock)


class TestDataAccessor:
    def test_create_series(self, accessor: DataAccessor) -> None:
        accessor.create_series("somefile.csv", ["hello"])
        assert accessor.read_csv("somefile.csv") == "time,hello\n"
        assert list(accessor.read_lines("somefile")) == ["time,hello"]

    def test_create_series_twice(self, accessor: DataAccessor) -> None:
        accessor.create_series("ate", ["what"])
        with pytest.raises(SeriesAlreadyDefined) as e:
            accessor.create_series("ate", ["what", "howMany"])
        assert e.value.name == "ate"
        assert str(e.value) == 'Series "ate" has already been defined.'

        # Same storage key, different name
        with pytest.raises(SeriesAlreadyDefined):
            accessor.create_series("ate.csv")

        assert accessor.read_csv("ate") == "time,what\n"

    def test_create_series_bad_column(self, accessor: DataAccessor) -> None:
        with pytest.raises(InvalidValue):
            accessor.create_series("ate", ["what,howMany"])
        assert accessor.list_series() == set()

    def test_append_values(self, accessor: DataAccessor, clock: TestClock) -> None:
        accessor.create_series("series", ["one", "two", "three"])

        first = accessor.append_values("series", values=["1", "2", "3"])
        assert first == clock.now()
        clock.advance_by(timedelta(seconds=1))
        second = clock.now()
        accessor.append_values("series", None, ["11", "22", "33"])

        assert accessor.read_csv("series") == (
            "time,one,two,three\n"
            f"{first:%Y-%m-%dT%H:%M:%S},1,2,3\n"
            f"{second:%Y-%m-%dT%H:%M:%S},11,22,33\n"
        )

    def test_append_with_timestamp(self, accessor: DataAccessor) -> None:
        accessor.create_series("things")
        ts = datetime(2020, 10, 6, 8, 15, 30, 250_000)
        assert accessor.append_values("things", ts) == ts
        # Rows are kept in the order they're appended
        accessor.append_values("things", datetime(2020, 10, 4))

        assert list(accessor.read_lines("things")) == [
            "time",
            "2020-10-06T08:15:30",
            "2020-10-04T00:00:00",
        ]

    def test_no_columns(self, accessor: DataAccessor) -> None:
        accessor.create_series("things")
        assert accessor.read_csv("things") == "time\n"

        accessor.append_values("things")
        assert accessor.read_csv("things") == "time\n2020-09-01T00:00:00\n"

    def test_append_undefined(self, accessor: DataAccessor) -> None:
        with pytest.raises(SeriesNotDefined) as e:
            accessor.append_values("nope")
        assert e.value.name == "nope"
        assert str(e.value) == (
            'Series "nope" hasn\'t been defined. Use tot add to define it.'
        )

    def test_too_many_values(self, accessor: DataAccessor) -> None:
        accessor.create_series("series", ["one", "two"])
        with pytest.raises(TooManyValues) as e:
            accessor.append_values("series", values=["one", "two", "three"])
        assert str(e.value) == (
            'Too many values specified. Series "series" expects values for: one,two'
        )
        assert accessor.read_csv("series") == "time,one,two\n"

    def test_too_few_values(self, accessor: DataAccessor) -> None:
        accessor.create_series("series", ["one", "two"])
        with pytest.raises(TooFewValues) as e:
            accessor.append_values("series", values=["one"])
        assert str(e.value) == (
            'Too few values specified. Series "series" expects values for: one,two'
        )

    def test_invalid_values(self, accessor: DataAccessor) -> None:
        accessor.create_series("stuff", ["value"])
        with pytest.raises(InvalidValue) as e:
            accessor.append_values("stuff", values=["one,two"])
        assert str(e.value) == 'Values can\'t contain commas but this does: "one,two"'

        with pytest.raises(InvalidValue):
            accessor.append_values("stuff", values=["one\ntwo"])

        assert accessor.read_csv("stuff") == "time,value\n"

    def test_read_undefined(self, accessor: DataAccessor) -> None:
        # Raised straight away, not once the lines are iterated
        with pytest.raises(SeriesNotDefined) as e:
            accessor.read_lines("nonexistent.csv")
        assert str(e.value) == (
            'Series "nonexistent.csv" hasn\'t been defined. Use tot add to define it.'
        )

    def test_list_series(self, accessor: DataAccessor) -> None:
        assert accessor.list_series() == set()

        accessor.create_series("series1", ["one"])
        accessor.create_series("series2", ["one", "two"])
        accessor.create_series("series3.csv", ["one", "two", "three"])
        assert accessor.list_series() == {"series1", "series2", "series3"}

    def test_series_definition(self, accessor: DataAccessor) -> None:
        accessor.create_series("ate", ["what", "howMany"])
        definition = accessor.get_series_definition("ate")
        assert definition.name == "ate"
        assert definition.columns == ["time", "what", "howMany"]

        with pytest.raises(SeriesNotDefined):
            accessor.get_series_definition("drank")

    def test_clock(self, accessor: DataAccessor, clock: TestClock) -> None:
        assert accessor.clock is clock


def test_default_clock(tmp_path: Path) -> None:
    assert MemoryDataAccessor().clock is SYSTEM_CLOCK
    assert FileDataAccessor(tmp_path).clock is SYSTEM_CLOCK


class TestFileDataAccessor:
    @pytest.fixture
    def accessor(self, tmp_path: Path, clock: TestClock) -> FileDataAccessor:
        return FileDataAccessor(tmp_path, clock)

    def test_missing_directory(self, tmp_path: Path) -> None:
        path = Path(tmp_path, "nope")
        with pytest.raises(StorageDirectoryMissing) as e:
            FileDataAccessor(path)
        assert e.value.path == path
        assert str(e.value) == f"Directory does not exist: {path}"

    def test_files_on_disk(self, accessor: FileDataAccessor, tmp_path: Path) -> None:
        accessor.create_series("ate", ["what", "howMany"])
        accessor.append_values("ate", values=["bananas", "3"])

        path = Path(tmp_path, "ate.csv")
        assert path.read_text() == "time,what,howMany\n2020-09-01T00:00:00,bananas,3\n"

    def test_existing_files(self, tmp_path: Path, clock: TestClock) -> None:
        """
        Series written elsewhere are picked up from their header line
        """
        Path(tmp_path, "weight.csv").write_text(
            "time,kg\n2020-09-01T07:00:00,80\n\n\n"
        )
        Path(tmp_path, "notes.txt").write_text("not a series\n")

        accessor = FileDataAccessor(tmp_path, clock)
        assert accessor.list_series() == {"weight"}
        assert accessor.get_series_definition("weight").value_columns == ["kg"]

        # Blank lines are skipped
        assert list(accessor.read_lines("weight")) == [
            "time,kg",
            "2020-09-01T07:00:00,80",
        ]

        # Names with an extension are used as-is
        assert list(accessor.read_lines("notes.txt")) == ["not a series"]

    def test_read_lines_is_lazy(
        self, accessor: FileDataAccessor, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        accessor.create_series("things")
        for _ in range(3):
            accessor.append_values("things")

        # Keep hold of every file read_lines opens
        opened: list[TextIO] = []
        real_open = Path.open

        def tracking_open(path: Path, *args: Any, **kwargs: Any) -> TextIO:
            f = real_open(path, *args, **kwargs)
            opened.append(f)
            return f

        monkeypatch.setattr(Path, "open", tracking_open)

        lines = accessor.read_lines("things")
        assert next(lines) == "time"
        assert next(lines) == "2020-09-01T00:00:00"
        reader = opened[-1]
        assert not reader.closed

        # Stopping early closes the file
        lines.close()
        assert reader.closed

        # So does reading to the end
        assert len(list(accessor.read_lines("things"))) == 4
        assert all(f.closed for f in opened)


def test_memory_read_lines(clock: TestClock) -> None:
    accessor = MemoryDataAccessor(clock)
    accessor.create_series("things")
    accessor.append_values("things")
    assert accessor.read_lines("things") == ["time", "2020-09-01T00:00:00"]
    assert accessor.files == {"things.csv": ["time", "2020-09-01T00:00:00"]}
