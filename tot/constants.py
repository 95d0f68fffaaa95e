from pathlib import Path

# Appended to a series name to get its storage key, unless it has an extension
DEFAULT_EXTENSION = ".csv"

# Implicit first column of every series
TIME_COLUMN = "time"

# Second precision, local time, no offset. e.g. 2020-10-04T15:00:00
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

FIELD_DELIMITER = ","

DEFAULT_PATH = Path.cwd()
