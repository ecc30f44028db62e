from pathlib import Path

# The original tool kept its log next to wherever it was run from
DEFAULT_EVENTS_FILE = Path("events.csv")

DESCRIPTION_MAX_LENGTH = 500
DATE_FORMAT = "%Y-%m-%d"

# Order that the Event fields will be written in each CSV row
CSV_FIELDS = (
    "date",
    "description",
    "category",
)

# Columns that must be present in the header of an events file
REQUIRED_FIELDS = ("date", "description")
