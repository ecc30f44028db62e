import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from daylog.constants import CSV_FIELDS, DESCRIPTION_MAX_LENGTH
from daylog.errors import ValidationError
from daylog.events.util import format_date, parse_date

# Regex for parsing the str() of an Event back into its fields
EVENT_RE = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2}): "
    # Anything goes in the description, even newlines and parentheses
    r"(?P<description>.+) "
    # The category is whatever is inside the final pair of parentheses
    r"\((?P<category>[^()]*)\)",
    re.DOTALL,
)


def validate_description(description: Optional[str]) -> str:
    if description is None or description == "":
        raise ValidationError("Description is required")
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description is too long ({len(description)} characters, max "
            f"{DESCRIPTION_MAX_LENGTH})"
        )
    return description


@dataclass
class Event:
    date: date
    description: str
    category: str = ""

    def __setattr__(self, name: str, value: Any) -> None:
        # Validate on every assignment, not only in __init__
        if name == "description":
            value = validate_description(value)
        elif name == "category" and value is None:
            value = ""
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return f"{format_date(self.date)}: {self.description} ({self.category})"

    @classmethod
    def from_str(cls, line: str) -> "Event":
        """
        Parse from the output of str(), like "2024-01-31: Team sync (work)"
        """
        match = EVENT_RE.fullmatch(line)
        if not match:
            raise ValueError(f"Unable to parse event: {line}")

        return cls(
            date=parse_date(match.group("date")),
            description=match.group("description"),
            category=match.group("category"),
        )

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "Event":
        """
        Build from a CSV row keyed by field name. A missing category is fine, the
        other fields are required.
        """
        return cls(
            date=parse_date(row["date"]),
            description=row["description"],
            category=row.get("category", ""),
        )

    def to_row(self) -> dict[str, str]:
        row = {
            "date": format_date(self.date),
            "description": self.description,
            "category": self.category,
        }
        return {k: row[k] for k in CSV_FIELDS}
