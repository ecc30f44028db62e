"""
Event utility functions
"""

from datetime import date, datetime

from daylog.constants import DATE_FORMAT


def parse_date(date_str: str) -> date:
    """
    Parse a calendar date - YYYY-MM-DD
    """
    return datetime.strptime(date_str.strip(), DATE_FORMAT).date()


def format_date(d: date) -> str:
    """
    Format a date the same way it is parsed, e.g. 2024-01-31
    """
    return d.isoformat()


def split_categories(categories: str) -> set[str]:
    """
    Split a comma separated list of categories, like "work,home"
    """
    return set(categories.split(","))
