import csv
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, TextIO

from daylog.constants import CSV_FIELDS, REQUIRED_FIELDS
from daylog.errors import DaylogError, FormatError, StorageError
from daylog.events.event import Event

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

# What csv.writer ends each row with
LINE_TERMINATOR = "\r\n"


@dataclass
class EventStore:
    """
    A CSV file holding every Event in the log, one per row after a header row.
    """

    path: Path

    def load(self) -> list[Event]:
        """
        Read every Event from the file, in file order. A file that doesn't exist yet
        is an empty log, not an error.
        """
        try:
            with self.path.open(newline="", encoding=ENCODING) as f:
                events = self._read_events(f)
        except FileNotFoundError:
            logger.debug(f"{self.path} does not exist, starting with an empty log")
            return []
        except UnicodeDecodeError as e:
            raise FormatError(self.path, self._undecodable_line(), str(e)) from e
        except OSError as e:
            raise StorageError(self.path, e) from e

        logger.debug(f"Loaded {len(events)} events from {self.path}")
        return events

    def _read_events(self, f: TextIO) -> list[Event]:
        reader = csv.reader(f)
        events = []
        try:
            header = next(reader, None)
            if header is None:
                return []
            columns = self._columns(header)

            for row in reader:
                if not row:
                    continue

                if len(row) != len(header):
                    raise FormatError(
                        self.path,
                        reader.line_num,
                        f"expected {len(header)} fields, got {len(row)}",
                    )

                fields = {name: row[i] for name, i in columns.items()}
                try:
                    events.append(Event.from_row(fields))
                except (ValueError, DaylogError) as e:
                    raise FormatError(self.path, reader.line_num, str(e)) from e
        except csv.Error as e:
            raise FormatError(self.path, reader.line_num, str(e)) from e

        return events

    def _columns(self, header: list[str]) -> dict[str, int]:
        """
        Map each known field to its column in the header. Names are matched case
        insensitively, and the header must have all of REQUIRED_FIELDS.
        """
        positions = {name.strip().lower(): i for i, name in enumerate(header)}
        for name in REQUIRED_FIELDS:
            if name not in positions:
                raise FormatError(self.path, 1, f"header is missing '{name}'")
        return {name: positions[name] for name in CSV_FIELDS if name in positions}

    def _undecodable_line(self) -> int:
        """
        Find the line holding the first byte which isn't valid UTF-8
        """
        data = self.path.read_bytes()
        try:
            data.decode(ENCODING)
        except UnicodeDecodeError as e:
            return data.count(b"\n", 0, e.start) + 1
        return 1

    def _existing_header(self) -> Optional[list[str]]:
        """
        Read just the header row of the file. Returns None if the file doesn't
        exist or is empty.
        """
        try:
            with self.path.open(newline="", encoding=ENCODING) as f:
                header = next(csv.reader(f), None)
        except FileNotFoundError:
            return None
        except (csv.Error, UnicodeDecodeError) as e:
            raise FormatError(self.path, 1, str(e)) from e
        return header

    def _ends_with_newline(self) -> bool:
        with self.path.open("rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) in (b"\n", b"\r")

    def append_one(self, event: Event) -> None:
        """
        Write a single Event after the existing ones, in the column order of the
        file's header. Creates the file, with a header, if it doesn't exist yet.
        """
        row = event.to_row()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            header = self._existing_header()
            new_file = header is None
            if header is None:
                header = list(CSV_FIELDS)
            columns = self._columns(header)
            needs_newline = not new_file and not self._ends_with_newline()

            for name in CSV_FIELDS:
                if name not in columns and row[name]:
                    logger.warning(f"{self.path} has no '{name}' column, dropping it")

            values = [""] * len(header)
            for name, i in columns.items():
                values[i] = row[name]

            with self.path.open("a", newline="", encoding=ENCODING) as f:
                writer = csv.writer(f, lineterminator=LINE_TERMINATOR)
                if new_file:
                    writer.writerow(header)
                elif needs_newline:
                    f.write(LINE_TERMINATOR)
                writer.writerow(values)

                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise StorageError(self.path, e) from e

        logger.debug(f"Appended to {self.path}: {event}")

    def rewrite_all(self, events: Iterable[Event]) -> None:
        """
        Replace the whole file with the given Events, in the given order.

        The new contents go to a temporary file next to the real one which then gets
        moved into place, so a failed write leaves the old file alone.
        """
        count = 0
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                newline="",
                encoding=ENCODING,
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                writer = csv.DictWriter(
                    f, fieldnames=CSV_FIELDS, lineterminator=LINE_TERMINATOR
                )
                writer.writeheader()
                for event in events:
                    writer.writerow(event.to_row())
                    count += 1
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(self.path, e) from e

        logger.debug(f"Rewrote {self.path} with {count} events")
