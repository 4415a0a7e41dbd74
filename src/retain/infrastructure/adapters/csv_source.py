import csv
import logging
from pathlib import Path

from retain.domain.constants import DEFAULT_DELIMITER
from retain.domain.errors import SourceFormatError
from retain.domain.ports import CardSource


class CsvCardSource(CardSource):
    """
    Reads cards from a delimited text file.

    The first column is the question (the card key), the second the answer.
    Extra columns are ignored, surrounding whitespace is trimmed and blank
    rows are skipped.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER, has_header: bool = True):
        self.delimiter = delimiter
        self.has_header = has_header
        self.logger = logging.getLogger(__name__)

    def read(self, path: Path) -> list[tuple[str, str]]:
        try:
            # utf-8-sig drops a leading BOM
            with open(path, newline="", encoding="utf-8-sig") as f:
                return self._parse(csv.reader(f, delimiter=self.delimiter), path)
        except csv.Error as e:
            raise SourceFormatError(str(e), path) from e
        except UnicodeDecodeError as e:
            raise SourceFormatError(f"not valid UTF-8 ({e.reason})", path) from e
        except OSError as e:
            raise SourceFormatError(f"cannot read file: {e.strerror or e}", path) from e

    def _parse(self, reader, path: Path) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        seen: dict[str, int] = {}
        header_pending = self.has_header

        for row in reader:
            line = reader.line_num
            if not any(field.strip() for field in row):
                continue
            if header_pending:
                header_pending = False
                self.logger.debug(f"Skipping header row {row}")
                continue

            if len(row) < 2:
                raise SourceFormatError(
                    f"expected at least 2 fields (question, answer), got {len(row)}",
                    path,
                    line,
                )

            key, answer = row[0].strip(), row[1].strip()
            if not key:
                raise SourceFormatError("question field is empty", path, line)
            if key in seen:
                raise SourceFormatError(
                    f"duplicate question {key!r} (first seen on line {seen[key]})",
                    path,
                    line,
                )

            seen[key] = line
            pairs.append((key, answer))

        self.logger.debug(f"Read {len(pairs)} rows from {path}")
        return pairs
