"""
Record source that reads JSON records from a JSONL file.
"""
import json
import logging
from pathlib import Path
from typing import Any, Iterator

from tqdm import tqdm

logger = logging.getLogger(__name__)


class RecordSource:
    """Reads records, one JSON document per line."""

    def __init__(self, input_file: Path):
        """
        Initialize record source.

        Args:
            input_file: Path to the JSONL input file
        """
        self.input_file = Path(input_file)
        self.read_count = 0
        self.skipped_count = 0

    def _count_lines(self) -> int:
        with open(self.input_file, 'r', encoding='utf-8') as f:
            return sum(1 for _ in f)

    def iter_records(self, progress: bool = True) -> Iterator[Any]:
        """
        Read all records from the input file.

        Blank lines are ignored; lines that are not valid JSON are logged
        and skipped.

        Args:
            progress: Show a progress bar while reading

        Yields:
            Decoded JSON records
        """
        logger.info(f"Reading records from {self.input_file}")
        total = self._count_lines() if progress else None

        with open(self.input_file, 'r', encoding='utf-8') as f, tqdm(
            total=total,
            desc=f"Encoding {self.input_file.name}",
            unit="records",
            disable=not progress
        ) as pbar:
            for line_num, line in enumerate(f, 1):
                pbar.update(1)
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping line {line_num} of {self.input_file}: {e}")
                    self.skipped_count += 1
                    continue

                self.read_count += 1
                yield record

        logger.info(
            f"Read {self.read_count} records from {self.input_file} "
            f"({self.skipped_count} skipped)"
        )
