"""
Concurrent batch file reading.

Files are read on a thread pool and joined before returning. A file that
cannot be read is logged and left out; the rest of the batch still comes
back.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from frenglish.models import FileRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 16


@dataclass
class ReadFailure:
    path: str
    error: str


@dataclass
class ReadBatch:
    """Outcome of reading a batch of files.

    ``records`` keeps the order of the input paths; each record's file_id
    is the literal path that was read.
    """
    records: list[FileRecord] = field(default_factory=list)
    failures: list[ReadFailure] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    def __iter__(self):
        return iter(self.records)


def read_file(path: Union[str, Path], encoding: str = "utf-8") -> FileRecord:
    """Read one file into a FileRecord keyed by its path.

    Line endings are kept as they are on disk.
    """
    with open(path, encoding=encoding, newline="") as f:
        content = f.read()
    return FileRecord(file_id=str(path), content=content)


def _read_or_fail(path: str, encoding: str) -> Union[FileRecord, ReadFailure]:
    try:
        return read_file(path, encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading file %s: %s", path, e)
        return ReadFailure(path=path, error=str(e))


def read_files(
    paths: Iterable[Union[str, Path]],
    encoding: str = "utf-8",
    max_workers: Optional[int] = None,
) -> ReadBatch:
    """
    Read every path concurrently.

    Args:
        paths: Files to read
        encoding: Text encoding of the files
        max_workers: Thread pool size (defaults to min(16, len(paths)))

    Returns:
        ReadBatch with the successfully read records and the failures
    """
    paths = [str(p) for p in paths]
    batch = ReadBatch()
    if not paths:
        return batch

    workers = max_workers or min(DEFAULT_MAX_WORKERS, len(paths))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        outcomes = list(executor.map(lambda p: _read_or_fail(p, encoding), paths))

    for outcome in outcomes:
        if isinstance(outcome, FileRecord):
            batch.records.append(outcome)
        else:
            batch.failures.append(outcome)

    logger.debug("Read %d file(s), %d failed", len(batch.records), len(batch.failures))
    return batch
