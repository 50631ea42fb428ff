"""
FASTA input/output.

Thin wrapper over Bio.SeqIO: records are read lazily and written one at a
time, in input order. Identifiers and descriptions are passed through
verbatim; sequences are not case-normalised.
"""

import gzip
import logging
import sys
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from ..exceptions import MalformedRecordError, SequenceIOError
from ..utils.validation import validate_file_exists
from .models import SequenceRecord

logger = logging.getLogger(__name__)

STDIO = "-"

PathLike = Union[str, Path]


def _is_stdio(path: Optional[PathLike]) -> bool:
    return path is None or str(path) == STDIO


def open_input(path: Optional[PathLike]) -> TextIO:
    """
    Open a FASTA file for reading.

    Supports .fa, .fasta, .fa.gz, .fasta.gz; None or "-" means stdin.

    Raises:
        SequenceIOError: If the file is missing or unreadable
    """
    if _is_stdio(path):
        return sys.stdin

    path = Path(path)
    try:
        validate_file_exists(str(path), "Input FASTA")
        if path.suffix == ".gz":
            return gzip.open(path, "rt")
        return open(path, "r")
    except OSError as e:
        raise SequenceIOError(f"Cannot open input file {path}: {e}") from e


def open_output(path: Optional[PathLike]) -> TextIO:
    """
    Open a FASTA file for writing (gzip if the name ends in .gz).

    Raises:
        SequenceIOError: If the file cannot be created
    """
    if _is_stdio(path):
        return sys.stdout

    path = Path(path)
    try:
        if path.suffix == ".gz":
            return gzip.open(path, "wt")
        return open(path, "w")
    except OSError as e:
        raise SequenceIOError(f"Cannot open output file {path}: {e}") from e


def close_handle(handle: TextIO) -> None:
    """Close a handle unless it is one of the process streams"""
    if handle is sys.stdout:
        handle.flush()
    elif handle is not sys.stdin:
        handle.close()


def _to_record(rec: SeqRecord) -> SequenceRecord:
    # rec.description holds the whole header line; keep what follows the id
    description = rec.description
    if description.startswith(rec.id):
        description = description[len(rec.id):]
    description = description.lstrip() or None
    return SequenceRecord(id=rec.id, seq=str(rec.seq), description=description)


def iter_records(handle: TextIO) -> Iterator[SequenceRecord]:
    """
    Lazily parse FASTA records from an open handle.

    Raises:
        MalformedRecordError: If the parser rejects the input
    """
    try:
        for rec in SeqIO.parse(handle, "fasta"):
            yield _to_record(rec)
    except ValueError as e:
        raise MalformedRecordError(f"Malformed FASTA input: {e}") from e
    except (OSError, EOFError) as e:
        # Bad or truncated gzip data surfaces only while reading
        raise MalformedRecordError(f"Cannot read FASTA input: {e}") from e


class FastaWriter:
    """Append records to a FASTA stream, one sequence line per record"""

    def __init__(self, handle: TextIO):
        self.handle = handle
        self.count = 0

    def write(self, record: SequenceRecord) -> None:
        # A description starting with the id is written as the whole header
        rec = SeqRecord(
            Seq(record.seq),
            id=record.id,
            name=record.id,
            description=f"{record.id} {record.description}" if record.description else "",
        )
        try:
            SeqIO.write(rec, self.handle, "fasta-2line")
        except OSError as e:
            raise SequenceIOError(f"Cannot write record {record.id}: {e}") from e
        self.count += 1
