"""
Core data structures.

Records are immutable: every transform returns a new SequenceRecord.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


# Standard DNA nucleotides
NUCLEOTIDES = "ACGT"


@dataclass(frozen=True)
class SequenceRecord:
    """One FASTA record"""
    id: str
    seq: str
    description: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.seq)


class MutationOutcome(IntEnum):
    """Per-symbol fate; the value is the index into the weight vector."""
    SUBSTITUTION = 0
    INSERTION = 1
    DELETION = 2
    IDENTITY = 3


@dataclass
class MutationStats:
    """Counters collected by a mutation run"""
    records: int = 0
    input_bases: int = 0
    output_bases: int = 0

    def summary(self) -> str:
        return (
            f"Records: {self.records}, "
            f"bases in: {self.input_bases}, "
            f"bases out: {self.output_bases}"
        )


@dataclass
class SonicationStats:
    """Counters collected by a sonication run"""
    records: int = 0
    short_records: int = 0
    windows: int = 0
    fragments: int = 0

    @property
    def mean_depth(self) -> float:
        """Observed copies per window"""
        if self.windows == 0:
            return 0.0
        return self.fragments / self.windows

    def summary(self) -> str:
        return (
            f"Records: {self.records} "
            f"({self.short_records} shorter than the window), "
            f"windows: {self.windows}, "
            f"fragments: {self.fragments} "
            f"(mean depth {self.mean_depth:.2f})"
        )
