"""
Per-base mutation model.

Every symbol independently draws one of four fates from a categorical
distribution {substitution: s, insertion: i, deletion: d, identity: 1-s-i-d}:

- substitution: replaced by a uniform draw from ACGT (may redraw the same base)
- insertion: dropped ("drop" mode) or kept and followed by a random base
  ("insert" mode)
- deletion: an A/C/G/T becomes one of the other three bases; any other
  symbol passes through
- identity: kept

Note that the default "drop" mode reproduces the reference tool, where an
insertion outcome removes the source symbol without adding a new one.
"""

import math
from typing import Optional

import numpy as np

from ..exceptions import ConfigurationError, InvalidRateConfiguration
from .models import NUCLEOTIDES, MutationOutcome, SequenceRecord

# Allowed float rounding when the three rates sum to exactly 1
RATE_TOLERANCE = 1e-9

INSERTION_MODES = ("drop", "insert")

# Sequences are handled as arrays of Unicode code points
_CODEC = "utf-32-le"
_CODE_DTYPE = np.dtype("<u4")

# Sorted, so searchsorted maps a base to its index in NUCLEOTIDES
_BASES = np.frombuffer(NUCLEOTIDES.encode(_CODEC), dtype=_CODE_DTYPE)


def _base_index(symbols: np.ndarray) -> np.ndarray:
    """Index into _BASES for every symbol, -1 for anything that is not A/C/G/T"""
    index = np.minimum(np.searchsorted(_BASES, symbols), len(_BASES) - 1)
    return np.where(_BASES[index] == symbols, index, -1)


def _check_rate(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidRateConfiguration(f"{name} rate must be a number, got {value!r}")
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        raise InvalidRateConfiguration(f"{name} rate must be in [0, 1], got {value}")
    return value


class Mutator:
    """Memoryless per-base substitution/insertion/deletion model"""

    def __init__(
        self,
        substitution: float,
        insertion: float,
        deletion: float,
        rng: Optional[np.random.Generator] = None,
        insertion_mode: str = "drop",
    ):
        """
        Args:
            substitution: Probability of substitution per nucleotide
            insertion: Probability of insertion per nucleotide
            deletion: Probability of deletion per nucleotide
            rng: Random generator (default: fresh unseeded generator)
            insertion_mode: "drop" or "insert"

        Raises:
            InvalidRateConfiguration: If a rate is not in [0, 1] or the
                three rates sum to more than 1
            ConfigurationError: If insertion_mode is unknown
        """
        self.substitution = _check_rate("substitution", substitution)
        self.insertion = _check_rate("insertion", insertion)
        self.deletion = _check_rate("deletion", deletion)

        identity = 1.0 - self.substitution - self.insertion - self.deletion
        if identity < -RATE_TOLERANCE:
            raise InvalidRateConfiguration(
                f"Rates sum to {1.0 - identity:.6g} > 1 "
                f"(substitution={self.substitution}, insertion={self.insertion}, "
                f"deletion={self.deletion})"
            )
        self.identity = max(identity, 0.0)

        if insertion_mode not in INSERTION_MODES:
            raise ConfigurationError(
                f"Unknown insertion mode: {insertion_mode}. Available: {list(INSERTION_MODES)}"
            )
        self.insertion_mode = insertion_mode

        self.rng = rng if rng is not None else np.random.default_rng()

        weights = np.array(
            [self.substitution, self.insertion, self.deletion, self.identity]
        )
        self._weights = weights / weights.sum()

    @property
    def weights(self) -> np.ndarray:
        """Categorical weights indexed by MutationOutcome"""
        return self._weights.copy()

    def draw_outcome(self) -> MutationOutcome:
        return MutationOutcome(int(self.rng.choice(len(MutationOutcome), p=self._weights)))

    def _random_base(self) -> str:
        return NUCLEOTIDES[int(self.rng.integers(0, len(NUCLEOTIDES)))]

    def mutate(self, symbol: str) -> Optional[str]:
        """
        Decide the fate of a single symbol.

        Returns:
            The emitted symbol(s), or None if the symbol is dropped
        """
        fate = self.draw_outcome()

        if fate is MutationOutcome.SUBSTITUTION:
            return self._random_base()

        if fate is MutationOutcome.INSERTION:
            if self.insertion_mode == "insert":
                return symbol + self._random_base()
            return None

        if fate is MutationOutcome.DELETION and symbol in NUCLEOTIDES:
            alternatives = [b for b in NUCLEOTIDES if b != symbol]
            return alternatives[int(self.rng.integers(0, len(alternatives)))]

        return symbol

    def mutate_sequence(self, sequence: str) -> str:
        """
        Apply mutate() independently to every symbol of a sequence.

        Vectorised version: one categorical draw per position, then the
        replacement bases for every substituted/deleted/inserted position
        in bulk. Output order follows input order.
        """
        if not sequence:
            return ""

        symbols = np.frombuffer(sequence.encode(_CODEC), dtype=_CODE_DTYPE).copy()
        fates = self.rng.choice(len(MutationOutcome), size=symbols.size, p=self._weights)
        index = _base_index(symbols)

        substituted = fates == MutationOutcome.SUBSTITUTION
        symbols[substituted] = _BASES[
            self.rng.integers(0, len(_BASES), size=int(substituted.sum()))
        ]

        # A shift of 1..3 around the alphabet lands on one of the other three bases
        deleted = (fates == MutationOutcome.DELETION) & (index >= 0)
        shift = self.rng.integers(1, len(_BASES), size=int(deleted.sum()))
        symbols[deleted] = _BASES[(index[deleted] + shift) % len(_BASES)]

        inserted = fates == MutationOutcome.INSERTION
        if self.insertion_mode == "drop":
            result = symbols[~inserted]
        else:
            copies = np.where(inserted, 2, 1)
            result = np.repeat(symbols, copies)
            extra = (np.cumsum(copies) - 1)[inserted]
            result[extra] = _BASES[self.rng.integers(0, len(_BASES), size=extra.size)]

        return result.tobytes().decode(_CODEC)

    def mutate_record(self, record: SequenceRecord) -> SequenceRecord:
        """Mutate a record, keeping its identifier and description"""
        return SequenceRecord(
            id=record.id,
            seq=self.mutate_sequence(record.seq),
            description=record.description,
        )

    def __repr__(self) -> str:
        return (
            f"Mutator(substitution={self.substitution}, insertion={self.insertion}, "
            f"deletion={self.deletion}, insertion_mode={self.insertion_mode!r})"
        )
