"""
In silico mutation of FASTA sequences.

Reads records from a FASTA file (or stdin), injects substitution,
insertion and deletion errors at per-base rates, and writes one mutated
record per input record, in input order, keeping identifiers and
descriptions.
"""

import logging
from typing import Iterator, Optional

import numpy as np

from .config import MutaConfig, load_config
from .io_utils import FastaWriter, close_handle, iter_records, open_input, open_output
from .models import MutationStats, SequenceRecord
from .mutator import Mutator
from .parallel import get_optimal_workers, parallel_mutate, record_seeds
from ..utils.validation import require_valid

logger = logging.getLogger(__name__)


def run_mutation(
    input_file: Optional[str] = None,
    output_file: Optional[str] = None,
    substitution: Optional[float] = None,
    insertion: Optional[float] = None,
    deletion: Optional[float] = None,
    insertion_mode: Optional[str] = None,
    seed: Optional[int] = None,
    threads: Optional[int] = None,
    config_file: Optional[str] = None,
) -> MutationStats:
    """
    Mutate every record of a FASTA file.

    Options left as None fall back to the config file, then to defaults.

    Args:
        input_file: Input FASTA file (None or "-" for stdin)
        output_file: Output FASTA file (None or "-" for stdout)
        substitution: Probability of substitution per nucleotide
        insertion: Probability of insertion per nucleotide
        deletion: Probability of deletion per nucleotide
        insertion_mode: "drop" (reference behaviour) or "insert"
        seed: Random seed
        threads: Number of worker processes (0=auto, 1=single)
        config_file: YAML/JSON config file

    Returns:
        MutationStats for the run

    Raises:
        ConfigurationError: Invalid parameters (before any record is read)
        SequenceIOError: Unreadable input, unwritable output or bad FASTA
    """
    config = load_config(MutaConfig, config_file)
    config.update(
        substitution=substitution,
        insertion=insertion,
        deletion=deletion,
        insertion_mode=insertion_mode,
        seed=seed,
        threads=threads,
    )

    mutator = Mutator(
        config.substitution,
        config.insertion,
        config.deletion,
        insertion_mode=config.insertion_mode,
    )
    require_valid(config.validate(), "mutation parameters")

    logger.info("In silico mutation")
    logger.info(f"Input: {input_file or 'stdin'}")
    logger.info(f"Output: {output_file or 'stdout'}")
    logger.info(
        f"Rates - substitution: {mutator.substitution}, insertion: {mutator.insertion}, "
        f"deletion: {mutator.deletion}, identity: {mutator.identity:.6g}"
    )
    logger.info(f"Insertion mode: {mutator.insertion_mode}")

    seed_seq = np.random.SeedSequence(config.seed)
    logger.debug(f"Seed entropy: {seed_seq.entropy}")

    workers = get_optimal_workers(config.threads)
    stats = MutationStats()

    fin = open_input(input_file)
    try:
        fout = open_output(output_file)
        try:
            writer = FastaWriter(fout)
            records = _count_input(iter_records(fin), stats)

            if workers > 1:
                mutated = parallel_mutate(mutator, records, seed_seq, workers)
            else:
                mutated = _mutate_serial(mutator, records, seed_seq)

            for result in mutated:
                writer.write(result)
                stats.records += 1
                stats.output_bases += result.length
                logger.debug(f"{result.id}: {result.length} bp written")
        finally:
            close_handle(fout)
    finally:
        close_handle(fin)

    logger.info(stats.summary())
    return stats


def _count_input(records: Iterator[SequenceRecord], stats: MutationStats) -> Iterator[SequenceRecord]:
    for record in records:
        stats.input_bases += record.length
        yield record


def _mutate_serial(
    mutator: Mutator,
    records: Iterator[SequenceRecord],
    seed_seq: np.random.SeedSequence,
) -> Iterator[SequenceRecord]:
    for record, child in record_seeds(records, seed_seq):
        mutator.rng = np.random.default_rng(child)
        yield mutator.mutate_record(record)
