"""
Multi-process mutation.

Each worker owns a Mutator; every task carries the child seed of its
record, so output is identical to the single-process run with the same
seed. Records come back in input order.
"""

import multiprocessing as mp
import logging
from typing import Iterable, Iterator, Tuple

import numpy as np

from .models import SequenceRecord
from .mutator import Mutator
from ..utils.logging_utils import get_logger

logger = logging.getLogger(__name__)

_MUTATOR = None


def get_optimal_workers(requested: int = 0) -> int:
    """
    Get the number of workers to use.

    Args:
        requested: Requested worker count, 0 means auto

    Returns:
        Actual worker count
    """
    cpu_count = mp.cpu_count()

    if requested <= 0:
        # Auto: all cores but one, at least 1
        return max(1, cpu_count - 1)
    else:
        return min(max(1, requested), cpu_count)


def record_seeds(
    records: Iterable[SequenceRecord],
    seed_seq: np.random.SeedSequence,
) -> Iterator[Tuple[SequenceRecord, np.random.SeedSequence]]:
    """Pair every record with its own child seed, spawned in input order"""
    for record in records:
        yield record, seed_seq.spawn(1)[0]


def _init_mutate_worker(substitution, insertion, deletion, insertion_mode):
    global _MUTATOR
    # Spawned workers start without the parent's handlers
    get_logger().debug(f"Worker {mp.current_process().name} ready")
    _MUTATOR = Mutator(substitution, insertion, deletion, insertion_mode=insertion_mode)


def _worker_mutate(task: Tuple[SequenceRecord, np.random.SeedSequence]) -> SequenceRecord:
    record, child = task
    _MUTATOR.rng = np.random.default_rng(child)
    return _MUTATOR.mutate_record(record)


def parallel_mutate(
    mutator: Mutator,
    records: Iterable[SequenceRecord],
    seed_seq: np.random.SeedSequence,
    num_workers: int,
) -> Iterator[SequenceRecord]:
    """
    Mutate records in a worker pool.

    Args:
        mutator: Template whose rates and insertion mode the workers copy
        records: Input records (consumed lazily)
        seed_seq: Root seed; one child is spawned per record
        num_workers: Number of worker processes

    Yields:
        Mutated records, in input order
    """
    logger.info(f"Using {num_workers} workers for parallel mutation")

    with mp.Pool(
        num_workers,
        initializer=_init_mutate_worker,
        initargs=(
            mutator.substitution,
            mutator.insertion,
            mutator.deletion,
            mutator.insertion_mode,
        ),
    ) as pool:
        yield from pool.imap(_worker_mutate, record_seeds(records, seed_seq))
