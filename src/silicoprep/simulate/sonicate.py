"""
In silico sonication of FASTA sequences.

Breaks every input sequence into all overlapping windows of a fixed
length and copies each window a Poisson-distributed number of times,
simulating uneven sequencing depth. Output records are named seq_1,
seq_2, ... in emission order across the whole run.
"""

import logging
from typing import Optional

import numpy as np

from .config import SonicatConfig, load_config
from .fragmenter import Fragmenter
from .io_utils import FastaWriter, close_handle, iter_records, open_input, open_output
from .models import SonicationStats
from ..utils.validation import require_valid

logger = logging.getLogger(__name__)


def run_sonication(
    input_file: Optional[str] = None,
    output_file: Optional[str] = None,
    depth: Optional[float] = None,
    length: Optional[int] = None,
    seed: Optional[int] = None,
    config_file: Optional[str] = None,
) -> SonicationStats:
    """
    Fragment every record of a FASTA file and sample its depth.

    Options left as None fall back to the config file, then to defaults.

    Args:
        input_file: Input FASTA file (None or "-" for stdin)
        output_file: Output FASTA file (None or "-" for stdout)
        depth: Average read depth (Poisson mean per window)
        length: Fragment (window) length
        seed: Random seed
        config_file: YAML/JSON config file

    Returns:
        SonicationStats for the run

    Raises:
        ConfigurationError: Invalid parameters (before any record is read)
        SequenceIOError: Unreadable input, unwritable output or bad FASTA
    """
    config = load_config(SonicatConfig, config_file)
    config.update(depth=depth, length=length, seed=seed)

    fragmenter = Fragmenter(config.depth, config.length)
    require_valid(config.validate(), "sonication parameters")
    # Seed only once the seed itself has been validated
    fragmenter.rng = np.random.default_rng(config.seed)

    logger.info("In silico sonication")
    logger.info(f"Input: {input_file or 'stdin'}")
    logger.info(f"Output: {output_file or 'stdout'}")
    logger.info(f"Depth: {fragmenter.depth}, fragment length: {fragmenter.length}")

    stats = SonicationStats()

    fin = open_input(input_file)
    try:
        fout = open_output(output_file)
        try:
            writer = FastaWriter(fout)
            for record in iter_records(fin):
                stats.records += 1
                n_windows = fragmenter.window_count(record.length)
                if n_windows == 0:
                    stats.short_records += 1
                    logger.debug(
                        f"{record.id}: {record.length} bp is shorter than "
                        f"the fragment length, no fragments"
                    )
                    continue

                stats.windows += n_windows
                before = fragmenter.count
                for fragment in fragmenter.fragment(record):
                    writer.write(fragment)
                logger.debug(f"{record.id}: {n_windows} windows, {fragmenter.count - before} fragments")
            stats.fragments = fragmenter.count
        finally:
            close_handle(fout)
    finally:
        close_handle(fin)

    if stats.short_records:
        logger.warning(
            f"{stats.short_records} record(s) shorter than {fragmenter.length} bp produced no fragments"
        )
    logger.info(stats.summary())
    return stats
