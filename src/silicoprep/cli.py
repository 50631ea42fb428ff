"""
silicoprep CLI - in silico sequencing sample preparation.

Usage:
    silico <command> [options]

The commands are also installed as standalone tools, `muta` and `sonicat`.
"""

import logging

import click

from silicoprep import __version__
from silicoprep.exceptions import ConfigurationError, SequenceIOError
from silicoprep.simulate.config import (
    DEFAULT_DELETION,
    DEFAULT_DEPTH,
    DEFAULT_INSERTION,
    DEFAULT_LENGTH,
    DEFAULT_SUBSTITUTION,
)
from silicoprep.utils.logging_utils import setup_logger


def _run(func, verbose, log_file, **kwargs):
    """Configure logging, run a pipeline and turn its errors into CLI errors."""
    setup_logger(log_file=log_file, level=logging.DEBUG if verbose else logging.INFO)
    try:
        return func(**kwargs)
    except (ConfigurationError, SequenceIOError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="silicoprep")
def main():
    """silicoprep - in silico sequencing sample preparation.

    Use 'silico <command> --help' for detailed usage of each command.
    """
    pass


@click.command()
@click.option("-i", "--in", "input_file", help="Input FASTA file, default to stdin")
@click.option("-o", "--out", "output_file", help="Output FASTA file, default to stdout")
@click.option("-s", "--substitution", type=float,
              help=f"Probability of substitution per nucleotide, default to {DEFAULT_SUBSTITUTION}")
@click.option("-n", "--insertion", type=float,
              help=f"Probability of insertion per nucleotide, default to {DEFAULT_INSERTION}")
@click.option("-d", "--deletion", type=float,
              help=f"Probability of deletion per nucleotide, default to {DEFAULT_DELETION}")
@click.option("--insertion-mode", type=click.Choice(["drop", "insert"]),
              help="drop: an insertion outcome removes the base (default); "
                   "insert: the base is kept and a random base follows it")
@click.option("--seed", type=int, help="Random seed")
@click.option("-t", "--threads", type=int, help="Number of worker processes (0=auto, default 1)")
@click.option("--config", "config_file", help="Config file (YAML/JSON)")
@click.option("--log-file", help="Also write the log to this file")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def muta(input_file, output_file, substitution, insertion, deletion,
         insertion_mode, seed, threads, config_file, log_file, verbose):
    """In silico mutation of FASTA sequences.

    Each base independently undergoes substitution, insertion or deletion
    at the given rates. Identifiers and descriptions are kept.
    """
    from silicoprep.simulate.mutate import run_mutation
    _run(
        run_mutation,
        verbose,
        log_file,
        input_file=input_file,
        output_file=output_file,
        substitution=substitution,
        insertion=insertion,
        deletion=deletion,
        insertion_mode=insertion_mode,
        seed=seed,
        threads=threads,
        config_file=config_file,
    )


@click.command()
@click.option("-i", "--in", "input_file", help="Input FASTA file, default to stdin")
@click.option("-o", "--out", "output_file", help="Output FASTA file, default to stdout")
@click.option("-d", "--depth", type=float, help=f"Average read depth, default to {DEFAULT_DEPTH}")
@click.option("-l", "--length", type=int, help=f"Read length, default to {DEFAULT_LENGTH}")
@click.option("--seed", type=int, help="Random seed")
@click.option("--config", "config_file", help="Config file (YAML/JSON)")
@click.option("--log-file", help="Also write the log to this file")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def sonicat(input_file, output_file, depth, length, seed, config_file, log_file, verbose):
    """In silico sonication of FASTA sequences.

    Every window of the given length is copied a Poisson-distributed
    number of times; copies are named seq_1, seq_2, ...
    """
    from silicoprep.simulate.sonicate import run_sonication
    _run(
        run_sonication,
        verbose,
        log_file,
        input_file=input_file,
        output_file=output_file,
        depth=depth,
        length=length,
        seed=seed,
        config_file=config_file,
    )


main.add_command(muta)
main.add_command(sonicat)


if __name__ == "__main__":
    main()
