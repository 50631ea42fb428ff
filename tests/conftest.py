"""Shared fixtures."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def workdir():
    """Temporary directory, removed afterwards."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


@pytest.fixture
def write_fasta(workdir):
    """Write FASTA text to a file in the work directory and return its path."""
    def _write(text: str, name: str = "input.fa") -> Path:
        path = workdir / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to streams of earlier tests."""
    yield
    logging.getLogger("silicoprep").handlers.clear()


@pytest.fixture
def read_fasta():
    """Parse a two-line FASTA file into (header, sequence) pairs."""
    def _read(path: Path) -> list:
        lines = Path(path).read_text().splitlines()
        return [(lines[i][1:], lines[i + 1]) for i in range(0, len(lines), 2)]
    return _read
