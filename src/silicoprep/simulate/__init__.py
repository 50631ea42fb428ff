"""Simulation of sequencing sample preparation: mutation and sonication."""

from silicoprep.simulate.fragmenter import Fragmenter
from silicoprep.simulate.models import MutationOutcome, SequenceRecord
from silicoprep.simulate.mutate import run_mutation
from silicoprep.simulate.mutator import Mutator
from silicoprep.simulate.sonicate import run_sonication

__all__ = [
    "Mutator",
    "Fragmenter",
    "MutationOutcome",
    "SequenceRecord",
    "run_mutation",
    "run_sonication",
]
