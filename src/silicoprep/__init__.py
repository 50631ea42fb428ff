"""
silicoprep: in silico sequencing sample preparation.

This package provides tools for:
- Mutation of FASTA sequences at per-base substitution/insertion/deletion rates
- Sonication of FASTA sequences into overlapping fixed-length fragments
  with Poisson-distributed sequencing depth
"""

__version__ = "0.1.0"
__author__ = "silicoprep Team"
