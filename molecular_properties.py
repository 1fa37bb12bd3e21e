"""
molecular_properties.py
=======================
SeqScope Toolkit — Molecular Property Estimator

Approximate molecular weights and melting temperatures.

Design Notes
------------
- Weights are plain sums of average residue masses.  No terminal-group,
  water or peptide-bond corrections are applied.
- Melting temperature uses the Wallace rule below 14 nt and the basic
  GC-percentage formula above it.  These are deliberately simple empirical
  estimates, not nearest-neighbour thermodynamics.
- Symbols missing from a mass table contribute 0.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Final, Mapping

from sequence_composition import gc_content

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Average nucleotide residue masses (Da) for DNA.
DNA_RESIDUE_MASS: Final[Mapping[str, float]] = MappingProxyType({
    "A": 331.2, "T": 322.2, "G": 347.2, "C": 307.2,
})

#: Average nucleotide residue masses (Da) for RNA.
RNA_RESIDUE_MASS: Final[Mapping[str, float]] = MappingProxyType({
    "A": 331.2, "U": 308.2, "G": 347.2, "C": 307.2,
})

#: Average amino-acid masses (Da), standard 20 residues.
AMINO_ACID_MASS: Final[Mapping[str, float]] = MappingProxyType({
    "A": 89.1,  "R": 174.2, "N": 132.1, "D": 133.1, "C": 121.2,
    "E": 147.1, "Q": 146.2, "G": 75.1,  "H": 155.2, "I": 131.2,
    "L": 131.2, "K": 146.2, "M": 149.2, "F": 165.2, "P": 115.1,
    "S": 105.1, "T": 119.1, "W": 204.2, "Y": 181.2, "V": 117.1,
})

#: Sequences shorter than this use the Wallace rule.
WALLACE_RULE_MAX_LENGTH: Final[int] = 14


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _sum_masses(clean_sequence: str, table: Mapping[str, float]) -> float:
    return sum(table.get(symbol, 0.0) for symbol in clean_sequence)


def molecular_weight(clean_sequence: str, is_rna: bool = False) -> float:
    """
    Approximate molecular weight of a nucleotide sequence in Daltons.

    Parameters
    ----------
    clean_sequence : str
        Cleaned DNA or RNA.
    is_rna : bool
        Use the RNA table (U instead of T).  With the RNA table a T weighs
        nothing, and vice versa.
    """
    table = RNA_RESIDUE_MASS if is_rna else DNA_RESIDUE_MASS
    return _sum_masses(clean_sequence, table)


def protein_molecular_weight(clean_sequence: str) -> float:
    """Approximate molecular weight of a protein in Daltons."""
    return _sum_masses(clean_sequence, AMINO_ACID_MASS)


def melting_temperature(clean_sequence: str) -> float:
    """
    Estimate the duplex melting temperature (°C).

    - length < 14:  ``Tm = 2 * (A + T) + 4 * (G + C)``  (Wallace rule)
    - otherwise:    ``Tm = 64.9 + 41 * (GC% / 100) - 675 / length``

    An empty sequence yields 0.0.
    """
    length = len(clean_sequence)

    if length < WALLACE_RULE_MAX_LENGTH:
        weak = clean_sequence.count("A") + clean_sequence.count("T")
        strong = clean_sequence.count("G") + clean_sequence.count("C")
        return float(2 * weak + 4 * strong)

    return 64.9 + 41 * (gc_content(clean_sequence) / 100) - 675 / length
