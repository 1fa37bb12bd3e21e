"""
sequence_composition.py
=======================
SeqScope Toolkit — Composition Analyzer

Per-symbol counts and GC / AT percentages over already-cleaned sequences.
Empty input is a normal case: counts are zero and percentages are 0.0.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Final

from sequence_normalization import Alphabet, coerce_alphabet

logger = logging.getLogger(__name__)

#: Keys always present in a nucleotide composition, DNA or RNA.
NUCLEOTIDE_KEYS: Final[tuple[str, ...]] = ("A", "T", "G", "C", "U")


def nucleotide_composition(clean_sequence: str) -> dict[str, int]:
    """
    Count A, T, G, C and U in a cleaned nucleotide sequence.

    All five keys are returned, so a DNA sequence reports ``U: 0`` and an
    RNA sequence reports ``T: 0``.  Other letters are not counted.
    """
    counts = Counter(clean_sequence)
    return {base: counts.get(base, 0) for base in NUCLEOTIDE_KEYS}


def protein_composition(clean_sequence: str) -> dict[str, int]:
    """
    Count every distinct symbol in a cleaned protein sequence.

    Keys appear in order of first occurrence; the stop symbol '*' is
    counted like any residue.
    """
    return dict(Counter(clean_sequence))


def composition(clean_sequence: str, alphabet: Alphabet | str = Alphabet.DNA) -> dict[str, int]:
    """Dispatch to the nucleotide or protein composition for ``alphabet``."""
    if coerce_alphabet(alphabet) is Alphabet.PROTEIN:
        return protein_composition(clean_sequence)
    return nucleotide_composition(clean_sequence)


def _percent_of(clean_sequence: str, symbols: str) -> float:
    length = len(clean_sequence)
    if length == 0:
        return 0.0
    hits = sum(clean_sequence.count(s) for s in symbols)
    return hits / length * 100


def gc_content(clean_sequence: str) -> float:
    """Percentage of G + C over the full sequence length; 0.0 when empty."""
    return _percent_of(clean_sequence, "GC")


def at_content(clean_sequence: str) -> float:
    """Percentage of A + T over the full sequence length; 0.0 when empty.

    U is not counted, so for RNA input gc + at is below 100 whenever U is
    present.
    """
    return _percent_of(clean_sequence, "AT")
