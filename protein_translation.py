"""
protein_translation.py
======================
SeqScope Toolkit — DNA → Protein Translation

Responsibilities
----------------
- Hold the standard genetic code as a static, read-only codon table
- Translate a cleaned nucleotide sequence at a chosen frame offset
- Produce the reverse complement consumed by minus-strand scanning

Data Flow
---------
    Input  : Clean DNA string (from sequence_normalization.clean)
    Output : Amino-acid string ('*' = stop, 'X' = unrecognised codon)

Design Notes
------------
- A *frame* here is a 0-based offset (0, 1 or 2) from the start of the
  sequence before the first full codon.
- Trailing 1–2 nucleotides that do not complete a codon are dropped.
- Codons are looked up verbatim.  RNA codons (containing U) and any other
  non-ACGT codon translate to 'X' rather than failing.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Final, Mapping

from sequence_normalization import clean

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Stop codon symbol in translated output.
STOP_SYMBOL: Final[str] = "*"

#: Start codon amino acid (methionine).
START_SYMBOL: Final[str] = "M"

#: Residue emitted for codons missing from the table.
UNKNOWN_RESIDUE: Final[str] = "X"

#: Valid 0-based frame offsets.
READING_FRAMES: Final[tuple[int, int, int]] = (0, 1, 2)

#: Standard genetic code (NCBI translation table 1).
STANDARD_CODON_TABLE: Final[Mapping[str, str]] = MappingProxyType({
    "TTT": "F", "TTC": "F", "TTA": "L", "TTG": "L",
    "TCT": "S", "TCC": "S", "TCA": "S", "TCG": "S",
    "TAT": "Y", "TAC": "Y", "TAA": "*", "TAG": "*",
    "TGT": "C", "TGC": "C", "TGA": "*", "TGG": "W",
    "CTT": "L", "CTC": "L", "CTA": "L", "CTG": "L",
    "CCT": "P", "CCC": "P", "CCA": "P", "CCG": "P",
    "CAT": "H", "CAC": "H", "CAA": "Q", "CAG": "Q",
    "CGT": "R", "CGC": "R", "CGA": "R", "CGG": "R",
    "ATT": "I", "ATC": "I", "ATA": "I", "ATG": "M",
    "ACT": "T", "ACC": "T", "ACA": "T", "ACG": "T",
    "AAT": "N", "AAC": "N", "AAA": "K", "AAG": "K",
    "AGT": "S", "AGC": "S", "AGA": "R", "AGG": "R",
    "GTT": "V", "GTC": "V", "GTA": "V", "GTG": "V",
    "GCT": "A", "GCC": "A", "GCA": "A", "GCG": "A",
    "GAT": "D", "GAC": "D", "GAA": "E", "GAG": "E",
    "GGT": "G", "GGC": "G", "GGA": "G", "GGG": "G",
})

#: Watson–Crick complement; characters outside ACGT pass through unchanged.
_COMPLEMENT_TABLE: Final[dict[int, int]] = str.maketrans("ACGT", "TGCA")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TranslationError(Exception):
    """Base exception for translation misuse."""


class InvalidReadingFrameError(TranslationError):
    """Raised when a frame offset outside {0, 1, 2} is requested."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _validate_frame(frame: int) -> int:
    """
    Validate a 0-based frame offset.

    Raises
    ------
    InvalidReadingFrameError
    """
    if isinstance(frame, bool) or not isinstance(frame, int) or frame not in READING_FRAMES:
        raise InvalidReadingFrameError(
            f"Reading frame must be 0, 1, or 2; received {frame!r}. "
            "Frame 0 = no offset, frame 1 = skip 1 nucleotide, "
            "frame 2 = skip 2 nucleotides."
        )
    return frame


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def translate(clean_sequence: str, frame: int = 0) -> str:
    """
    Translate a nucleotide sequence with the standard genetic code.

    Parameters
    ----------
    clean_sequence : str
        Cleaned DNA.  The text is passed through ``clean`` again, which is a
        no-op for already-clean input.
    frame : int
        Offset of the first codon: 0, 1 or 2.

    Returns
    -------
    str
        One residue per complete codon.  Stop codons appear as '*' and are
        not treated as terminators; unknown codons become 'X'.

    Raises
    ------
    InvalidReadingFrameError
        If ``frame`` is not 0, 1 or 2.

    Examples
    --------
    >>> translate("ATGGCGTAG")
    'MA*'
    """
    _validate_frame(frame)
    seq = clean(clean_sequence)

    residues = [
        STANDARD_CODON_TABLE.get(seq[i : i + 3], UNKNOWN_RESIDUE)
        for i in range(frame, len(seq) - 2, 3)
    ]
    return "".join(residues)


def reverse_complement(clean_sequence: str) -> str:
    """
    Return the reverse complement of a cleaned DNA sequence.

    A↔T and G↔C are swapped; any other letter (e.g. U) is kept as is, so
    the operation is its own inverse for every input.
    """
    return clean(clean_sequence)[::-1].translate(_COMPLEMENT_TABLE)
