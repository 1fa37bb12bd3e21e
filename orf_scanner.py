"""
orf_scanner.py
==============
SeqScope Toolkit — Six-Frame ORF Scanner

Scans the three forward and three reverse-complement reading frames of a
cleaned DNA sequence for open reading frames.

Policy
------
Within one translated frame the scan holds at most one open start:

- 'M' with no open start opens a candidate at that residue.
- 'M' while a candidate is open is ignored (no nested starts).
- '*' closes the open candidate.  It is emitted when its nucleotide length
  (stop index − start index) × 3 reaches ``min_length``; either way the
  candidate is closed and the next 'M' may open a new one.
- A candidate still open when the frame ends has no stop and is dropped.

This is first-start-to-first-stop, not longest-ORF or all-candidates.

Coordinates
-----------
All positions are 0-based and inclusive on the forward strand.  For a
forward frame ``f``:

    start = start_idx * 3 + f
    end   = stop_idx * 3 + f + 2          (covers the stop codon)

For a reverse-complement frame ``f`` on a sequence of length ``L``:

    start = L - (stop_idx * 3 + f + 2)
    end   = L - (start_idx * 3 + f)

The reverse mapping sits one base to the right of the exact mirror image
(``end`` can equal ``L``).  Callers rely on these numbers as they are, so
the formulas are kept verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Final, Iterator

from protein_translation import (
    READING_FRAMES,
    START_SYMBOL,
    STOP_SYMBOL,
    reverse_complement,
    translate,
)
from sequence_normalization import clean

logger = logging.getLogger(__name__)

#: Minimum ORF length (nucleotides) used when the caller supplies none.
DEFAULT_MIN_ORF_LENGTH: Final[int] = 100


class InvalidMinimumLengthError(ValueError):
    """Raised when ``min_length`` is not a positive integer."""


@dataclass(frozen=True, slots=True)
class ORF:
    """
    One open reading frame.

    Attributes
    ----------
    start : int
        0-based inclusive start on the forward strand.
    end : int
        0-based inclusive end on the forward strand (stop codon included).
    frame : int
        1, 2, 3 for forward frames; -1, -2, -3 for reverse-complement frames.
    protein : str
        Translated residues from the start 'M' up to, not including, the stop.
    """

    start: int
    end: int
    frame: int
    protein: str

    @property
    def length(self) -> int:
        """Span in nucleotides, ``end - start + 1``."""
        return self.end - self.start + 1

    @property
    def strand(self) -> str:
        return "+" if self.frame > 0 else "-"

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _validate_min_length(min_length: int) -> int:
    if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 1:
        raise InvalidMinimumLengthError(
            f"min_length must be a positive integer number of nucleotides; "
            f"received {min_length!r}."
        )
    return min_length


def _scan_protein(protein: str, min_length: int) -> Iterator[tuple[int, int]]:
    """Yield ``(start_idx, stop_idx)`` residue pairs that pass ``min_length``."""
    open_start = -1

    for idx, residue in enumerate(protein):
        if residue == START_SYMBOL and open_start == -1:
            open_start = idx
        elif residue == STOP_SYMBOL and open_start != -1:
            if (idx - open_start) * 3 >= min_length:
                yield open_start, idx
            open_start = -1


def _forward_orfs(seq: str, frame: int, min_length: int) -> list[ORF]:
    protein = translate(seq, frame)
    return [
        ORF(
            start=start_idx * 3 + frame,
            end=stop_idx * 3 + frame + 2,
            frame=frame + 1,
            protein=protein[start_idx:stop_idx],
        )
        for start_idx, stop_idx in _scan_protein(protein, min_length)
    ]


def _reverse_orfs(rc_seq: str, frame: int, min_length: int, seq_length: int) -> list[ORF]:
    protein = translate(rc_seq, frame)
    return [
        ORF(
            start=seq_length - (stop_idx * 3 + frame + 2),
            end=seq_length - (start_idx * 3 + frame),
            frame=-(frame + 1),
            protein=protein[start_idx:stop_idx],
        )
        for start_idx, stop_idx in _scan_protein(protein, min_length)
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_orfs(clean_sequence: str, min_length: int = DEFAULT_MIN_ORF_LENGTH) -> list[ORF]:
    """
    Find ORFs in all six reading frames.

    Parameters
    ----------
    clean_sequence : str
        Cleaned DNA.
    min_length : int
        Minimum ORF length in nucleotides, counted from the start codon up
        to (not including) the stop codon.  Any positive integer.

    Returns
    -------
    list[ORF]
        Forward frames 1, 2, 3 then reverse frames -1, -2, -3; within each
        frame in left-to-right order of the frame's translation.  Empty for
        an empty sequence or when ``min_length`` exceeds every candidate.

    Raises
    ------
    InvalidMinimumLengthError
        If ``min_length`` is not a positive integer.

    Examples
    --------
    >>> find_orfs("ATGAAATAG", min_length=1)
    [ORF(start=0, end=8, frame=1, protein='MK')]
    """
    _validate_min_length(min_length)
    seq = clean(clean_sequence)
    if not seq:
        return []

    orfs: list[ORF] = []
    for frame in READING_FRAMES:
        frame_orfs = _forward_orfs(seq, frame, min_length)
        logger.debug("Frame +%d: %d ORF(s) >= %d nt.", frame + 1, len(frame_orfs), min_length)
        orfs.extend(frame_orfs)

    rc_seq = reverse_complement(seq)
    for frame in READING_FRAMES:
        frame_orfs = _reverse_orfs(rc_seq, frame, min_length, len(seq))
        logger.debug("Frame -%d: %d ORF(s) >= %d nt.", frame + 1, len(frame_orfs), min_length)
        orfs.extend(frame_orfs)

    return orfs
