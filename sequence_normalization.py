"""
sequence_normalization.py
=========================
SeqScope Toolkit — Normalizer

Responsibilities
----------------
- Reduce raw user text (pasted sequences, FASTA bodies) to a clean,
  uppercase, letters-only sequence
- Validate raw text against the DNA, RNA, or protein alphabet
- Guess the alphabet of an unlabelled sequence

Data Flow
---------
    Input  : Raw text (any characters, any case)
    Output : Clean sequence string | bool | Alphabet

Malformed biological input never raises here: ``clean`` silently drops
characters and ``validate`` answers ``False``.  Only an unknown alphabet
*name* is treated as a caller error.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Final

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Alphabets
# ---------------------------------------------------------------------------


class Alphabet(str, Enum):
    """Sequence alphabets understood by the toolkit."""

    DNA     = "dna"
    RNA     = "rna"
    PROTEIN = "protein"


#: Symbols accepted by ``validate`` for each alphabet.
ALPHABET_SYMBOLS: Final[dict[Alphabet, frozenset[str]]] = {
    Alphabet.DNA:     frozenset("ATGC"),
    Alphabet.RNA:     frozenset("AUGC"),
    Alphabet.PROTEIN: frozenset("ACDEFGHIKLMNPQRSTVWY*"),
}

#: Everything that is not an ASCII letter is discarded by ``clean``.
_NON_LETTER: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z]")

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")

# re.ASCII keeps IGNORECASE from folding e.g. KELVIN SIGN onto "K".
_ALPHABET_PATTERNS: Final[dict[Alphabet, re.Pattern[str]]] = {
    Alphabet.DNA:     re.compile(r"[ATGC]+", re.IGNORECASE | re.ASCII),
    Alphabet.RNA:     re.compile(r"[AUGC]+", re.IGNORECASE | re.ASCII),
    Alphabet.PROTEIN: re.compile(r"[ACDEFGHIKLMNPQRSTVWY*]+", re.IGNORECASE | re.ASCII),
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnknownAlphabetError(ValueError):
    """Raised when an alphabet name is not one of dna / rna / protein."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def coerce_alphabet(alphabet: Alphabet | str) -> Alphabet:
    """
    Resolve an ``Alphabet`` member from a member or its (case-insensitive) name.

    Raises
    ------
    UnknownAlphabetError
    """
    if isinstance(alphabet, Alphabet):
        return alphabet
    try:
        return Alphabet(str(alphabet).strip().lower())
    except ValueError:
        valid = [a.value for a in Alphabet]
        raise UnknownAlphabetError(
            f"Unknown alphabet {alphabet!r}; expected one of {valid}."
        ) from None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def clean(raw: str) -> str:
    """
    Strip every non-letter character and upper-case the remainder.

    Digits, punctuation, whitespace and line breaks are discarded.  Never
    fails; an empty (or ``None``) input yields an empty string.

    Parameters
    ----------
    raw : str
        Arbitrary user-supplied text.

    Returns
    -------
    str
        Uppercase string containing only A–Z.
    """
    if not raw:
        return ""
    return _NON_LETTER.sub("", raw).upper()


def validate(raw: str, alphabet: Alphabet | str) -> bool:
    """
    Check raw text against an alphabet.

    Whitespace anywhere in ``raw`` (including newlines) is tolerated; any
    other character outside the alphabet, digits included, fails the check.
    Matching is case-insensitive.  Blank input is never valid.

    Parameters
    ----------
    raw : str
        Unprocessed input text.  Not pre-cleaned.
    alphabet : Alphabet | str
        ``Alphabet`` member or one of ``"dna"``, ``"rna"``, ``"protein"``.

    Returns
    -------
    bool

    Raises
    ------
    UnknownAlphabetError
        If ``alphabet`` does not name a known alphabet.
    """
    resolved = coerce_alphabet(alphabet)
    if not raw:
        return False
    compact = _WHITESPACE.sub("", raw)
    return _ALPHABET_PATTERNS[resolved].fullmatch(compact) is not None


def validate_dna(raw: str) -> bool:
    return validate(raw, Alphabet.DNA)


def validate_rna(raw: str) -> bool:
    return validate(raw, Alphabet.RNA)


def validate_protein(raw: str) -> bool:
    return validate(raw, Alphabet.PROTEIN)


def detect_sequence_type(raw: str) -> Alphabet:
    """
    Guess the alphabet of an unlabelled sequence.

    DNA is tried first, then RNA, then protein.  Text matching none of them
    is reported as DNA so that callers always receive a concrete alphabet;
    pair this with ``validate`` to know whether the guess actually holds.
    """
    for candidate in (Alphabet.DNA, Alphabet.RNA, Alphabet.PROTEIN):
        if validate(raw, candidate):
            return candidate

    logger.debug("No alphabet matched input of length %d; defaulting to DNA.", len(raw or ""))
    return Alphabet.DNA
