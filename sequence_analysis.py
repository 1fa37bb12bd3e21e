"""
sequence_analysis.py
====================
SeqScope Toolkit — Analysis Orchestration

Overview
--------
This module does **no scientific computation itself**.  It wires the
Normalizer, Composition Analyzer and Molecular Property Estimator into the
two aggregate results callers render, and runs them over every record of a
FASTA upload.

::

    raw text ──► clean ──┬──► composition / GC / AT ──┐
                         ├──► molecular weight        ├──► SequenceAnalysis
                         └──► melting temperature ────┘

    FASTA text ──► parse_fasta ──► detect type ──► validate ──► analyse
                                                     │
                                                     └──► BatchResult

Export Shape
------------
Every result exposes ``to_dict()``.  ``AnalysisBundle`` packages one
analysis as ``{sequence, sequence_type, analysis, timestamp}`` for callers
that download results; this module never writes files.

Concurrency
-----------
Analyses share no state, so ``analyze_batch`` may fan records out over a
``ThreadPoolExecutor`` (``AnalysisConfig.max_workers > 1``).  Output order
always matches input order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from analysis_config import AnalysisConfig
from fasta_parser import FastaRecord, parse_fasta
from molecular_properties import (
    melting_temperature,
    molecular_weight,
    protein_molecular_weight,
)
from orf_scanner import ORF, find_orfs
from sequence_composition import (
    at_content,
    gc_content,
    nucleotide_composition,
    protein_composition,
)
from sequence_normalization import (
    Alphabet,
    clean,
    coerce_alphabet,
    detect_sequence_type,
    validate,
)

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Analysis records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SequenceAnalysis:
    """
    Statistics for a DNA or RNA sequence.

    Attributes
    ----------
    sequence : str
        Cleaned sequence the statistics were computed on.
    length : int
    gc_content : float
        Percentage in [0, 100].
    at_content : float
        Percentage in [0, 100].  U is not counted.
    composition : dict[str, int]
        Counts for A, T, G, C and U.
    molecular_weight : float
        Approximate weight in Daltons.
    melting_temperature : float | None
        Estimated Tm in °C.
    """

    sequence: str
    length: int
    gc_content: float
    at_content: float
    composition: dict[str, int]
    molecular_weight: float
    melting_temperature: float | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ProteinAnalysis:
    """Statistics for a protein sequence; no GC / AT / Tm fields."""

    sequence: str
    length: int
    molecular_weight: float
    composition: dict[str, int]

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Single-sequence API
# ---------------------------------------------------------------------------


def analyze_sequence(raw: str, is_rna: bool = False) -> SequenceAnalysis:
    """
    Clean a nucleotide sequence and compute every nucleotide statistic.

    Parameters
    ----------
    raw : str
        DNA or RNA text; non-letters are dropped.
    is_rna : bool
        Weigh U instead of T.

    Returns
    -------
    SequenceAnalysis
        All-zero statistics for empty input.
    """
    seq = clean(raw)
    return SequenceAnalysis(
        sequence=seq,
        length=len(seq),
        gc_content=gc_content(seq),
        at_content=at_content(seq),
        composition=nucleotide_composition(seq),
        molecular_weight=molecular_weight(seq, is_rna=is_rna),
        melting_temperature=melting_temperature(seq),
    )


def analyze_protein(raw: str) -> ProteinAnalysis:
    """Clean a protein sequence and compute its composition and weight."""
    seq = clean(raw)
    return ProteinAnalysis(
        sequence=seq,
        length=len(seq),
        molecular_weight=protein_molecular_weight(seq),
        composition=protein_composition(seq),
    )


def analyze(raw: str, alphabet: Alphabet | str) -> SequenceAnalysis | ProteinAnalysis:
    """Run the analysis matching ``alphabet``."""
    resolved = coerce_alphabet(alphabet)
    if resolved is Alphabet.PROTEIN:
        return analyze_protein(raw)
    return analyze_sequence(raw, is_rna=resolved is Alphabet.RNA)


@dataclass(frozen=True, slots=True)
class AnalysisBundle:
    """
    One analysis packaged for export.

    Attributes
    ----------
    sequence : str
        Cleaned sequence.
    sequence_type : Alphabet
    analysis : SequenceAnalysis | ProteinAnalysis
    timestamp : datetime
        UTC creation time.
    """

    sequence: str
    sequence_type: Alphabet
    analysis: SequenceAnalysis | ProteinAnalysis
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def build(cls, raw: str, alphabet: Alphabet | str) -> "AnalysisBundle":
        resolved = coerce_alphabet(alphabet)
        result = analyze(raw, resolved)
        return cls(sequence=result.sequence, sequence_type=resolved, analysis=result)

    def to_dict(self) -> dict:
        return {
            "sequence":      self.sequence,
            "sequence_type": self.sequence_type.value,
            "analysis":      self.analysis.to_dict(),
            "timestamp":     self.timestamp.isoformat(),
        }


# ---------------------------------------------------------------------------
# Batch analysis
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SequenceEntry:
    """
    One record of a batch.

    ``analysis`` is ``None`` when the sequence failed validation against its
    detected type.  ``orfs`` is ``None`` unless ORF scanning was requested
    and the record is valid DNA.
    """

    header: str
    sequence: str
    sequence_type: Alphabet
    is_valid: bool
    analysis: SequenceAnalysis | ProteinAnalysis | None = None
    orfs: tuple[ORF, ...] | None = None

    def to_dict(self) -> dict:
        return {
            "header":        self.header,
            "sequence":      self.sequence,
            "sequence_type": self.sequence_type.value,
            "is_valid":      self.is_valid,
            "analysis":      self.analysis.to_dict() if self.analysis is not None else None,
            "orfs":          [o.to_dict() for o in self.orfs] if self.orfs is not None else None,
        }


@dataclass(frozen=True, slots=True)
class BatchResult:
    """
    Output of :func:`analyze_batch`.

    Attributes
    ----------
    entries : tuple[SequenceEntry, ...]
        One entry per input record, in input order.
    config : AnalysisConfig
        Configuration the batch ran with.
    created_at : datetime
        UTC time the batch finished.
    """

    entries: tuple[SequenceEntry, ...]
    config: AnalysisConfig
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def total_sequences(self) -> int:
        return len(self.entries)

    @property
    def valid_sequences(self) -> int:
        return sum(1 for e in self.entries if e.is_valid)

    def to_dict(self) -> dict:
        return {
            "sequences":       [e.to_dict() for e in self.entries],
            "total_sequences": self.total_sequences,
            "valid_sequences": self.valid_sequences,
            "created_at":      self.created_at.isoformat(),
        }

    def summary(self) -> str:
        """One-line human-readable summary of the batch."""
        return (
            f"{self.total_sequences} sequence(s), "
            f"{self.valid_sequences} valid, "
            f"{self.total_sequences - self.valid_sequences} invalid"
        )


def _analyze_record(
    record: FastaRecord,
    config: AnalysisConfig,
    raw: str | None = None,
) -> SequenceEntry:
    """
    Detect, validate and (when valid) analyse one record.

    ``raw`` is the uncleaned text the record came from.  When given, type
    detection and validation run on it instead of the cleaned sequence.
    """
    source = record.sequence if raw is None else raw
    seq_type = detect_sequence_type(source)
    is_valid = validate(source, seq_type)
    result = analyze(record.sequence, seq_type) if is_valid else None

    orfs = None
    if config.include_orfs and is_valid and seq_type is Alphabet.DNA:
        orfs = tuple(find_orfs(record.sequence, config.min_orf_length))

    logger.debug(
        "Record '%s': type=%s, length=%d, valid=%s",
        record.header, seq_type.value, len(record.sequence), is_valid,
    )
    return SequenceEntry(
        header=record.header,
        sequence=record.sequence,
        sequence_type=seq_type,
        is_valid=is_valid,
        analysis=result,
        orfs=orfs,
    )


def analyze_batch(
    text: str,
    config: AnalysisConfig | None = None,
    fallback_header: str | None = None,
) -> BatchResult:
    """
    Analyse every sequence in an uploaded text.

    The text is parsed as FASTA first.  When that yields no records the
    whole text is treated as a single sequence named ``fallback_header``:
    its type is detected and validated on the text as given, so digits or
    stray header lines make the entry invalid, and the cleaned letters are
    analysed only when it passes.

    Parameters
    ----------
    text : str
        FASTA content or a bare sequence.
    config : AnalysisConfig | None
        Defaults to ``AnalysisConfig()``.
    fallback_header : str | None
        Overrides ``config.fallback_header`` (e.g. an upload's file stem).

    Returns
    -------
    BatchResult
        Empty when ``text`` holds no letters at all.
    """
    config = config or AnalysisConfig()
    header = fallback_header or config.fallback_header

    records = parse_fasta(text)
    if not records:
        bare = clean(text)
        if not bare:
            entries = ()
        else:
            # Detection and validation see the raw text.
            logger.debug("No FASTA headers found; analysing input as '%s'.", header)
            entries = (
                _analyze_record(FastaRecord(header=header, sequence=bare), config, raw=text),
            )
    elif config.max_workers > 1 and len(records) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            entries = tuple(pool.map(lambda r: _analyze_record(r, config), records))
    else:
        entries = tuple(_analyze_record(r, config) for r in records)

    result = BatchResult(entries=entries, config=config)
    logger.info("Batch analysis complete: %s.", result.summary())
    return result
