"""
fasta_parser.py
===============
SeqScope Toolkit — FASTA Parser

Responsibilities
----------------
- Split multi-record FASTA text into ``FastaRecord`` objects
- Clean every record's sequence through the Normalizer
- Convert records to and from Biopython ``SeqRecord`` objects

Parsing Rules
-------------
- A line beginning with '>' starts a new record; the header is the rest of
  the line, stripped.  Starting a record flushes the previous one.
- Every other line is stripped and appended to the current sequence.
- Records whose header or cleaned sequence is empty are dropped silently.
- Text before the first header has no header and is therefore dropped.

The parser is hand-written rather than delegated to ``Bio.SeqIO`` because
headers must be kept whole and records without residues must vanish.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Final

from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from sequence_normalization import clean

logger = logging.getLogger(__name__)

#: Marker that opens a FASTA header line.
HEADER_PREFIX: Final[str] = ">"

#: Placeholders Biopython assigns to a SeqRecord built without them.
_UNKNOWN_DESCRIPTION: Final[str] = "<unknown description>"
_UNKNOWN_ID: Final[str] = "<unknown id>"


@dataclass(frozen=True, slots=True)
class FastaRecord:
    """
    One FASTA entry.

    Attributes
    ----------
    header : str
        Header line without the leading '>' and surrounding whitespace.
    sequence : str
        Cleaned (uppercase, letters-only) sequence.
    """

    header: str
    sequence: str

    @property
    def identifier(self) -> str:
        """First whitespace-delimited token of the header."""
        parts = self.header.split(None, 1)
        return parts[0] if parts else ""

    def to_fasta(self, line_width: int = 60) -> str:
        """
        Return a FASTA-formatted string for this record.

        Parameters
        ----------
        line_width : int
            Characters per sequence line.  Use 0 or a negative value to
            emit the sequence on a single line.
        """
        if line_width > 0:
            wrapped = "\n".join(
                self.sequence[i : i + line_width]
                for i in range(0, len(self.sequence), line_width)
            )
        else:
            wrapped = self.sequence
        return f"{HEADER_PREFIX}{self.header}\n{wrapped}\n"

    def to_seqrecord(self) -> SeqRecord:
        """Convert to a Biopython ``SeqRecord`` (id = first header token)."""
        return SeqRecord(
            Seq(self.sequence),
            id=self.identifier,
            description=self.header,
        )

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_fasta(text: str) -> list[FastaRecord]:
    """
    Parse FASTA text into an ordered list of records.

    Parameters
    ----------
    text : str
        Raw FASTA content.  ``\\r\\n`` line endings are tolerated because
        every line is stripped.

    Returns
    -------
    list[FastaRecord]
        Records in input order.  Empty when nothing parseable is present.

    Examples
    --------
    >>> parse_fasta(">h1\\nATG\\nCGT\\n>h2\\nGGG\\n")
    [FastaRecord(header='h1', sequence='ATGCGT'), FastaRecord(header='h2', sequence='GGG')]
    """
    records: list[FastaRecord] = []
    header = ""
    chunks: list[str] = []

    def _flush() -> None:
        sequence = clean("".join(chunks))
        if header and sequence:
            records.append(FastaRecord(header=header, sequence=sequence))
        elif header or chunks:
            logger.debug("Dropping FASTA record with empty header or sequence: %r", header)

    for line in (text or "").split("\n"):
        if line.startswith(HEADER_PREFIX):
            _flush()
            header = line[len(HEADER_PREFIX):].strip()
            chunks = []
        else:
            chunks.append(line.strip())

    _flush()
    return records


def load_fasta(path: str | Path) -> list[FastaRecord]:
    """
    Read a FASTA file and parse it with ``parse_fasta``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"FASTA file not found: {path}")

    records = parse_fasta(path.read_text(encoding="utf-8"))
    logger.info("Loaded %d FASTA record(s) from '%s'.", len(records), path)
    return records


def fasta_record_from_biopython(seq_record: SeqRecord) -> FastaRecord:
    """
    Convert a Biopython ``SeqRecord`` into a ``FastaRecord``.

    The header is the record's description, falling back to its id when the
    description is empty or Biopython's ``"<unknown description>"`` default.
    The sequence is cleaned like parsed input.
    """
    description = seq_record.description
    if description == _UNKNOWN_DESCRIPTION:
        description = ""
    record_id = "" if seq_record.id == _UNKNOWN_ID else seq_record.id
    header = (description or record_id or "").strip()
    return FastaRecord(header=header, sequence=clean(str(seq_record.seq)))
