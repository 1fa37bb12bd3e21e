"""
analysis_config.py
==================
SeqScope Toolkit — Analysis Configuration

Environment Variables
---------------------
  SEQSCOPE_MIN_ORF_LENGTH   — default minimum ORF length (nucleotides)
  SEQSCOPE_MAX_WORKERS      — worker threads for batch analysis
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Final, Mapping

from orf_scanner import DEFAULT_MIN_ORF_LENGTH

logger = logging.getLogger(__name__)

ENV_MIN_ORF_LENGTH: Final[str] = "SEQSCOPE_MIN_ORF_LENGTH"
ENV_MAX_WORKERS: Final[str] = "SEQSCOPE_MAX_WORKERS"


class InvalidConfigError(ValueError):
    """Raised when :class:`AnalysisConfig` contains invalid parameters."""


@dataclass
class AnalysisConfig:
    """
    Settings shared by batch and single-sequence analysis.

    Parameters
    ----------
    min_orf_length : int
        Minimum ORF length in nucleotides used by batch ORF scanning.
    max_workers : int
        Threads used by ``analyze_batch``.  ``1`` runs records sequentially.
    fallback_header : str
        Header given to text that contains no FASTA records.
    include_orfs : bool
        Scan valid DNA records of a batch for ORFs.
    """

    min_orf_length: int = DEFAULT_MIN_ORF_LENGTH
    max_workers: int = 1
    fallback_header: str = "sequence"
    include_orfs: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Raises
        ------
        InvalidConfigError
            On any validation failure.
        """
        for name in ("min_orf_length", "max_workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidConfigError(
                    f"'{name}' must be a positive integer, got {value!r}."
                )
        if not isinstance(self.fallback_header, str) or not self.fallback_header.strip():
            raise InvalidConfigError("'fallback_header' must be a non-empty string.")
        if not isinstance(self.include_orfs, bool):
            raise InvalidConfigError(
                f"'include_orfs' must be a bool, got {self.include_orfs!r}."
            )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "AnalysisConfig":
        """
        Build a config from a mapping of field names.

        Raises
        ------
        InvalidConfigError
            If unknown keys are present or values fail validation.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise InvalidConfigError(f"Unknown configuration key(s): {unknown}")
        return cls(**dict(config_dict))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AnalysisConfig":
        """
        Build a config from ``SEQSCOPE_*`` environment variables.

        Unset variables keep their defaults.

        Raises
        ------
        InvalidConfigError
            If a variable is set but is not an integer.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}

        for key, name in ((ENV_MIN_ORF_LENGTH, "min_orf_length"), (ENV_MAX_WORKERS, "max_workers")):
            raw = env.get(key)
            if raw is None or not raw.strip():
                continue
            try:
                overrides[name] = int(raw)
            except ValueError:
                raise InvalidConfigError(
                    f"Environment variable {key} must be an integer, got {raw!r}."
                ) from None

        if overrides:
            logger.debug("Configuration overrides from environment: %s", overrides)
        return cls(**overrides)
