import json
from datetime import datetime

import pytest

from analysis_config import AnalysisConfig
from orf_scanner import ORF
from sequence_analysis import (
    AnalysisBundle,
    ProteinAnalysis,
    SequenceAnalysis,
    analyze,
    analyze_batch,
    analyze_protein,
    analyze_sequence,
)
from sequence_normalization import Alphabet, clean


def test_analyze_sequence():
    result = analyze_sequence("atgc 12\n")
    assert result.sequence == "ATGC"
    assert result.length == 4
    assert result.gc_content == 50.0
    assert result.at_content == 50.0
    assert result.composition == {"A": 1, "T": 1, "G": 1, "C": 1, "U": 0}
    assert result.molecular_weight == pytest.approx(1307.8)
    assert result.melting_temperature == 12


def test_analyze_empty_sequence():
    result = analyze_sequence("")
    assert result.length == 0
    assert result.gc_content == 0.0
    assert result.at_content == 0.0
    assert sum(result.composition.values()) == 0
    assert result.molecular_weight == 0.0


def test_analyze_rna_sequence():
    result = analyze_sequence("AUGC", is_rna=True)
    assert result.molecular_weight == pytest.approx(1293.8)
    assert result.composition["U"] == 1
    assert result.at_content == 25.0


def test_analyze_protein():
    result = analyze_protein("mka*")
    assert result.sequence == "MKA"
    assert result.composition == {"M": 1, "K": 1, "A": 1}
    assert result.molecular_weight == pytest.approx(149.2 + 146.2 + 89.1)


def test_protein_analysis_drops_stop_symbol_while_cleaning():
    # clean() keeps letters only, so "*" never reaches the composition.
    assert analyze_protein("MK").length == 2
    assert "*" not in analyze_protein("MK*").composition


def test_analyze_dispatches_on_alphabet():
    assert isinstance(analyze("MKV", "protein"), ProteinAnalysis)
    rna = analyze("AUG", Alphabet.RNA)
    assert isinstance(rna, SequenceAnalysis)
    assert rna.molecular_weight == pytest.approx(331.2 + 308.2 + 347.2)


def test_analysis_to_dict_is_json_ready():
    data = json.loads(json.dumps(analyze_sequence("ATGC").to_dict()))
    assert set(data) == {
        "sequence", "length", "gc_content", "at_content",
        "composition", "molecular_weight", "melting_temperature",
    }
    assert set(analyze_protein("MK").to_dict()) == {
        "sequence", "length", "molecular_weight", "composition",
    }


def test_analysis_bundle():
    bundle = AnalysisBundle.build("atgc", "dna")
    data = bundle.to_dict()
    assert data["sequence"] == "ATGC"
    assert data["sequence_type"] == "dna"
    assert data["analysis"]["gc_content"] == 50.0
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


FASTA = ">d\nATGC\n>r\nAUGC\n>p\nMKV\n>bad\nBBB\n"


def test_analyze_batch_detects_types_and_validity():
    result = analyze_batch(FASTA)
    types = [(e.header, e.sequence_type, e.is_valid) for e in result.entries]
    assert types == [
        ("d", Alphabet.DNA, True),
        ("r", Alphabet.RNA, True),
        ("p", Alphabet.PROTEIN, True),
        ("bad", Alphabet.DNA, False),
    ]
    assert result.total_sequences == 4
    assert result.valid_sequences == 3
    assert result.entries[3].analysis is None
    assert isinstance(result.entries[2].analysis, ProteinAnalysis)
    assert result.entries[1].analysis.molecular_weight == pytest.approx(1293.8)


def test_analyze_batch_falls_back_to_single_sequence():
    result = analyze_batch("ATGC\nATGC", fallback_header="upload")
    assert [(e.header, e.sequence) for e in result.entries] == [("upload", "ATGCATGC")]


def test_analyze_batch_uses_config_fallback_header():
    config = AnalysisConfig(fallback_header="pasted")
    assert analyze_batch("GGCC", config=config).entries[0].header == "pasted"


@pytest.mark.parametrize("text", ["ATG123\nCGT", "ATGC-ATGC", "ATGC;\n"])
def test_headerless_upload_with_non_letters_is_invalid(text):
    result = analyze_batch(text)
    assert result.total_sequences == 1
    assert result.valid_sequences == 0
    entry = result.entries[0]
    assert entry.is_valid is False
    assert entry.analysis is None
    assert entry.sequence == clean(text)


def test_headerless_upload_never_gets_orfs_when_invalid():
    config = AnalysisConfig(min_orf_length=3, include_orfs=True)
    assert analyze_batch("ATG1AAATAG", config=config).entries[0].orfs is None


def test_headerless_upload_with_whitespace_stays_valid():
    entry = analyze_batch("  atgc\r\n\tATGC \n").entries[0]
    assert entry.is_valid is True
    assert entry.sequence == "ATGCATGC"
    assert entry.analysis.gc_content == 50.0


def test_upload_whose_records_are_all_dropped_is_not_valid():
    # Header lines only: no record survives parsing, so the text falls back.
    result = analyze_batch(">h1\n>h2\n")
    assert result.valid_sequences == 0
    assert [(e.sequence, e.is_valid, e.analysis) for e in result.entries] == [
        ("HH", False, None),
    ]


def test_upload_with_only_blank_records_and_no_letters_is_empty():
    assert analyze_batch(">\n123\n>\n").total_sequences == 0


def test_analyze_batch_empty_input():
    result = analyze_batch("  \n 12 ")
    assert result.total_sequences == 0
    assert result.summary() == "0 sequence(s), 0 valid, 0 invalid"


def test_analyze_batch_orf_scanning():
    config = AnalysisConfig(min_orf_length=3, include_orfs=True)
    result = analyze_batch(">o\nATGAAATAG\n>p\nMKV\n", config=config)
    assert result.entries[0].orfs == (ORF(0, 8, 1, "MK"),)
    assert result.entries[1].orfs is None


def test_analyze_batch_skips_orfs_by_default():
    assert analyze_batch(">o\nATGAAATAG\n").entries[0].orfs is None


def test_threaded_batch_matches_sequential():
    fasta = "".join(f">s{i}\n{'ATGC' * (i + 1)}\n" for i in range(20))
    sequential = analyze_batch(fasta)
    threaded = analyze_batch(fasta, config=AnalysisConfig(max_workers=4))
    assert threaded.entries == sequential.entries


def test_batch_to_dict_is_json_serialisable():
    result = analyze_batch(FASTA, config=AnalysisConfig(include_orfs=True))
    data = json.loads(json.dumps(result.to_dict()))
    assert data["total_sequences"] == 4
    assert data["valid_sequences"] == 3
    assert data["sequences"][0]["sequence_type"] == "dna"
    assert data["sequences"][0]["orfs"] == []
    assert data["sequences"][3]["analysis"] is None
    assert "created_at" in data
