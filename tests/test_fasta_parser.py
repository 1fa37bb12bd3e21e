import pytest
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from fasta_parser import (
    FastaRecord,
    fasta_record_from_biopython,
    load_fasta,
    parse_fasta,
)


def test_parse_multi_record_fasta():
    assert parse_fasta(">h1\nATG\nCGT\n>h2\nGGG\n") == [
        FastaRecord(header="h1", sequence="ATGCGT"),
        FastaRecord(header="h2", sequence="GGG"),
    ]


def test_header_and_lines_are_stripped():
    records = parse_fasta(">  sp|P1| some protein  \r\n mk v \r\nLL*\r\n")
    assert records == [FastaRecord("sp|P1| some protein", "MKVLL")]


def test_sequences_are_cleaned():
    assert parse_fasta(">x\nAT1G 2\nc-c\n") == [FastaRecord("x", "ATGCC")]


def test_record_without_sequence_is_dropped():
    assert parse_fasta(">a\n>b\nATG") == [FastaRecord("b", "ATG")]
    assert parse_fasta(">a\n\n\n") == []


def test_record_with_only_non_letters_is_dropped():
    assert parse_fasta(">a\n123 456\n>b\nGG\n") == [FastaRecord("b", "GG")]


def test_record_without_header_is_dropped():
    assert parse_fasta(">\nATG\n>c\nGG") == [FastaRecord("c", "GG")]


def test_text_before_first_header_is_ignored():
    assert parse_fasta("ATG\n>x\nCC") == [FastaRecord("x", "CC")]


def test_plain_sequence_yields_no_records():
    assert parse_fasta("ATGCATGC") == []
    assert parse_fasta("") == []


def test_indented_header_is_sequence_text():
    assert parse_fasta(">a\n >b\nCC") == [FastaRecord("a", "BCC")]


def test_to_fasta_wraps_lines():
    record = FastaRecord("h", "ATGCATGC")
    assert record.to_fasta(line_width=3) == ">h\nATG\nCAT\nGC\n"
    assert record.to_fasta(line_width=0) == ">h\nATGCATGC\n"


def test_to_fasta_round_trips_through_parser():
    record = FastaRecord("gene1 chromosome 4", "ATG" * 50)
    assert parse_fasta(record.to_fasta()) == [record]


def test_to_seqrecord():
    seq_record = FastaRecord("h1 first gene", "ATGC").to_seqrecord()
    assert seq_record.id == "h1"
    assert seq_record.description == "h1 first gene"
    assert str(seq_record.seq) == "ATGC"


def test_from_biopython_cleans_sequence():
    seq_record = SeqRecord(Seq("atg-c"), id="x", description="x some gene")
    assert fasta_record_from_biopython(seq_record) == FastaRecord("x some gene", "ATGC")


def test_from_biopython_ignores_default_description():
    assert fasta_record_from_biopython(SeqRecord(Seq("acgt"), id="r9")) == FastaRecord("r9", "ACGT")


def test_from_biopython_without_id_or_description():
    assert fasta_record_from_biopython(SeqRecord(Seq("GG"))) == FastaRecord("", "GG")


def test_record_to_dict():
    assert FastaRecord("h", "GG").to_dict() == {"header": "h", "sequence": "GG"}


def test_load_fasta(tmp_path):
    path = tmp_path / "reads.fasta"
    path.write_text(">r1\nACGT\n>r2\nTTGA\n", encoding="utf-8")
    assert load_fasta(path) == [FastaRecord("r1", "ACGT"), FastaRecord("r2", "TTGA")]


def test_load_fasta_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_fasta(tmp_path / "missing.fa")
