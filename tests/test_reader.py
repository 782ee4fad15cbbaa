"""Tests for the FASTA/FASTQ reader."""

import bz2
import gzip
import io
import lzma

import pytest

from hyperex.core.reader import Compression, SequenceReader
from hyperex.exceptions import InputError

FASTA = ">seq1 first record\nacgtacgt\nACGT\n>seq2\nTTTT\n"
FASTQ = "@read1\nACGTN\n+\nIIIII\n@read2\nGGCC\n+\nIIII\n"


def read_all(path):
    return [(record.identifier, record.sequence) for record in SequenceReader(path)]


class TestDetection:
    """Tests for compression and format detection."""

    @pytest.mark.parametrize("head, expected", [
        (b"\x1f\x8b\x08\x00", Compression.GZIP),
        (b"BZh91AY", Compression.BZIP2),
        (b"\xfd7zXZ\x00\x00", Compression.XZ),
        (b">seq1\nACGT", Compression.NONE),
        (b"", Compression.NONE),
    ])
    def test_detect_compression(self, head, expected):
        assert SequenceReader.detect_compression(head) is expected

    def test_detect_format(self):
        assert SequenceReader.detect_format(b"\n\n>seq") == "fasta"
        assert SequenceReader.detect_format(b"@read") == "fastq"
        assert SequenceReader.detect_format(b"  \n") is None

    def test_unknown_format(self):
        with pytest.raises(InputError):
            SequenceReader.detect_format(b"LOCUS       NC_000913")


class TestRecords:
    """Tests for record iteration."""

    def test_plain_fasta(self, tmp_path):
        path = tmp_path / "input.fa"
        path.write_text(FASTA)

        assert read_all(path) == [("seq1", "ACGTACGTACGT"), ("seq2", "TTTT")]

    def test_description_is_kept(self, tmp_path):
        path = tmp_path / "input.fa"
        path.write_text(FASTA)

        first = next(iter(SequenceReader(path)))
        assert first.description == "seq1 first record"

    @pytest.mark.parametrize("suffix, opener, compression", [
        ("gz", gzip.open, Compression.GZIP),
        ("bz2", bz2.open, Compression.BZIP2),
        ("xz", lzma.open, Compression.XZ),
    ])
    def test_compressed_fasta(self, tmp_path, suffix, opener, compression):
        path = tmp_path / f"input.fa.{suffix}"
        with opener(path, "wt") as f:
            f.write(FASTA)

        reader = SequenceReader(path)
        assert [record.identifier for record in reader] == ["seq1", "seq2"]
        assert reader.compression is compression
        assert reader.format == "fasta"

    def test_fastq(self, tmp_path):
        path = tmp_path / "reads.fq.gz"
        with gzip.open(path, "wt") as f:
            f.write(FASTQ)

        assert read_all(path) == [("read1", "ACGTN"), ("read2", "GGCC")]

    def test_empty_input(self, tmp_path):
        path = tmp_path / "empty.fa"
        path.write_text("")

        assert read_all(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            SequenceReader(tmp_path / "missing.fa")

    def test_unrecognized_content(self, tmp_path):
        path = tmp_path / "table.tsv"
        path.write_text("id\tsequence\nseq1\tACGT\n")

        with pytest.raises(InputError) as excinfo:
            read_all(path)
        assert "table.tsv" in str(excinfo.value)

    def test_truncated_fastq(self, tmp_path):
        path = tmp_path / "broken.fq"
        path.write_text("@read1\nACGT\n+\nII\n")

        with pytest.raises(InputError):
            read_all(path)


class TestStandardInput:
    """Tests for reading from "-"."""

    @staticmethod
    def stdin(monkeypatch, data):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BufferedReader(io.BytesIO(data))))

    def test_plain_fasta(self, monkeypatch):
        self.stdin(monkeypatch, FASTA.encode())

        reader = SequenceReader("-")
        assert [(r.identifier, r.sequence) for r in reader] == [("seq1", "ACGTACGTACGT"), ("seq2", "TTTT")]
        assert reader.compression is Compression.NONE

    def test_gzip_fastq(self, monkeypatch):
        self.stdin(monkeypatch, gzip.compress(FASTQ.encode()))

        reader = SequenceReader("-")
        assert [(r.identifier, r.sequence) for r in reader] == [("read1", "ACGTN"), ("read2", "GGCC")]
        assert reader.compression is Compression.GZIP
        assert reader.format == "fastq"

    def test_empty_stdin(self, monkeypatch):
        self.stdin(monkeypatch, b"")

        assert read_all("-") == []
