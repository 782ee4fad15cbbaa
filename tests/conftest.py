"""Shared fixtures for hyperex tests."""

import gzip
from pathlib import Path

import pytest

from hyperex.primers.catalogue import build_pair

# Forward site, 10 bp region, reverse-primer site (TGCA is its own reverse complement)
FORWARD = "ACGT"
REVERSE = "TGCA"
MIDDLE = "GATTACAGAT"
AMPLICON = FORWARD + MIDDLE + REVERSE


@pytest.fixture
def toy_pair():
    """Primer pair flanking the 10 bp toy region."""
    return build_pair(FORWARD, REVERSE, name="toy")


@pytest.fixture
def write_fasta(tmp_path):
    """Write records to a FASTA file, gzip'd when the name ends in .gz."""

    def _write(records, name="input.fa"):
        path = tmp_path / name
        content = "".join(f">{identifier}\n{sequence}\n" for identifier, sequence in records)
        if name.endswith(".gz"):
            with gzip.open(path, "wt") as f:
                f.write(content)
        else:
            path.write_text(content)
        return path

    return _write


@pytest.fixture
def prefix(tmp_path):
    return tmp_path / "out" / "hyperex_out"
