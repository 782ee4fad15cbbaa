"""Tests for the 16S rRNA primer catalogue."""

import pytest

from hyperex.exceptions import ConfigurationError
from hyperex.models import Orientation
from hyperex.primers.catalogue import (
    REGIONS,
    all_region_pairs,
    build_pair,
    pair_from_mapping,
    pairs_from_patterns,
    primer_name,
    primers_to_region,
    region_pair,
    region_to_primers,
)


def test_primers_to_region():
    assert primers_to_region("CCTACGGGNGGCWGCAG", "GACTACHVGGGTATCTAATCC") == "v3v4"


def test_primers_to_region_same_label():
    assert primers_to_region("GTGCCAGCMGCCGCGGTAA", "GTGCCAGCMGCCGCGGTAA") == "v4"


def test_primers_to_region_unknown():
    assert primers_to_region("ZZZZZ", "AAAAAA") == ""


def test_primers_to_region_partial():
    assert primers_to_region("CCTACGGGNGGCWGCAG", "AAAAAA") == "v3"
    assert primers_to_region("AAAAAA", "GACTACHVGGGTATCTAATCC") == "v4"


def test_primers_to_region_repeated_label():
    assert primers_to_region("CCTACGGGNGGCWGCAG", "ATTACCGCGGCTGCTGG") == "v3v3"


def test_build_pair_partial_label():
    pair = build_pair("CCTACGGGNGGCWGCAG", "TTGACA")
    assert pair.name == "v3"
    assert pair.reverse.name == "reverse_1"


def test_region_to_primer():
    assert region_to_primers("v1v2") == ("AGAGTTTGATCMTGGCTCAG", "CYIACTGCTGCCTCCCGTAG")
    assert region_to_primers("v1v3") == ("AGAGTTTGATCMTGGCTCAG", "ATTACCGCGGCTGCTGG")
    assert region_to_primers("v1v9") == ("AGAGTTTGATCMTGGCTCAG", "TACGGYTACCTTGTTAYGACTT")
    assert region_to_primers("v3v4") == ("CCTACGGGNGGCWGCAG", "GACTACHVGGGTATCTAATCC")
    assert region_to_primers("v3v5") == ("CCTACGGGNGGCWGCAG", "CCGTCAATTYMTTTRAGT")
    assert region_to_primers("v4") == ("GTGCCAGCMGCCGCGGTAA", "GGACTACHVGGGTWTCTAAT")
    assert region_to_primers("v4v5") == ("GTGYCAGCMGCCGCGGTAA", "CCCCGYCAATTCMTTTRAGT")
    assert region_to_primers("v5v7") == ("AACMGGATTAGATACCCKG", "ACGTCATCCCCACCTTCC")
    assert region_to_primers("v6v9") == ("TAAAACTYAAAKGAATTGACGGGG", "TACGGYTACCTTGTTAYGACTT")
    assert region_to_primers("V7V9") == ("YAACGAGCGCAACCC", "TACGGYTACCTTGTTAYGACTT")


def test_region_to_primer_unknown():
    with pytest.raises(ConfigurationError):
        region_to_primers("v2v8")


def test_primer_name():
    assert primer_name("cctacgggnggcwgcag", Orientation.FORWARD) == "341F"
    assert primer_name("CCTACGGGNGGCWGCAG", Orientation.REVERSE) is None


def test_region_pair():
    pair = region_pair("v1v2")
    assert pair.name == "v1v2"
    assert pair.forward.name == "27F"
    assert pair.reverse.name == "337R"
    assert pair.reverse.orientation is Orientation.REVERSE


def test_all_region_pairs():
    pairs = all_region_pairs()
    assert [pair.name for pair in pairs] == list(REGIONS)


def test_build_pair_names():
    pair = build_pair("ACGTAC", "TTGACA", index=3)
    assert pair.forward.name == "forward_3"
    assert pair.reverse.name == "reverse_3"
    assert pair.name == "forward_3-reverse_3"

    known = build_pair("GTGCCAGCMGCCGCGGTAA", "GGACTACHVGGGTWTCTAAT")
    assert (known.forward.name, known.reverse.name, known.name) == ("515F", "806R", "v4")


def test_pairs_from_patterns():
    pairs = pairs_from_patterns(["ACGT", "CCGG"], ["TGCA", "GGCC"])
    assert [(pair.forward.pattern, pair.reverse.pattern) for pair in pairs] == [
        ("ACGT", "TGCA"),
        ("CCGG", "GGCC"),
    ]


def test_pairs_from_patterns_not_ok():
    with pytest.raises(ConfigurationError):
        pairs_from_patterns(["ab", "cd", "ef"], ["ab"])


def test_unsupported_symbol_in_pattern():
    with pytest.raises(ConfigurationError):
        pairs_from_patterns(["ACGXT"], ["TGCA"])


def test_pair_from_mapping():
    pair = pair_from_mapping({"name": "V3-V4", "forward": "CCTACGGGNGGCWGCAG", "reverse": "GACTACHVGGGTATCTAATCC"})
    assert pair.name == "V3-V4"
    assert pair.forward.name == "341F"

    with pytest.raises(ConfigurationError):
        pair_from_mapping({"name": "broken", "forward": "ACGT"})
    with pytest.raises(ConfigurationError):
        pair_from_mapping("ACGT,TGCA")
