"""Tests for the IUPAC ambiguity table."""

import pytest

from hyperex.exceptions import ConfigurationError, InvalidSymbolError
from hyperex.iupac import (
    CONCRETE_BASES,
    IUPAC_CODES,
    Alphabet,
    compatible,
    complement,
    expansion,
    reverse_complement,
    sequence_type,
    symbol_masks,
)

IUPAC_SYMBOLS = "ACGTURYSWKMBDHVN"


class TestAmbiguityTable:
    """Tests for symbol expansion and compatibility."""

    def test_every_iupac_symbol_has_a_mapping(self):
        for symbol in IUPAC_SYMBOLS:
            assert expansion(symbol)

    @pytest.mark.parametrize("symbol", list(IUPAC_SYMBOLS))
    def test_compatible_iff_base_in_expansion(self, symbol):
        for base in CONCRETE_BASES:
            assert compatible(symbol, base) == (base in IUPAC_CODES[symbol])

    def test_case_insensitive(self):
        assert compatible("r", "a")
        assert not compatible("y", "g")
        assert expansion("n") == frozenset("ACGT")

    def test_u_reads_as_t(self):
        assert compatible("U", "T")
        assert compatible("T", "U")
        assert not compatible("U", "A")

    def test_symmetric_for_ambiguous_targets(self):
        assert compatible("A", "N")
        assert compatible("N", "A")
        assert compatible("R", "K")
        assert not compatible("R", "Y")

    def test_unknown_symbol_is_an_error(self):
        with pytest.raises(InvalidSymbolError):
            compatible("X", "A")
        with pytest.raises(ConfigurationError):
            compatible("A", "-")

    def test_table_is_immutable(self):
        with pytest.raises(TypeError):
            IUPAC_CODES["X"] = frozenset("A")

    def test_symbol_masks_reports_position(self):
        with pytest.raises(InvalidSymbolError) as excinfo:
            symbol_masks("ACGXT", context="primer test")
        assert excinfo.value.symbol == "X"
        assert excinfo.value.position == 3


class TestComplement:
    """Tests for complement and reverse complement."""

    def test_complement_dna(self):
        assert complement("ATCGATCGATCGATCGRYKBVDH") == "TAGCTAGCTAGCTAGCYRMVBHD"

    def test_complement_rna(self):
        assert complement("AUCGAUCGAUCGAUCGRYKBVDHM", Alphabet.RNA) == "UAGCUAGCUAGCUAGCYRMVBHDK"

    def test_reverse_complement(self):
        assert reverse_complement("GTGCCAGCMGCCGCGGTAA") == "TTACCGCGGCKGCTGGCAC"

    def test_self_complementary_codes(self):
        assert complement("NSW") == "NSW"

    @pytest.mark.parametrize("sequence", [
        "ACGTRYSWKMBDHVN",
        "AGAGTTTGATCMTGGCTCAG",
        "NNNNACGTNNNN",
        "",
    ])
    def test_reverse_complement_is_an_involution(self, sequence):
        assert reverse_complement(reverse_complement(sequence)) == sequence

    def test_rna_involution(self):
        sequence = "AUCGRYKMBVDHN"
        twice = reverse_complement(reverse_complement(sequence, Alphabet.RNA), Alphabet.RNA)
        assert twice == sequence

    def test_lower_case_input(self):
        assert complement("acgtn") == "TGCAN"
        assert reverse_complement(reverse_complement("acgtn")) == "ACGTN"

    def test_unknown_symbol(self):
        with pytest.raises(InvalidSymbolError):
            reverse_complement("ACGZ")


class TestSequenceType:
    """Tests for alphabet detection."""

    def test_dna(self):
        assert sequence_type("ATCGATCGATCG") is Alphabet.DNA

    def test_dna_iupac(self):
        assert sequence_type("ATCGMTGCAATCG") is Alphabet.DNA

    def test_rna(self):
        assert sequence_type("AGCUUUGCA") is Alphabet.RNA

    def test_rna_iupac(self):
        assert sequence_type("GUUUUAACCCAAM") is Alphabet.RNA

    def test_unknown(self):
        assert sequence_type("ATCXXXRMGU") is None
