"""IUPAC nucleotide ambiguity table.

Every symbol maps to the set of concrete bases it stands for. The table is
built once at import time and exposed read-only. Matching works on bitmasks
(A=1, C=2, G=4, T=8) so that two symbols are compatible when their expansion
sets intersect.
"""

from __future__ import annotations

from enum import Enum
from functools import reduce
from operator import or_
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from .exceptions import InvalidSymbolError


class Alphabet(Enum):
    """Nucleic acid alphabet of a sequence."""
    DNA = "dna"
    RNA = "rna"


CONCRETE_BASES = "ACGT"

_BASE_BITS = {"A": 1, "C": 2, "G": 4, "T": 8}

# U is read as T; I (inosine) pairs with any base.
IUPAC_CODES: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "A": frozenset("A"),
    "C": frozenset("C"),
    "G": frozenset("G"),
    "T": frozenset("T"),
    "U": frozenset("T"),
    "R": frozenset("AG"),
    "Y": frozenset("CT"),
    "S": frozenset("CG"),
    "W": frozenset("AT"),
    "K": frozenset("GT"),
    "M": frozenset("AC"),
    "B": frozenset("CGT"),
    "D": frozenset("AGT"),
    "H": frozenset("ACT"),
    "V": frozenset("ACG"),
    "N": frozenset("ACGT"),
    "I": frozenset("ACGT"),
})

SYMBOL_MASKS: Mapping[str, int] = MappingProxyType({
    symbol: reduce(or_, (_BASE_BITS[base] for base in bases))
    for symbol, bases in IUPAC_CODES.items()
})

VALID_SYMBOLS = frozenset(IUPAC_CODES)

_DNA_COMPLEMENT = str.maketrans(
    "ACGTURYKMBVDHSWNI",
    "TGCAAYRMKVBHDSWNI",
)

_RNA_COMPLEMENT = str.maketrans(
    "ACGURYKMBVDHSWNI",
    "UGCAYRMKVBHDSWNI",
)


def expansion(symbol: str) -> FrozenSet[str]:
    """Return the concrete bases a symbol stands for."""
    try:
        return IUPAC_CODES[symbol.upper()]
    except KeyError:
        raise InvalidSymbolError(symbol) from None


def compatible(pattern_symbol: str, base: str) -> bool:
    """Return True if ``base`` may pair with ``pattern_symbol``.

    The relation is symmetric: a target ``N`` is compatible with any primer
    symbol, exactly as a primer ``N`` is compatible with any target base.
    """
    try:
        return bool(SYMBOL_MASKS[pattern_symbol.upper()] & SYMBOL_MASKS[base.upper()])
    except KeyError as e:
        raise InvalidSymbolError(e.args[0]) from None


def symbol_masks(sequence: str, context: Optional[str] = None) -> Tuple[int, ...]:
    """Encode a sequence as a tuple of ambiguity bitmasks.

    Raises:
        InvalidSymbolError: On the first symbol without a table entry
    """
    masks = []
    for position, symbol in enumerate(sequence.upper()):
        mask = SYMBOL_MASKS.get(symbol)
        if mask is None:
            raise InvalidSymbolError(symbol, position=position, context=context)
        masks.append(mask)
    return tuple(masks)


def sequence_type(sequence: str) -> Optional[Alphabet]:
    """Guess the alphabet of a sequence, or None if it holds unknown symbols."""
    symbols = set(sequence.upper())
    if not symbols <= VALID_SYMBOLS:
        return None
    if "U" in symbols and "T" not in symbols:
        return Alphabet.RNA
    return Alphabet.DNA


def complement(sequence: str, alphabet: Alphabet = Alphabet.DNA) -> str:
    """Complement every symbol of a sequence, returned upper-cased."""
    sequence = sequence.upper()
    unknown = set(sequence) - VALID_SYMBOLS
    if unknown:
        symbol = min(unknown)
        raise InvalidSymbolError(symbol, position=sequence.index(symbol))
    table = _RNA_COMPLEMENT if alphabet is Alphabet.RNA else _DNA_COMPLEMENT
    return sequence.translate(table)


def reverse_complement(sequence: str, alphabet: Alphabet = Alphabet.DNA) -> str:
    """Reverse complement of a sequence, returned upper-cased."""
    return complement(sequence, alphabet)[::-1]
