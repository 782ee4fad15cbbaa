#!/usr/bin/env python3
"""
Approximate primer matching for hyperex.

This module scans both strands of a sequence for occurrences of degenerate
primers within a mismatch budget.
"""

from typing import List, Tuple

from ..exceptions import ConfigurationError
from ..iupac import Alphabet, reverse_complement, sequence_type, symbol_masks
from ..models import Match, Primer, SequenceRecord, Strand


class TargetSequence:
    """A sequence prepared for scanning on both strands."""

    def __init__(self, record: SequenceRecord):
        """
        Validate the record and precompute both strands.

        Args:
            record: Input sequence record

        Raises:
            InvalidSymbolError: If the sequence holds a symbol outside the IUPAC table
        """
        self.record = record
        context = f"sequence {record.identifier}"

        self.masks = symbol_masks(record.sequence, context=context)
        self.alphabet = sequence_type(record.sequence)
        self.reverse_complement = reverse_complement(record.sequence, self.alphabet)
        self.reverse_masks = symbol_masks(self.reverse_complement, context=context)

    @classmethod
    def from_string(cls, sequence: str, identifier: str = "query") -> "TargetSequence":
        """Create a target from a bare sequence string."""
        return cls(SequenceRecord(identifier=identifier, sequence=sequence))

    @property
    def identifier(self) -> str:
        return self.record.identifier

    @property
    def sequence(self) -> str:
        return self.record.sequence

    @property
    def is_rna(self) -> bool:
        return self.alphabet is Alphabet.RNA

    def __len__(self) -> int:
        return len(self.masks)

    def strand_masks(self, strand: Strand) -> Tuple[int, ...]:
        """Get the encoded symbols of one strand."""
        if strand is Strand.REVERSE_COMPLEMENT:
            return self.reverse_masks
        return self.masks


class PrimerMatcher:
    """Find every approximate occurrence of a primer within a mismatch budget."""

    def __init__(self, max_mismatches: int = 0):
        """
        Initialize matcher.

        Args:
            max_mismatches: Maximum number of incompatible positions per match
        """
        if max_mismatches < 0:
            raise ConfigurationError(
                f"Mismatch budget cannot be negative: {max_mismatches}",
                parameter="mismatch",
            )
        self.max_mismatches = max_mismatches

    def find_all(
        self,
        primer: Primer,
        target: TargetSequence,
        strand: Strand = Strand.ORIGINAL,
    ) -> List[Match]:
        """
        Scan one strand of the target for the primer.

        Every window with at most ``max_mismatches`` incompatible positions is
        reported, overlapping windows included, ordered by start offset.

        Args:
            primer: Primer to look for
            target: Prepared target sequence
            strand: Strand to scan

        Returns:
            List of Match objects in strand coordinates
        """
        text = target.strand_masks(strand)
        pattern = primer.masks
        width = len(pattern)
        budget = self.max_mismatches
        matches = []

        for start in range(len(text) - width + 1):
            mismatches = 0
            for offset, mask in enumerate(pattern):
                if not mask & text[start + offset]:
                    mismatches += 1
                    if mismatches > budget:
                        break
            else:
                matches.append(Match(
                    primer=primer,
                    start=start,
                    end=start + width,
                    strand=strand,
                    mismatches=mismatches,
                ))

        return matches

    def find_both(self, primer: Primer, target: TargetSequence) -> List[Match]:
        """Scan both strands; reverse-complement matches come last."""
        return (
            self.find_all(primer, target, Strand.ORIGINAL)
            + self.find_all(primer, target, Strand.REVERSE_COMPLEMENT)
        )
