#!/usr/bin/env python3
"""
Region extraction module for hyperex.

This module pairs forward and reverse primer matches and cuts the region
they flank out of the original sequence.
"""

from bisect import bisect_right
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from loguru import logger

from ..models import Match, PrimerPair, Region, SequenceRecord, Strand
from .matcher import PrimerMatcher, TargetSequence


class PairingStrategy(Enum):
    """How forward and reverse matches are paired."""
    NEAREST = "nearest"
    BEST = "best"


class RegionExtractor:
    """Extract regions flanked by primer pairs."""

    def __init__(
        self,
        matcher: PrimerMatcher,
        pairing: PairingStrategy = PairingStrategy.NEAREST,
        include_primers: bool = False,
    ):
        """
        Initialize extractor.

        Args:
            matcher: Primer matcher holding the mismatch budget
            pairing: Pairing strategy
            include_primers: Keep primer sites in the extracted region
        """
        self.matcher = matcher
        self.pairing = PairingStrategy(pairing)
        self.include_primers = include_primers

    def extract(self, target: TargetSequence, pair: PrimerPair) -> List[Region]:
        """
        Extract every region of one primer pair from a sequence.

        The forward primer is searched on the sequence and the reverse primer
        on its reverse complement. An empty list means the region was not found.

        Args:
            target: Prepared target sequence
            pair: Primer pair

        Returns:
            List of Region objects ordered by start
        """
        forward = self.matcher.find_all(pair.forward, target, Strand.ORIGINAL)
        reverse = [
            match.on_original(len(target))
            for match in self.matcher.find_all(pair.reverse, target, Strand.REVERSE_COMPLEMENT)
        ]

        if not forward or not reverse:
            absent = [
                primer.name
                for primer, matches in ((pair.forward, forward), (pair.reverse, reverse))
                if not matches
            ]
            logger.debug(
                f"{target.identifier}: primer {', '.join(absent)} not found for region {pair.name}"
            )
            return []

        if self.pairing is PairingStrategy.BEST:
            pairings = self.pair_best(forward, reverse)
        else:
            pairings = self.pair_nearest(forward, reverse)

        if not pairings:
            logger.debug(
                f"{target.identifier}: no reverse match downstream of a forward match "
                f"for region {pair.name}"
            )

        regions = [self._build_region(target, pair, f, r) for f, r in pairings]
        return sorted(regions, key=lambda region: region.start)

    def pair_nearest(
        self,
        forward: Sequence[Match],
        reverse: Sequence[Match],
    ) -> List[Tuple[Match, Match]]:
        """
        Pair each forward match with the nearest downstream reverse match.

        Reverse matches must be in original coordinates. A reverse match
        qualifies when its start lies strictly after the forward match end.
        When several forward matches select the same reverse match, the one
        with the fewest mismatches wins, then the one closest to it. The
        result therefore holds at most one region per reverse match, not one
        per forward match: the other forward matches are dropped and logged
        at DEBUG.
        """
        ordered = sorted(reverse, key=lambda match: match.start)
        starts = [match.start for match in ordered]
        candidates: Dict[int, List[Match]] = {}

        for f in sorted(forward, key=lambda match: match.start):
            index = bisect_right(starts, f.end)
            if index == len(starts):
                continue
            candidates.setdefault(index, []).append(f)

        pairings = []
        for index, forwards in sorted(candidates.items()):
            r = ordered[index]
            best = min(forwards, key=lambda match: (match.mismatches, -match.end))
            if len(forwards) > 1:
                logger.debug(
                    f"{len(forwards)} {best.primer.name} matches pair with "
                    f"{r.primer.name} at {r.start}; keeping the one at {best.start}"
                )
            pairings.append((best, r))

        return pairings

    def pair_best(
        self,
        forward: Sequence[Match],
        reverse: Sequence[Match],
    ) -> List[Tuple[Match, Match]]:
        """
        Pair the best forward match with the best downstream reverse match.

        Best means fewest mismatches; ties go to the earliest forward match and
        to the nearest reverse match. Yields at most one pairing.
        """
        f = min(forward, key=lambda match: (match.mismatches, match.start))
        downstream = [r for r in reverse if r.start > f.end]
        if not downstream:
            return []
        r = min(downstream, key=lambda match: (match.mismatches, match.start))
        return [(f, r)]

    def _build_region(
        self,
        target: TargetSequence,
        pair: PrimerPair,
        forward: Match,
        reverse: Match,
    ) -> Region:
        if self.include_primers:
            start, end = forward.start, reverse.end
        else:
            start, end = forward.end, reverse.start

        return Region(
            record_id=target.identifier,
            name=pair.name,
            start=start,
            end=end,
            sequence=target.sequence[start:end],
            forward_match=forward,
            reverse_match=reverse,
        )


def extract_regions(
    record: SequenceRecord,
    primer_pairs: Sequence[PrimerPair],
    max_mismatches: int = 0,
    pairing: PairingStrategy = PairingStrategy.NEAREST,
    include_primers: bool = False,
) -> List[Region]:
    """
    Extract the regions of every primer pair from one record.

    Args:
        record: Input sequence record
        primer_pairs: Primer pairs to search
        max_mismatches: Mismatch budget per primer match
        pairing: Pairing strategy
        include_primers: Keep primer sites in the extracted regions

    Returns:
        Regions of all pairs, in pair order
    """
    extractor = RegionExtractor(PrimerMatcher(max_mismatches), pairing, include_primers)
    target = TargetSequence(record)
    regions = []
    for pair in primer_pairs:
        regions.extend(extractor.extract(target, pair))
    return regions
