"""Catalogue of universal 16S rRNA primers and the regions they flank."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import ConfigurationError
from ..models import Orientation, Primer, PrimerPair

FORWARD_PRIMERS: Mapping[str, str] = MappingProxyType({
    "27F": "AGAGTTTGATCMTGGCTCAG",
    "341F": "CCTACGGGNGGCWGCAG",
    "515F": "GTGCCAGCMGCCGCGGTAA",
    "515F-Y": "GTGYCAGCMGCCGCGGTAA",
    "799F": "AACMGGATTAGATACCCKG",
    "928F": "TAAAACTYAAAKGAATTGACGGGG",
    "1100F": "YAACGAGCGCAACCC",
})

REVERSE_PRIMERS: Mapping[str, str] = MappingProxyType({
    "337R": "CYIACTGCTGCCTCCCGTAG",
    "534R": "ATTACCGCGGCTGCTGG",
    "805R": "GACTACHVGGGTATCTAATCC",
    "926Rb": "CCGTCAATTYMTTTRAGT",
    "806R": "GGACTACHVGGGTWTCTAAT",
    "909-928R": "CCCCGYCAATTCMTTTRAGT",
    "1193R": "ACGTCATCCCCACCTTCC",
    "1492Rmod": "TACGGYTACCTTGTTAYGACTT",
})

# Hypervariable region bordered by each primer
PRIMER_TO_REGION: Mapping[str, str] = MappingProxyType({
    "AGAGTTTGATCMTGGCTCAG": "v1",
    "CCTACGGGNGGCWGCAG": "v3",
    "GTGCCAGCMGCCGCGGTAA": "v4",
    "GTGYCAGCMGCCGCGGTAA": "v4",
    "AACMGGATTAGATACCCKG": "v5",
    "TAAAACTYAAAKGAATTGACGGGG": "v6",
    "YAACGAGCGCAACCC": "v7",
    "CYIACTGCTGCCTCCCGTAG": "v2",
    "ATTACCGCGGCTGCTGG": "v3",
    "GACTACHVGGGTATCTAATCC": "v4",
    "CCGTCAATTYMTTTRAGT": "v5",
    "GGACTACHVGGGTWTCTAAT": "v4",
    "CCCCGYCAATTCMTTTRAGT": "v5",
    "ACGTCATCCCCACCTTCC": "v7",
    "TACGGYTACCTTGTTAYGACTT": "v9",
})

REGIONS: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "v1v2": ("27F", "337R"),
    "v1v3": ("27F", "534R"),
    "v1v9": ("27F", "1492Rmod"),
    "v3v4": ("341F", "805R"),
    "v3v5": ("341F", "926Rb"),
    "v4": ("515F", "806R"),
    "v4v5": ("515F-Y", "909-928R"),
    "v5v7": ("799F", "1193R"),
    "v6v9": ("928F", "1492Rmod"),
    "v7v9": ("1100F", "1492Rmod"),
})

_PRIMER_NAMES = {
    Orientation.FORWARD: {pattern: name for name, pattern in FORWARD_PRIMERS.items()},
    Orientation.REVERSE: {pattern: name for name, pattern in REVERSE_PRIMERS.items()},
}


def region_to_primers(region: str) -> Tuple[str, str]:
    """Get the (forward, reverse) primer patterns of a named region."""
    try:
        forward_name, reverse_name = REGIONS[region.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown region {region!r}, expected one of {', '.join(REGIONS)}",
            parameter="region",
        ) from None
    return FORWARD_PRIMERS[forward_name], REVERSE_PRIMERS[reverse_name]


def primers_to_region(forward: str, reverse: str) -> str:
    """Name the region flanked by two primer patterns.

    The label joins the region of each known primer, so a pair with one
    catalogue primer gets a partial label and two unknown primers give "".
    Only the v4 pair collapses to a single label.
    """
    first_part = PRIMER_TO_REGION.get(forward.upper(), "")
    second_part = PRIMER_TO_REGION.get(reverse.upper(), "")

    if first_part == second_part == "v4":
        return first_part
    return f"{first_part}{second_part}"


def primer_name(pattern: str, orientation: Orientation) -> Optional[str]:
    """Get the catalogue name of a primer pattern."""
    return _PRIMER_NAMES[orientation].get(pattern.upper())


def build_pair(
    forward: str,
    reverse: str,
    name: str = "",
    forward_name: str = "",
    reverse_name: str = "",
    index: int = 1,
) -> PrimerPair:
    """
    Build a primer pair from raw patterns.

    Missing primer names are looked up in the catalogue and fall back to
    ``forward_<index>``/``reverse_<index>``. A missing pair name becomes the
    catalogue region name, else ``<forward name>-<reverse name>``.

    Raises:
        ConfigurationError: If a pattern is empty or holds unknown symbols
    """
    forward_primer = Primer(
        name=forward_name
        or primer_name(forward, Orientation.FORWARD)
        or f"forward_{index}",
        pattern=forward,
        orientation=Orientation.FORWARD,
    )
    reverse_primer = Primer(
        name=reverse_name
        or primer_name(reverse, Orientation.REVERSE)
        or f"reverse_{index}",
        pattern=reverse,
        orientation=Orientation.REVERSE,
    )
    if not name:
        name = primers_to_region(forward_primer.pattern, reverse_primer.pattern)
    return PrimerPair(forward=forward_primer, reverse=reverse_primer, name=name)


def region_pair(region: str) -> PrimerPair:
    """Build the primer pair of a catalogue region."""
    forward, reverse = region_to_primers(region)
    forward_name, reverse_name = REGIONS[region.lower()]
    return build_pair(
        forward,
        reverse,
        name=region.lower(),
        forward_name=forward_name,
        reverse_name=reverse_name,
    )


def pairs_from_patterns(forward: Sequence[str], reverse: Sequence[str]) -> List[PrimerPair]:
    """Pair forward and reverse patterns by position."""
    if len(forward) != len(reverse):
        raise ConfigurationError(
            f"Got {len(forward)} forward and {len(reverse)} reverse primers; "
            "each forward primer needs a reverse primer",
            parameter="primer_pairs",
        )
    return [
        build_pair(f, r, index=i)
        for i, (f, r) in enumerate(zip(forward, reverse), start=1)
    ]


def pair_from_mapping(data: Dict, index: int = 1) -> PrimerPair:
    """Build a primer pair from a configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid primer pair entry: {data!r}", parameter="primer_pairs")

    missing = [key for key in ("forward", "reverse") if not data.get(key)]
    if missing:
        raise ConfigurationError(
            f"Primer pair {index} lacks {' and '.join(missing)} primer",
            parameter="primer_pairs",
        )

    return build_pair(
        str(data["forward"]),
        str(data["reverse"]),
        name=str(data.get("name") or ""),
        forward_name=str(data.get("forward_name") or ""),
        reverse_name=str(data.get("reverse_name") or ""),
        index=index,
    )


def all_region_pairs() -> List[PrimerPair]:
    """Primer pairs of every catalogue region."""
    return [region_pair(region) for region in REGIONS]
