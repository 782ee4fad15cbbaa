"""16S rRNA primer catalogue for hyperex."""

from .catalogue import (
    FORWARD_PRIMERS, REVERSE_PRIMERS, REGIONS,
    primer_name, primers_to_region, region_pair, region_to_primers
)

__all__ = [
    "FORWARD_PRIMERS",
    "REVERSE_PRIMERS",
    "REGIONS",
    "primer_name",
    "primers_to_region",
    "region_pair",
    "region_to_primers"
]
