"""Core processing modules for hyperex."""

from .matcher import PrimerMatcher, TargetSequence
from .extractor import PairingStrategy, RegionExtractor, extract_regions
from .reader import Compression, SequenceReader
from .writer import RegionWriter

__all__ = [
    "PrimerMatcher",
    "TargetSequence",
    "PairingStrategy",
    "RegionExtractor",
    "extract_regions",
    "Compression",
    "SequenceReader",
    "RegionWriter"
]
