"""hyperex: hypervariable region primer-based extractor.

Locates degenerate forward/reverse primer pairs on nucleotide sequences
(e.g. 16S rRNA) and extracts the region they flank.
"""

__version__ = "0.2.0"
__author__ = "Anicet Ebou"

from .config import HyperexConfig
from .exceptions import ConfigurationError, HyperexError, InputError, InvalidSymbolError, OutputError
from .models import Match, Orientation, Primer, PrimerPair, RecordResult, Region, SequenceRecord, Strand
from .core import (
    PairingStrategy, PrimerMatcher, RegionExtractor, RegionWriter,
    SequenceReader, TargetSequence, extract_regions
)
from .main import process_record, process_records, run_pipeline

__all__ = [
    "__version__",
    "__author__",
    "HyperexConfig",
    "ConfigurationError",
    "HyperexError",
    "InputError",
    "InvalidSymbolError",
    "OutputError",
    "Match",
    "Orientation",
    "Primer",
    "PrimerPair",
    "RecordResult",
    "Region",
    "SequenceRecord",
    "Strand",
    "PairingStrategy",
    "PrimerMatcher",
    "RegionExtractor",
    "RegionWriter",
    "SequenceReader",
    "TargetSequence",
    "extract_regions",
    "process_record",
    "process_records",
    "run_pipeline"
]
