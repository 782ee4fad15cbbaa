"""Data models for hyperex."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from .exceptions import ConfigurationError, InvalidSymbolError
from .iupac import SYMBOL_MASKS, reverse_complement, symbol_masks


class Orientation(Enum):
    """Primer orientation."""
    FORWARD = "forward"
    REVERSE = "reverse"


class Strand(Enum):
    """Strand a primer match was found on."""
    ORIGINAL = "original"
    REVERSE_COMPLEMENT = "reverse_complement"


@dataclass(frozen=True)
class Primer:
    """Degenerate primer pattern, validated against the IUPAC table."""

    name: str
    pattern: str
    orientation: Orientation = Orientation.FORWARD
    masks: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Normalise and validate the pattern."""
        if not self.name:
            raise ConfigurationError("Primer name is empty", parameter=self.pattern)

        pattern = (self.pattern or "").strip().upper()
        if not pattern:
            raise ConfigurationError("Primer pattern is empty", parameter=self.name)

        if isinstance(self.orientation, str):
            object.__setattr__(self, "orientation", Orientation(self.orientation))
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "masks", symbol_masks(pattern, context=f"primer {self.name}"))

    def __len__(self) -> int:
        return len(self.pattern)

    def is_compatible(self, position: int, base: str) -> bool:
        """Check whether ``base`` is acceptable at ``position`` of the primer."""
        mask = SYMBOL_MASKS.get(base.upper())
        if mask is None:
            raise InvalidSymbolError(base, context=f"primer {self.name}")
        return bool(self.masks[position] & mask)

    def reverse_complement(self) -> str:
        """Get reverse complement of the primer pattern."""
        return reverse_complement(self.pattern)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "pattern": self.pattern,
            "orientation": self.orientation.value,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Primer":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            pattern=data["pattern"],
            orientation=Orientation(data.get("orientation", "forward")),
        )


@dataclass(frozen=True)
class PrimerPair:
    """Forward + reverse primer flanking one named region."""

    forward: Primer
    reverse: Primer
    name: str = ""

    def __post_init__(self):
        if not self.name:
            object.__setattr__(self, "name", f"{self.forward.name}-{self.reverse.name}")

    @property
    def primers(self) -> Tuple[Primer, Primer]:
        return (self.forward, self.reverse)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "forward": self.forward.to_dict(),
            "reverse": self.reverse.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "PrimerPair":
        """Create from dictionary."""
        return cls(
            forward=Primer.from_dict(data["forward"]),
            reverse=Primer.from_dict(data["reverse"]),
            name=data.get("name", ""),
        )


@dataclass
class SequenceRecord:
    """Input sequence record."""

    identifier: str
    sequence: str
    description: str = ""

    def __post_init__(self):
        self.sequence = self.sequence.upper()

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True)
class Match:
    """Approximate occurrence of a primer on one strand of a sequence.

    ``start`` and ``end`` are 0-based, end exclusive, in the coordinates of
    the strand that was scanned.
    """

    primer: Primer
    start: int
    end: int
    strand: Strand
    mismatches: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def on_original(self, sequence_length: int) -> "Match":
        """Map the match into original-sequence coordinates."""
        if self.strand is Strand.ORIGINAL:
            return self
        return Match(
            primer=self.primer,
            start=sequence_length - self.end,
            end=sequence_length - self.start,
            strand=self.strand,
            mismatches=self.mismatches,
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "primer": self.primer.name,
            "start": self.start,
            "end": self.end,
            "strand": self.strand.value,
            "mismatches": self.mismatches,
        }


@dataclass
class Region:
    """Extracted sub-sequence bounded by a forward and a reverse match.

    Coordinates, including those of both matches, refer to the original
    sequence.
    """

    record_id: str
    name: str
    start: int
    end: int
    sequence: str
    forward_match: Match
    reverse_match: Match

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "record_id": self.record_id,
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "sequence": self.sequence,
            "forward_match": self.forward_match.to_dict(),
            "reverse_match": self.reverse_match.to_dict(),
        }


@dataclass
class RecordResult:
    """All regions extracted from one input record."""

    record_id: str
    regions: List[Region] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.regions)


@dataclass
class PipelineSummary:
    """Counters reported at the end of a run."""

    records: int = 0
    regions: int = 0
    empty_records: List[str] = field(default_factory=list)

    def add(self, result: RecordResult) -> None:
        self.records += 1
        self.regions += len(result.regions)
        if not result.found:
            self.empty_records.append(result.record_id)
