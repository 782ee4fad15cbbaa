"""Configuration management for hyperex."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from .core.extractor import PairingStrategy
from .core.reader import STDIN
from .core.writer import output_paths
from .exceptions import ConfigurationError
from .models import PrimerPair
from .primers.catalogue import (
    all_region_pairs,
    pair_from_mapping,
    pairs_from_patterns,
    region_pair,
)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class HyperexConfig:
    """Run configuration settings."""

    input_file: Union[str, Path] = STDIN
    primer_pairs: List[PrimerPair] = field(default_factory=all_region_pairs)
    prefix: Path = Path("hyperex_out")
    mismatch: int = 0
    force: bool = False
    include_primers: bool = False
    pairing: PairingStrategy = PairingStrategy.NEAREST
    expected_length: int = 1500
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if str(self.input_file) != STDIN:
            self.input_file = Path(self.input_file)
            if not self.input_file.exists():
                raise ConfigurationError(f"Input file not found: {self.input_file}")

        self.prefix = Path(self.prefix)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

        try:
            self.pairing = PairingStrategy(self.pairing)
        except ValueError:
            raise ConfigurationError(f"Invalid pairing strategy: {self.pairing}", parameter="pairing") from None

        if not self.primer_pairs:
            raise ConfigurationError("No primer pair configured", parameter="primer_pairs")

        self._validate_names()

        if not isinstance(self.mismatch, int) or self.mismatch < 0:
            raise ConfigurationError(f"Invalid mismatch: {self.mismatch}", parameter="mismatch")

        longest = max(len(primer) for pair in self.primer_pairs for primer in pair.primers)
        if self.mismatch > longest:
            raise ConfigurationError(
                f"Mismatch ({self.mismatch}) cannot be greater than the length "
                f"of the longest primer ({longest})",
                parameter="mismatch",
            )

        if self.expected_length < 0:
            raise ConfigurationError(f"Invalid expected_length: {self.expected_length}")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level: {self.log_level}; expected one of {', '.join(LOG_LEVELS)}",
                parameter="log_level",
            )

        if not self.force:
            existing = [str(path) for path in output_paths(self.prefix) if path.exists()]
            if existing:
                raise ConfigurationError(
                    f"Output already exists: {', '.join(existing)}; use --force to overwrite",
                    parameter="prefix",
                )

    def _validate_names(self) -> None:
        """Region names must be unique and a primer name must mean one pattern."""
        seen_regions = set()
        patterns: Dict[str, str] = {}

        for pair in self.primer_pairs:
            if pair.name in seen_regions:
                raise ConfigurationError(f"Duplicate region name: {pair.name}", parameter="primer_pairs")
            seen_regions.add(pair.name)

            for primer in pair.primers:
                known = patterns.setdefault(primer.name, primer.pattern)
                if known != primer.pattern:
                    raise ConfigurationError(
                        f"Primer name {primer.name} used for both {known} and {primer.pattern}",
                        parameter="primer_pairs",
                    )

    @property
    def shortest_primer(self) -> int:
        return min(len(primer) for pair in self.primer_pairs for primer in pair.primers)

    @staticmethod
    def build_primer_pairs(
        regions: Optional[List[str]] = None,
        forward: Optional[List[str]] = None,
        reverse: Optional[List[str]] = None,
        primer_pairs: Optional[List[Dict]] = None,
    ) -> List[PrimerPair]:
        """
        Collect primer pairs from region names, raw primers and mappings.

        With nothing given, every catalogue region is used.
        """
        pairs = [region_pair(region) for region in regions or []]

        if forward or reverse:
            pairs.extend(pairs_from_patterns(forward or [], reverse or []))

        for index, entry in enumerate(primer_pairs or [], start=len(pairs) + 1):
            pairs.append(pair_from_mapping(entry, index=index))

        return pairs or all_region_pairs()

    @classmethod
    def from_yaml(cls, yaml_file: Path, **overrides) -> "HyperexConfig":
        """Load configuration from YAML file."""
        yaml_file = Path(yaml_file)
        if not yaml_file.exists():
            raise ConfigurationError(f"Config file not found: {yaml_file}")

        try:
            with open(yaml_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML config: {e}", config_file=str(yaml_file))

        if not isinstance(data, dict):
            raise ConfigurationError("Expected a mapping at top level", config_file=str(yaml_file))

        data.update({key: value for key, value in overrides.items() if value is not None})

        try:
            data["primer_pairs"] = cls.build_primer_pairs(
                regions=data.pop("regions", None),
                forward=data.pop("forward_primers", None),
                reverse=data.pop("reverse_primers", None),
                primer_pairs=data.pop("primer_pairs", None),
            )
            return cls(**data)
        except ConfigurationError as e:
            raise ConfigurationError(str(e), config_file=str(yaml_file)) from None
        except TypeError as e:
            raise ConfigurationError(f"Invalid config parameters: {e}", config_file=str(yaml_file))

    @classmethod
    def from_args(cls, args: dict) -> "HyperexConfig":
        """Create configuration from command-line arguments."""
        # Map command-line argument names to config field names
        arg_mapping = {
            'file': 'input_file',
            'prefix': 'prefix',
            'mismatch': 'mismatch',
            'force': 'force',
            'include_primers': 'include_primers',
            'pairing': 'pairing',
            'log_level': 'log_level',
            'log_file': 'log_file',
        }

        config_args = {}
        for arg_name, config_name in arg_mapping.items():
            if arg_name in args and args[arg_name] is not None:
                config_args[config_name] = args[arg_name]

        config_args['primer_pairs'] = cls.build_primer_pairs(
            regions=args.get('region'),
            forward=args.get('forward_primer'),
            reverse=args.get('reverse_primer'),
        )

        if args.get('quiet'):
            config_args['log_level'] = "WARNING"

        return cls(**config_args)
