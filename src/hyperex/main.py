#!/usr/bin/env python3
"""
Main pipeline module for hyperex.

This module provides the main entry point and orchestrates the extraction.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from loguru import logger

from . import __version__
from .config import HyperexConfig
from .core.extractor import PairingStrategy, RegionExtractor
from .core.matcher import PrimerMatcher, TargetSequence
from .core.reader import STDIN, SequenceReader
from .core.writer import RegionWriter
from .exceptions import HyperexError
from .models import PipelineSummary, PrimerPair, RecordResult, SequenceRecord
from .primers.catalogue import REGIONS

STDOUT_FORMAT = "[{time:HH:mm:ss}][<level>{level}</level>] {message}"
FILE_FORMAT = "[{time:YYYY-MM-DD}][{time:HH:mm:ss}][{name}][{level}] {message}"
DEFAULT_LOG_FILE = Path("hyperex.log")


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Setup logging configuration."""
    logger.remove()
    logger.add(
        sys.stdout,
        level=log_level.upper(),
        format=STDOUT_FORMAT,
        colorize=os.environ.get("NO_COLOR") is None,
    )
    if log_file is not None:
        # Separate file sink so that file logs carry the full date
        logger.add(log_file, level="DEBUG", format=FILE_FORMAT)


def process_record(
    record: SequenceRecord,
    primer_pairs: Sequence[PrimerPair],
    extractor: RegionExtractor,
) -> RecordResult:
    """
    Extract the regions of every primer pair from a single record.

    Args:
        record: Input sequence record
        primer_pairs: Configured primer pairs
        extractor: Region extractor

    Returns:
        RecordResult holding the regions and the names of pairs not found
    """
    target = TargetSequence(record)
    result = RecordResult(record_id=record.identifier)

    for pair in primer_pairs:
        regions = extractor.extract(target, pair)
        if regions:
            result.regions.extend(regions)
        else:
            result.missing.append(pair.name)
            logger.warning(f"Region {pair.name} not found in sequence {record.identifier}")

    return result


def process_records(
    records: Iterable[SequenceRecord],
    primer_pairs: Sequence[PrimerPair],
    extractor: RegionExtractor,
    expected_length: int = 0,
) -> Iterator[RecordResult]:
    """Process records one at a time, yielding one result per record."""
    for record in records:
        if len(record) < expected_length:
            logger.warning(
                f"Sequence {record.identifier} is shorter than {expected_length} bp. "
                "We may not be able to find some regions"
            )
        yield process_record(record, primer_pairs, extractor)


def run_pipeline(config: HyperexConfig) -> PipelineSummary:
    """
    Run the complete region extraction.

    Args:
        config: Run configuration

    Returns:
        Summary of the run
    """
    logger.info("Starting hyperex")
    logger.info(f"Input file: {config.input_file}")
    logger.info(f"Output prefix: {config.prefix}")
    logger.info(f"Regions: {', '.join(pair.name for pair in config.primer_pairs)}")
    logger.info(f"Allowed mismatches: {config.mismatch}")

    if config.mismatch >= config.shortest_primer:
        logger.warning(
            f"Mismatch ({config.mismatch}) reaches the length of the shortest primer; "
            "it will match everywhere"
        )

    extractor = RegionExtractor(
        PrimerMatcher(config.mismatch),
        pairing=config.pairing,
        include_primers=config.include_primers,
    )
    reader = SequenceReader(config.input_file)
    summary = PipelineSummary()

    with RegionWriter(config.prefix) as writer:
        for result in process_records(
            reader, config.primer_pairs, extractor, config.expected_length
        ):
            writer.write(result)
            summary.add(result)
            if not result.found:
                logger.warning(f"No region found in sequence {result.record_id}")

    if summary.records == 0:
        logger.warning("No sequence found in input")

    logger.info(
        f"Extracted {summary.regions} regions from {summary.records} sequences "
        f"({len(summary.empty_records)} without any region)"
    )
    return summary


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="hyperex",
        usage="hyperex [options] [<FILE>]",
        description="Hypervariable region primer-based extractor",
    )

    parser.add_argument(
        "file",
        nargs="?",
        default=STDIN,
        metavar="FILE",
        help="Input fasta/fastq file, possibly gzip'd, xz'd or bzip'd. "
             "With no FILE, or when FILE is -, read standard input"
    )

    parser.add_argument(
        "-f", "--forward-primer",
        action="append",
        metavar="STR",
        help="Forward primer sequence, may contain IUPAC ambiguities (repeatable)"
    )

    parser.add_argument(
        "-r", "--reverse-primer",
        action="append",
        metavar="STR",
        help="Reverse primer sequence, may contain IUPAC ambiguities (repeatable)"
    )

    parser.add_argument(
        "--region",
        action="append",
        choices=list(REGIONS),
        metavar="STR",
        help=f"16S rRNA region name (repeatable). Supported values are {', '.join(REGIONS)}"
    )

    parser.add_argument(
        "-m", "--mismatch",
        type=int,
        default=None,
        metavar="N",
        help="Number of allowed mismatches (default: 0)"
    )

    parser.add_argument(
        "-p", "--prefix",
        type=Path,
        default=None,
        metavar="PATH",
        help="Prefix of output files, paths are supported (default: hyperex_out)"
    )

    parser.add_argument(
        "--pairing",
        choices=[strategy.value for strategy in PairingStrategy],
        default=None,
        help="Pair each forward match with the nearest downstream reverse match, "
             "or only the best matches (default: nearest)"
    )

    parser.add_argument(
        "--include-primers",
        action="store_true",
        default=None,
        help="Keep primer sites in the extracted regions"
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="YAML configuration file; command line options take precedence"
    )

    parser.add_argument(
        "--force",
        action="store_true",
        default=None,
        help="Overwrite output"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Decrease program verbosity"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help=f"Log file (default: {DEFAULT_LOG_FILE})"
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.region and (args.forward_primer or args.reverse_primer):
        parser.error("--region cannot be used with --forward-primer/--reverse-primer")
    if bool(args.forward_primer) != bool(args.reverse_primer):
        parser.error("--forward-primer and --reverse-primer must be given together")

    log_level = "WARNING" if args.quiet else args.log_level
    setup_logging(log_level or "INFO", args.log_file or DEFAULT_LOG_FILE)

    try:
        if args.config:
            config = HyperexConfig.from_yaml(
                args.config,
                input_file=args.file if args.file != STDIN else None,
                prefix=args.prefix,
                mismatch=args.mismatch,
                force=args.force,
                include_primers=args.include_primers,
                pairing=args.pairing,
                log_level=log_level,
                log_file=args.log_file,
                regions=args.region,
                forward_primers=args.forward_primer,
                reverse_primers=args.reverse_primer,
            )
            setup_logging(config.log_level, config.log_file or DEFAULT_LOG_FILE)
        else:
            config = HyperexConfig.from_args(vars(args))
        run_pipeline(config)
    except HyperexError as e:
        logger.error(f"hyperex failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("hyperex interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
