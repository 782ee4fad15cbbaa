"""Output writer for extracted regions (FASTA and GFF3)."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from loguru import logger

from ..exceptions import OutputError
from ..models import RecordResult, Region

SOURCE = "hyperex"


def output_paths(prefix: Union[str, Path]) -> List[Path]:
    """Get the FASTA and GFF3 paths written for a prefix."""
    prefix = str(prefix)
    return [Path(f"{prefix}.fa"), Path(f"{prefix}.gff")]


class RegionWriter:
    """Write regions to ``<prefix>.fa`` and ``<prefix>.gff``."""

    def __init__(self, prefix: Union[str, Path]):
        """
        Initialize writer.

        Args:
            prefix: Output path prefix; parent directories are created
        """
        self.fasta_path, self.gff_path = output_paths(prefix)
        self.records = 0
        self.regions = 0
        self.empty_records = 0
        self._fasta = None
        self._gff = None

    def __enter__(self) -> "RegionWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
        if exc_type is not None:
            self.discard()

    def discard(self) -> None:
        """Remove the output files of an aborted run."""
        for path in (self.fasta_path, self.gff_path):
            if path.exists():
                path.unlink()
                logger.warning(f"Removed incomplete output {path}")

    def open(self) -> None:
        """Create the output files and write the GFF3 header."""
        try:
            self.fasta_path.parent.mkdir(parents=True, exist_ok=True)
            self._fasta = open(self.fasta_path, "w")
            self._gff = open(self.gff_path, "w")
            self._gff.write("##gff-version 3\n")
        except IOError as e:
            self.close()
            raise OutputError(str(e), path=str(self.fasta_path.parent)) from e

        logger.info(f"Writing regions to {self.fasta_path} and {self.gff_path}")

    def close(self) -> None:
        if self._fasta is not None:
            logger.debug(
                f"Wrote {self.regions} regions for {self.records} records "
                f"({self.empty_records} without region)"
            )
        for handle in (self._fasta, self._gff):
            if handle is not None:
                handle.close()
        self._fasta = None
        self._gff = None

    def write(self, result: RecordResult) -> None:
        """Write every region of one input record."""
        if self._fasta is None:
            raise OutputError("writer is not open", path=str(self.fasta_path))

        self.records += 1
        if not result.found:
            self.empty_records += 1
            return

        try:
            for number, region in enumerate(result.regions, start=1):
                SeqIO.write(self.to_seq_record(region), self._fasta, "fasta")
                self._gff.write(self.to_gff_line(region, number))
        except IOError as e:
            raise OutputError(str(e), path=str(self.fasta_path)) from e

        self.regions += len(result.regions)

    @staticmethod
    def describe(region: Region) -> str:
        """Build the FASTA description of a region."""
        forward, reverse = region.forward_match, region.reverse_match
        return (
            f"region={region.name} start={region.start} end={region.end} "
            f"forward={forward.primer.pattern} reverse={reverse.primer.pattern} "
            f"forward_mismatches={forward.mismatches} "
            f"reverse_mismatches={reverse.mismatches}"
        )

    @classmethod
    def to_seq_record(cls, region: Region) -> SeqRecord:
        return SeqRecord(
            Seq(region.sequence),
            id=region.record_id,
            description=cls.describe(region),
        )

    @staticmethod
    def to_gff_line(region: Region, number: int = 1) -> str:
        """Format a region as a GFF3 feature line (1-based, inclusive)."""
        forward, reverse = region.forward_match, region.reverse_match
        attributes = ";".join([
            f"ID={region.record_id}_{region.name}_{number}",
            f"Name={region.name}",
            f"forward_primer={forward.primer.name}",
            f"reverse_primer={reverse.primer.name}",
            f"forward_mismatches={forward.mismatches}",
            f"reverse_mismatches={reverse.mismatches}",
            "Note=Hypervariable region",
        ])
        return "\t".join([
            region.record_id,
            SOURCE,
            "region",
            str(region.start + 1),
            str(region.end),
            ".",
            "+",
            ".",
            attributes,
        ]) + "\n"
