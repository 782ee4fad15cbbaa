"""FASTA/FASTQ input reader with transparent decompression."""

from __future__ import annotations

import bz2
import gzip
import io
import lzma
import sys
from contextlib import ExitStack, contextmanager
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from Bio import SeqIO
from loguru import logger

from ..exceptions import InputError
from ..models import SequenceRecord

STDIN = "-"


class Compression(Enum):
    """Compression format of an input stream."""
    NONE = "none"
    GZIP = "gzip"
    BZIP2 = "bzip2"
    XZ = "xz"


class SequenceReader:
    """Reader for FASTA or FASTQ files, plain or compressed."""

    MAGIC_NUMBERS = {
        b"\x1f\x8b": Compression.GZIP,
        b"BZh": Compression.BZIP2,
        b"\xfd7zXZ\x00": Compression.XZ,
    }

    FORMAT_MARKERS = {
        b">": "fasta",
        b"@": "fastq",
    }

    PEEK_SIZE = 1024

    def __init__(self, source: Union[str, Path] = STDIN):
        """Initialize reader with a file path, or "-" for standard input."""
        self.source = source
        self.is_stdin = str(source) == STDIN
        self.compression: Optional[Compression] = None
        self.format: Optional[str] = None

        if not self.is_stdin and not Path(source).exists():
            raise InputError("Input file not found", path=str(source))

    @classmethod
    def detect_compression(cls, head: bytes) -> Compression:
        """Detect compression from the first bytes of a stream."""
        for magic, compression in cls.MAGIC_NUMBERS.items():
            if head.startswith(magic):
                return compression
        return Compression.NONE

    @classmethod
    def detect_format(cls, head: bytes) -> Optional[str]:
        """
        Detect sequence format from the first bytes of a decompressed stream.

        Returns:
            "fasta", "fastq", or None for an empty stream

        Raises:
            InputError: If the stream is neither FASTA nor FASTQ
        """
        head = head.lstrip()
        if not head:
            return None
        try:
            return cls.FORMAT_MARKERS[head[:1]]
        except KeyError:
            raise InputError(
                f"Unrecognized sequence format (starts with {head[:10]!r})"
            ) from None

    @staticmethod
    def _decompress(raw: BinaryIO, compression: Compression) -> BinaryIO:
        if compression is Compression.GZIP:
            return gzip.GzipFile(fileobj=raw)
        if compression is Compression.BZIP2:
            return bz2.BZ2File(raw)
        if compression is Compression.XZ:
            return lzma.LZMAFile(raw)
        return raw

    @contextmanager
    def open(self) -> Iterator[io.TextIOWrapper]:
        """Open the source as decompressed text, detecting its format."""
        with ExitStack() as stack:
            if self.is_stdin:
                raw = sys.stdin.buffer
            else:
                try:
                    raw = stack.enter_context(open(self.source, "rb"))
                except OSError as e:
                    raise InputError(f"Cannot read file: {e}", path=str(self.source)) from e

            try:
                self.compression = self.detect_compression(raw.peek(8))
                stream = self._decompress(raw, self.compression)
                self.format = self.detect_format(stream.peek(self.PEEK_SIZE))
            except (OSError, EOFError, lzma.LZMAError) as e:
                raise InputError(f"Cannot decompress input: {e}", path=str(self.source)) from e
            except InputError as e:
                raise InputError(str(e), path=str(self.source)) from None

            logger.debug(
                f"Reading {self.source} (compression: {self.compression.value}, "
                f"format: {self.format})"
            )

            text = io.TextIOWrapper(stream, encoding="utf-8")
            try:
                yield text
            finally:
                if self.is_stdin and stream is raw:
                    text.detach()
                else:
                    text.close()

    def records(self) -> Iterator[SequenceRecord]:
        """
        Iterate over the input records lazily.

        Yields:
            SequenceRecord objects with upper-cased sequences

        Raises:
            InputError: If the input cannot be decompressed or parsed
        """
        with self.open() as handle:
            if self.format is None:
                logger.warning(f"Input {self.source} is empty")
                return
            try:
                for record in SeqIO.parse(handle, self.format):
                    yield SequenceRecord(
                        identifier=record.id,
                        sequence=str(record.seq),
                        description=record.description,
                    )
            except (ValueError, OSError, EOFError) as e:
                raise InputError(f"Malformed {self.format} input: {e}", path=str(self.source)) from e

    def __iter__(self) -> Iterator[SequenceRecord]:
        return self.records()
