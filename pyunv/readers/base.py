#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Abstract base class for all record decoders

Every concrete decoder (151, 164, 15, 2411, 18, 82, 2412, 55, 58)
inherits from :class:`BaseDecoder` and implements :meth:`~BaseDecoder.parse`,
which turns one :class:`~pyunv.readers.scanner.ParsedBlock` into a typed
record from :mod:`pyunv.models`.

The public :meth:`~BaseDecoder.decode` wraps ``parse`` and always
returns a :class:`RecordResult`: a malformed record becomes a result
carrying the error, so that a single bad block never aborts a file scan.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from pyunv.exceptions import ParseError, PyUNVError
from pyunv.models.records import Record
from pyunv.readers.scanner import ParsedBlock
from pyunv.utils.constants import LINE_WIDTH
from pyunv.utils.parsing import pad_line, text_field

logger = logging.getLogger(__name__)


@dataclass
class DecodeContext:
    """Everything a decoder may look at for one block

    Parameters
    ----------
    data : bytes
        Complete file contents.
    block : ParsedBlock
        Envelope and absolute content-line table.
    verbose : bool
        Emit warnings through ``logging`` at WARNING level when ``True``,
        at DEBUG level otherwise.  They are always collected.
    """

    data: bytes
    block: ParsedBlock
    verbose: bool = True
    warnings: list[str] = field(default_factory=list)

    @property
    def n_lines(self) -> int:
        return len(self.block.lines)

    def raw_line(self, index: int) -> str:
        """Content line *index* (0-based) decoded octet-for-octet."""
        start, end = self.block.lines[index]
        return self.data[start:end].decode("latin-1")

    def line(self, index: int) -> str:
        """Content line *index*, padded to 80 columns; blank if absent."""
        if index >= self.n_lines:
            return " " * LINE_WIDTH
        return pad_line(self.raw_line(index))

    def text(self, index: int) -> str:
        """Trimmed first 80 columns of content line *index*."""
        return text_field(self.line(index))

    def require_lines(self, count: int, what: str) -> None:
        if self.n_lines < count:
            raise ParseError(
                f"{what} needs at least {count} lines, block {self.block.number} "
                f"has {self.n_lines}"
            )

    def warn(self, message: str) -> None:
        """Record a self-correction applied while decoding."""
        self.warnings.append(message)
        level = logging.WARNING if self.verbose else logging.DEBUG
        logger.log(level, "Block %d: %s", self.block.number, message)


@dataclass
class RecordResult:
    """Outcome of one decode: a record or an error, plus warnings"""

    record: Record | None
    error: PyUNVError | None = None
    warnings: list[str] = field(default_factory=list)


class BaseDecoder(ABC):
    """Abstract base for Universal File record decoders

    Subclasses set :attr:`type_codes` and override :meth:`parse`.  Field
    conversions raise :class:`~pyunv.exceptions.ParseError`; ``parse``
    lets them propagate and :meth:`decode` turns them into a
    :class:`RecordResult`.

    Notes
    -----
    Decoders never touch the file system and never write anything.  They
    are pure functions of the file buffer, the line table and the
    envelope.  The dependency direction is::

        utils ← models ← readers ← converters
    """

    type_codes: ClassVar[tuple[int, ...]] = ()

    def decode(self, context: DecodeContext) -> RecordResult:
        """Decode one block, capturing any record-level failure

        Parameters
        ----------
        context : DecodeContext
            Buffer, parsed block and warning channel.

        Returns
        -------
        RecordResult
            ``record`` set on success, ``error`` set on failure.
        """
        try:
            record = self.parse(context)
        except PyUNVError as exc:
            return RecordResult(None, exc, context.warnings)
        except (ValueError, IndexError) as exc:
            error = ParseError(f"error decoding type {context.block.envelope.type_code}: {exc}")
            error.__cause__ = exc
            return RecordResult(None, error, context.warnings)
        return RecordResult(record, None, context.warnings)

    @abstractmethod
    def parse(self, context: DecodeContext) -> Record:
        """Build the typed record of one block

        Raises
        ------
        ParseError
            If the block content is malformed.
        """
        ...
