#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Per-record status reports returned by the read and write orchestrators

A report holds one :class:`RecordStatus` per collection slot, in the same
order as the records, so ``records[i]`` and ``report.entries[i]`` always
describe the same block.  Fatal errors are never stored here; they are
raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pyunv.exceptions import ErrorCode, PyUNVError


@dataclass
class RecordStatus:
    """Outcome of decoding or encoding one record

    Parameters
    ----------
    block_number : int
        1-based block number when reading, 1-based position in the
        input sequence when writing.
    type_code : int | None
        Record type code, ``None`` when an input record had none.
    binary : bool
        Binary-hybrid variant.
    error_code : ErrorCode
        ``ErrorCode.NONE`` on success.
    error_message : str
        Empty on success.
    warnings : list[str]
        Self-corrections applied while processing the record.
    """

    block_number: int
    type_code: int | None
    binary: bool = False
    error_code: ErrorCode = ErrorCode.NONE
    error_message: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error_code == ErrorCode.NONE

    def fail(self, exc: PyUNVError) -> None:
        """Record *exc* as this slot's error."""
        self.error_code = exc.error_code
        self.error_message = str(exc)


@dataclass
class _Report:
    entries: list[RecordStatus] = field(default_factory=list)

    def add(self, status: RecordStatus) -> None:
        self.entries.append(status)

    @property
    def n_records(self) -> int:
        return len(self.entries)

    @property
    def n_errors(self) -> int:
        return sum(1 for e in self.entries if not e.ok)

    @property
    def error_messages(self) -> list[str]:
        return [e.error_message for e in self.entries if not e.ok]

    @property
    def type_codes(self) -> list[int | None]:
        return [e.type_code for e in self.entries]


@dataclass
class ParseReport(_Report):
    """Result summary of :func:`~pyunv.readers.uff.read_uff`

    Parameters
    ----------
    source : str
        Path of the file that was read.
    n_blocks : int
        Number of delimited blocks found by the scanner.
    messages : list[str]
        Non-fatal file-level messages, such as blocks whose header line
        could not be parsed.  Such blocks occupy no slot.
    """

    source: str = ""
    n_blocks: int = 0
    messages: list[str] = field(default_factory=list)

    @property
    def binary(self) -> list[bool]:
        return [e.binary for e in self.entries]


@dataclass
class WriteReport(_Report):
    """Result summary of :func:`~pyunv.writers.uff.write_uff`

    Parameters
    ----------
    target : str
        Path of the file that was written.
    n_written : int
        Number of blocks actually written.
    """

    target: str = ""
    n_written: int = 0
