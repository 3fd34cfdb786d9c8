#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Universal File reader: the read orchestrator

Reads the whole file into memory once, locates its blocks, and decodes
each visited block with the decoder registered for its type code.

Read modes
----------
``"info"``
    Parse block headers only.  The report lists every block's type code
    and binary flag; no records are returned.
``"full"``
    Decode every block.
``"filtered"``
    Decode only the 1-based block numbers in *blocks* (in the given
    order) and / or only the type codes in *types*.  Passing either
    filter implies this mode; an empty filter means no filtering.

Slot rules
----------
* A block whose header line cannot be parsed takes no slot; the problem
  goes to ``report.messages``.
* A block excluded by *types* takes no slot.
* A block with an unknown type code takes a slot holding an
  :class:`~pyunv.models.records.UnsupportedRecord` and a record error.
* A block that fails to decode takes a slot holding ``None`` and a
  record error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal, Sequence

from pyunv.exceptions import FileFormatError, ParseError, UnsupportedRecordError
from pyunv.models.records import Record, UnsupportedRecord
from pyunv.models.report import ParseReport, RecordStatus
from pyunv.readers.base import BaseDecoder, DecodeContext
from pyunv.readers.geometry import (
    CoordinateSystemDecoder,
    ElementDecoder,
    NodeDecoder,
    TraceLineDecoder,
)
from pyunv.readers.header import HeaderDecoder, UnitsDecoder
from pyunv.readers.measurement import MeasurementDecoder
from pyunv.readers.response import NodalResponseDecoder
from pyunv.readers.scanner import parse_block_header, scan_blocks

logger = logging.getLogger(__name__)

ReadMode = Literal["info", "full", "filtered"]

DECODERS: dict[int, BaseDecoder] = {
    code: decoder
    for decoder in (
        HeaderDecoder(),
        UnitsDecoder(),
        NodeDecoder(),
        CoordinateSystemDecoder(),
        TraceLineDecoder(),
        ElementDecoder(),
        NodalResponseDecoder(),
        MeasurementDecoder(),
    )
    for code in decoder.type_codes
}
"""Registry of decoders keyed by record type code."""


class UFFReader:
    """Reader for Universal Files (``.uff`` / ``.unv``)

    Examples
    --------
    >>> reader = UFFReader()
    >>> records, report = reader.read("test.unv", types=[58])
    >>> report.n_errors
    0
    """

    def read(
        self,
        path: Path | str,
        *,
        mode: ReadMode = "full",
        blocks: Sequence[int] | None = None,
        types: Iterable[int] | None = None,
        verbose: bool = True,
    ) -> tuple[list[Record | None], ParseReport]:
        """Read a Universal File and return its records and a report

        Parameters
        ----------
        path : Path | str
            File to read.
        mode : ``"info"`` | ``"full"`` | ``"filtered"``
            Read mode (see module notes).  Default ``"full"``.
        blocks : sequence of int, optional
            1-based block numbers to visit, in order.
        types : iterable of int, optional
            Type codes to keep.
        verbose : bool, optional
            Log self-corrections at WARNING level (default) rather than
            DEBUG.  They are recorded in the report either way.

        Returns
        -------
        records : list
            One entry per slot (see module notes).  Empty in info mode.
        report : ParseReport
            One status entry per slot plus file-level messages.

        Raises
        ------
        FileFormatError
            If the file cannot be read, holds no blocks, holds an odd
            number of delimiters, or *blocks* names a block that does
            not exist.
        """
        if mode not in ("info", "full", "filtered"):
            raise ValueError(
                f"Unknown read mode {mode!r}.  Must be one of: info, full, filtered"
            )
        filepath = Path(path)
        logger.debug("Opening UFF file: %s", filepath)
        try:
            with open(filepath, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise FileFormatError(f"could not read file {filepath}: {exc}") from exc

        ranges = scan_blocks(data)
        scope = self._scope(blocks, len(ranges))
        wanted = set(types) if types else None
        report = ParseReport(source=str(filepath), n_blocks=len(ranges))
        records: list[Record | None] = []

        for number in scope:
            try:
                parsed = parse_block_header(data, ranges[number - 1])
            except ParseError as exc:
                message = f"block {number}: {exc}"
                report.messages.append(message)
                logger.warning("Skipping %s", message)
                continue

            envelope = parsed.envelope
            if wanted is not None and envelope.type_code not in wanted:
                continue

            status = RecordStatus(
                block_number=number,
                type_code=envelope.type_code,
                binary=envelope.binary,
                warnings=list(parsed.warnings),
            )
            if mode == "info":
                report.add(status)
                continue

            decoder = DECODERS.get(envelope.type_code)
            if decoder is None:
                records.append(UnsupportedRecord(envelope.type_code, envelope.binary))
                status.fail(UnsupportedRecordError(
                    f"unknown data-set ({envelope.type_code}) found in block {number}"
                ))
                logger.debug("Block %d: unsupported type %d", number, envelope.type_code)
            else:
                context = DecodeContext(data=data, block=parsed, verbose=verbose)
                result = decoder.decode(context)
                records.append(result.record)
                status.warnings.extend(result.warnings)
                if result.error is not None:
                    status.fail(result.error)
                    logger.debug("Block %d: %s", number, result.error)
            report.add(status)

        logger.debug(
            "Read %d records (%d errors) from %s",
            report.n_records, report.n_errors, filepath,
        )
        return records, report

    @staticmethod
    def _scope(blocks: Sequence[int] | None, n_blocks: int) -> list[int]:
        if not blocks:
            return list(range(1, n_blocks + 1))
        numbers = [int(b) for b in blocks]
        if max(numbers) > n_blocks:
            raise FileFormatError(
                f"Max block number to be read is too high ({max(numbers)}); "
                f"the file holds {n_blocks} blocks"
            )
        if min(numbers) < 1:
            raise FileFormatError(f"Block numbers start at 1, got {min(numbers)}")
        return numbers


def read_uff(
    path: Path | str,
    *,
    mode: ReadMode = "full",
    blocks: Sequence[int] | None = None,
    types: Iterable[int] | None = None,
    verbose: bool = True,
) -> tuple[list[Record | None], ParseReport]:
    """Read a Universal File (convenience wrapper around :class:`UFFReader`)

    See :meth:`UFFReader.read` for the parameters.

    Examples
    --------
    >>> records, report = read_uff("test.unv", blocks=[2], types=[58])
    """
    if mode == "full" and (blocks or types):
        mode = "filtered"
    return UFFReader().read(path, mode=mode, blocks=blocks, types=types, verbose=verbose)
