#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Universal File writer: the write orchestrator

Opens the target once, renders every record with the encoder registered
for its type code and writes each rendered body wrapped between two
``-1`` delimiter lines.

Write modes
-----------
``"append"``
    Add blocks to the end of the file, creating it if needed (default).
``"replace"``
    Truncate the file first.

A record that fails to encode (validation failure, unsupported function
type, unsupported record type) gets an error entry in the returned
:class:`~pyunv.models.report.WriteReport` and nothing is written for it;
the remaining records are still written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal

from pyunv.exceptions import EncodeError, UnsupportedRecordError
from pyunv.models.records import Record
from pyunv.models.report import RecordStatus, WriteReport
from pyunv.utils.constants import SENTINEL_LINE
from pyunv.writers.auxiliary import (
    DataHeaderEncoder,
    PartCoordinateSystemsEncoder,
    TransducerEncoder,
)
from pyunv.writers.base import BaseEncoder, ByteOrder, EncodeOptions
from pyunv.writers.geometry import (
    CoordinateSystemEncoder,
    ElementEncoder,
    NodeEncoder,
    TraceLineEncoder,
)
from pyunv.writers.header import HeaderEncoder, UnitsEncoder
from pyunv.writers.measurement import MeasurementEncoder
from pyunv.writers.response import NodalResponseEncoder

logger = logging.getLogger(__name__)

WriteMode = Literal["append", "replace"]

_FILE_MODES: dict[str, str] = {"append": "ab", "replace": "wb"}

ENCODERS: dict[int, BaseEncoder] = {
    code: encoder
    for encoder in (
        HeaderEncoder(),
        UnitsEncoder(),
        NodeEncoder(),
        CoordinateSystemEncoder(),
        TraceLineEncoder(),
        ElementEncoder(),
        NodalResponseEncoder(),
        MeasurementEncoder(),
        DataHeaderEncoder(),
        TransducerEncoder(),
        PartCoordinateSystemsEncoder(),
    )
    for code in encoder.type_codes
}
"""Registry of encoders keyed by record type code."""


class UFFWriter:
    """Writer for Universal Files (``.uff`` / ``.unv``)

    Examples
    --------
    >>> writer = UFFWriter()
    >>> report = writer.write("out.unv", records, mode="replace")
    >>> report.n_written == len(records)
    True
    """

    def write(
        self,
        path: Path | str,
        records: Iterable[Record | None],
        *,
        mode: WriteMode = "append",
        byte_order: ByteOrder = "little",
        verbose: bool = True,
    ) -> WriteReport:
        """Write *records* to a Universal File

        Parameters
        ----------
        path : Path | str
            Target file.
        records : iterable of Record
            Records to write, in order.
        mode : ``"append"`` | ``"replace"``
            Append to or replace an existing file.  Default ``"append"``.
        byte_order : ``"little"`` | ``"big"``
            Byte order of 58b binary payloads.  Default ``"little"``.
        verbose : bool, optional
            Log encoder warnings (such as truncated text fields) at WARNING
            level when ``True`` (default), at DEBUG level otherwise.  They
            are always collected in the report.

        Returns
        -------
        WriteReport
            One status entry per input record.

        Raises
        ------
        ValueError
            If *mode* is not one of the supported modes.
        EncodeError
            If the file cannot be opened or an I/O fault occurs while
            writing.  The file handle is closed first.
        """
        if mode not in _FILE_MODES:
            raise ValueError(
                f"Unknown write mode {mode!r}.  Must be one of: {sorted(_FILE_MODES)}"
            )
        filepath = Path(path)
        options = EncodeOptions(byte_order=byte_order, verbose=verbose)
        report = WriteReport(target=str(filepath))

        try:
            with open(filepath, _FILE_MODES[mode]) as fh:
                for index, record in enumerate(records, start=1):
                    status = self._write_one(fh, index, record, options)
                    if status.ok:
                        report.n_written += 1
                    report.add(status)
        except Exception as exc:
            if isinstance(exc, EncodeError):
                raise
            raise EncodeError(f"Failed to write UFF file {filepath}: {exc}") from exc

        logger.info(
            "Wrote %d of %d records to %s", report.n_written, report.n_records, filepath
        )
        return report

    @staticmethod
    def _write_one(fh, index: int, record: Record | None, options: EncodeOptions) -> RecordStatus:
        type_code = getattr(record, "type_code", None)
        status = RecordStatus(
            block_number=index,
            type_code=type_code,
            binary=bool(getattr(record, "binary", False)),
        )
        encoder = ENCODERS.get(type_code) if type_code is not None else None
        if encoder is None:
            status.fail(UnsupportedRecordError(
                f"record {index}: unsupported record type ({type_code})"
            ))
            logger.debug("Record %d: no encoder for type %s", index, type_code)
            return status

        result = encoder.encode(record, options)
        status.warnings.extend(result.warnings)
        if result.error is not None:
            status.fail(result.error)
            logger.debug("Record %d: %s", index, result.error)
            return status

        fh.write(SENTINEL_LINE + result.payload + SENTINEL_LINE)
        return status


def write_uff(
    path: Path | str,
    records: Iterable[Record | None],
    *,
    mode: WriteMode = "append",
    byte_order: ByteOrder = "little",
    verbose: bool = True,
) -> WriteReport:
    """Write records to a Universal File (wrapper around :class:`UFFWriter`)

    See :meth:`UFFWriter.write` for the parameters.

    Examples
    --------
    >>> report = write_uff("out.unv", records, mode="replace", byte_order="big")
    """
    return UFFWriter().write(
        path, records, mode=mode, byte_order=byte_order, verbose=verbose
    )
