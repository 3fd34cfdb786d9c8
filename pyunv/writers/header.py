#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Encoders for the file-level records: header (151) and units (164)
"""

from __future__ import annotations

import logging
from datetime import datetime

from pyunv.models.records import HeaderRecord, UnitsRecord
from pyunv.utils.constants import FILE_HEADER, UNITS
from pyunv.utils.parsing import format_exp, format_text, join_lines
from pyunv.writers.base import BaseEncoder, EncodeOptions, type_line

logger = logging.getLogger(__name__)

UNITS_DESCRIPTION_WIDTH: int = 20


def _date_time(date: str, time: str) -> str:
    return format_text(date, 10) + format_text(time, 10) + " " * 60


class HeaderEncoder(BaseEncoder):
    """Encoder for the type-151 file header

    Line 7 (date and time the file was written) is always stamped with
    the current local time.
    """

    type_codes = (FILE_HEADER,)

    def render(self, record: HeaderRecord, options: EncodeOptions) -> bytes:
        now = datetime.now()
        created = (
            format_text(record.date_created, 10)
            + format_text(record.time_created, 10)
            + f"{int(record.db_version):10d}{int(record.db_subversion):10d}{0:10d}"
            + " " * 30
        )
        return join_lines([
            type_line(FILE_HEADER),
            format_text(record.model_name),
            format_text(record.description),
            format_text(record.db_application),
            created,
            _date_time(record.date_last_saved, record.time_last_saved),
            format_text(record.writer_application),
            _date_time(now.strftime("%d-%b-%y"), now.strftime("%H:%M:%S")),
        ])


class UnitsEncoder(BaseEncoder):
    """Encoder for the type-164 units record

    Factors are written in ``D25.17`` fields.
    """

    type_codes = (UNITS,)

    def render(self, record: UnitsRecord, options: EncodeOptions) -> bytes:
        if len(record.description) > UNITS_DESCRIPTION_WIDTH:
            options.warn(
                f"units description {record.description!r} truncated to "
                f"{UNITS_DESCRIPTION_WIDTH} characters"
            )
        first = (
            f"{int(record.units_code):10d}"
            + format_text(record.description, UNITS_DESCRIPTION_WIDTH)
            + f"{int(record.temperature_mode):10d}"
        )
        factors = "".join(
            format_exp(v, 25, 17, marker="D")
            for v in (record.length_factor, record.force_factor, record.temperature_factor)
        )
        return join_lines([
            type_line(UNITS),
            first,
            factors,
            format_exp(record.temperature_offset, 25, 17, marker="D"),
        ])
