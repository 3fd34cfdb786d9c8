#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Decoders for the file-level records: header (151) and units (164)

Type 151 layout
---------------
=====  ============================================================
Line   Content
=====  ============================================================
1      model name
2      model file description
3      program that created the database
4      date (1–10), time (11–20), version (21–30), sub-version (31–40)
5      date (1–10), time (11–20) the database was last saved
6      program that wrote the universal file
7      date (1–10), time (11–20) the universal file was written
=====  ============================================================

Missing trailing lines read as empty strings and zero versions.

Type 164 layout
---------------
Line 1 holds the units code (1–10), a 20-character description
(11–30) and the temperature mode (31–40).  Lines 2 and 3 hold the
length, force and temperature factors and the temperature offset in
25-column ``D25.17`` fields.
"""

from __future__ import annotations

import logging

from pyunv.models.records import HeaderRecord, UnitsRecord
from pyunv.readers.base import BaseDecoder, DecodeContext
from pyunv.utils.constants import FILE_HEADER, UNITS
from pyunv.utils.parsing import float_fields, int_uff, text_field

logger = logging.getLogger(__name__)


class HeaderDecoder(BaseDecoder):
    """Decoder for the type-151 file header"""

    type_codes = (FILE_HEADER,)

    def parse(self, context: DecodeContext) -> HeaderRecord:
        created = context.line(3)
        saved = context.line(4)
        written = context.line(6)
        return HeaderRecord(
            model_name=context.text(0),
            description=context.text(1),
            db_application=context.text(2),
            date_created=text_field(created, 0, 10),
            time_created=text_field(created, 10, 20),
            db_version=int_uff(created[20:30]),
            db_subversion=int_uff(created[30:40]),
            date_last_saved=text_field(saved, 0, 10),
            time_last_saved=text_field(saved, 10, 20),
            writer_application=context.text(5),
            date_written=text_field(written, 0, 10),
            time_written=text_field(written, 10, 20),
        )


class UnitsDecoder(BaseDecoder):
    """Decoder for the type-164 units record"""

    type_codes = (UNITS,)

    def parse(self, context: DecodeContext) -> UnitsRecord:
        context.require_lines(2, "Units record")
        first = context.line(0)
        length, force, temperature = float_fields(context.raw_line(1), 25, 3)
        (offset,) = float_fields(context.line(2), 25, 1)
        return UnitsRecord(
            units_code=int_uff(first[0:10]),
            description=text_field(first, 10, 30),
            temperature_mode=int_uff(first[30:40]),
            length_factor=length,
            force_factor=force,
            temperature_factor=temperature,
            temperature_offset=offset,
        )
