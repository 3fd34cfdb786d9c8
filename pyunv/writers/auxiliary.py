#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Encoders for the write-only records 1858, 1860 and 2420

Type 1858 layout
----------------
=====  ===============================================================
Line   Content
=====  ===============================================================
1      six reserved integers (6I12)
2      reserved, window type, amplitude units, normalization method,
       reserved, ordinate numerator / denominator and z-axis data
       type qualifiers, sampling type, three reserved (12I6)
3      z RPM, z time, z order, number of samples, exponential window
       damping (5E15.7)
4–5    reserved reals (5E15.7)
6–7    ``NONE`` placeholders for response and reference direction text
=====  ===============================================================

Type 1860 layout
----------------
Serial number (A20); manufacturer and model (A20, 2X, A20); calibrated
by, calibration date and due date (3 × A20 separated by two blanks);
description (A80); operating mode, data type, type qualifier (3I12),
length / force / temperature exponents (3I6), units label (2X, A20);
sensitivity (E15.7).

Type 2420 layout
----------------
Part UID (I10) and a reserved zero; part name (A40); then per
coordinate system a ``4I10`` label / type / color line, a name line
(A40) and four ``3E25.16`` lines holding the transformation matrix
(three rotation rows and the origin).
"""

from __future__ import annotations

import logging

from pyunv.models.records import (
    DataHeaderRecord,
    PartCoordinateSystemsRecord,
    TransducerRecord,
)
from pyunv.utils.constants import DATA_HEADER, PART_COORDINATE_SYSTEMS, TRANSDUCER
from pyunv.utils.parsing import format_exp, format_ints, format_text, join_lines
from pyunv.utils.validation import validate_equal_lengths, validate_shape
from pyunv.writers.base import BaseEncoder, EncodeOptions, type_line

logger = logging.getLogger(__name__)


def _e15(values) -> str:
    return "".join(format_exp(v, 15, 7) for v in values) + " " * 5


class DataHeaderEncoder(BaseEncoder):
    """Encoder for the type-1858 measurement qualifier record"""

    type_codes = (DATA_HEADER,)

    def render(self, record: DataHeaderRecord, options: EncodeOptions) -> bytes:
        qualifiers = [
            0,
            record.window_type,
            record.amplitude_units,
            record.normalization_method,
            0,
            record.ordinate_numerator_qualifier,
            record.ordinate_denominator_qualifier,
            record.z_axis_qualifier,
            record.sampling_type,
            0, 0, 0,
        ]
        return join_lines([
            type_line(DATA_HEADER),
            format_ints([0] * 6, 12) + " " * 8,
            format_ints(qualifiers, 6) + " " * 8,
            _e15([
                record.z_rpm,
                record.z_time,
                record.z_order,
                record.number_of_samples,
                record.exponential_window_damping,
            ]),
            _e15([0.0] * 5),
            _e15([0.0] * 5),
            format_text("NONE", 6) + format_text("NONE", 74),
            format_text("NONE"),
        ])


class TransducerEncoder(BaseEncoder):
    """Encoder for the type-1860 transducer calibration record"""

    type_codes = (TRANSDUCER,)

    def render(self, record: TransducerRecord, options: EncodeOptions) -> bytes:
        units = (
            format_ints([record.operating_mode, record.data_type, record.type_qualifier], 12)
            + format_ints(
                [record.length_exponent, record.force_exponent, record.temperature_exponent], 6
            )
            + "  " + format_text(record.units_label, 20)
        )
        return join_lines([
            type_line(TRANSDUCER),
            format_text(record.serial_number, 20),
            format_text(record.manufacturer, 20) + "  " + format_text(record.model, 20),
            "  ".join(
                format_text(s, 20)
                for s in (record.calibrated_by, record.calibration_date,
                          record.calibration_due_date)
            ),
            format_text(record.description),
            units,
            format_exp(record.sensitivity, 15, 7),
        ])


class PartCoordinateSystemsEncoder(BaseEncoder):
    """Encoder for the type-2420 part coordinate system record"""

    type_codes = (PART_COORDINATE_SYSTEMS,)

    def render(self, record: PartCoordinateSystemsRecord, options: EncodeOptions) -> bytes:
        validate_shape(record.matrices, (4, 3), "matrices")
        n = validate_equal_lengths(
            labels=record.labels, matrices=record.matrices,
            types=record.types, colors=record.colors, names=record.names,
        )
        lines = [
            type_line(PART_COORDINATE_SYSTEMS),
            format_ints([record.part_uid, 0]),
            format_text(record.part_name, 40),
        ]
        for i in range(n):
            lines.append(format_ints([record.labels[i], record.types[i], record.colors[i], 0]))
            lines.append(format_text(record.names[i], 40))
            for row in record.matrices[i]:
                lines.append("".join(format_exp(v, 25, 16) for v in row))
        return join_lines(lines)
