#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Encoder for the type-58 measurement record and its binary variant 58b

The on-disk case is re-derived from the record's content, never taken
from the caller:

==== ======= ========= ======= ===========================
Case Ordinate Precision Spacing ASCII format
==== ======= ========= ======= ===========================
1    real    single    even    6E13.5
2    real    single    uneven  6E13.5
3    complex single    even    6E13.5
4    complex single    uneven  6E13.5
5    real    double    even    4E20.12
6    real    double    uneven  2(E13.5, E20.12)
7    complex double    even    4E20.12
8    complex double    uneven  E13.5, 2E20.12
==== ======= ========= ======= ===========================

Binary payloads are written in the requested byte order.  The abscissa
of unevenly spaced data is stored as a 4-byte single in every case, and
the byte count written on the header line is exact for the chosen case.
The payload is terminated by a line break ahead of the closing delimiter.
"""

from __future__ import annotations

import logging

import numpy as np

from pyunv.exceptions import EncodeError
from pyunv.models.records import AxisDescriptor, MeasurementRecord
from pyunv.utils.constants import (
    BINARY_ASCII_LINES,
    BINARY_MARKER,
    BYTE_ORDER_CODES,
    FLOAT_FORMAT_IEEE,
    MEASUREMENT,
    WRITABLE_FUNCTION_TYPES,
    MeasurementLayout,
)
from pyunv.utils.parsing import (
    format_exp,
    format_ints,
    format_text,
    join_lines,
    wrap_fields,
)
from pyunv.utils.validation import validate_choice, validate_series
from pyunv.writers.base import BaseEncoder, EncodeOptions, type_line

logger = logging.getLogger(__name__)


def _axis_line(axis: AxisDescriptor) -> str:
    return (
        format_ints([axis.data_character], 10)
        + format_ints(
            [axis.length_exponent, axis.force_exponent, axis.temperature_exponent], 5
        )
        + " " + format_text(axis.axis_label, 20)
        + " " + format_text(axis.units_label, 20)
    ).ljust(80)


def _function_line(record: MeasurementRecord) -> str:
    return (
        f"{int(record.function_type):5d}{int(record.function_id):10d}"
        f"{int(record.version):5d}{int(record.load_case):10d}"
        f" {format_text(record.response_entity, 10)}"
        f"{int(record.response_node):10d}{int(record.response_direction):4d}"
        f" {format_text(record.reference_entity, 10)}"
        f"{int(record.reference_node):10d}{int(record.reference_direction):4d}"
    )


def _binary_header(byte_order: int, n_bytes: int) -> str:
    return (
        f"{MEASUREMENT:6d}{BINARY_MARKER}{byte_order:6d}{FLOAT_FORMAT_IEEE:6d}"
        f"{BINARY_ASCII_LINES:12d}{n_bytes:12d}{0:6d}{0:6d}{0:12d}{0:12d}"
    )


def _sample_columns(record: MeasurementRecord, layout: MeasurementLayout) -> list[np.ndarray]:
    """Per-sample stored columns, abscissa first when uneven."""
    columns: list[np.ndarray] = [] if layout.even else [record.x]
    if layout.complex_data:
        columns += [record.data.real, record.data.imag]
    else:
        columns.append(record.data.real)
    return columns


class MeasurementEncoder(BaseEncoder):
    """Encoder for type-58 (ASCII) and type-58b (binary) measurements"""

    type_codes = (MEASUREMENT,)

    def render(self, record: MeasurementRecord, options: EncodeOptions) -> bytes:
        if int(record.function_type) not in WRITABLE_FUNCTION_TYPES:
            raise EncodeError(f"Unsupported function type: {record.function_type}")
        validate_choice(record.precision, ("single", "double"), "precision")
        validate_choice(options.byte_order, BYTE_ORDER_CODES, "byte_order")
        n = validate_series(record.x, record.data)

        layout = record.layout
        if layout.even:
            xmin = record.x[0]
            dx = record.x[1] - record.x[0] if n > 1 else 0.0
        else:
            xmin = dx = 0.0

        if record.binary:
            header = _binary_header(BYTE_ORDER_CODES[options.byte_order], layout.byte_count(n))
        else:
            header = type_line(MEASUREMENT)

        lines = [header]
        lines.extend(
            format_text(s)
            for s in (record.id_1, record.id_2, record.date, record.id_4, record.id_5)
        )
        lines.append(_function_line(record))
        lines.append(
            format_ints([layout.ordinate_code, n, 1 if layout.even else 0])
            + "".join(format_exp(v, 13, 5) for v in (xmin, dx, record.z_value))
        )
        for axis in (record.abscissa, record.ordinate, record.denominator, record.z_axis):
            lines.append(_axis_line(axis))

        columns = _sample_columns(record, layout)
        logger.debug(
            "Encoding measurement case %d (%d points, %s)",
            layout.case_id, n, "binary" if record.binary else "ascii",
        )
        if record.binary:
            return join_lines(lines) + self._binary_payload(columns, layout, options) + b"\n"

        flat = np.column_stack(columns).ravel()
        lines.extend(
            wrap_fields(flat, layout.ascii_fields, lambda v, f: format_exp(v, *f))
        )
        return join_lines(lines)

    @staticmethod
    def _binary_payload(
        columns: list[np.ndarray],
        layout: MeasurementLayout,
        options: EncodeOptions,
    ) -> bytes:
        order = "<" if options.byte_order == "little" else ">"
        element = np.dtype(f"{order}f{layout.element_size}")
        if layout.even:
            return np.column_stack(columns).astype(element).tobytes()
        record = np.dtype([("x", f"{order}f4"), ("y", element, (layout.components,))])
        table = np.zeros(columns[0].size, dtype=record)
        table["x"] = columns[0]
        table["y"] = np.column_stack(columns[1:])
        return table.tobytes()
