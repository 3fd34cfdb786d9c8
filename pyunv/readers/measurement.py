#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Decoder for the type-58 "function at nodal DOF" record and its binary
hybrid variant 58b

Header lines
------------
=====  ================================================================
Line   Content
=====  ================================================================
1–5    ID line 1, ID line 2, date, ID line 4, ID line 5
6      function type (1–5), function id (6–15), version (16–20), load
       case (21–30), response entity (32–41), node (42–51), direction
       (52–55), reference entity (57–66), node (67–76), direction (77–80)
7      ordinate data type (1–10), number of points (11–20), spacing
       flag (21–30, 0 = uneven), x minimum, x increment, z value
       (three E13 fields)
8–11   abscissa, ordinate numerator, ordinate denominator and z axis:
       data characteristic (1–10), length / force / temperature
       exponents (11–25), axis label (27–46), units label (48–)
=====  ================================================================

Data section
------------
Ordinate codes 2 and 5 are single precision, every other code double;
5 and 6 are complex.  Unevenly spaced data store one abscissa before
each ordinate group; evenly spaced abscissae are rebuilt as
``x[i] = xmin + i * dx``.  In a 58b block the values are raw IEEE
floats starting right after line 11's terminator, in the byte order of
the envelope.  The uneven abscissa is always a 4-byte single.

Binary Byte-Count Recovery
--------------------------
Some producers write inconsistent point and byte counts.  The payload
size, measured up to the line break that ends the payload line (the
LF or CR LF directly before the closing delimiter is not data), is
compared with the declared byte count:

* fewer bytes than declared → :class:`~pyunv.exceptions.TruncatedDataError`;
* more bytes → the trailing bytes are skipped with a warning;
* declared point count ≠ count implied by the byte count → the larger
  of the two is used, with a warning.
"""

from __future__ import annotations

import logging

import numpy as np

from pyunv.exceptions import ParseError, TruncatedDataError
from pyunv.models.records import AxisDescriptor, MeasurementRecord
from pyunv.readers.base import BaseDecoder, DecodeContext
from pyunv.utils.constants import (
    ABSCISSA_BYTES,
    COMPLEX_ORDINATE_CODES,
    MEASUREMENT,
    SINGLE_ORDINATE_CODES,
    MeasurementLayout,
    measurement_layout,
)
from pyunv.utils.parsing import float_fields, int_fields, int_uff, scan_numbers, text_field

logger = logging.getLogger(__name__)

HEADER_LINES: int = 11


def _axis(line: str) -> AxisDescriptor:
    character = int_uff(line[0:10])
    length, force, temperature = int_fields(line, 5, 3, start=10)
    return AxisDescriptor(
        data_character=character,
        length_exponent=length,
        force_exponent=force,
        temperature_exponent=temperature,
        axis_label=text_field(line, 26, 46),
        units_label=text_field(line, 47),
    )


def _payload_end(buf: bytes, start: int, end: int) -> int:
    """Offset where the payload line ends, before its CR LF or LF."""
    if end > start and buf[end - 1 : end] == b"\n":
        end -= 1
        if end > start and buf[end - 1 : end] == b"\r":
            end -= 1
    return end


class MeasurementDecoder(BaseDecoder):
    """Decoder for type-58 (ASCII) and type-58b (binary) measurements"""

    type_codes = (MEASUREMENT,)

    def parse(self, context: DecodeContext) -> MeasurementRecord:
        context.require_lines(HEADER_LINES, "Measurement record")
        line6 = context.line(5)
        line7 = context.line(6)

        ordinate_code, n_points, spacing = int_fields(line7, 10, 3)
        xmin, dx, z_value = float_fields(line7, 13, 3, start=30)
        layout = measurement_layout(
            complex_data=ordinate_code in COMPLEX_ORDINATE_CODES,
            double=ordinate_code not in SINGLE_ORDINATE_CODES,
            even=spacing != 0,
        )

        if context.block.envelope.binary:
            x, data = self._read_binary(context, layout, n_points)
        else:
            x, data = self._read_ascii(context, layout, n_points)
        if layout.even:
            x = xmin + np.arange(data.size) * dx

        return MeasurementRecord(
            x=x,
            data=data,
            function_type=int_uff(line6[0:5]),
            id_1=context.text(0),
            id_2=context.text(1),
            date=context.text(2),
            id_4=context.text(3),
            id_5=context.text(4),
            function_id=int_uff(line6[5:15]),
            version=int_uff(line6[15:20]),
            load_case=int_uff(line6[20:30]),
            response_entity=text_field(line6, 31, 41),
            response_node=int_uff(line6[41:51]),
            response_direction=int_uff(line6[51:55]),
            reference_entity=text_field(line6, 56, 66),
            reference_node=int_uff(line6[66:76]),
            reference_direction=int_uff(line6[76:80]),
            z_value=z_value,
            precision="double" if layout.double else "single",
            binary=context.block.envelope.binary,
            abscissa=_axis(context.line(7)),
            ordinate=_axis(context.line(8)),
            denominator=_axis(context.line(9)),
            z_axis=_axis(context.line(10)),
        )

    # -- ASCII -------------------------------------------------------------

    @staticmethod
    def _read_ascii(
        context: DecodeContext,
        layout: MeasurementLayout,
        n_points: int,
    ) -> tuple[np.ndarray | None, np.ndarray]:
        values = scan_numbers(
            context.raw_line(i) for i in range(HEADER_LINES, context.n_lines)
        )
        if values.size % layout.group_size:
            raise ParseError(
                f"{values.size} data values do not form whole groups of {layout.group_size}"
            )
        groups = values.reshape(-1, layout.group_size)
        if groups.shape[0] != n_points:
            context.warn(
                f"header declares {n_points} points but {groups.shape[0]} were read"
            )
        x = None if layout.even else groups[:, 0].copy()
        samples = groups[:, 0 if layout.even else 1 :]
        if layout.complex_data:
            data = samples[:, 0] + 1j * samples[:, 1]
        else:
            data = samples[:, 0].copy()
        return x, data

    # -- binary ------------------------------------------------------------

    @staticmethod
    def _read_binary(
        context: DecodeContext,
        layout: MeasurementLayout,
        n_points: int,
    ) -> tuple[np.ndarray | None, np.ndarray]:
        envelope = context.block.envelope
        buf = context.data
        _, header_end = context.block.lines[HEADER_LINES - 1]
        brk = buf.find(b"\n", header_end, context.block.end)
        if brk < 0:
            raise TruncatedDataError("no binary data follows the ASCII header lines")
        start = brk + 1
        available = _payload_end(buf, start, context.block.end) - start
        declared = envelope.byte_count

        skip = available - declared
        if skip < 0:
            raise TruncatedDataError(
                f"not enough data: header declares {declared} bytes but only "
                f"{available} bytes precede the closing delimiter"
            )
        if skip > 0:
            context.warn(
                f"payload holds {available} bytes, {declared} declared; "
                f"skipping {skip} trailing bytes"
            )

        ordinate_bytes = declared if layout.even else declared - n_points * ABSCISSA_BYTES
        implied = ordinate_bytes // (layout.element_size * layout.components)
        if implied != n_points:
            context.warn(
                f"header declares {n_points} points but the byte count implies "
                f"{implied}; reading {max(n_points, implied)}"
            )
        count = max(n_points, implied)
        if count * layout.sample_bytes > available:
            raise TruncatedDataError(
                f"not enough data: {count} points need {count * layout.sample_bytes} "
                f"bytes, {available} available"
            )

        order = envelope.numpy_byte_order
        element = np.dtype(f"{order}f{layout.element_size}")
        if layout.even:
            flat = np.frombuffer(
                buf, dtype=element, count=count * layout.components, offset=start
            ).astype("f8")
            x = None
            samples = flat.reshape(count, layout.components)
        else:
            record = np.dtype(
                [("x", f"{order}f4"), ("y", element, (layout.components,))]
            )
            table = np.frombuffer(buf, dtype=record, count=count, offset=start)
            x = table["x"].astype("f8")
            samples = table["y"].astype("f8").reshape(count, layout.components)

        if layout.complex_data:
            data = samples[:, 0] + 1j * samples[:, 1]
        else:
            data = samples[:, 0].copy()
        return x, data
