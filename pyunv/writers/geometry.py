#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Encoders for geometry records: nodes, coordinate systems, trace lines
and elements

Line formats
------------
* **15** — ``4I10, 3E13.5`` per node.
* **2411** — ``4I10`` then ``3D25.16`` per node.
* **18** — ``5I10``, ``A20``, ``6E13.5``, ``3E13.5`` per system.
* **82** — ``3I10``, ``A80``, then node labels ``8I10``.
* **2412** — ``6I10``, ``3I10`` orientation for beam-like descriptors,
  then node labels ``8I10``.
"""

from __future__ import annotations

import logging

from pyunv.models.records import (
    CoordinateSystemRecord,
    ElementRecord,
    NodeRecord,
    TraceLineRecord,
)
from pyunv.utils.constants import (
    BEAM_LIKE_DESCRIPTORS,
    COORDINATE_SYSTEMS,
    DOUBLE_PRECISION_NODES,
    ELEMENT_NODES_PER_LINE,
    ELEMENTS,
    NODES,
    TRACE_LINES,
)
from pyunv.utils.parsing import format_exp, format_ints, format_text, join_lines
from pyunv.utils.validation import validate_equal_lengths, validate_shape
from pyunv.writers.base import BaseEncoder, EncodeOptions, type_line

logger = logging.getLogger(__name__)


def _int_lines(values, per_line: int = ELEMENT_NODES_PER_LINE) -> list[str]:
    values = [int(v) for v in values]
    return [format_ints(values[i : i + per_line]) for i in range(0, len(values), per_line)]


class NodeEncoder(BaseEncoder):
    """Encoder for node records (types 15 and 2411)"""

    type_codes = (NODES, DOUBLE_PRECISION_NODES)

    def render(self, record: NodeRecord, options: EncodeOptions) -> bytes:
        validate_equal_lengths(
            labels=record.labels, x=record.x, y=record.y, z=record.z,
            def_cs=record.def_cs, disp_cs=record.disp_cs, color=record.color,
        )
        double = record.type_code == DOUBLE_PRECISION_NODES
        lines = [type_line(record.type_code)]
        for i in range(record.labels.size):
            ids = format_ints(
                [record.labels[i], record.def_cs[i], record.disp_cs[i], record.color[i]]
            )
            xyz = (record.x[i], record.y[i], record.z[i])
            if double:
                lines.append(ids)
                lines.append("".join(format_exp(v, 25, 16, marker="D") for v in xyz))
            else:
                lines.append(ids + "".join(format_exp(v, 13, 5) for v in xyz))
        return join_lines(lines)


class CoordinateSystemEncoder(BaseEncoder):
    """Encoder for the type-18 coordinate system record"""

    type_codes = (COORDINATE_SYSTEMS,)

    def render(self, record: CoordinateSystemRecord, options: EncodeOptions) -> bytes:
        for name in ("origins", "ref_point_1", "ref_point_2"):
            validate_shape(getattr(record, name), (3,), name)
        n = validate_equal_lengths(
            numbers=record.numbers, origins=record.origins,
            ref_point_1=record.ref_point_1, ref_point_2=record.ref_point_2,
            types=record.types, ref_cs=record.ref_cs, colors=record.colors,
            methods=record.methods, names=record.names,
        )
        lines = [type_line(COORDINATE_SYSTEMS)]
        for i in range(n):
            lines.append(format_ints([
                record.numbers[i], record.types[i], record.ref_cs[i],
                record.colors[i], record.methods[i],
            ]))
            lines.append(format_text(record.names[i], 20))
            points = list(record.origins[i]) + list(record.ref_point_1[i])
            lines.append("".join(format_exp(v, 13, 5) for v in points))
            lines.append("".join(format_exp(v, 13, 5) for v in record.ref_point_2[i]))
        return join_lines(lines)


class TraceLineEncoder(BaseEncoder):
    """Encoder for the type-82 trace line record"""

    type_codes = (TRACE_LINES,)

    def render(self, record: TraceLineRecord, options: EncodeOptions) -> bytes:
        lines = [
            type_line(TRACE_LINES),
            format_ints([record.trace_number, record.nodes.size, record.color]),
            format_text(record.identifier),
        ]
        lines.extend(_int_lines(record.nodes))
        return join_lines(lines)


class ElementEncoder(BaseEncoder):
    """Encoder for the type-2412 element record"""

    type_codes = (ELEMENTS,)

    def render(self, record: ElementRecord, options: EncodeOptions) -> bytes:
        validate_shape(record.beam_orientation, (3,), "beam_orientation")
        n = validate_equal_lengths(
            labels=record.labels, descriptors=record.descriptors,
            connectivity=record.connectivity, node_counts=record.node_counts,
            physical_properties=record.physical_properties,
            material_properties=record.material_properties,
            colors=record.colors, beam_orientation=record.beam_orientation,
        )
        lines = [type_line(ELEMENTS)]
        for i in range(n):
            nodes = record.element_nodes(i)
            lines.append(format_ints([
                record.labels[i], record.descriptors[i],
                record.physical_properties[i], record.material_properties[i],
                record.colors[i], nodes.size,
            ]))
            if int(record.descriptors[i]) in BEAM_LIKE_DESCRIPTORS:
                lines.append(format_ints(record.beam_orientation[i]))
            lines.extend(_int_lines(nodes))
        return join_lines(lines)
