#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Decoders for geometry records: nodes, coordinate systems, trace lines
and elements

Supported record types
----------------------
* **15 / 2411** — Nodes.  A free-form numeric run grouped by seven:
  label, definition CS, displacement CS, color, x, y, z.  Type 2411
  spreads each node over two lines (``4I10`` / ``3D25.16``) but the flat
  run is the same.
* **18** — Coordinate systems, four lines per system.
* **82** — Trace line: header line, ID line, then node labels eight per
  line.
* **2412** — Elements.  A flat integer run of element headers, optional
  beam orientation fields and node labels.
"""

from __future__ import annotations

import logging

import numpy as np

from pyunv.exceptions import ParseError
from pyunv.models.records import (
    CoordinateSystemRecord,
    DoublePrecisionNodeRecord,
    ElementRecord,
    NodeRecord,
    TraceLineRecord,
)
from pyunv.readers.base import BaseDecoder, DecodeContext
from pyunv.utils.constants import (
    BEAM_LIKE_DESCRIPTORS,
    BEAM_ORIENTATION_FIELDS,
    COORDINATE_SYSTEMS,
    DOUBLE_PRECISION_NODES,
    ELEMENT_HEADER_FIELDS,
    ELEMENTS,
    NODES,
    TRACE_LINES,
)
from pyunv.utils.parsing import int_fields, scan_ints, scan_numbers, text_field

logger = logging.getLogger(__name__)

NODE_FIELDS: int = 7
CS_LINES: int = 4


class NodeDecoder(BaseDecoder):
    """Decoder for node records (types 15 and 2411)"""

    type_codes = (NODES, DOUBLE_PRECISION_NODES)

    def parse(self, context: DecodeContext) -> NodeRecord:
        values = scan_numbers(context.raw_line(i) for i in range(context.n_lines))
        if values.size % NODE_FIELDS:
            raise ParseError(
                f"Node record holds {values.size} values, not a multiple of {NODE_FIELDS}"
            )
        table = values.reshape(-1, NODE_FIELDS)
        cls = (
            DoublePrecisionNodeRecord
            if context.block.envelope.type_code == DOUBLE_PRECISION_NODES
            else NodeRecord
        )
        return cls(
            labels=table[:, 0].astype("i8"),
            def_cs=table[:, 1].astype("i8"),
            disp_cs=table[:, 2].astype("i8"),
            color=table[:, 3].astype("i8"),
            x=table[:, 4],
            y=table[:, 5],
            z=table[:, 6],
        )


class CoordinateSystemDecoder(BaseDecoder):
    """Decoder for the type-18 coordinate system record

    Each system spans four lines::

        csNum, csType, refCsNum, color, method     (5I10)
        name                                       (A20)
        origin xyz, point on x axis xyz            (6E13.5)
        point in xz plane xyz                      (3E13.5)

    A trailing partial group is dropped with a warning.
    """

    type_codes = (COORDINATE_SYSTEMS,)

    def parse(self, context: DecodeContext) -> CoordinateSystemRecord:
        n = context.n_lines // CS_LINES
        if context.n_lines % CS_LINES:
            context.warn(
                f"coordinate system record has {context.n_lines} lines, "
                f"ignoring {context.n_lines % CS_LINES} trailing line(s)"
            )
        ints = np.zeros((n, 5), dtype="i8")
        points = np.zeros((n, 9), dtype="f8")
        names: list[str] = []
        for i in range(n):
            base = i * CS_LINES
            ints[i] = int_fields(context.line(base), 10, 5)
            names.append(text_field(context.line(base + 1), 0, 20))
            pts = scan_numbers([context.raw_line(base + 2), context.raw_line(base + 3)])
            if pts.size != 9:
                raise ParseError(
                    f"coordinate system {ints[i, 0]} has {pts.size} point values, expected 9"
                )
            points[i] = pts
        return CoordinateSystemRecord(
            numbers=ints[:, 0],
            types=ints[:, 1],
            ref_cs=ints[:, 2],
            colors=ints[:, 3],
            methods=ints[:, 4],
            names=names,
            origins=points[:, 0:3],
            ref_point_1=points[:, 3:6],
            ref_point_2=points[:, 6:9],
        )


class TraceLineDecoder(BaseDecoder):
    """Decoder for the type-82 trace line record"""

    type_codes = (TRACE_LINES,)

    def parse(self, context: DecodeContext) -> TraceLineRecord:
        trace_number, declared, color = int_fields(context.line(0), 10, 3)
        nodes = scan_ints(context.raw_line(i) for i in range(2, context.n_lines))
        if declared != len(nodes):
            context.warn(
                f"trace line {trace_number} declares {declared} nodes but lists {len(nodes)}"
            )
        return TraceLineRecord(
            trace_number=trace_number,
            nodes=np.asarray(nodes, dtype="i8"),
            color=color,
            identifier=context.text(1),
        )


class ElementDecoder(BaseDecoder):
    """Decoder for the type-2412 element record

    The record is read as one flat integer run.  Each element starts
    with six fields (label, FE descriptor id, physical property table,
    material property table, color, node count).  Descriptors listed in
    :data:`~pyunv.utils.constants.BEAM_LIKE_DESCRIPTORS` are followed by
    three orientation fields before the node labels.
    """

    type_codes = (ELEMENTS,)

    def parse(self, context: DecodeContext) -> ElementRecord:
        run = scan_ints(context.raw_line(i) for i in range(context.n_lines))
        headers: list[list[int]] = []
        orientations: list[list[int]] = []
        node_lists: list[list[int]] = []
        pos = 0
        while pos < len(run):
            if pos + ELEMENT_HEADER_FIELDS > len(run):
                raise ParseError(f"truncated element header at value {pos}")
            header = run[pos : pos + ELEMENT_HEADER_FIELDS]
            pos += ELEMENT_HEADER_FIELDS
            orientation = [0, 0, 0]
            if header[1] in BEAM_LIKE_DESCRIPTORS:
                orientation = run[pos : pos + BEAM_ORIENTATION_FIELDS]
                pos += BEAM_ORIENTATION_FIELDS
            count = header[5]
            nodes = run[pos : pos + count]
            if len(nodes) != count or len(orientation) != BEAM_ORIENTATION_FIELDS:
                raise ParseError(f"element {header[0]} is truncated")
            pos += count
            headers.append(header)
            orientations.append(orientation)
            node_lists.append(nodes)

        width = max((len(n) for n in node_lists), default=0)
        connectivity = np.zeros((len(node_lists), width), dtype="i8")
        for i, nodes in enumerate(node_lists):
            connectivity[i, : len(nodes)] = nodes
        table = np.asarray(headers, dtype="i8").reshape(-1, ELEMENT_HEADER_FIELDS)
        logger.debug("Decoded %d elements (max %d nodes)", len(headers), width)
        return ElementRecord(
            labels=table[:, 0],
            descriptors=table[:, 1],
            physical_properties=table[:, 2],
            material_properties=table[:, 3],
            colors=table[:, 4],
            node_counts=table[:, 5],
            connectivity=connectivity,
            beam_orientation=np.asarray(orientations, dtype="i8").reshape(-1, 3),
        )
