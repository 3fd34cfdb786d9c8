#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Decoder for the type-55 "data at nodes" record

Layout
------
=====  ================================================================
Line   Content
=====  ================================================================
1–5    free ID text
6      model type, analysis type, data characteristic, response type,
       data type, values per node (6I10)
7      analysis-specific integers (number of ints, number of reals,
       …, mode or frequency number)
8      analysis-specific reals
9…     one node-number line followed by one data line, per node
=====  ================================================================

Analysis-specific lines 7–8
---------------------------
* **2, normal mode** — mode number; frequency, modal mass, viscous and
  hysteretic damping ratio.
* **3 / 7, complex eigenvalue** — mode number; eigenvalue, modal A and
  modal B, each as a real / imaginary pair.
* **5, frequency response** — frequency number; frequency.
"""

from __future__ import annotations

import logging

import numpy as np

from pyunv.exceptions import ParseError
from pyunv.models.records import NodalResponseRecord
from pyunv.readers.base import BaseDecoder, DecodeContext
from pyunv.utils.constants import (
    ANALYSIS_COMPLEX_EIGENVALUE_FIRST,
    ANALYSIS_COMPLEX_EIGENVALUE_SECOND,
    ANALYSIS_FREQUENCY_RESPONSE,
    ANALYSIS_LINE7_COUNTS,
    ANALYSIS_NORMAL_MODE,
    DATA_TYPE_COMPLEX,
    DATA_TYPE_REAL,
    MODEL_TYPE_STRUCTURAL,
    NODAL_RESPONSE,
)
from pyunv.utils.parsing import int_fields, int_uff, scan_numbers

logger = logging.getLogger(__name__)

HEADER_LINES: int = 8


class NodalResponseDecoder(BaseDecoder):
    """Decoder for the type-55 nodal response record"""

    type_codes = (NODAL_RESPONSE,)

    def parse(self, context: DecodeContext) -> NodalResponseRecord:
        context.require_lines(HEADER_LINES, "Data-at-nodes record")
        (model_type, analysis_type, data_character,
         response_type, data_type, per_node) = int_fields(context.line(5), 10, 6)

        if model_type != MODEL_TYPE_STRUCTURAL:
            raise ParseError(f"Unsupported model type {model_type} (only 1 is supported)")
        if data_type not in (DATA_TYPE_REAL, DATA_TYPE_COMPLEX):
            raise ParseError(f"Unsupported data type {data_type}")
        if per_node not in (3, 6):
            raise ParseError(f"Unsupported number of values per node: {per_node}")
        if data_type == DATA_TYPE_COMPLEX and per_node == 6:
            raise ParseError("Complex data with 6 values per node is not supported")
        if analysis_type not in ANALYSIS_LINE7_COUNTS:
            raise ParseError(f"Unsupported analysis type {analysis_type}")

        line7 = context.line(6)
        counts = tuple(int_fields(line7, 10, 2))
        if counts != ANALYSIS_LINE7_COUNTS[analysis_type]:
            context.warn(
                f"line 7 declares {counts[0]} integers and {counts[1]} reals, "
                f"expected {ANALYSIS_LINE7_COUNTS[analysis_type]}"
            )
        number = int_uff(line7[30:40])
        reals = scan_numbers([context.raw_line(7)])

        extra: dict = {}
        if analysis_type == ANALYSIS_NORMAL_MODE:
            freq, mass, v_damp, h_damp = self._take(reals, 4)
            extra = dict(
                mode_number=number,
                frequency=freq,
                modal_mass=mass,
                viscous_damping=v_damp,
                hysteretic_damping=h_damp,
            )
        elif analysis_type in (ANALYSIS_COMPLEX_EIGENVALUE_FIRST,
                               ANALYSIS_COMPLEX_EIGENVALUE_SECOND):
            e_re, e_im, a_re, a_im, b_re, b_im = self._take(reals, 6)
            extra = dict(
                mode_number=number,
                eigenvalue=complex(e_re, e_im),
                modal_a=complex(a_re, a_im),
                modal_b=complex(b_re, b_im),
            )
        elif analysis_type == ANALYSIS_FREQUENCY_RESPONSE:
            (freq,) = self._take(reals, 1)
            extra = dict(frequency_number=number, frequency=freq)

        nodes, values = self._node_data(context, data_type, per_node)
        return NodalResponseRecord(
            node_numbers=nodes,
            values=values,
            analysis_type=analysis_type,
            data_character=data_character,
            response_type=response_type,
            id_lines=[context.text(i) for i in range(5)],
            model_type=model_type,
            **extra,
        )

    @staticmethod
    def _take(reals: np.ndarray, count: int) -> list[float]:
        if reals.size < count:
            raise ParseError(f"line 8 holds {reals.size} values, expected {count}")
        return [float(v) for v in reals[:count]]

    @staticmethod
    def _node_data(
        context: DecodeContext,
        data_type: int,
        per_node: int,
    ) -> tuple[np.ndarray, np.ndarray]:
        remaining = context.n_lines - HEADER_LINES
        n = remaining // 2
        if remaining % 2:
            context.warn("odd number of node data lines, ignoring the last one")
        stored = per_node * (2 if data_type == DATA_TYPE_COMPLEX else 1)

        nodes = np.zeros(n, dtype="i8")
        raw = np.zeros((n, stored), dtype="f8")
        for k in range(n):
            base = HEADER_LINES + 2 * k
            nodes[k] = int_uff(context.line(base)[0:10])
            row = scan_numbers([context.raw_line(base + 1)])
            if row.size < stored:
                raise ParseError(
                    f"node {nodes[k]} holds {row.size} values, expected {stored}"
                )
            raw[k] = row[:stored]

        if data_type == DATA_TYPE_COMPLEX:
            return nodes, raw[:, 0::2] + 1j * raw[:, 1::2]
        return nodes, raw
