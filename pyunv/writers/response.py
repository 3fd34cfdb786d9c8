#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Encoder for the type-55 "data at nodes" record
"""

from __future__ import annotations

import logging

import numpy as np

from pyunv.exceptions import EncodeError, ValidationError
from pyunv.models.records import NodalResponseRecord
from pyunv.utils.constants import (
    ANALYSIS_COMPLEX_EIGENVALUE_FIRST,
    ANALYSIS_COMPLEX_EIGENVALUE_SECOND,
    ANALYSIS_FREQUENCY_RESPONSE,
    ANALYSIS_LINE7_COUNTS,
    ANALYSIS_NORMAL_MODE,
    DATA_TYPE_COMPLEX,
    MODEL_TYPE_STRUCTURAL,
    NODAL_RESPONSE,
)
from pyunv.utils.parsing import format_exp, format_ints, format_text, join_lines
from pyunv.utils.validation import validate_equal_lengths
from pyunv.writers.base import BaseEncoder, EncodeOptions, type_line

logger = logging.getLogger(__name__)


def _e13(values) -> str:
    return "".join(format_exp(v, 13, 5) for v in values)


class NodalResponseEncoder(BaseEncoder):
    """Encoder for the type-55 nodal response record

    The data type (2 real, 5 complex) and the number of values per node
    are taken from :attr:`NodalResponseRecord.values`.
    """

    type_codes = (NODAL_RESPONSE,)

    def render(self, record: NodalResponseRecord, options: EncodeOptions) -> bytes:
        values = record.values
        validate_equal_lengths(node_numbers=record.node_numbers, values=values)
        per_node = record.values_per_node
        complex_data = record.data_type == DATA_TYPE_COMPLEX
        if per_node not in (3, 6) or (complex_data and per_node != 3):
            raise ValidationError(
                f"values must have shape (N, 3) or real (N, 6), got {values.shape} "
                f"{'complex' if complex_data else 'real'}"
            )

        analysis = int(record.analysis_type)
        if analysis not in ANALYSIS_LINE7_COUNTS:
            raise EncodeError(f"Unsupported analysis type: {analysis}")
        n_ints, n_reals = ANALYSIS_LINE7_COUNTS[analysis]

        lines = [type_line(NODAL_RESPONSE)]
        lines.extend(format_text(s) for s in record.id_lines)
        lines.append(format_ints([
            MODEL_TYPE_STRUCTURAL, analysis, record.data_character,
            record.response_type, record.data_type, per_node,
        ]))
        if analysis == ANALYSIS_NORMAL_MODE:
            lines.append(format_ints([n_ints, n_reals, 0, record.mode_number]))
            lines.append(_e13([
                record.frequency, record.modal_mass,
                record.viscous_damping, record.hysteretic_damping,
            ]))
        elif analysis in (ANALYSIS_COMPLEX_EIGENVALUE_FIRST, ANALYSIS_COMPLEX_EIGENVALUE_SECOND):
            lines.append(format_ints([n_ints, n_reals, 0, record.mode_number]))
            lines.append(_e13([
                record.eigenvalue.real, record.eigenvalue.imag,
                record.modal_a.real, record.modal_a.imag,
                record.modal_b.real, record.modal_b.imag,
            ]))
        elif analysis == ANALYSIS_FREQUENCY_RESPONSE:
            lines.append(format_ints([n_ints, n_reals, 0, record.frequency_number]))
            lines.append(_e13([record.frequency]))

        for node, row in zip(record.node_numbers, values):
            lines.append(f"{int(node):10d}")
            if complex_data:
                lines.append(_e13(np.column_stack([row.real, row.imag]).ravel()))
            else:
                lines.append(_e13(row))
        return join_lines(lines)
