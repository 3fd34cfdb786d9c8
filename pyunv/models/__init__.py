#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for Universal File records

All models are plain ``dataclasses`` carrying NumPy arrays and scalar
metadata.  They are the sole output format of the reader layer and the
sole input format accepted by the writer and converter layers.
"""

from __future__ import annotations

from pyunv.models.records import (
    AxisDescriptor,
    CoordinateSystemRecord,
    DataHeaderRecord,
    DoublePrecisionNodeRecord,
    ElementRecord,
    HeaderRecord,
    MeasurementRecord,
    NodalResponseRecord,
    NodeRecord,
    PartCoordinateSystemsRecord,
    Record,
    TraceLineRecord,
    TransducerRecord,
    UnitsRecord,
    UnsupportedRecord,
)
from pyunv.models.report import ParseReport, RecordStatus, WriteReport

__all__ = [
    "AxisDescriptor",
    "CoordinateSystemRecord",
    "DataHeaderRecord",
    "DoublePrecisionNodeRecord",
    "ElementRecord",
    "HeaderRecord",
    "MeasurementRecord",
    "NodalResponseRecord",
    "NodeRecord",
    "PartCoordinateSystemsRecord",
    "Record",
    "TraceLineRecord",
    "TransducerRecord",
    "UnitsRecord",
    "UnsupportedRecord",
    "ParseReport",
    "RecordStatus",
    "WriteReport",
]
