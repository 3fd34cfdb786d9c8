#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyUNV - Python library for reading and writing Universal Files

Decode and encode the block-delimited Universal File Format (UFF / UNV)
used by structural dynamics and modal testing software: node geometry,
coordinate systems, elements, nodal responses (mode shapes), measured
functions (FRFs, time histories) in ASCII and binary form, units and
file headers.  Decoded records can be exported to HDF5.

Modules
-------
readers
    Block scanner, per-type record decoders and the read orchestrator.
writers
    Per-type record encoders and the write orchestrator.
models
    Typed dataclass records and the parse / write reports.
converters
    HDF5 export of decoded records.
utils
    Fixed-column field helpers, format constants and validation logic.

Examples
--------
>>> from pyunv import read_uff, write_uff
>>> records, report = read_uff("test.unv", types=[58])
>>> write_uff("copy.unv", records, mode="replace")
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from pyunv.readers.uff import UFFReader, read_uff
from pyunv.writers.uff import UFFWriter, write_uff
from pyunv.converters.hdf5 import convert_uff_to_hdf5, write_records_hdf5
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
    TraceLineRecord,
    TransducerRecord,
    UnitsRecord,
    UnsupportedRecord,
)
from pyunv.models.report import ParseReport, RecordStatus, WriteReport
from pyunv.exceptions import (
    ConversionError,
    EncodeError,
    ErrorCode,
    FileFormatError,
    ParseError,
    PyUNVError,
    TruncatedDataError,
    UnsupportedRecordError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Reader / writer
    "UFFReader",
    "read_uff",
    "UFFWriter",
    "write_uff",
    # Converter
    "convert_uff_to_hdf5",
    "write_records_hdf5",
    # Records
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
    "TraceLineRecord",
    "TransducerRecord",
    "UnitsRecord",
    "UnsupportedRecord",
    # Reports
    "ParseReport",
    "RecordStatus",
    "WriteReport",
    # Exceptions
    "PyUNVError",
    "ErrorCode",
    "FileFormatError",
    "ParseError",
    "UnsupportedRecordError",
    "TruncatedDataError",
    "ValidationError",
    "EncodeError",
    "ConversionError",
]
