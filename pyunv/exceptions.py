#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the PyUNV package

All exceptions raised by PyUNV inherit from :class:`PyUNVError`, making it
possible to catch every library-specific error with a single ``except`` clause
while still allowing fine-grained handling when needed.

Two severities exist.  *File-level* errors (:class:`FileFormatError`) abort a
read or write call immediately.  *Record-level* errors (every other subclass)
are caught by the reader and writer loops, stored in the per-record report
entry together with their :class:`ErrorCode`, and processing continues with
the next block.

Exception Hierarchy
-------------------
::

    PyUNVError
    ├── FileFormatError          # Unreadable file, no blocks, unbalanced tags
    ├── ParseError               # Malformed block or record content
    │   ├── UnsupportedRecordError   # Type code without a decoder / encoder
    │   └── TruncatedDataError       # Binary payload shorter than declared
    ├── ValidationError          # Record fails pre-encode shape checks
    ├── EncodeError              # Record cannot be rendered / write aborted
    └── ConversionError          # HDF5 export failures
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Numeric error codes stored in per-record report entries"""

    NONE = 0
    UNSUPPORTED_TYPE = 1
    DECODE = 2
    TRUNCATED_DATA = 3
    VALIDATION = 4
    ENCODE = 5


class PyUNVError(Exception):
    """Base exception for all PyUNV errors

    Every exception raised by PyUNV is a subclass of this type.
    Catching ``PyUNVError`` therefore catches any library-specific failure
    while still allowing standard Python exceptions (``KeyError``,
    ``TypeError``, etc.) to propagate normally.
    """

    error_code: ErrorCode = ErrorCode.DECODE


class FileFormatError(PyUNVError):
    """Raised when a file cannot be treated as a Universal File at all

    This is a *fatal* error: the file could not be opened or read, it
    contains no ``-1`` delimited blocks, the number of delimiters is odd,
    or a requested block number does not exist.  No partial result is
    returned.

    Parameters
    ----------
    message : str
        Description of the failure, including the file path.
    """


class ParseError(PyUNVError):
    """Raised when a block contains malformed or unparseable content

    This includes a missing or non-numeric type code, an empty block,
    non-numeric data in numeric fields, value counts that do not divide
    into whole records, and unsupported analysis / data type
    combinations inside an otherwise recognised record.

    Parameters
    ----------
    message : str
        Human-readable description of the parse failure.
    """

    error_code = ErrorCode.DECODE


class UnsupportedRecordError(ParseError):
    """Raised for a record type code that has no decoder or encoder"""

    error_code = ErrorCode.UNSUPPORTED_TYPE


class TruncatedDataError(ParseError):
    """Raised when a binary payload holds fewer bytes than its envelope declares

    Parameters
    ----------
    message : str
        Description including the declared and available byte counts.
    """

    error_code = ErrorCode.TRUNCATED_DATA


class ValidationError(PyUNVError):
    """Raised when a record fails structural checks before encoding

    Validation checks include equal-length per-node arrays, the shapes of
    coordinate-system points and transformation matrices, matching
    abscissa / ordinate lengths, and allowed option values.  A
    ``ValidationError`` means nothing was written for that record.

    Parameters
    ----------
    message : str
        Description of the failed check, including the field name,
        expected constraint, and actual value.
    """

    error_code = ErrorCode.VALIDATION


class EncodeError(PyUNVError):
    """Raised when a record cannot be rendered or a write is aborted

    Record-level instances (for example an unsupported measurement
    function type) are stored in the write report.  An unexpected I/O
    fault during a write is re-raised as ``EncodeError`` after the file
    handle has been closed.

    Parameters
    ----------
    message : str
        Description of the failure and the target file path.
    """

    error_code = ErrorCode.ENCODE


class ConversionError(PyUNVError):
    """Raised when HDF5 export fails

    This covers any error during HDF5 file creation: permission denied,
    disk full, an existing output file with ``overwrite=False``, or a
    record field that cannot be stored.

    Parameters
    ----------
    message : str
        Description of the conversion failure and the target HDF5 path.
    """
