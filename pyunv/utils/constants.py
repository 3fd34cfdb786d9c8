#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Format constants and code tables used across PyUNV

Column widths, delimiter text, record type codes and the lookup tables
that give meaning to the integer codes found inside Universal File
records.  Both the reader and the writer layers take their numbers
from here so that the two directions can never drift apart.

References
----------
.. [1] I-DEAS / Siemens "Universal File Datasets Summary", dataset
   numbers 15, 18, 55, 58, 82, 151, 164, 1858, 1860, 2411, 2412, 2420.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Line layout
# ---------------------------------------------------------------------------

LINE_WIDTH: int = 80
"""Logical width of every Universal File text line."""

TYPE_CODE_WIDTH: int = 6
"""Width of the record type code field on a block header line."""

SENTINEL_LINE: bytes = b"    -1" + b" " * 74 + b"\n"
"""Delimiter line written before and after every block."""

BINARY_MARKER: str = "b"
"""Column-7 marker of the binary-hybrid header variant."""

BINARY_ASCII_LINES: int = 11
"""Number of ASCII header lines preceding a binary type-58 payload."""

BYTE_ORDER_LITTLE: int = 1
BYTE_ORDER_BIG: int = 2

BYTE_ORDER_CODES: dict[str, int] = {
    "little": BYTE_ORDER_LITTLE,
    "big": BYTE_ORDER_BIG,
}
"""Map of byte-order names to the header code written on 58b blocks."""

FLOAT_FORMAT_IEEE: int = 2
"""Floating-point format code for IEEE 754 payloads."""

# ---------------------------------------------------------------------------
# Record type codes
# ---------------------------------------------------------------------------

NODES: int = 15
COORDINATE_SYSTEMS: int = 18
NODAL_RESPONSE: int = 55
MEASUREMENT: int = 58
TRACE_LINES: int = 82
FILE_HEADER: int = 151
UNITS: int = 164
DATA_HEADER: int = 1858
TRANSDUCER: int = 1860
DOUBLE_PRECISION_NODES: int = 2411
ELEMENTS: int = 2412
PART_COORDINATE_SYSTEMS: int = 2420

RECORD_TYPE_NAMES: dict[int, str] = {
    NODES: "nodes",
    COORDINATE_SYSTEMS: "coordinate_systems",
    NODAL_RESPONSE: "nodal_response",
    MEASUREMENT: "measurement",
    TRACE_LINES: "trace_lines",
    FILE_HEADER: "file_header",
    UNITS: "units",
    DATA_HEADER: "data_header",
    TRANSDUCER: "transducer",
    DOUBLE_PRECISION_NODES: "double_precision_nodes",
    ELEMENTS: "elements",
    PART_COORDINATE_SYSTEMS: "part_coordinate_systems",
}
"""Short names used for HDF5 group labels and log messages."""

# ---------------------------------------------------------------------------
# Type 2412: elements
# ---------------------------------------------------------------------------

BEAM_LIKE_DESCRIPTORS: frozenset[int] = frozenset(
    {11, 21, 22, 23, 24, 31, 32, 121, 122}
)
"""FE descriptor ids whose element records carry an extra orientation line.

Rods, beams, curved beams and rigid elements store the orientation node
and the fore / aft cross-section numbers between the element header and
the node labels.
"""

BEAM_ORIENTATION_FIELDS: int = 3
ELEMENT_HEADER_FIELDS: int = 6
ELEMENT_NODES_PER_LINE: int = 8

# ---------------------------------------------------------------------------
# Type 55: data at nodes
# ---------------------------------------------------------------------------

MODEL_TYPE_STRUCTURAL: int = 1

ANALYSIS_NORMAL_MODE: int = 2
ANALYSIS_COMPLEX_EIGENVALUE_FIRST: int = 3
ANALYSIS_FREQUENCY_RESPONSE: int = 5
ANALYSIS_COMPLEX_EIGENVALUE_SECOND: int = 7

ANALYSIS_TYPES: dict[int, str] = {
    ANALYSIS_NORMAL_MODE: "normal mode",
    ANALYSIS_COMPLEX_EIGENVALUE_FIRST: "complex eigenvalue first order",
    ANALYSIS_FREQUENCY_RESPONSE: "frequency response",
    ANALYSIS_COMPLEX_EIGENVALUE_SECOND: "complex eigenvalue second order",
}

ANALYSIS_LINE7_COUNTS: dict[int, tuple[int, int]] = {
    ANALYSIS_NORMAL_MODE: (2, 4),
    ANALYSIS_COMPLEX_EIGENVALUE_FIRST: (2, 6),
    ANALYSIS_FREQUENCY_RESPONSE: (2, 1),
    ANALYSIS_COMPLEX_EIGENVALUE_SECOND: (2, 6),
}
"""Leading (integer count, real count) pair of line 7 per analysis type."""

DATA_TYPE_REAL: int = 2
DATA_TYPE_COMPLEX: int = 5

# ---------------------------------------------------------------------------
# Type 58: function at nodal DOF
# ---------------------------------------------------------------------------

FUNCTION_TYPES: dict[int, str] = {
    0: "general or unknown",
    1: "time response",
    2: "auto spectrum",
    3: "cross spectrum",
    4: "frequency response function",
    5: "transmissibility",
    6: "coherence",
    7: "auto correlation",
    8: "cross correlation",
    9: "power spectral density",
    10: "energy spectral density",
    11: "probability density function",
    12: "spectrum",
    13: "cumulative frequency distribution",
    14: "peaks valley",
    15: "stress/cycles",
    16: "strain/cycles",
    17: "orbit",
    18: "mode indicator function",
    19: "force pattern",
    20: "partial power",
    21: "partial coherence",
    22: "eigenvalue",
    23: "eigenvector",
    24: "shock response spectrum",
    25: "finite impulse response filter",
    26: "multiple coherence",
    27: "order function",
}

FUNCTION_TIME_RESPONSE: int = 1

WRITABLE_FUNCTION_TYPES: frozenset[int] = frozenset({1, 2, 3, 4, 6, 12})
"""Function types the measurement encoder accepts."""

AXIS_DEFAULTS: dict[bool, tuple[int, int, int]] = {
    True: (17, 8, 0),
    False: (18, 12, 13),
}
"""(abscissa, ordinate, denominator) data characteristics keyed by
``function_type == FUNCTION_TIME_RESPONSE``.

Time responses default to time / displacement / unknown; every other
function type to frequency / acceleration / excitation force.
"""

SINGLE_ORDINATE_CODES: frozenset[int] = frozenset({2, 5})
COMPLEX_ORDINATE_CODES: frozenset[int] = frozenset({5, 6})

ABSCISSA_BYTES: int = 4
"""Stored size of an unevenly spaced abscissa value (always float32)."""

EVEN_SPACING_RTOL: float = 1e-9
"""Relative tolerance under which abscissa steps count as identical."""

E13 = (13, 5)
E20 = (20, 12)


@dataclass(frozen=True)
class MeasurementLayout:
    """One of the eight on-disk encodings of a type-58 data section

    Parameters
    ----------
    case_id : int
        Case number, 1 to 8.
    complex_data : bool
        Ordinates are complex (stored as real / imaginary pairs).
    double : bool
        Ordinates are 8-byte doubles rather than 4-byte singles.
    even : bool
        Abscissa is evenly spaced and therefore not stored.
    ordinate_code : int
        Ordinate data type code written on line 7.
    ascii_fields : tuple[tuple[int, int], ...]
        ``(width, precision)`` of each exponential field on one ASCII
        data line; the pattern repeats line after line.
    """

    case_id: int
    complex_data: bool
    double: bool
    even: bool
    ordinate_code: int
    ascii_fields: tuple[tuple[int, int], ...]

    @property
    def components(self) -> int:
        return 2 if self.complex_data else 1

    @property
    def element_size(self) -> int:
        return 8 if self.double else 4

    @property
    def group_size(self) -> int:
        """Stored values per sample (abscissa included when uneven)."""
        return self.components + (0 if self.even else 1)

    @property
    def sample_bytes(self) -> int:
        return self.element_size * self.components + (0 if self.even else ABSCISSA_BYTES)

    def byte_count(self, n_points: int) -> int:
        """Exact binary payload size for *n_points* samples."""
        return n_points * self.sample_bytes


MEASUREMENT_LAYOUTS: tuple[MeasurementLayout, ...] = (
    MeasurementLayout(1, False, False, True, 2, (E13,) * 6),
    MeasurementLayout(2, False, False, False, 2, (E13,) * 6),
    MeasurementLayout(3, True, False, True, 5, (E13,) * 6),
    MeasurementLayout(4, True, False, False, 5, (E13,) * 6),
    MeasurementLayout(5, False, True, True, 4, (E20,) * 4),
    MeasurementLayout(6, False, True, False, 4, (E13, E20, E13, E20)),
    MeasurementLayout(7, True, True, True, 6, (E20,) * 4),
    MeasurementLayout(8, True, True, False, 6, (E13, E20, E20)),
)
"""Shared case table used by both the type-58 decoder and encoder."""


def measurement_layout(complex_data: bool, double: bool, even: bool) -> MeasurementLayout:
    """Return the layout matching the three case-selecting flags"""
    for layout in MEASUREMENT_LAYOUTS:
        if (layout.complex_data, layout.double, layout.even) == (
            bool(complex_data), bool(double), bool(even)
        ):
            return layout
    raise KeyError((complex_data, double, even))
