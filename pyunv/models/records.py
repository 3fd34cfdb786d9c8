#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for Universal File records

Every model is a ``dataclass`` carrying scalar metadata and NumPy arrays.
Models are the sole output of the reader layer and the sole input
accepted by the writer and converter layers.

Each supported record type has exactly one class, and every field is
always present: optional fields take the documented default in
``__post_init__`` so that decoders, encoders and converters never test
for presence.  A block whose type code has no decoder is represented by
:class:`UnsupportedRecord`, which keeps only the raw code.

Hierarchy
---------
::

    HeaderRecord                 — 151  file header
    UnitsRecord                  — 164  units and conversion factors
    NodeRecord                   — 15   nodes, single precision
    DoublePrecisionNodeRecord    — 2411 nodes, double precision
    CoordinateSystemRecord       — 18   coordinate system definitions
    TraceLineRecord              — 82   display (trace) line
    ElementRecord                — 2412 finite elements
    NodalResponseRecord          — 55   data at nodes
    MeasurementRecord            — 58   function at nodal DOF (58b if binary)
    DataHeaderRecord             — 1858 measurement qualifiers (write only)
    TransducerRecord             — 1860 transducer calibration (write only)
    PartCoordinateSystemsRecord  — 2420 part coordinate systems (write only)
    UnsupportedRecord            — any other type code

Conventions
-----------
* Node, element and coordinate-system labels are ``int64`` arrays.
* Coordinates, factors and ordinates are ``float64`` or ``complex128``.
* Text fields are stored trimmed; encoders pad or truncate them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

import numpy as np

from pyunv.utils.constants import (
    AXIS_DEFAULTS,
    COORDINATE_SYSTEMS,
    DATA_HEADER,
    DATA_TYPE_COMPLEX,
    DATA_TYPE_REAL,
    DOUBLE_PRECISION_NODES,
    ELEMENTS,
    EVEN_SPACING_RTOL,
    FILE_HEADER,
    FUNCTION_TIME_RESPONSE,
    MEASUREMENT,
    NODAL_RESPONSE,
    NODES,
    PART_COORDINATE_SYSTEMS,
    TRACE_LINES,
    TRANSDUCER,
    UNITS,
    MeasurementLayout,
    measurement_layout,
)


def _int_array(values, n: int, fill: int = 0) -> np.ndarray:
    if values is None:
        return np.full(n, fill, dtype="i8")
    return np.asarray(values, dtype="i8").reshape(-1)


def _points(values, n: int) -> np.ndarray:
    if values is None:
        return np.zeros((n, 3), dtype="f8")
    return np.asarray(values, dtype="f8").reshape(-1, 3)


def _as_samples(values) -> np.ndarray:
    arr = np.asarray(values)
    if np.iscomplexobj(arr):
        return arr.astype("c16")
    return arr.astype("f8")


class UFFRecord:
    """Common base giving every record its type code and binary flag"""

    TYPE_CODE: ClassVar[int] = 0
    binary = False

    @property
    def type_code(self) -> int:
        return self.TYPE_CODE


# ---------------------------------------------------------------------------
# File-level records
# ---------------------------------------------------------------------------

@dataclass
class HeaderRecord(UFFRecord):
    """File header (type 151)

    Parameters
    ----------
    model_name, description, db_application : str
        Lines 1 to 3.
    date_created, time_created : str
        Creation date and time as written by the producing program.
    db_version, db_subversion : int
        Database version numbers.
    date_last_saved, time_last_saved : str
        Date and time the database was last saved.
    writer_application : str
        Program that wrote the Universal File.
    date_written, time_written : str
        Optional line 7.  The encoder always stamps the current time.
    """

    TYPE_CODE: ClassVar[int] = FILE_HEADER

    model_name: str = ""
    description: str = ""
    db_application: str = ""
    date_created: str = ""
    time_created: str = ""
    db_version: int = 0
    db_subversion: int = 0
    date_last_saved: str = ""
    time_last_saved: str = ""
    writer_application: str = ""
    date_written: str = ""
    time_written: str = ""


@dataclass
class UnitsRecord(UFFRecord):
    """Units and SI conversion factors (type 164)

    Parameters
    ----------
    units_code : int
        Units system code (1 = SI meter / newton, 2 = BG foot / pound, …).
    description : str
        Up to 20 characters.
    temperature_mode : int
        1 = absolute, 2 = relative.
    length_factor, force_factor, temperature_factor : float
        Factors converting the file's units to SI.
    temperature_offset : float
        Offset added after the temperature factor.
    """

    TYPE_CODE: ClassVar[int] = UNITS

    units_code: int = 1
    description: str = ""
    temperature_mode: int = 1
    length_factor: float = 1.0
    force_factor: float = 1.0
    temperature_factor: float = 1.0
    temperature_offset: float = 0.0


# ---------------------------------------------------------------------------
# Geometry records
# ---------------------------------------------------------------------------

@dataclass
class NodeRecord(UFFRecord):
    """Node coordinates (type 15)

    Parameters
    ----------
    labels : numpy.ndarray
        Node labels, shape ``(N,)``.
    x, y, z : numpy.ndarray
        Coordinates, shape ``(N,)``.
    def_cs, disp_cs, color : numpy.ndarray
        Definition coordinate system, displacement coordinate system and
        display color per node.  Default zeros.
    """

    TYPE_CODE: ClassVar[int] = NODES

    labels: np.ndarray
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    def_cs: np.ndarray | None = None
    disp_cs: np.ndarray | None = None
    color: np.ndarray | None = None

    def __post_init__(self) -> None:
        self.labels = np.asarray(self.labels, dtype="i8").reshape(-1)
        n = self.labels.size
        self.x = np.asarray(self.x, dtype="f8").reshape(-1)
        self.y = np.asarray(self.y, dtype="f8").reshape(-1)
        self.z = np.asarray(self.z, dtype="f8").reshape(-1)
        self.def_cs = _int_array(self.def_cs, n)
        self.disp_cs = _int_array(self.disp_cs, n)
        self.color = _int_array(self.color, n)

    @property
    def coordinates(self) -> np.ndarray:
        """Coordinates stacked into shape ``(N, 3)``."""
        return np.column_stack([self.x, self.y, self.z])


@dataclass
class DoublePrecisionNodeRecord(NodeRecord):
    """Node coordinates in double precision (type 2411)"""

    TYPE_CODE: ClassVar[int] = DOUBLE_PRECISION_NODES


@dataclass
class CoordinateSystemRecord(UFFRecord):
    """Coordinate system definitions (type 18)

    Each system is defined by its origin, a point on its x axis
    (``ref_point_1``) and a point in its xz plane (``ref_point_2``).

    Parameters
    ----------
    numbers : numpy.ndarray
        Coordinate system numbers, shape ``(N,)``.
    origins, ref_point_1, ref_point_2 : numpy.ndarray
        Points, shape ``(N, 3)``.
    types, ref_cs, colors : numpy.ndarray
        Default zeros.
    methods : numpy.ndarray
        Method of definition, default ones.
    names : list[str]
        Default ``CS1``, ``CS2``, …
    """

    TYPE_CODE: ClassVar[int] = COORDINATE_SYSTEMS

    numbers: np.ndarray
    origins: np.ndarray
    ref_point_1: np.ndarray
    ref_point_2: np.ndarray
    types: np.ndarray | None = None
    ref_cs: np.ndarray | None = None
    colors: np.ndarray | None = None
    methods: np.ndarray | None = None
    names: list[str] | None = None

    def __post_init__(self) -> None:
        self.numbers = np.asarray(self.numbers, dtype="i8").reshape(-1)
        n = self.numbers.size
        self.origins = _points(self.origins, n)
        self.ref_point_1 = _points(self.ref_point_1, n)
        self.ref_point_2 = _points(self.ref_point_2, n)
        self.types = _int_array(self.types, n)
        self.ref_cs = _int_array(self.ref_cs, n)
        self.colors = _int_array(self.colors, n)
        self.methods = _int_array(self.methods, n, fill=1)
        if self.names is None:
            self.names = [f"CS{i + 1}" for i in range(n)]
        else:
            self.names = [str(s) for s in self.names]


@dataclass
class TraceLineRecord(UFFRecord):
    """Display sequence drawn as one polyline (type 82)

    A node label of ``0`` in *nodes* lifts the pen.

    Parameters
    ----------
    trace_number : int
        Trace line number.
    nodes : numpy.ndarray
        Node labels in drawing order.
    color : int
        Default 0.
    identifier : str
        Line 2 ID text, default ``"NONE"``.
    """

    TYPE_CODE: ClassVar[int] = TRACE_LINES

    trace_number: int
    nodes: np.ndarray
    color: int = 0
    identifier: str = "NONE"

    def __post_init__(self) -> None:
        self.nodes = np.asarray(self.nodes, dtype="i8").reshape(-1)


@dataclass
class ElementRecord(UFFRecord):
    """Finite elements (type 2412)

    Parameters
    ----------
    labels : numpy.ndarray
        Element labels, shape ``(N,)``.
    descriptors : numpy.ndarray
        FE descriptor ids, shape ``(N,)``.
    connectivity : numpy.ndarray
        Node labels, shape ``(N, W)``, padded with ``0`` to the widest
        element.
    node_counts : numpy.ndarray
        Number of nodes per element.  Defaults to the count of non-zero
        entries in each connectivity row.
    physical_properties, material_properties, colors : numpy.ndarray
        Table numbers and display color, default zeros.
    beam_orientation : numpy.ndarray
        Orientation node, fore-end and aft-end cross-section numbers for
        beam-like descriptors, shape ``(N, 3)``.  Zero rows elsewhere.
    """

    TYPE_CODE: ClassVar[int] = ELEMENTS

    labels: np.ndarray
    descriptors: np.ndarray
    connectivity: np.ndarray
    node_counts: np.ndarray | None = None
    physical_properties: np.ndarray | None = None
    material_properties: np.ndarray | None = None
    colors: np.ndarray | None = None
    beam_orientation: np.ndarray | None = None

    def __post_init__(self) -> None:
        self.labels = np.asarray(self.labels, dtype="i8").reshape(-1)
        n = self.labels.size
        self.descriptors = _int_array(self.descriptors, n)
        conn = np.asarray(self.connectivity, dtype="i8")
        if conn.ndim == 1:
            conn = conn.reshape(n, -1) if n else conn.reshape(0, 0)
        self.connectivity = conn
        if self.node_counts is None:
            self.node_counts = np.count_nonzero(conn, axis=1).astype("i8")
        else:
            self.node_counts = _int_array(self.node_counts, n)
        self.physical_properties = _int_array(self.physical_properties, n)
        self.material_properties = _int_array(self.material_properties, n)
        self.colors = _int_array(self.colors, n)
        if self.beam_orientation is None:
            self.beam_orientation = np.zeros((n, 3), dtype="i8")
        else:
            self.beam_orientation = np.asarray(self.beam_orientation, dtype="i8").reshape(-1, 3)

    def element_nodes(self, index: int) -> np.ndarray:
        """Node labels of element *index* without padding."""
        return self.connectivity[index, : self.node_counts[index]]


# ---------------------------------------------------------------------------
# Response and measurement records
# ---------------------------------------------------------------------------

@dataclass
class NodalResponseRecord(UFFRecord):
    """Data at nodes (type 55)

    Which of the analysis-specific scalars are meaningful depends on
    *analysis_type*: normal mode (2) uses ``mode_number``, ``frequency``,
    ``modal_mass`` and the two damping ratios; complex eigenvalue (3, 7)
    uses ``mode_number``, ``eigenvalue``, ``modal_a`` and ``modal_b``;
    frequency response (5) uses ``frequency_number`` and ``frequency``.

    Parameters
    ----------
    node_numbers : numpy.ndarray
        Node labels, shape ``(N,)``.
    values : numpy.ndarray
        Response values, shape ``(N, 3)`` or ``(N, 6)`` real, or
        ``(N, 3)`` complex.
    analysis_type : int
        Default 2 (normal mode).
    data_character : int
        Default 2 (3 DOF translation).
    response_type : int
        Default 8 (displacement).
    id_lines : list[str]
        The five ID lines, default ``"NONE"`` each.
    """

    TYPE_CODE: ClassVar[int] = NODAL_RESPONSE

    node_numbers: np.ndarray
    values: np.ndarray
    analysis_type: int = 2
    data_character: int = 2
    response_type: int = 8
    id_lines: list[str] | None = None
    model_type: int = 1
    mode_number: int = 0
    frequency_number: int = 0
    frequency: float = 0.0
    modal_mass: float = 0.0
    viscous_damping: float = 0.0
    hysteretic_damping: float = 0.0
    eigenvalue: complex = 0j
    modal_a: complex = 0j
    modal_b: complex = 0j

    def __post_init__(self) -> None:
        self.node_numbers = np.asarray(self.node_numbers, dtype="i8").reshape(-1)
        values = _as_samples(self.values)
        if values.ndim == 1:
            n = self.node_numbers.size
            values = values.reshape(n, -1) if n else values.reshape(0, 3)
        self.values = values
        if self.id_lines is None:
            self.id_lines = ["NONE"] * 5
        else:
            self.id_lines = (list(self.id_lines) + [""] * 5)[:5]
        self.eigenvalue = complex(self.eigenvalue)
        self.modal_a = complex(self.modal_a)
        self.modal_b = complex(self.modal_b)

    @property
    def data_type(self) -> int:
        """2 for real values, 5 for complex values."""
        return DATA_TYPE_COMPLEX if np.iscomplexobj(self.values) else DATA_TYPE_REAL

    @property
    def values_per_node(self) -> int:
        return int(self.values.shape[1]) if self.values.ndim == 2 else 0


@dataclass
class AxisDescriptor:
    """Data characteristics of one measurement axis (type 58, lines 8–11)

    Parameters
    ----------
    data_character : int
        Specific data type code (0 unknown, 8 displacement, 12
        acceleration, 13 excitation force, 17 time, 18 frequency, …).
    length_exponent, force_exponent, temperature_exponent : int
        Units exponents.
    axis_label, units_label : str
        Up to 20 characters each.  Default ``"NONE"``.
    """

    data_character: int = 0
    length_exponent: int = 0
    force_exponent: int = 0
    temperature_exponent: int = 0
    axis_label: str = "NONE"
    units_label: str = "NONE"


@dataclass
class MeasurementRecord(UFFRecord):
    """Function at nodal DOF (type 58, or 58b when *binary* is set)

    The on-disk encoding is not stored: it is derived from *precision*,
    from whether *data* is complex, and from whether the steps of *x*
    are identical (see :attr:`layout`).

    Parameters
    ----------
    x : numpy.ndarray
        Abscissa values, shape ``(N,)``.
    data : numpy.ndarray
        Ordinate values, shape ``(N,)``, real or complex.
    function_type : int
        Function type code (1 time response, 4 FRF, …).  Default 1.
    id_1, id_2, date, id_4, id_5 : str
        Lines 1 to 5.
    function_id, version, load_case : int
        Line 6 identifiers, default 0.
    response_entity, reference_entity : str
        Entity names, default ``"NONE"``.
    response_node, response_direction, reference_node, reference_direction : int
        Default 0.
    z_value : float
        Z-axis value, default 0.
    precision : str
        ``"single"`` or ``"double"`` (default).
    binary : bool
        Write / was read as the binary-hybrid 58b variant.
    abscissa, ordinate, denominator, z_axis : AxisDescriptor
        Default data characteristics depend on *function_type*.
    """

    TYPE_CODE: ClassVar[int] = MEASUREMENT

    x: np.ndarray
    data: np.ndarray
    function_type: int = FUNCTION_TIME_RESPONSE
    id_1: str = "NONE"
    id_2: str = "NONE"
    date: str = ""
    id_4: str = "NONE"
    id_5: str = "NONE"
    function_id: int = 0
    version: int = 0
    load_case: int = 0
    response_entity: str = "NONE"
    response_node: int = 0
    response_direction: int = 0
    reference_entity: str = "NONE"
    reference_node: int = 0
    reference_direction: int = 0
    z_value: float = 0.0
    precision: str = "double"
    binary: bool = False
    abscissa: AxisDescriptor | None = None
    ordinate: AxisDescriptor | None = None
    denominator: AxisDescriptor | None = None
    z_axis: AxisDescriptor | None = None

    def __post_init__(self) -> None:
        self.x = np.asarray(self.x, dtype="f8").reshape(-1)
        self.data = _as_samples(self.data).reshape(-1)
        absc, ordn, denom = AXIS_DEFAULTS[self.function_type == FUNCTION_TIME_RESPONSE]
        if self.abscissa is None:
            self.abscissa = AxisDescriptor(data_character=absc)
        if self.ordinate is None:
            self.ordinate = AxisDescriptor(data_character=ordn)
        if self.denominator is None:
            self.denominator = AxisDescriptor(data_character=denom)
        if self.z_axis is None:
            self.z_axis = AxisDescriptor()

    @property
    def is_complex(self) -> bool:
        return bool(np.iscomplexobj(self.data))

    @property
    def is_even(self) -> bool:
        """``True`` when every abscissa step is identical within tolerance."""
        if self.x.size < 3:
            return True
        steps = np.diff(self.x)
        scale = float(np.max(np.abs(steps)))
        return bool(np.all(np.abs(steps - steps[0]) <= EVEN_SPACING_RTOL * scale))

    @property
    def layout(self) -> MeasurementLayout:
        """On-disk case selected by precision, complexity and spacing."""
        return measurement_layout(self.is_complex, self.precision == "double", self.is_even)


# ---------------------------------------------------------------------------
# Write-only records
# ---------------------------------------------------------------------------

@dataclass
class DataHeaderRecord(UFFRecord):
    """Qualifiers written ahead of a measurement record (type 1858)

    Every field defaults to zero.
    """

    TYPE_CODE: ClassVar[int] = DATA_HEADER

    window_type: int = 0
    amplitude_units: int = 0
    normalization_method: int = 0
    ordinate_numerator_qualifier: int = 0
    ordinate_denominator_qualifier: int = 0
    z_axis_qualifier: int = 0
    sampling_type: int = 0
    z_rpm: float = 0.0
    z_time: float = 0.0
    z_order: float = 0.0
    number_of_samples: int = 0
    exponential_window_damping: float = 0.0


@dataclass
class TransducerRecord(UFFRecord):
    """Transducer calibration (type 1860)

    Parameters
    ----------
    serial_number : str
        Transducer serial number.
    sensitivity : float
        Calibration sensitivity.
    data_type : int
        Measured quantity code.
    operating_mode : int
        Transducer operating mode code.
    """

    TYPE_CODE: ClassVar[int] = TRANSDUCER

    serial_number: str
    sensitivity: float
    data_type: int
    operating_mode: int
    manufacturer: str = "NONE"
    model: str = "NONE"
    calibrated_by: str = "NONE"
    calibration_date: str = "NONE"
    calibration_due_date: str = "NONE"
    description: str = "NONE"
    type_qualifier: int = 0
    length_exponent: int = 0
    force_exponent: int = 0
    temperature_exponent: int = 0
    units_label: str = "NONE"

    def __post_init__(self) -> None:
        self.serial_number = str(self.serial_number)


@dataclass
class PartCoordinateSystemsRecord(UFFRecord):
    """Coordinate systems of one part (type 2420)

    Parameters
    ----------
    part_uid : int
        Part unique identifier.
    part_name : str
        Up to 40 characters.
    labels : numpy.ndarray
        Coordinate system labels, shape ``(N,)``.
    matrices : numpy.ndarray
        Transformation matrices, shape ``(N, 4, 3)``: three rotation
        rows followed by the origin.
    types, colors : numpy.ndarray
        Default zeros.
    names : list[str]
        Default blank.
    """

    TYPE_CODE: ClassVar[int] = PART_COORDINATE_SYSTEMS

    part_uid: int
    part_name: str
    labels: np.ndarray
    matrices: np.ndarray
    types: np.ndarray | None = None
    colors: np.ndarray | None = None
    names: list[str] | None = None

    def __post_init__(self) -> None:
        self.labels = np.asarray(self.labels, dtype="i8").reshape(-1)
        n = self.labels.size
        self.matrices = np.asarray(self.matrices, dtype="f8")
        self.types = _int_array(self.types, n)
        self.colors = _int_array(self.colors, n)
        if self.names is None:
            self.names = [""] * n


# ---------------------------------------------------------------------------
# Unsupported
# ---------------------------------------------------------------------------

@dataclass
class UnsupportedRecord:
    """Placeholder for a block whose type code has no decoder

    Parameters
    ----------
    type_code : int
        The raw type code found on the block header line.
    binary : bool
        Whether the header declared the binary-hybrid variant.
    """

    type_code: int
    binary: bool = False


Record = Union[
    HeaderRecord,
    UnitsRecord,
    NodeRecord,
    DoublePrecisionNodeRecord,
    CoordinateSystemRecord,
    TraceLineRecord,
    ElementRecord,
    NodalResponseRecord,
    MeasurementRecord,
    DataHeaderRecord,
    TransducerRecord,
    PartCoordinateSystemsRecord,
    UnsupportedRecord,
]
"""Type alias for the closed set of record models."""
