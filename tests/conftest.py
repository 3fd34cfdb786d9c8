#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for PyUNV tests

Provides hand-written Universal File blocks and synthetic records for
testing the scanner, decoders, encoders and the HDF5 converter without
requiring real measurement files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from pyunv.models.records import (
    CoordinateSystemRecord,
    DoublePrecisionNodeRecord,
    ElementRecord,
    HeaderRecord,
    MeasurementRecord,
    NodalResponseRecord,
    NodeRecord,
    TraceLineRecord,
    UnitsRecord,
)

SENTINEL = "    -1"


def _block(header: str, lines: list[str], newline: str = "\n") -> bytes:
    body = [SENTINEL, header, *lines, SENTINEL]
    return (newline.join(body) + newline).encode("latin-1")


# ---------------------------------------------------------------------------
# File builders
# ---------------------------------------------------------------------------

@pytest.fixture
def make_block() -> Callable[..., bytes]:
    """Build one delimited block from a header line and content lines"""
    return _block


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write raw bytes to a file under ``tmp_path`` and return its path"""

    def _write(*chunks: bytes, name: str = "test.unv") -> Path:
        path = tmp_path / name
        path.write_bytes(b"".join(chunks))
        return path

    return _write


# ---------------------------------------------------------------------------
# Hand-written blocks
# ---------------------------------------------------------------------------

@pytest.fixture
def header_block() -> bytes:
    """Minimal type-151 block with only the first three lines"""
    return _block("   151", ["TestModel", "Demo", "App1"])


@pytest.fixture
def units_block() -> bytes:
    """Type-164 block, SI with a relative temperature offset"""
    return _block("   164", [
        f"{1:10d}{'SI - mks (Newton)':20s}{2:10d}",
        f"{'1.00000000000000000D+00':>25}" * 3,
        f"{'2.73150000000000000D+02':>25}",
    ])


@pytest.fixture
def nodes_block() -> bytes:
    """Type-15 block with two nodes"""
    return _block("    15", [
        f"{1:10d}{0:10d}{0:10d}{11:10d}{1.0:13.5E}{2.0:13.5E}{3.0:13.5E}",
        f"{2:10d}{0:10d}{0:10d}{11:10d}{-4.0:13.5E}{0.5:13.5E}{0.0:13.5E}",
    ])


@pytest.fixture
def double_nodes_block() -> bytes:
    """Type-2411 block with two nodes in ``D25.16`` fields"""
    return _block("  2411", [
        f"{1:10d}{1:10d}{1:10d}{11:10d}",
        "   1.0000000000000000D+00   2.5000000000000000D-01  -3.0000000000000000D+00",
        f"{2:10d}{1:10d}{1:10d}{11:10d}",
        "   0.0000000000000000D+00   0.0000000000000000D+00   1.2500000000000000D+00",
    ])


@pytest.fixture
def coordinate_systems_block() -> bytes:
    """Type-18 block with one coordinate system"""
    return _block("    18", [
        f"{1:10d}{0:10d}{0:10d}{8:10d}{1:10d}",
        "CS1",
        "".join(f"{v:13.5E}" for v in (0.0, 0.0, 0.0, 1.0, 0.0, 0.0)),
        "".join(f"{v:13.5E}" for v in (0.0, 1.0, 0.0)),
    ])


@pytest.fixture
def trace_line_block() -> bytes:
    """Type-82 block with a pen lift (node 0)"""
    return _block("    82", [
        f"{1:10d}{5:10d}{2:10d}",
        "Trace 1",
        "".join(f"{n:10d}" for n in (1, 2, 3, 0, 4)),
    ])


@pytest.fixture
def elements_block() -> bytes:
    """Type-2412 block with one rod (beam-like) and one triangle"""
    return _block("  2412", [
        "".join(f"{v:10d}" for v in (1, 11, 1, 1, 7, 2)),
        "".join(f"{v:10d}" for v in (0, 1, 1)),
        "".join(f"{v:10d}" for v in (1, 2)),
        "".join(f"{v:10d}" for v in (2, 91, 1, 1, 7, 3)),
        "".join(f"{v:10d}" for v in (1, 2, 3)),
    ])


@pytest.fixture
def modes_block() -> bytes:
    """Type-55 normal-mode block with two nodes"""
    return _block("    55", [
        "Mode shape",
        "NONE",
        "NONE",
        "NONE",
        "NONE",
        "".join(f"{v:10d}" for v in (1, 2, 2, 8, 2, 3)),
        "".join(f"{v:10d}" for v in (2, 4, 0, 1)),
        "".join(f"{v:13.5E}" for v in (12.5, 1.0, 0.02, 0.0)),
        f"{1:10d}",
        "".join(f"{v:13.5E}" for v in (0.5, 0.0, -0.25)),
        f"{2:10d}",
        "".join(f"{v:13.5E}" for v in (1.0, 0.0, -0.5)),
    ])


def _measurement_header(ordinate_code: int, n_points: int, even: int,
                        xmin: float = 0.0, dx: float = 0.0) -> list[str]:
    return [
        "Response",
        "NONE",
        "01-Jan-26 12:00:00",
        "NONE",
        "NONE",
        f"{1:5d}{0:10d}{0:5d}{0:10d} {'pt':10s}{3:10d}{3:4d} {'ref':10s}{1:10d}{-3:4d}",
        f"{ordinate_code:10d}{n_points:10d}{even:10d}"
        f"{xmin:13.5E}{dx:13.5E}{0.0:13.5E}",
        f"{17:10d}{0:5d}{0:5d}{0:5d} {'Time':20s} {'s':20s}",
        f"{8:10d}{1:5d}{0:5d}{0:5d} {'Displacement':20s} {'m':20s}",
        f"{0:10d}{0:5d}{0:5d}{0:5d} {'NONE':20s} {'NONE':20s}",
        f"{0:10d}{0:5d}{0:5d}{0:5d} {'NONE':20s} {'NONE':20s}",
    ]


@pytest.fixture
def measurement_block() -> bytes:
    """Type-58 block, real single precision, even spacing, 4 points"""
    return _block("    58", _measurement_header(2, 4, 1, 0.0, 0.5) + [
        "".join(f"{v:13.5E}" for v in (1.0, 2.0, 3.0, 4.0)),
    ])


@pytest.fixture
def measurement_header_lines() -> Callable[..., list[str]]:
    """Eleven ASCII header lines of a type-58 block"""
    return _measurement_header


# ---------------------------------------------------------------------------
# Synthetic records
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_header() -> HeaderRecord:
    """File header with every line populated"""
    return HeaderRecord(
        model_name="Plate",
        description="Free-free plate",
        db_application="Modal",
        date_created="01-Jan-26",
        time_created="10:00:00",
        db_version=3,
        db_subversion=1,
        date_last_saved="02-Jan-26",
        time_last_saved="11:00:00",
        writer_application="pyunv",
    )


@pytest.fixture
def sample_units() -> UnitsRecord:
    """Units record in millimetres"""
    return UnitsRecord(
        units_code=5,
        description="mm (milli-newton)",
        temperature_mode=2,
        length_factor=1e-3,
        force_factor=1e-3,
        temperature_factor=1.0,
        temperature_offset=273.15,
    )


@pytest.fixture
def sample_nodes() -> NodeRecord:
    """Three single precision nodes"""
    return NodeRecord(
        labels=[1, 2, 3],
        x=[0.0, 1.0, 2.0],
        y=[0.0, 0.5, -0.5],
        z=[0.0, 0.0, 0.25],
        color=[11, 11, 11],
    )


@pytest.fixture
def sample_double_nodes() -> DoublePrecisionNodeRecord:
    """Two double precision nodes with values needing 16 digits"""
    return DoublePrecisionNodeRecord(
        labels=[10, 20],
        x=[0.1, 1.0 / 3.0],
        y=[2.0, -7.123456789012345],
        z=[1e-10, 0.0],
        def_cs=[1, 1],
        disp_cs=[1, 1],
    )


@pytest.fixture
def sample_coordinate_systems() -> CoordinateSystemRecord:
    """Two coordinate systems"""
    return CoordinateSystemRecord(
        numbers=[1, 2],
        origins=[[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]],
        ref_point_1=[[1.0, 0.0, 0.0], [2.0, 2.0, 3.0]],
        ref_point_2=[[0.0, 1.0, 0.0], [1.0, 3.0, 3.0]],
        colors=[8, 8],
    )


@pytest.fixture
def sample_trace_line() -> TraceLineRecord:
    """Trace line spanning two output lines of node labels"""
    return TraceLineRecord(
        trace_number=3,
        nodes=[1, 2, 3, 4, 5, 6, 7, 8, 0, 9, 10],
        color=4,
        identifier="Outline",
    )


@pytest.fixture
def sample_elements() -> ElementRecord:
    """A beam, a quad and a ten-node tetrahedron"""
    connectivity = np.zeros((3, 10), dtype="i8")
    connectivity[0, :2] = [1, 2]
    connectivity[1, :4] = [1, 2, 3, 4]
    connectivity[2, :10] = np.arange(1, 11)
    return ElementRecord(
        labels=[1, 2, 3],
        descriptors=[21, 94, 118],
        connectivity=connectivity,
        physical_properties=[1, 2, 3],
        material_properties=[1, 1, 1],
        colors=[7, 7, 7],
        beam_orientation=[[5, 1, 1], [0, 0, 0], [0, 0, 0]],
    )


@pytest.fixture
def sample_modes() -> NodalResponseRecord:
    """Normal-mode shape at three nodes"""
    return NodalResponseRecord(
        node_numbers=[1, 2, 3],
        values=[[0.5, 0.0, -0.25], [1.0, 0.0, -0.5], [0.0, 0.125, 0.0]],
        analysis_type=2,
        id_lines=["Mode 1", "NONE", "NONE", "NONE", "NONE"],
        mode_number=1,
        frequency=12.5,
        modal_mass=1.0,
        viscous_damping=0.02,
    )


@pytest.fixture
def sample_measurement() -> MeasurementRecord:
    """Real double precision, evenly spaced time response"""
    return MeasurementRecord(
        x=np.arange(8) * 0.25,
        data=np.array([0.0, 1.0, -1.0, 0.5, -0.5, 0.25, -0.25, 0.125]),
        id_1="Response",
        response_entity="pt",
        response_node=3,
        response_direction=3,
        reference_entity="ref",
        reference_node=1,
        reference_direction=-3,
    )


@pytest.fixture
def sample_frf() -> MeasurementRecord:
    """Complex FRF on an uneven frequency axis"""
    return MeasurementRecord(
        x=np.array([1.0, 2.0, 4.0, 8.0, 16.0]),
        data=np.array([1 + 1j, 0.5 - 0.5j, -0.25 + 0.125j, 2.0 + 0j, 0 - 1j]),
        function_type=4,
        id_1="FRF",
        response_node=5,
        response_direction=2,
        reference_node=1,
        reference_direction=3,
    )
