#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the type-58 measurement record in ASCII and binary form

Covers all eight on-disk cases in both variants, case selection from
record content, byte-count recovery for inconsistent 58b headers, byte
order handling and the header-line layout.
"""

from __future__ import annotations

import numpy as np
import pytest

from pyunv import read_uff, write_uff
from pyunv.exceptions import ErrorCode
from pyunv.models.records import AxisDescriptor, MeasurementRecord

EVEN_X = np.arange(6) * 0.25
UNEVEN_X = np.array([0.0, 0.5, 1.5, 3.0, 3.25, 8.0])
REAL = np.array([0.5, -1.25, 2.0, 0.125, -0.0625, 4.0])
CPLX = REAL + 1j * REAL[::-1]


def _record(complex_data: bool, precision: str, even: bool, binary: bool) -> MeasurementRecord:
    return MeasurementRecord(
        x=EVEN_X if even else UNEVEN_X,
        data=CPLX if complex_data else REAL,
        function_type=4 if complex_data else 1,
        id_1="Case test",
        precision=precision,
        binary=binary,
        response_node=12,
        response_direction=-2,
        reference_node=1,
        reference_direction=3,
    )


CASES = [
    # complex, precision, even, case id, ordinate code
    (False, "single", True, 1, 2),
    (False, "single", False, 2, 2),
    (True, "single", True, 3, 5),
    (True, "single", False, 4, 5),
    (False, "double", True, 5, 4),
    (False, "double", False, 6, 4),
    (True, "double", True, 7, 6),
    (True, "double", False, 8, 6),
]


def _line(path, index: int) -> str:
    return path.read_bytes().split(b"\n")[index].decode("latin-1")


# -----------------------------------------------------------------------
# Case selection
# -----------------------------------------------------------------------

class TestCaseSelection:
    """Test that the on-disk case follows the record content"""

    @pytest.mark.parametrize("complex_data, precision, even, case_id, code", CASES)
    def test_layout(self, complex_data, precision, even, case_id, code) -> None:
        layout = _record(complex_data, precision, even, False).layout
        assert layout.case_id == case_id
        assert layout.ordinate_code == code

    def test_toggling_precision_changes_case(self) -> None:
        record = _record(False, "double", True, False)
        assert record.layout.case_id == 5
        record.precision = "single"
        assert record.layout.case_id == 1

    def test_toggling_spacing_changes_case(self) -> None:
        record = _record(True, "double", True, False)
        assert record.layout.case_id == 7
        record.x = UNEVEN_X
        assert record.layout.case_id == 8

    def test_two_points_count_as_even(self) -> None:
        record = MeasurementRecord(x=[0.0, 3.0], data=[1.0, 2.0])
        assert record.is_even

    def test_tiny_step_jitter_is_even(self) -> None:
        x = np.arange(5) * 0.1
        x[3] += 1e-15
        assert MeasurementRecord(x=x, data=np.zeros(5)).is_even

    @pytest.mark.parametrize("complex_data, precision, even, case_id, code", CASES)
    def test_ordinate_code_written(
        self, tmp_path, complex_data, precision, even, case_id, code
    ) -> None:
        path = tmp_path / "case.unv"
        write_uff(path, [_record(complex_data, precision, even, False)], mode="replace")
        line7 = _line(path, 8)
        assert int(line7[0:10]) == code
        assert int(line7[10:20]) == 6
        assert int(line7[20:30]) == (1 if even else 0)


# -----------------------------------------------------------------------
# Round trips
# -----------------------------------------------------------------------

class TestRoundTrip:
    """Test that every case decodes back to the encoded record"""

    @pytest.mark.parametrize("binary", [False, True], ids=["ascii", "binary"])
    @pytest.mark.parametrize("complex_data, precision, even, case_id, code", CASES)
    def test_case(self, tmp_path, binary, complex_data, precision, even, case_id, code) -> None:
        original = _record(complex_data, precision, even, binary)
        path = tmp_path / "roundtrip.unv"
        write_report = write_uff(path, [original], mode="replace")
        assert write_report.n_written == 1

        (decoded,), report = read_uff(path)
        assert report.n_errors == 0
        assert report.entries[0].warnings == []
        assert report.binary == [binary]
        assert decoded.binary is binary
        assert decoded.precision == precision
        assert decoded.is_complex is complex_data
        assert decoded.layout.case_id == case_id
        np.testing.assert_array_equal(decoded.x, original.x)
        np.testing.assert_array_equal(decoded.data, original.data)

    def test_header_fields(self, tmp_path, sample_measurement) -> None:
        sample_measurement.ordinate = AxisDescriptor(8, 1, 0, 0, "Displacement", "m")
        path = tmp_path / "header.unv"
        write_uff(path, [sample_measurement], mode="replace")
        (decoded,), _ = read_uff(path)
        assert decoded.id_1 == "Response"
        assert decoded.function_type == 1
        assert decoded.response_entity == "pt"
        assert decoded.response_node == 3
        assert decoded.response_direction == 3
        assert decoded.reference_entity == "ref"
        assert decoded.reference_direction == -3
        assert decoded.ordinate == AxisDescriptor(8, 1, 0, 0, "Displacement", "m")
        assert decoded.abscissa.data_character == 17

    def test_frf_defaults(self, tmp_path, sample_frf) -> None:
        path = tmp_path / "frf.unv"
        write_uff(path, [sample_frf], mode="replace")
        (decoded,), _ = read_uff(path)
        assert decoded.function_type == 4
        assert decoded.abscissa.data_character == 18
        assert decoded.ordinate.data_character == 12
        assert decoded.denominator.data_character == 13
        np.testing.assert_array_equal(decoded.data, sample_frf.data)

    def test_single_precision_binary_rounds_to_float32(self, tmp_path) -> None:
        record = MeasurementRecord(
            x=np.arange(4) * 0.5, data=[0.1, 0.2, 0.3, 0.4], precision="single", binary=True
        )
        path = tmp_path / "single.unv"
        write_uff(path, [record], mode="replace")
        (decoded,), _ = read_uff(path)
        np.testing.assert_array_equal(decoded.data, record.data.astype("f4").astype("f8"))

    def test_double_precision_binary_is_exact(self, tmp_path) -> None:
        data = np.array([1.0 / 3.0, np.pi, -np.e, 1e-300])
        record = MeasurementRecord(x=np.arange(4) * 0.5, data=data, binary=True)
        path = tmp_path / "double.unv"
        write_uff(path, [record], mode="replace")
        (decoded,), _ = read_uff(path)
        np.testing.assert_array_equal(decoded.data, data)

    def test_even_abscissa_limited_by_header_fields(self, tmp_path) -> None:
        # xmin and dx live in E13.5 fields even when the payload is double
        x = np.arange(5) / 3.0
        data = np.array([1.0 / 3.0, np.pi, -np.e, 1e-300, 7.0])
        record = MeasurementRecord(x=x, data=data, binary=True)
        path = tmp_path / "thirds.unv"
        write_uff(path, [record], mode="replace")
        (decoded,), report = read_uff(path)
        assert report.n_errors == 0
        np.testing.assert_array_equal(decoded.data, data)
        np.testing.assert_allclose(decoded.x, x, rtol=5e-6)
        assert not np.array_equal(decoded.x, x)


# -----------------------------------------------------------------------
# Binary envelope and recovery
# -----------------------------------------------------------------------

class TestBinary:
    """Test 58b header lines, byte order and byte-count recovery"""

    def _write(self, tmp_path, byte_order: str = "little"):
        record = MeasurementRecord(x=np.arange(10) * 0.5, data=np.arange(10.0), binary=True)
        path = tmp_path / "binary.unv"
        write_uff(path, [record], mode="replace", byte_order=byte_order)
        return path

    def test_header_line(self, tmp_path) -> None:
        header = _line(self._write(tmp_path), 1)
        assert header[0:6] == "    58"
        assert header[6] == "b"
        assert int(header[7:13]) == 1
        assert int(header[13:19]) == 2
        assert int(header[19:31]) == 11
        assert int(header[31:43]) == 80

    def test_big_endian(self, tmp_path) -> None:
        path = self._write(tmp_path, byte_order="big")
        assert int(_line(path, 1)[7:13]) == 2
        (decoded,), report = read_uff(path)
        assert report.n_errors == 0
        np.testing.assert_array_equal(decoded.data, np.arange(10.0))

    def test_payload_follows_line_eleven(self, tmp_path) -> None:
        raw = self._write(tmp_path).read_bytes()
        lines = raw.split(b"\n", 13)
        payload = lines[13][:80]
        np.testing.assert_array_equal(np.frombuffer(payload, dtype="<f8"), np.arange(10.0))

    def test_declared_bytes_short_by_eight(self, tmp_path) -> None:
        path = self._write(tmp_path)
        raw = path.read_bytes().replace(f"{80:12d}".encode(), f"{72:12d}".encode(), 1)
        path.write_bytes(raw)

        (decoded,), report = read_uff(path, verbose=False)
        assert report.n_errors == 0
        assert len(report.entries[0].warnings) == 2
        assert decoded.data.size == 10
        np.testing.assert_array_equal(decoded.data, np.arange(10.0))

    def test_declared_bytes_exceed_payload(self, tmp_path) -> None:
        path = self._write(tmp_path)
        raw = path.read_bytes().replace(f"{80:12d}".encode(), f"{88:12d}".encode(), 1)
        path.write_bytes(raw)

        records, report = read_uff(path)
        assert records == [None]
        assert report.entries[0].error_code == ErrorCode.TRUNCATED_DATA
        assert "not enough data" in report.error_messages[0]

    def test_payload_line_break_is_not_data(self, tmp_path) -> None:
        payload = np.arange(10.0).astype("<f8").tobytes()
        raw = self._write(tmp_path).read_bytes()
        assert payload + b"\n" + b"    -1" in raw

        (decoded,), report = read_uff(tmp_path / "binary.unv")
        assert report.n_errors == 0
        assert report.entries[0].warnings == []
        np.testing.assert_array_equal(decoded.data, np.arange(10.0))

    def test_payload_crlf_is_not_data(self, tmp_path) -> None:
        payload = np.arange(10.0).astype("<f8").tobytes()
        path = self._write(tmp_path)
        raw = path.read_bytes().replace(payload + b"\n    -1", payload + b"\r\n    -1", 1)
        path.write_bytes(raw)

        (decoded,), report = read_uff(path)
        assert report.n_errors == 0
        assert report.entries[0].warnings == []
        np.testing.assert_array_equal(decoded.data, np.arange(10.0))

    def test_line_break_does_not_satisfy_byte_count(self, tmp_path) -> None:
        path = self._write(tmp_path)
        raw = path.read_bytes().replace(f"{80:12d}".encode(), f"{81:12d}".encode(), 1)
        path.write_bytes(raw)

        records, report = read_uff(path)
        assert records == [None]
        assert report.entries[0].error_code == ErrorCode.TRUNCATED_DATA
        assert "not enough data" in report.error_messages[0]

    def test_point_count_larger_than_bytes(self, tmp_path) -> None:
        path = self._write(tmp_path)
        raw = path.read_bytes()
        line7 = raw.split(b"\n")[8]
        patched = line7[:10] + f"{12:10d}".encode() + line7[20:]
        path.write_bytes(raw.replace(line7, patched, 1))

        records, report = read_uff(path, verbose=False)
        assert records == [None]
        assert report.entries[0].error_code == ErrorCode.TRUNCATED_DATA

    def test_binary_followed_by_ascii_block(self, tmp_path, sample_nodes) -> None:
        path = self._write(tmp_path)
        write_uff(path, [sample_nodes], mode="append")
        records, report = read_uff(path)
        assert report.n_errors == 0
        assert [r.type_code for r in records] == [58, 15]


# -----------------------------------------------------------------------
# ASCII decoding quirks
# -----------------------------------------------------------------------

class TestAsciiDecoding:
    """Test hand-written type-58 blocks"""

    def test_even_single(self, write_file, measurement_block) -> None:
        (record,), report = read_uff(write_file(measurement_block))
        assert report.n_errors == 0
        assert record.precision == "single"
        np.testing.assert_array_equal(record.x, [0.0, 0.5, 1.0, 1.5])
        np.testing.assert_array_equal(record.data, [1.0, 2.0, 3.0, 4.0])
        assert record.date == "01-Jan-26 12:00:00"
        assert record.response_entity == "pt"
        assert record.reference_direction == -3
        assert record.abscissa.axis_label == "Time"
        assert record.ordinate.units_label == "m"

    def test_point_count_mismatch_warns(
        self, write_file, make_block, measurement_header_lines
    ) -> None:
        block = make_block(
            "    58",
            measurement_header_lines(2, 5, 1, 0.0, 1.0)
            + ["".join(f"{v:13.5E}" for v in (1.0, 2.0, 3.0, 4.0))],
        )
        (record,), report = read_uff(write_file(block), verbose=False)
        assert record.data.size == 4
        assert "declares 5 points" in report.entries[0].warnings[0]

    def test_partial_group_is_error(
        self, write_file, make_block, measurement_header_lines
    ) -> None:
        block = make_block(
            "    58",
            measurement_header_lines(5, 2, 1, 0.0, 1.0)
            + ["".join(f"{v:13.5E}" for v in (1.0, 2.0, 3.0))],
        )
        records, report = read_uff(write_file(block))
        assert records == [None]
        assert "whole groups" in report.error_messages[0]

    def test_d_exponent_data(self, write_file, make_block, measurement_header_lines) -> None:
        block = make_block(
            "    58",
            measurement_header_lines(4, 2, 1, 0.0, 1.0)
            + ["  1.000000000000D+00 -2.500000000000D-01"],
        )
        (record,), _ = read_uff(write_file(block))
        np.testing.assert_array_equal(record.data, [1.0, -0.25])
