#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 export for decoded Universal File records

Writes deterministic, self-documenting HDF5 files from the typed
dataclass models returned by the reader layer.

HDF5 Layout
-----------
::

    /metadata/
        source              string   — path of the Universal File
        n_blocks            int64    — delimited blocks in the source
        n_records           int64    — slots in the parse report
        n_errors            int64    — slots carrying a record error

    /records/
        0001_file_header/           attrs: type_code, binary, model_name, …
        0002_nodes/
            labels                  int64[]
            x, y, z                 float64[]
            def_cs, disp_cs, color  int64[]
        0003_measurement/
            x                       float64[]
            data                    float64[] | complex128[]
            abscissa/               attrs: data_character, axis_label, …
            ordinate/ ...
            denominator/ ...
            z_axis/ ...
        0004_9999/                  attrs: type_code, binary (unsupported)

Groups are numbered by slot (1-based), so the group order matches the
record order of :func:`~pyunv.readers.uff.read_uff`.  Slots holding
``None`` (records that failed to decode) are skipped.  NumPy arrays are
stored as datasets (complex arrays stay complex), scalars and strings as
group attributes, lists of strings as variable-length string datasets.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Sequence

import numpy as np

try:
    import h5py
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'h5py' package is required by the HDF5 converter.  "
        "Install it with: pip install h5py"
    ) from _exc

from pyunv.exceptions import ConversionError
from pyunv.models.records import AxisDescriptor, MeasurementRecord, Record
from pyunv.models.report import ParseReport
from pyunv.readers.uff import read_uff
from pyunv.utils.constants import FUNCTION_TYPES, RECORD_TYPE_NAMES

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal writers
# ---------------------------------------------------------------------------

def _group_name(index: int, type_code: int) -> str:
    return f"{index:04d}_{RECORD_TYPE_NAMES.get(type_code, str(type_code))}"


def _write_axis(group: h5py.Group, name: str, axis: AxisDescriptor) -> None:
    sub = group.create_group(name)
    for f in dataclasses.fields(axis):
        sub.attrs[f.name] = getattr(axis, f.name)


def _write_field(group: h5py.Group, name: str, value) -> None:
    """Store one record field as a dataset, sub-group or attribute

    Parameters
    ----------
    group : h5py.Group
        Record group.
    name : str
        Field name.
    value : object
        Field value.

    Raises
    ------
    ConversionError
        If *value* has a type that has no HDF5 mapping.
    """
    if value is None:
        return
    if isinstance(value, np.ndarray):
        group.create_dataset(name, data=value)
    elif isinstance(value, AxisDescriptor):
        _write_axis(group, name, value)
    elif isinstance(value, list):
        group.create_dataset(
            name,
            data=np.array([str(v) for v in value], dtype=object),
            dtype=h5py.string_dtype(),
        )
    elif isinstance(value, complex):
        group.create_dataset(name, data=np.complex128(value))
    elif isinstance(value, (str, bool, int, float, np.generic)):
        group.attrs[name] = value
    else:
        raise ConversionError(
            f"Cannot store field {name!r} of type {type(value).__name__} in HDF5"
        )


def _write_record(root: h5py.Group, index: int, record: Record) -> None:
    """Write one record as the group ``/records/NNNN_<type>``"""
    type_code = int(record.type_code)
    group = root.create_group(_group_name(index, type_code))
    group.attrs["type_code"] = type_code
    group.attrs["binary"] = bool(record.binary)

    for f in dataclasses.fields(record):
        if f.name in ("type_code", "binary"):
            continue
        _write_field(group, f.name, getattr(record, f.name))

    if isinstance(record, MeasurementRecord):
        group.attrs["function_name"] = FUNCTION_TYPES.get(int(record.function_type), "")
        group.attrs["case"] = record.layout.case_id


def write_records_hdf5(h5f: h5py.Group, records: Sequence[Record | None]) -> int:
    """Write a record collection under ``/records`` of an open HDF5 file

    Parameters
    ----------
    h5f : h5py.File | h5py.Group
        Open, writable HDF5 file or group.
    records : sequence of Record
        Records as returned by :func:`~pyunv.readers.uff.read_uff`.

    Returns
    -------
    int
        Number of record groups written.
    """
    root = h5f.require_group("records")
    written = 0
    for index, record in enumerate(records, start=1):
        if record is None:
            logger.debug("Slot %d holds no record, skipped", index)
            continue
        _write_record(root, index, record)
        written += 1
    logger.debug("Wrote %d record groups", written)
    return written


def _write_metadata(h5f: h5py.File, report: ParseReport) -> None:
    meta = h5f.create_group("metadata")
    meta.create_dataset("source", data=report.source)
    meta.create_dataset("n_blocks", data=np.int64(report.n_blocks))
    meta.create_dataset("n_records", data=np.int64(report.n_records))
    meta.create_dataset("n_errors", data=np.int64(report.n_errors))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def convert_uff_to_hdf5(
    source_path: Path | str,
    output_path: Path | str,
    *,
    overwrite: bool = False,
    verbose: bool = False,
) -> ParseReport:
    """Read a Universal File and write its records to an HDF5 file

    Parameters
    ----------
    source_path : Path | str
        Path to the ``.uff`` / ``.unv`` file.
    output_path : Path | str
        Path for the output HDF5 file.  Parent directories are created
        automatically.
    overwrite : bool, optional
        If ``True``, overwrite an existing HDF5 file.  If ``False``
        (default), raise :class:`~pyunv.exceptions.ConversionError`
        when the output file already exists.
    verbose : bool, optional
        Passed to the reader.  Default ``False``.

    Returns
    -------
    ParseReport
        The report of the underlying read.

    Raises
    ------
    ConversionError
        If *overwrite* is ``False`` and *output_path* exists, or if
        any HDF5 write operation fails.
    FileFormatError
        If the source file cannot be read as a Universal File.

    Examples
    --------
    >>> report = convert_uff_to_hdf5("test.unv", "out/test.h5", overwrite=True)
    """
    src = Path(source_path)
    out = Path(output_path)

    if out.exists() and not overwrite:
        raise ConversionError(
            f"Output file {out} already exists and overwrite=False."
        )

    logger.debug("Parsing UFF records from %s", src)
    records, report = read_uff(src, verbose=verbose)

    out.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = "w" if overwrite else "w-"
        with h5py.File(str(out), mode) as h5f:
            _write_metadata(h5f, report)
            write_records_hdf5(h5f, records)
    except Exception as exc:
        if isinstance(exc, ConversionError):
            raise
        raise ConversionError(
            f"Failed to write HDF5 file {out}: {exc}"
        ) from exc

    logger.info("Wrote HDF5 file: %s (%d records)", out, report.n_records)
    return report
