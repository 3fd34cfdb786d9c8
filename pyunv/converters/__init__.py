#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 export of Universal File records

* :func:`~pyunv.converters.hdf5.convert_uff_to_hdf5`
    Reads a Universal File and writes its records to a new HDF5 file.
* :func:`~pyunv.converters.hdf5.write_records_hdf5`
    Writes a record collection into an already open HDF5 file.
"""

from __future__ import annotations

from pyunv.converters.hdf5 import convert_uff_to_hdf5, write_records_hdf5

__all__ = ["convert_uff_to_hdf5", "write_records_hdf5"]
