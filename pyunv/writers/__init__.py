#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Universal File encoders

Every encoder shares the :class:`~pyunv.writers.base.BaseEncoder`
interface and renders one block body in memory;
:class:`~pyunv.writers.uff.UFFWriter` wraps the bodies in delimiter
lines and writes them.
"""

from __future__ import annotations

from pyunv.writers.uff import ENCODERS, UFFWriter, write_uff

__all__ = ["ENCODERS", "UFFWriter", "write_uff"]
