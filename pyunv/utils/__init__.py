#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities for fixed-column parsing, formatting and validation

This sub-package centralises the low-level field helpers, the format
constants and the pre-encode checks so that no logic is duplicated
across the decoder and encoder modules.
"""

from __future__ import annotations
