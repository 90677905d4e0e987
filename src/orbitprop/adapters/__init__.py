# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for Earth orientation data.

File I/O is confined to this layer.
"""
from orbitprop.adapters.finals_file import FinalsFileSource, JsonEOPSource

__all__ = ["FinalsFileSource", "JsonEOPSource"]
