# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Pure domain layer: time, frames, forces and propagators. No I/O beyond bundled tables."""
