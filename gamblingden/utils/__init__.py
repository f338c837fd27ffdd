# File: utils/__init__.py
"""Pure Python utilities for GamblingDen.

This module contains pure Python functions with no engine, manager or
storage dependencies. All functions here can be unit tested in isolation.

Submodules:
    - dt_utils: Local-calendar date math and timestamp parsing
    - math_utils: Currency rounding, clamping, display formatting
    - random_utils: Unbiased CSPRNG-backed integer sampling

Usage:
    from . import dt_utils
    from .math_utils import round_amount
"""

from . import dt_utils, math_utils, random_utils

__all__ = ["dt_utils", "math_utils", "random_utils"]
