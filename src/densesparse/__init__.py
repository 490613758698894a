"""Ordered containers that tell "no value here" apart from "nothing here".

denselist can never hold a missing value; sparselist treats an absent
position as a first-class state. See README.md for usage examples.
"""

from densesparse.convert import asdense, assparse, is_denselist, is_sparselist, safe_to_dense
from densesparse.denselist import denselist
from densesparse.sparselist import sparselist

__all__ = [
    "asdense",
    "assparse",
    "denselist",
    "is_denselist",
    "is_sparselist",
    "safe_to_dense",
    "sparselist",
]
