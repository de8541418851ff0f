"""
Writer module for generated Fusion files.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, check_balanced_braces

__all__ = [
    "AtomicWriter",
    "check_balanced_braces",
]
