"""
Fusion backend: attribute pipeline and code generator.
"""

from __future__ import annotations

from .attribute_pipeline import (
    SHORTHAND_META_PATHS,
    expand_shorthand_meta_paths,
    filter_attributes,
    process_attributes,
    sort_attributes,
)
from .fusion_generator import FusionGenerator, normalize_text

__all__ = [
    "FusionGenerator",
    "normalize_text",
    "SHORTHAND_META_PATHS",
    "filter_attributes",
    "expand_shorthand_meta_paths",
    "sort_attributes",
    "process_attributes",
]
