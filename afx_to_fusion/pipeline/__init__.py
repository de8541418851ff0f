"""
Pipeline - AST-based AFX to Fusion converter.

1. Phase 1 (Parser): Parse AFX source into an AST
2. Phase 2 (Backend): Run the attribute pipeline and generate Fusion source
3. Phase 3 (Output): Optionally wrap the result in a prototype declaration
   and write it atomically
"""

from __future__ import annotations

from .config import GeneratorConfig, OutputConfig, OutputMode
from .errors import AfxError, AfxParseError, FusionGenerationError, OutputWriteError
from .fusion_dsl import transpile_fusion
from .generator import PipelineGenerator, convert_afx_to_fusion
from .prototype import PrototypeRenderer
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "convert_afx_to_fusion",
    "transpile_fusion",
    "PrototypeRenderer",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AfxError",
    "AfxParseError",
    "FusionGenerationError",
    "OutputWriteError",
    "AtomicWriter",
]
