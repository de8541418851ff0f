"""AFX to Fusion converter

A Python package for translating AFX, the JSX-like markup used in
Neos CMS templates, into Fusion source. Ships the AFX parser, the
Fusion generator, a transpiler for AFX blocks inside Fusion files
and a command line tool.
"""

__version__ = "1.0.0"

from .pipeline import (
    AfxError,
    AfxParseError,
    AtomicWriter,
    FusionGenerationError,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    OutputWriteError,
    PipelineGenerator,
    PrototypeRenderer,
    convert_afx_to_fusion,
    transpile_fusion,
)

__all__ = [
    "convert_afx_to_fusion",
    "transpile_fusion",
    "PipelineGenerator",
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
