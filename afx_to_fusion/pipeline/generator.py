"""
Pipeline generator.

Orchestrates the phases of AFX to Fusion conversion:
1. Parse AFX source into an AST
2. Generate Fusion source from the AST
"""

from __future__ import annotations

from .afx_ast import AfxParser, AstValue
from .backend import FusionGenerator
from .config import GeneratorConfig
from .errors import AfxParseError


class PipelineGenerator:
    """AFX to Fusion converter with a reusable configuration."""

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the pipeline.

        Args:
            config: Generation configuration
        """
        self.config = config or GeneratorConfig()
        self.generator = FusionGenerator(self.config)

    def parse(self, afx_code: str) -> list[AstValue]:
        """Parse AFX source, ignoring surrounding whitespace."""
        try:
            return AfxParser(afx_code.strip()).parse()
        except RecursionError:
            raise AfxParseError("AFX nodes are nested too deeply to be parsed") from None

    def generate(self, afx_code: str, indentation: str = "") -> str:
        """
        Convert AFX source to Fusion.

        Args:
            afx_code: The AFX source
            indentation: Base indentation of the emitted code

        Returns:
            Fusion source

        Raises:
            AfxParseError: If the AFX source is malformed
            FusionGenerationError: If the parsed AST violates a generator contract
        """
        return self.generator.generate(self.parse(afx_code), indentation)


def convert_afx_to_fusion(afx_code: str, indentation: str = "", config: GeneratorConfig | None = None) -> str:
    """Convert AFX source to Fusion in one call."""
    return PipelineGenerator(config).generate(afx_code, indentation)
