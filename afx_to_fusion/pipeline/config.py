"""
Configuration for the AFX to Fusion pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to check brace balance before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True

    @staticmethod
    def from_dict(d: dict) -> OutputConfig:
        """Create a config from a dictionary."""
        config = OutputConfig()
        for k, v in d.items():
            if k == "mode":
                v = OutputMode(v)
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "mode": self.mode.value,
            "validate_before_write": self.validate_before_write,
            "atomic_write": self.atomic_write,
        }


@dataclass
class GeneratorConfig:
    """Configuration options for Fusion generation."""

    # Indentation unit added per nesting level
    indentation: str = "    "

    # Prototype used for plain markup tags
    tag_prototype: str = "Neos.Fusion:Tag"

    # Prototype wrapping two or more sibling values
    join_prototype: str = "Neos.Fusion:Join"

    # Prototype for props grouped after a spread
    data_structure_prototype: str = "Neos.Fusion:DataStructure"

    # Property receiving the children unless overridden by @children
    children_property: str = "content"

    # Identifier of DSL blocks in Fusion files (afx`...`)
    dsl_identifier: str = "afx"

    # Base prototype of generated component prototypes
    component_prototype: str = "Neos.Fusion:Component"

    # Add generation comment at top of prototype files
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "indentation": self.indentation,
            "tag_prototype": self.tag_prototype,
            "join_prototype": self.join_prototype,
            "data_structure_prototype": self.data_structure_prototype,
            "children_property": self.children_property,
            "dsl_identifier": self.dsl_identifier,
            "component_prototype": self.component_prototype,
            "add_generation_comment": self.add_generation_comment,
        }
