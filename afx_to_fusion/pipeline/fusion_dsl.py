"""
Transpiler for AFX blocks embedded in Fusion files.

Fusion files embed AFX as a DSL value:

    prototype(Vendor.Site:Card) < prototype(Neos.Fusion:Component) {
        renderer = afx`<div>{props.title}</div>`
    }

Every block with the configured DSL identifier is replaced by generated
Fusion, indented like the line the block starts on. A backtick inside a
block is escaped with a backslash.
"""

from __future__ import annotations

import logging
import re

from .config import GeneratorConfig
from .generator import PipelineGenerator

logger = logging.getLogger(__name__)

_DSL_BLOCK = re.compile(r"(?<![A-Za-z0-9.])(?P<identifier>[A-Za-z0-9.]+)`(?P<code>(?:\\`|[^`])*)`")
_LEADING_WHITESPACE = re.compile(r"[ \t]*")


def transpile_fusion(source: str, config: GeneratorConfig | None = None) -> str:
    """
    Replace AFX DSL blocks in Fusion source with generated Fusion.

    Args:
        source: Fusion source possibly containing afx`...` blocks
        config: Generation configuration

    Returns:
        Fusion source without AFX blocks

    Raises:
        AfxParseError: If an AFX block is malformed
        FusionGenerationError: If an AFX block violates a generator contract
    """
    pipeline = PipelineGenerator(config)
    dsl_identifier = pipeline.config.dsl_identifier
    transpiled_blocks = 0

    def replace_block(match: re.Match) -> str:
        nonlocal transpiled_blocks
        if match.group("identifier") != dsl_identifier:
            return match.group(0)
        line_start = source.rfind("\n", 0, match.start()) + 1
        indentation = _LEADING_WHITESPACE.match(source, line_start).group(0)
        transpiled_blocks += 1
        return pipeline.generate(match.group("code").replace("\\`", "`"), indentation)

    result = _DSL_BLOCK.sub(replace_block, source)
    logger.debug("Transpiled %d %s block(s)", transpiled_blocks, dsl_identifier)
    return result
