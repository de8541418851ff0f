"""
Atomic file writer for generated Fusion.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputWriteError

logger = logging.getLogger(__name__)


def check_balanced_braces(content: str) -> None:
    """Check that braces outside quoted strings are balanced.

    Raises:
        OutputWriteError: If a closing brace has no opening one or braces stay open
    """
    depth = 0
    quote = None
    escaped = False
    for line_number, line in enumerate(content.split("\n"), start=1):
        if quote is None and line.lstrip().startswith(("//", "#")):
            continue
        for character in line:
            if quote is not None:
                if escaped:
                    escaped = False
                elif character == "\\":
                    escaped = True
                elif character == quote:
                    quote = None
            elif character in "'\"":
                quote = character
            elif character == "{":
                depth += 1
            elif character == "}":
                depth -= 1
                if depth < 0:
                    raise OutputWriteError(f"Generated Fusion has an unmatched closing brace on line {line_number}")
    if depth != 0:
        raise OutputWriteError(f"Generated Fusion has unbalanced braces: {depth} left open")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate_fusion: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_fusion: Optional validation function for Fusion code
        """
        self._validate_fusion = validate_fusion or check_balanced_braces

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputWriteError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_fusion(content)

            temp_path.replace(path)
            logger.info("Wrote %s", path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if file was written

        Raises:
            OutputWriteError: If the file already exists or validation fails
        """
        if path.exists():
            raise OutputWriteError(f"Output file already exists: {path}. Use --mode force to overwrite.")

        self.write(path, content, validate)
        return True
