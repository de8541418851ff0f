"""
Utility functions for the AFX to Fusion converter.
"""

import re
from pathlib import Path

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or camelCase text to PascalCase.

    Examples:
        "card_teaser" -> "CardTeaser"
        "card-teaser" -> "CardTeaser"
        "cardTeaser" -> "CardTeaser"
    """
    if not text:
        return ""
    words = _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))
    return "".join(word.capitalize() for word in words if word)


def prototype_name_from_path(package: str, path: str | Path) -> str:
    """Derive a prototype name from a package key and an AFX file name.

    Examples:
        ("Vendor.Site", "components/card_teaser.afx") -> "Vendor.Site:CardTeaser"
    """
    return f"{package}:{snake_to_pascal_case(Path(path).stem)}"
