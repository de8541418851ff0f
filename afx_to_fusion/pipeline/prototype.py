"""
Prototype rendering.

Wraps generated Fusion in a component prototype declaration so an
`.afx` file can be turned into a standalone `.fusion` file.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from .config import GeneratorConfig

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class PrototypeRenderer:
    """Renders `prototype(Name) < prototype(Base) { renderer = ... }`."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.prototype_template = self.jinja_env.get_template("prototype.fusion.jinja2")

    def render(self, prototype_name: str, renderer: str, generation_comment: str | None = None) -> str:
        """
        Render a prototype declaration.

        Args:
            prototype_name: Name of the declared prototype (e.g. Vendor.Site:Card)
            renderer: Fusion generated with one level of indentation
            generation_comment: Optional comment placed above the declaration

        Returns:
            Fusion source ending with a newline
        """
        return self.prototype_template.render(
            prototype_name=prototype_name,
            base_prototype=self.config.component_prototype,
            indentation=self.config.indentation,
            renderer=renderer,
            generation_comment=generation_comment if self.config.add_generation_comment else None,
        )
