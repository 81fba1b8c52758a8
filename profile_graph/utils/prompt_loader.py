"""
Jinja2 prompt templates for the completion call.

Templates live in the package's prompts/ directory. Undefined variables are
errors: a prompt rendered with a missing profile field is never sent.

Usage:
    loader = get_default_loader()
    system_prompt = loader.render("knowledge_graph/system.j2")
"""

from pathlib import Path
from typing import Any, Optional

import structlog
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

logger = structlog.get_logger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class PromptRenderError(Exception):
    """Raised when a prompt template cannot be loaded or rendered."""

    pass


class PromptLoader:
    """Loads and renders prompt templates."""

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        """
        Args:
            template_dir: Base directory for templates (defaults to profile_graph/prompts)
        """
        self.template_dir = template_dir or PROMPTS_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(
        self,
        template_name: str,
        correlation_id: Optional[str] = None,
        **variables: Any,
    ) -> str:
        """
        Render a template.

        Args:
            template_name: Path relative to the template directory
                (e.g., "knowledge_graph/profile.j2")
            correlation_id: Optional correlation ID for logging
            **variables: Template variables

        Returns:
            Rendered prompt text

        Raises:
            PromptRenderError: If the template is missing, malformed, or
                references a variable that was not passed
        """
        log = logger.bind(template_name=template_name, correlation_id=correlation_id)

        try:
            rendered = self.env.get_template(template_name).render(**variables)
        except TemplateNotFound as e:
            log.error("Prompt template not found", template_dir=str(self.template_dir))
            raise PromptRenderError(f"Prompt template not found: {template_name}") from e
        except TemplateSyntaxError as e:
            log.error("Prompt template syntax error", error=str(e), lineno=e.lineno)
            raise PromptRenderError(
                f"Syntax error in {template_name} line {e.lineno}: {e.message}"
            ) from e
        except UndefinedError as e:
            log.error(
                "Prompt variable missing",
                error=str(e),
                variables_provided=sorted(variables),
            )
            raise PromptRenderError(f"Undefined variable in {template_name}: {e}") from e

        log.debug("Prompt rendered", rendered_length=len(rendered))
        return rendered


_default_loader: Optional[PromptLoader] = None


def get_default_loader() -> PromptLoader:
    """Return the shared loader for the packaged templates."""
    global _default_loader
    if _default_loader is None:
        _default_loader = PromptLoader()
    return _default_loader
