"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering. Helper
functions are handed to each render call as an explicit table so the
engine itself holds no registrations.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import (
    Environment,
    StrictUndefined,
    TemplateSyntaxError,
)

from ...logging_config import get_logger
from .naming import export_name, quote, title_words, to_lower, to_upper
from .schema import GenerationRequest

logger = get_logger(__name__)

TemplateFunctions = Mapping[str, Callable[..., Any]]


class TemplateError(Exception):
    """Exception raised when a template cannot be parsed."""

    pass


class TemplateExecutionError(Exception):
    """Exception raised when a parsed template fails while rendering."""

    pass


def default_template_functions() -> Dict[str, Callable[..., Any]]:
    """
    Return the helper functions available to every template.

    The names are part of the template contract; templates written by
    users call them directly, so renaming one breaks those templates.
    """
    return {
        "export_name": export_name,
        "to_upper": to_upper,
        "to_lower": to_lower,
        "title_words": title_words,
        "quote": quote,
    }


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def _create_environment(self, functions: TemplateFunctions) -> Environment:
        """Create a Jinja2 environment exposing the given functions."""
        env = Environment(
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters.update(functions)
        env.globals.update(functions)
        return env

    def render(
        self,
        request: GenerationRequest,
        template_text: str,
        functions: Optional[TemplateFunctions] = None,
    ) -> str:
        """
        Render a generation request through a template.

        Args:
            request: Package name and tables to render
            template_text: Jinja2 template source
            functions: Helper functions exposed to the template as both
                filters and globals; defaults to default_template_functions()

        Returns:
            Rendered text

        Raises:
            TemplateError: If the template text fails to parse
            TemplateExecutionError: If rendering the request fails
        """
        if functions is None:
            functions = default_template_functions()

        env = self._create_environment(functions)

        try:
            template = env.from_string(template_text)
        except TemplateSyntaxError as e:
            logger.debug("Template parse failed at line %s", e.lineno)
            raise TemplateError(f"unable to parse template: {e}") from e

        context = {
            "package_name": request.package_name,
            "tables": request.tables,
            "request": request,
        }

        try:
            rendered = template.render(**context)
        except Exception as e:
            raise TemplateExecutionError(f"error executing template: {e}") from e

        logger.debug("Rendered %d characters", len(rendered))
        return rendered


def create_template_engine() -> TemplateEngine:
    """Create a template engine instance."""
    return TemplateEngine()
