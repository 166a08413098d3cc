"""
Output verification for generated source.

A SourceFormatter canonicalizes rendered text and rejects text that is
not valid source in its language. verify_output wraps that check so the
caller always gets the raw rendering back when it fails.
"""

import ast
from abc import ABC, abstractmethod
from typing import Optional

from ...logging_config import get_logger

logger = get_logger(__name__)

MAX_BLANK_LINES = 2


class MalformedOutputError(Exception):
    """Exception raised when rendered text is not valid source code."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class SourceFormatter(ABC):
    """Canonical formatter for one target language."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the language this formatter handles."""
        pass

    @abstractmethod
    def format(self, source: str) -> str:
        """
        Canonicalize source text.

        Args:
            source: Rendered source

        Returns:
            Formatted source

        Raises:
            SyntaxError: If the source is not valid in the target language
            ValueError: If the source cannot be handed to the parser at all
        """
        pass


class PythonSourceFormatter(SourceFormatter):
    """Whitespace canonicalization plus a syntax check by the Python parser."""

    @property
    def language_name(self) -> str:
        return "python"

    def format(self, source: str) -> str:
        formatted = self._normalize_whitespace(source)
        ast.parse(formatted, filename="<generated>")
        return formatted

    def _normalize_whitespace(self, source: str) -> str:
        """Strip trailing whitespace and collapse runs of blank lines."""
        formatted_lines = []
        blank_count = 0

        for line in source.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                # Leading blank lines are dropped entirely
                if not formatted_lines:
                    continue
                blank_count += 1
                if blank_count <= MAX_BLANK_LINES:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        if not formatted_lines:
            return ""
        return "\n".join(formatted_lines) + "\n"


def verify_output(rendered: str, formatter: Optional[SourceFormatter] = None) -> str:
    """
    Format rendered text and check that it is valid source.

    Args:
        rendered: Text produced by the template engine
        formatter: Formatter to apply; defaults to PythonSourceFormatter

    Returns:
        Formatted source

    Raises:
        MalformedOutputError: If the formatter rejects the text. The
            unformatted text is attached as ``raw_text``.
    """
    formatter = formatter or PythonSourceFormatter()

    try:
        formatted = formatter.format(rendered)
    except (SyntaxError, ValueError) as e:
        # ValueError: null bytes on older interpreters
        logger.debug("Generated %s failed to parse: %s", formatter.language_name, e)
        raise MalformedOutputError(f"generated bad code: {e}", rendered) from e

    return formatted
