"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and the
render-then-verify pipeline shared by all of them.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ...logging_config import get_logger
from ...utils import load_template
from .config import GeneratorConfig
from .formatter import SourceFormatter, verify_output
from .schema import GenerationRequest, Table
from .templates import (
    TemplateEngine,
    TemplateFunctions,
    create_template_engine,
    default_template_functions,
)

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py')."""
        pass

    @property
    @abstractmethod
    def default_template(self) -> str:
        """Return the built-in template source."""
        pass

    @property
    @abstractmethod
    def formatter(self) -> SourceFormatter:
        """Return the canonical formatter for the target language."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine()
        return self._template_engine

    def template_functions(self) -> TemplateFunctions:
        """
        Return the helper functions exposed to templates.

        Subclasses may extend the table; they should not rename entries.
        """
        return default_template_functions()

    def template_source(self) -> str:
        """
        Return the template to render with.

        Reads the configured template file when one is set, otherwise
        returns the built-in template.
        """
        if not self.config.template_file:
            return self.default_template

        return load_template(self.config.template_file)

    def build_request(self, tables: Sequence[Table]) -> GenerationRequest:
        """Build the template input for a list of tables."""
        return GenerationRequest(package_name=self.config.package_name, tables=tables)

    def generate(self, request: GenerationRequest) -> str:
        """
        Render a request into unformatted source text.

        Args:
            request: Package name and tables

        Returns:
            Rendered text
        """
        return self.template_engine.render(
            request, self.template_source(), self.template_functions()
        )

    def validate_tables(self, tables: Sequence[Table]) -> List[str]:
        """
        Validate tables for basic structural issues.

        Language generators should override this to add language-specific validation.

        Args:
            tables: Tables to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        seen = set()

        for table in tables:
            if table.name in seen:
                warnings.append(f"Table '{table.name}' is defined more than once")
            seen.add(table.name)

            if not table.columns:
                warnings.append(f"Table '{table.name}' has no columns")

            column_names = set()
            for column in table.columns:
                if column.name in column_names:
                    warnings.append(
                        f"Column '{table.name}.{column.name}' is defined more than once"
                    )
                column_names.add(column.name)

                if not column.type:
                    warnings.append(f"Column '{table.name}.{column.name}' has no type")

        return warnings

    def check_tables(self, tables: Sequence[Table]) -> None:
        """
        Reject tables that would generate wrong code.

        Called after validate_tables; the base implementation accepts
        everything.

        Raises:
            GeneratorError: If the generated code would be wrong
        """
        pass

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code

        Raises:
            MalformedOutputError: If the code is not valid in the target language
        """
        return verify_output(code, self.formatter)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(
        cls, message: str, exception: Exception = None, warnings: List[str] = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="", warnings=warnings)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, tables: Sequence[Table]
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        tables: Tables to generate constants for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    warnings = []
    try:
        # Validate tables first so warnings survive a failed render
        warnings = generator.validate_tables(tables)
        generator.check_tables(tables)

        request = generator.build_request(tables)

        # Render then verify
        code = generator.generate(request)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "package_name": request.package_name,
            "table_count": len(request.tables),
            "column_count": sum(len(table.columns) for table in request.tables),
            "custom_template": bool(generator.config.template_file),
        }

        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.debug("Code generation failed", exc_info=True)
        return GenerationResult.error(str(e), exception=e, warnings=warnings)
