"""
Core code generation components.

Provides the table model, the template engine and the output verifier
used by every language generator.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .parser import DEFAULT_DIALECT, RawStatement, SchemaParseError, parse_sql
from .schema import (
    Column,
    Table,
    GenerationRequest,
    column_type_parts,
    extract_tables,
    parse_table_list,
    render_type,
)
from .naming import IRREGULAR_NAMES, export_name, quote, title_words, to_lower, to_upper
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import (
    TemplateEngine,
    TemplateError,
    TemplateExecutionError,
    create_template_engine,
    default_template_functions,
)
from .formatter import (
    MalformedOutputError,
    PythonSourceFormatter,
    SourceFormatter,
    verify_output,
)

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # SQL parsing
    "DEFAULT_DIALECT",
    "RawStatement",
    "SchemaParseError",
    "parse_sql",
    # Table model
    "Column",
    "Table",
    "GenerationRequest",
    "column_type_parts",
    "extract_tables",
    "parse_table_list",
    "render_type",
    # Naming utilities
    "IRREGULAR_NAMES",
    "export_name",
    "quote",
    "title_words",
    "to_lower",
    "to_upper",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "TemplateExecutionError",
    "create_template_engine",
    "default_template_functions",
    # Output verification
    "MalformedOutputError",
    "PythonSourceFormatter",
    "SourceFormatter",
    "verify_output",
]
