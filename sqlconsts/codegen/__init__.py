"""
sqlconsts Code Generation Module

Generates table and column name constants from SQL schemas.
"""

from typing import Any, Dict, Optional, Union

from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.parser import parse_sql
from .core.schema import Column, Table, GenerationRequest, extract_tables
from .core.config import GeneratorConfig, ConfigManager, load_config
from .languages.python import PythonGenerator, create_python_generator

# Version info
__version__ = "0.1.0"


# Convenience functions
def generate_from_sql(
    sql: str, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None
) -> GenerationResult:
    """
    Generate constants from SQL schema text.

    Args:
        sql: One or more SQL statements
        config: Generator configuration, or a dict of overrides

    Returns:
        GenerationResult with generated code

    Raises:
        SchemaParseError: If the SQL cannot be parsed
    """
    if not isinstance(config, GeneratorConfig):
        config = load_config(config)

    statements = parse_sql(sql, config.dialect)
    tables = extract_tables(statements, set(config.tables), config.dialect)

    generator = create_python_generator(config)
    return generate_code(generator, tables)


def quick_generate(sql: str, **options) -> str:
    """
    Quick code generation from SQL text.

    Args:
        sql: SQL schema text
        **options: Generator options (package_name, tables, dialect, ...)

    Returns:
        Generated code string
    """
    result = generate_from_sql(sql, options)

    if result.success:
        return result.code
    else:
        raise GeneratorError(
            f"Code generation failed: {result.error_message}"
        ) from result.exception


# Export main interfaces
__all__ = [
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "GenerationRequest",
    "Column",
    "Table",
    "GeneratorConfig",
    "ConfigManager",
    "PythonGenerator",
    "generate_code",
    "generate_from_sql",
    "quick_generate",
    "load_config",
]
