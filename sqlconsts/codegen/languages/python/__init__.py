"""
Python code generator module.

Generates a module of table and column name constants from SQL schemas.
"""

from .generator import DEFAULT_TEMPLATE, PythonGenerator, create_python_generator
from .naming import (
    PYTHON_RESERVED_WORDS,
    TABLE_NAME_ATTRIBUTE,
    check_exported_name,
    validate_python_package_name,
)

__all__ = [
    # Generator
    "DEFAULT_TEMPLATE",
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "PYTHON_RESERVED_WORDS",
    "TABLE_NAME_ATTRIBUTE",
    "check_exported_name",
    "validate_python_package_name",
]
