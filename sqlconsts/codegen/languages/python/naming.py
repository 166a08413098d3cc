"""
Python-specific naming checks.

Exported names become module-level class names and class attributes in
the generated module, so they must be identifiers, must not be keywords,
and should not shadow builtins the module might rely on.
"""

import builtins
from typing import Optional

# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Builtins an exported (title-cased) name can collide with
PYTHON_BUILTIN_NAMES = {
    name for name in dir(builtins) if name[:1].isupper() and not name.startswith("_")
} - PYTHON_RESERVED_WORDS

# Attribute every generated class defines for the table name
TABLE_NAME_ATTRIBUTE = "TableName"


def check_exported_name(name: str) -> Optional[str]:
    """
    Check an exported name for use in generated Python.

    Args:
        name: Name produced by export_name()

    Returns:
        Description of the problem, or None if the name is usable
    """
    if not name:
        return "is empty"
    if name in PYTHON_RESERVED_WORDS:
        return "is a Python keyword"
    if not name.isidentifier():
        return "is not a valid Python identifier"
    return None


def shadows_builtin(name: str) -> bool:
    """Check whether a module-level name would hide a Python builtin."""
    return name in PYTHON_BUILTIN_NAMES


def validate_python_package_name(name: str) -> list[str]:
    """
    Validate a package name according to Python naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    if not name.isidentifier():
        errors.append(f"'{name}' is not a valid Python identifier")

    if name != name.lower():
        errors.append("Package names should be lowercase")

    if name in PYTHON_RESERVED_WORDS:
        errors.append(f"'{name}' is a Python reserved word")

    return errors
