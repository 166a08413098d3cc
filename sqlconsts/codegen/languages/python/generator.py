"""
Python code generator implementation.

Generates one constants class per table, holding the table name and the
name of every column, using templates.
"""

from typing import Dict, List, Optional, Sequence

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.formatter import PythonSourceFormatter, SourceFormatter
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import export_name
from ...core.schema import Table
from .naming import (
    TABLE_NAME_ATTRIBUTE,
    check_exported_name,
    shadows_builtin,
    validate_python_package_name,
)

logger = get_logger(__name__)

DEFAULT_TEMPLATE = '''\
# Code generated by sqlconsts; DO NOT EDIT.
"""Table and column name constants for the {{ package_name }} package."""
{% for table in tables %}


# {{ table.name | export_name }} contains constants for the {{ table.name }} table
class {{ table.name | export_name }}:
    TableName = {{ table.name | quote }}
{% for column in table.columns %}
    {{ column.name | export_name }} = {{ column.name | quote }}\
{{ "  # " ~ column.type if column.type else "" }}
{% endfor %}
{% endfor %}
'''


class PythonGenerator(CodeGenerator):
    """Code generator for Python table-name constants."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)
        self._formatter = PythonSourceFormatter()

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    @property
    def default_template(self) -> str:
        return DEFAULT_TEMPLATE

    @property
    def formatter(self) -> SourceFormatter:
        return self._formatter

    def validate_tables(self, tables: Sequence[Table]) -> List[str]:
        """Validate tables for Python generation."""
        warnings = super().validate_tables(tables)

        for error in validate_python_package_name(self.config.package_name):
            warnings.append(f"Package name: {error}")

        for table in tables:
            class_name = export_name(table.name)

            problem = check_exported_name(class_name)
            if problem:
                warnings.append(
                    f"Table '{table.name}' exports as '{class_name}', which {problem}"
                )
            elif shadows_builtin(class_name):
                warnings.append(
                    f"Table '{table.name}' exports as '{class_name}', "
                    f"which shadows a Python builtin"
                )

            warnings.extend(self._validate_columns(table))

        warnings.extend(self._name_collisions(tables))

        for warning in warnings:
            logger.debug("Validation: %s", warning)
        return warnings

    def _validate_columns(self, table: Table) -> List[str]:
        """Check the attribute names generated for one table."""
        warnings = []

        for column in table.columns:
            attribute = export_name(column.name)

            problem = check_exported_name(attribute)
            if problem:
                warnings.append(
                    f"Column '{table.name}.{column.name}' exports as "
                    f"'{attribute}', which {problem}"
                )

        return warnings

    def check_tables(self, tables: Sequence[Table]) -> None:
        """
        Fail on names that would overwrite each other in the generated module.

        A later class attribute silently replaces an earlier one, so the
        generated constants would hold the wrong value.
        """
        collisions = self._name_collisions(tables)
        if collisions:
            raise GeneratorError("name collision: " + "; ".join(collisions))

    def _name_collisions(self, tables: Sequence[Table]) -> List[str]:
        """Find distinct SQL names that export to the same Python name."""
        collisions = []
        class_names: Dict[str, str] = {}

        for table in tables:
            class_name = export_name(table.name)
            previous = class_names.setdefault(class_name, table.name)
            if previous != table.name:
                collisions.append(
                    f"Tables '{previous}' and '{table.name}' both export as "
                    f"'{class_name}'"
                )

            attributes: Dict[str, Optional[str]] = {TABLE_NAME_ATTRIBUTE: None}
            for column in table.columns:
                attribute = export_name(column.name)
                if attribute in attributes and attributes[attribute] != column.name:
                    owner = attributes[attribute] or "the table name"
                    collisions.append(
                        f"Column '{table.name}.{column.name}' exports as "
                        f"'{attribute}', which collides with {owner}"
                    )
                attributes.setdefault(attribute, column.name)

        return collisions


def create_python_generator(
    config: Optional[GeneratorConfig] = None,
) -> PythonGenerator:
    """Create a Python generator, using default configuration if none is given."""
    if config is None:
        config = GeneratorConfig(package_name="models")

    return PythonGenerator(config)
