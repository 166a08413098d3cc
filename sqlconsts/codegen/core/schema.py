"""
Core schema representation for code generation.

Reduces parsed SQL statements into a normalized table/column model
that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Set, Tuple

from sqlglot import exp

from ...logging_config import get_logger
from .parser import DEFAULT_DIALECT, RawStatement

logger = get_logger(__name__)

_T = exp.DataType.Type

# Postgres catalog spelling of built-in types; sqlglot folds aliases such as
# int4 or bool into its own canonical names
POSTGRES_TYPE_NAMES = {
    _T.SMALLINT: "int2",
    _T.INT: "int4",
    _T.BIGINT: "int8",
    _T.FLOAT: "float4",
    _T.DOUBLE: "float8",
    _T.DECIMAL: "numeric",
    _T.BOOLEAN: "bool",
    _T.CHAR: "bpchar",
    _T.VARCHAR: "varchar",
    _T.TEXT: "text",
    _T.DATE: "date",
    _T.TIME: "time",
    _T.TIMETZ: "timetz",
    _T.TIMESTAMP: "timestamp",
    _T.TIMESTAMPTZ: "timestamptz",
    _T.INTERVAL: "interval",
    _T.UUID: "uuid",
    _T.JSON: "json",
    _T.JSONB: "jsonb",
    _T.VARBINARY: "bytea",
    _T.SERIAL: "serial",
    _T.BIGSERIAL: "bigserial",
    _T.SMALLSERIAL: "smallserial",
}


@dataclass(frozen=True)
class Column:
    """A single column of a table."""

    name: str
    type: str = ""


@dataclass(frozen=True)
class Table:
    """A table and its columns in declaration order."""

    name: str
    columns: Tuple[Column, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError("Table name must not be empty")
        # Accept any sequence but store an immutable one
        object.__setattr__(self, "columns", tuple(self.columns))

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None


@dataclass(frozen=True)
class GenerationRequest:
    """Everything a template needs: the package name and the tables."""

    package_name: str
    tables: Tuple[Table, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "tables", tuple(self.tables))


def column_type_parts(column_def: exp.ColumnDef) -> List[Any]:
    """Return the type-name parts of a column definition."""
    kind = column_def.args.get("kind")
    if kind is None:
        return []
    return [kind]


def render_type(parts: Iterable[Any], dialect: str = DEFAULT_DIALECT) -> str:
    """
    Flatten type-name parts into a single display string.

    Plain names contribute their text. Data types contribute their SQL
    spelling, using Postgres catalog names (int4, bool, numeric) when
    reading Postgres.
    Any other node is skipped with a warning.

    Args:
        parts: Ordered type-name nodes
        dialect: Dialect used to spell data types

    Returns:
        Space-joined type string
    """
    rendered = []

    for part in parts:
        if isinstance(part, str):
            text = part
        elif isinstance(part, (exp.Identifier, exp.Var)):
            text = part.name
        elif isinstance(part, exp.DataType):
            text = _data_type_name(part, dialect)
        else:
            logger.warning("unhandled type node: %s", type(part).__name__)
            continue

        if text:
            rendered.append(text)

    return " ".join(rendered)


def _postgres_type_name(data_type: exp.DataType) -> Optional[str]:
    """Spell a data type with its Postgres catalog name, if it has one."""
    if data_type.this == _T.ARRAY and len(data_type.expressions) == 1:
        element = data_type.expressions[0]
        if isinstance(element, exp.DataType):
            name = _postgres_type_name(element)
            return f"{name}[]" if name else None
        return None

    name = POSTGRES_TYPE_NAMES.get(data_type.this)
    if name is None:
        return None

    params = [param.sql(dialect="postgres") for param in data_type.expressions]
    if params:
        return f"{name}({', '.join(params)})"
    return name


def _data_type_name(data_type: exp.DataType, dialect: str) -> str:
    if dialect == "postgres":
        name = _postgres_type_name(data_type)
        if name is not None:
            return name

    text = data_type.sql(dialect=dialect)
    if data_type.this != _T.USERDEFINED:
        text = text.lower()
    return text


def _table_creation(statement: Any) -> Optional[exp.Create]:
    """Return the CREATE TABLE node of a statement, or None if it has none."""
    if isinstance(statement, RawStatement):
        position = statement.position
        statement = statement.stmt
    else:
        position = None

    if isinstance(statement, exp.Create) and _creates_table(statement):
        return statement

    kind = _statement_kind(statement)
    if position is None:
        logger.warning("unexpected statement type %s", kind)
    else:
        logger.warning("unexpected statement type %s at statement %d", kind, position)
    return None


def _statement_kind(statement: Any) -> str:
    """Describe a statement for diagnostics, e.g. "Create INDEX"."""
    name = type(statement).__name__
    if isinstance(statement, exp.Create):
        kind = (statement.args.get("kind") or "").upper()
        if kind == "TABLE" and statement.expression is not None:
            kind = "TABLE AS"
        return f"{name} {kind}".rstrip()
    return name


def _creates_table(create: exp.Create) -> bool:
    """
    Check that a CREATE statement defines a table.

    A table without an element list (PARTITION OF, OF type) still counts;
    CREATE TABLE ... AS SELECT does not.
    """
    kind = (create.args.get("kind") or "").upper()
    if kind != "TABLE":
        return False
    if isinstance(create.this, exp.Schema):
        return True
    return isinstance(create.this, exp.Table) and create.expression is None


def _created_table(create: exp.Create) -> exp.Table:
    """Return the table node named by a CREATE TABLE statement."""
    if isinstance(create.this, exp.Schema):
        return create.this.this
    return create.this


def _build_table(create: exp.Create, dialect: str) -> Table:
    """Build a Table from a CREATE TABLE node."""
    columns = []
    elements = create.this.expressions if isinstance(create.this, exp.Schema) else []

    # Table-level constraints and LIKE clauses carry no column
    for element in elements:
        if isinstance(element, exp.ColumnDef):
            columns.append(
                Column(
                    name=element.name,
                    type=render_type(column_type_parts(element), dialect),
                )
            )
        elif isinstance(element, (exp.Identifier, exp.Column)):
            # sqlglot leaves a column with no type or constraints unwrapped
            columns.append(Column(name=element.name))

    return Table(name=_created_table(create).name, columns=tuple(columns))


def extract_tables(
    statements: Iterable[Any],
    allowlist: Optional[Set[str]] = None,
    dialect: str = DEFAULT_DIALECT,
) -> List[Table]:
    """
    Extract tables from parsed SQL statements.

    Statements may be bare sqlglot nodes or RawStatement wrappers. Anything
    that is not a CREATE TABLE is logged and skipped. A CREATE TABLE
    without a column list (PARTITION OF) yields a table with no columns.

    Args:
        statements: Parsed statements in document order
        allowlist: Raw table names to keep; empty or None keeps all
        dialect: Dialect used to spell column types

    Returns:
        Tables in statement order
    """
    tables = []

    for statement in statements:
        create = _table_creation(statement)
        if create is None:
            continue

        table_name = _created_table(create).name
        if not table_name:
            logger.warning("Skipping CREATE TABLE without a table name")
            continue
        if allowlist and table_name not in allowlist:
            logger.debug("Skipping table %s: not in allowlist", table_name)
            continue

        table = _build_table(create, dialect)
        logger.debug(
            "Extracted table %s with %d column(s)", table.name, len(table.columns)
        )
        tables.append(table)

    return tables


def parse_table_list(value: Optional[Any]) -> Set[str]:
    """
    Build a table-name allowlist.

    Args:
        value: Comma-separated string, a sequence of names, or None

    Returns:
        Set of table names (empty means all tables)
    """
    if not value:
        return set()
    if isinstance(value, str):
        names: Sequence[str] = value.split(",")
    else:
        names = value
    return {name.strip() for name in names if name and name.strip()}
