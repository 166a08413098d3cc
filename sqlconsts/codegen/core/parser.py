"""
SQL parsing front end.

Thin wrapper around sqlglot that turns a SQL document into an ordered
list of RawStatement wrappers for the schema extractor.
"""

from dataclasses import dataclass
from typing import List, Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DIALECT = "postgres"


class SchemaParseError(Exception):
    """Exception raised when the SQL document cannot be parsed."""

    pass


@dataclass(frozen=True)
class RawStatement:
    """A parsed statement together with its position in the document."""

    stmt: Optional[exp.Expression]
    position: int = 0


def parse_sql(sql: str, dialect: str = DEFAULT_DIALECT) -> List[RawStatement]:
    """
    Parse a SQL document into raw statements.

    Args:
        sql: SQL source text
        dialect: sqlglot dialect name used to read the text

    Returns:
        Statements in document order

    Raises:
        SchemaParseError: If the text is not valid SQL for the dialect
    """
    logger.debug("Parsing %d characters of %s SQL", len(sql), dialect)

    try:
        expressions = sqlglot.parse(sql, read=dialect)
    except (ParseError, TokenError) as e:
        raise SchemaParseError(f"error parsing sql: {e}") from e
    except ValueError as e:
        # sqlglot reports unknown dialect names this way
        raise SchemaParseError(f"error parsing sql: {e}") from e

    statements = [
        RawStatement(stmt=expression, position=position)
        for position, expression in enumerate(expressions)
    ]
    logger.info("Parsed %d statement(s)", len(statements))
    return statements
