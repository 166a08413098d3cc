"""Shared fixtures for the sqlconsts test suite."""
import logging

import pytest

from sqlconsts.codegen.core.schema import Column, Table
from sqlconsts.logging_config import PACKAGE_LOGGER


SCHEMA_SQL = """
CREATE TABLE users (
    id int4 PRIMARY KEY,
    email text NOT NULL,
    first_name varchar(100)
);

CREATE TABLE posts (
    id int4,
    user_id int4 NOT NULL,
    title text,
    PRIMARY KEY (id)
);
"""


@pytest.fixture
def schema_sql():
    """Two-table schema used across tests."""
    return SCHEMA_SQL


@pytest.fixture
def schema_file(tmp_path):
    """The two-table schema written to disk."""
    path = tmp_path / "schema.sql"
    path.write_text(SCHEMA_SQL, encoding="utf-8")
    return path


@pytest.fixture
def users_table():
    return Table("users", [Column("id", "int4"), Column("email", "text")])


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by setup_logging()."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
