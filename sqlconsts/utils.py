"""Utility functions for loading inputs and writing generated code.

This module provides functions for loading SQL schemas from files and URLs,
reading template files, and writing output, with proper error handling.
"""

from pathlib import Path
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

SQL_SUFFIXES = {".sql", ".ddl", ".pgsql", ".psql"}


class SourceLoadError(Exception):
    """Custom exception for input and output file errors."""

    pass


def _read_text(file_path: Path, what: str) -> str:
    """Read a UTF-8 text file, mapping failures to SourceLoadError."""
    if not file_path.exists():
        logger.error(f"{what} not found: {file_path}")
        raise SourceLoadError(f"unable to open {file_path}: no such file")

    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"{what} is not valid UTF-8: {file_path}")
        raise SourceLoadError(f"unable to read {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading {what.lower()} {file_path}: {e}", exc_info=True)
        raise SourceLoadError(f"unable to open {file_path}: {e}") from e


def load_sql_from_file(file_path: str | Path) -> tuple[str, str]:
    """Load SQL text from a local file.

    Args:
        file_path: Path to the SQL file.

    Returns:
        Tuple of (source description, SQL text).

    Raises:
        SourceLoadError: If the file is missing or cannot be read.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load SQL from file: {file_path}")

    if file_path.suffix.lower() not in SQL_SUFFIXES:
        logger.warning(f"File does not have a SQL extension: {file_path}")
        # Don't raise, just warn - might still be valid SQL

    sql = _read_text(file_path, "SQL file")
    logger.info(f"Successfully loaded SQL from {file_path}")
    return str(file_path), sql


def load_sql_from_url(url: str, timeout: int = 30) -> tuple[str, str]:
    """Load SQL text from a URL.

    Args:
        url: URL to fetch the schema from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, SQL text).

    Raises:
        SourceLoadError: If the URL is invalid or the request fails.
    """
    logger.debug(f"Attempting to load SQL from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise SourceLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise SourceLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SourceLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise SourceLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise SourceLoadError(f"Request error for URL {url}: {e}") from e

    logger.info(f"Successfully loaded SQL from {url}")
    return url, response.text


def load_sql(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, str]:
    """Load SQL text from either a file or URL.

    Args:
        file_path: Path to local SQL file (mutually exclusive with url).
        url: URL to fetch SQL from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, SQL text).

    Raises:
        SourceLoadError: If neither or both parameters are provided, or loading fails.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise SourceLoadError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise SourceLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_sql_from_file(file_path)
    else:
        return load_sql_from_url(url, timeout)


def load_template(file_path: str | Path) -> str:
    """Read a user-supplied template file.

    Raises:
        SourceLoadError: If the file is missing or cannot be read.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading template from {file_path}")
    return _read_text(file_path, "Template file")


def write_output(code: str, file_path: str | Path) -> Path:
    """Write generated code to a file, replacing any existing content.

    Raises:
        SourceLoadError: If the file cannot be written.
    """
    output_path = Path(file_path)
    try:
        output_path.write_text(code, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing {output_path}: {e}")
        raise SourceLoadError(f"error creating output file {output_path}: {e}") from e

    logger.info(f"Wrote {len(code)} characters to {output_path}")
    return output_path
