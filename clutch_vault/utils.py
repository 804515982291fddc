"""Helpers for JSON exports, lenient stat parsing and year display."""

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('clutch_vault.utils')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON export (league history, aliases, client config) from disk.

    Malformed JSON and schema mismatches are both raised as ValueError
    naming the file, so the exporter reports every unreadable input the
    same way.

    Args:
        path: File to read
        schema: Pydantic model to validate into (e.g. LeagueHistory)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not JSON or does not match the schema
    """
    path = Path(path)

    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        logger.error(f'Export not found: {path}')
        raise

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f'{path} is not valid JSON (line {e.lineno}, column {e.colno})')
        raise ValueError(f'{path} is not valid JSON: {e.msg} at line {e.lineno}') from e

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__} ({e.error_count()} errors)')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write vault output as JSON, creating parent directories.

    Pydantic models are written with their camelCase wire names so the file
    can be read back by the web app or by load_json(schema=...).
    """
    path = Path(path)
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=indent, ensure_ascii=False) + '\n', encoding='utf-8')
    logger.debug(f'Wrote {path}')


def coerce_number(value: Any) -> float:
    """
    Coerce an imported stat to a number, falling back to 0.

    Blank strings, None, non-numeric text, NaN and infinities all become 0.
    Malformed values are not reported.

    Example:
        coerce_number('1432.6')  # 1432.6
        coerce_number('n/a')     # 0.0
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(number):
        return 0.0
    return number


def format_year_ranges(years: Iterable[int]) -> str:
    """
    Format years into compact ranges.

    Example:
        format_year_ranges([2010, 2011, 2012, 2015])  # '2010-12, 2015'
    """
    ordered = sorted(years)
    if not ordered:
        return ''

    ranges = []
    start = end = ordered[0]
    for year in ordered[1:]:
        if year == end + 1:
            end = year
            continue
        ranges.append(_format_range(start, end))
        start = end = year
    ranges.append(_format_range(start, end))
    return ', '.join(ranges)


def _format_range(start: int, end: int) -> str:
    if start == end:
        return str(start)
    return f'{start}-{str(end)[2:]}'
