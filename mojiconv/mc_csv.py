#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reads and writes CSV files as lists of records (lists of text fields).
The delimiter is always a comma; encoding, quote character and line break style are configurable (FileConfig).
Fields are opaque text; no type conversion is performed.
"""

import csv
from dataclasses import dataclass
import io
import logging as log
from pathlib import Path
from typing import List, Union
from mojiconv.mc_errors import CsvReadError, CsvWriteError

LINE_BREAKS = {'crlf': '\r\n', 'lf': '\n', 'cr': '\r'}


@dataclass
class FileConfig:
    """Location and format of one CSV file."""

    path: Union[str, Path]
    encoding: str = 'utf-8'
    line_break: str = 'lf'
    quote: str = '"'
    has_header: bool = False
    quoted: bool = True  # output only: quote every field


def line_break_char(line_break: str) -> str:
    """Example: 'crlf' -> '\\r\\n'"""
    try:
        return LINE_BREAKS[line_break]
    except KeyError:
        raise ValueError(f"Unknown line break {line_break!r} (expected one of {', '.join(LINE_BREAKS)})")


def parse_csv(text: str, quote: str = '"', line_break: str = 'lf') -> List[List[str]]:
    """Parses CSV text into records. Quotes inside quoted fields are escaped by doubling.
    CR, LF and CRLF are all accepted as record separators; the configured style is only checked for validity.
    An empty line yields a record with a single empty field."""
    line_break_char(line_break)
    if text.startswith('\ufeff'):  # byte order mark
        text = text[1:]
    reader = csv.reader(io.StringIO(text, newline=''), delimiter=',', quotechar=quote, doublequote=True)
    return [row if row else [''] for row in reader]


def read_csv(config: FileConfig) -> List[List[str]]:
    """Reads file bytes, decodes them with config.encoding, and parses them into records.
    Undecodable bytes become U+FFFD."""
    try:
        raw = Path(config.path).read_bytes()
        text = raw.decode(config.encoding, errors='replace')
        return parse_csv(text, quote=config.quote, line_break=config.line_break)
    except (OSError, UnicodeError, LookupError, ValueError, csv.Error) as error:
        log.debug(f'CSV read error {config.path}: {error}')
        raise CsvReadError(f'Could not read CSV file {config.path}: {error}') from error


def format_csv(records: List[List[str]], quote: str = '"', line_break: str = 'lf', quoted: bool = True) -> str:
    """Every record, including the last one, is terminated by the line break."""
    buffer = io.StringIO(newline='')
    writer = csv.writer(buffer, delimiter=',', quotechar=quote, doublequote=True,
                        quoting=csv.QUOTE_ALL if quoted else csv.QUOTE_MINIMAL,
                        lineterminator=line_break_char(line_break))
    writer.writerows(records)
    return buffer.getvalue()


def write_csv(records: List[List[str]], config: FileConfig) -> None:
    """Characters that config.encoding cannot represent are written as '?'."""
    try:
        content = format_csv(records, quote=config.quote, line_break=config.line_break, quoted=config.quoted)
        Path(config.path).write_bytes(content.encode(config.encoding, errors='replace'))
    except (OSError, UnicodeError, LookupError, ValueError, csv.Error) as error:
        raise CsvWriteError(f'Could not write CSV file {config.path}: {error}') from error
