#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error taxonomy of mojiconv.
Character-level failures (MissingCharacter, CharacterNotRepresentable) are normally carried inside
ConversionResult/RecordResult objects rather than raised; unwrap() on such a result raises them.
"""

from typing import Optional
from mojiconv.mc_unicode import code_point_str


class ConversionError(Exception):
    """Base class for all mojiconv errors."""


class ConfigError(ConversionError):
    """Invalid or incomplete configuration file."""


class CsvReadError(ConversionError):
    pass


class CsvWriteError(ConversionError):
    pass


class InvalidTableRow(ConversionError):
    """Malformed conversion table row (too few fields or empty source character). Recovered and counted."""
    def __init__(self, row_number: int, reason: str):
        self.row_number = row_number
        self.reason = reason
        super().__init__(f'Conversion table row {row_number}: {reason}')


class NoValidRules(ConversionError):
    def __init__(self, source: Optional[str] = None, n_errors: int = 0):
        self.source = source
        self.n_errors = n_errors
        location = f' in {source}' if source else ''
        super().__init__(f'No valid conversion rules found{location} ({n_errors} invalid rows)')


class MissingCharacter(ConversionError):
    def __init__(self, character: str):
        self.character = character
        super().__init__(f'Character "{character}" ({code_point_str(character)}) not found in conversion table')


class UnsupportedEncoding(ConversionError):
    def __init__(self, encoding: str):
        self.encoding = encoding
        super().__init__(f'Unsupported encoding: {encoding!r}')


class CharacterNotRepresentable(ConversionError):
    def __init__(self, character: str, encoding: str):
        self.character = character
        self.encoding = encoding
        super().__init__(f'Character "{character}" ({code_point_str(character)}) '
                         f'is not representable in encoding {encoding}')


class ColumnOutOfRange(ConversionError):
    """Never fatal: the field is left untouched and the record is flagged as warned."""
    def __init__(self, column: int, n_fields: int):
        self.column = column
        self.n_fields = n_fields
        super().__init__(f'Column index {column} is out of range (max: {n_fields - 1})')
