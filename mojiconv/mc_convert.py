#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Character substitution on grapheme clusters, and column-scoped conversion of CSV records.
Examples (table {'龍': '龙', '鳳': '凤', '删': ''}):
  convert_string_with_handling('龍A鳳', table, 'skip')  -> '龙A凤' (warned: False)
  convert_string_with_handling('龍A鳳', table, 'warn')  -> '龙A凤' (warned: True)
  convert_string_with_handling('龍A鳳', table, 'error') -> failure, MissingCharacter 'A'
  convert_string('龍删鳳', table) -> '龙凤'
Substitution operates on whole grapheme clusters: a rule for '葛' does not apply to '葛󠄀' (葛 + U+E0100),
and a rule for a variation selector alone never matches inside such a sequence.
"""
# -*- encoding: utf-8 -*-

from typing import List, Optional, Sequence
from mojiconv.mc_charset import CharacterSetValidation, validate_characters
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_errors import ColumnOutOfRange, MissingCharacter
from mojiconv.mc_result import ConversionResult, RecordResult
from mojiconv.mc_table import ConversionTable
from mojiconv.mc_unicode import describe_character, split_characters

MISSING_CHARACTER_HANDLING = ('error', 'warn', 'skip')


def convert_string(text: str, table: ConversionTable) -> str:
    """Maps each grapheme cluster through the table; clusters without rule are kept."""
    converted_chars = []
    for char in split_characters(text):
        converted = table.get(char)
        if converted is None:
            converted_chars.append(char)
        elif converted:
            converted_chars.append(converted)
    return ''.join(converted_chars)


def convert_string_with_handling(text: str, table: ConversionTable, missing_character_handling: str = 'skip',
                                 character_set_validation: Optional[CharacterSetValidation] = None,
                                 diagnostics: Optional[Diagnostics] = None) -> ConversionResult:
    """
    Converts text cluster by cluster. Clusters without rule are handled according to missing_character_handling:
      'error': the conversion fails (MissingCharacter), no partial output
      'warn':  the cluster is kept, a warning is issued and the result is flagged as warned
      'skip':  the cluster is kept silently
    If character_set_validation is enabled, the converted (not the original) text is then validated.
    """
    if missing_character_handling not in MISSING_CHARACTER_HANDLING:
        raise ValueError(f'Unknown missing character handling {missing_character_handling!r}')
    diagnostics = diagnostics or Diagnostics()
    converted_chars = []
    warned = False
    for char in split_characters(text):
        converted = table.get(char)
        if converted is not None:
            if converted:
                converted_chars.append(converted)
        elif missing_character_handling == 'error':
            return ConversionResult.failure(MissingCharacter(char))
        elif missing_character_handling == 'warn':
            diagnostics.warning(f'Character {describe_character(char)} not found in conversion table; '
                                f'output unchanged')
            converted_chars.append(char)
            warned = True
        else:
            converted_chars.append(char)
    converted_text = ''.join(converted_chars)
    if character_set_validation and character_set_validation.enabled:
        validation_result = validate_characters(converted_text, character_set_validation.target_encoding,
                                                character_set_validation.undefined_character_handling,
                                                alt_char=character_set_validation.alt_char,
                                                diagnostics=diagnostics)
        if not validation_result.ok:
            return ConversionResult.failure(validation_result.error, warned=warned)
        return ConversionResult(validation_result.text, warned or validation_result.warned)
    return ConversionResult(converted_text, warned)


def convert_record(record: Sequence[str], target_columns: Sequence[int], table: ConversionTable,
                   missing_character_handling: str = 'skip',
                   character_set_validation: Optional[CharacterSetValidation] = None,
                   diagnostics: Optional[Diagnostics] = None) -> RecordResult:
    """
    Converts the fields at target_columns (0-based) of record; all other fields are copied unchanged.
    Out-of-range columns are skipped with a warning. The output record has as many fields as the input record.
    The first failing field fails the whole record.
    """
    diagnostics = diagnostics or Diagnostics()
    converted_record: List[str] = list(record)
    warned = False
    for column in target_columns:
        if not 0 <= column < len(record):
            diagnostics.warning(str(ColumnOutOfRange(column, len(record))))
            warned = True
            continue
        orig_value = record[column] or ''
        result = convert_string_with_handling(orig_value, table, missing_character_handling,
                                              character_set_validation=character_set_validation,
                                              diagnostics=diagnostics)
        if not result.ok:
            return RecordResult.failure(result.error, column=column, warned=warned or result.warned)
        converted_record[column] = result.text
        warned = warned or result.warned
        if result.text != orig_value:
            diagnostics.debug(f'column {column + 1}: "{orig_value}" -> "{result.text}"')
    return RecordResult(converted_record, warned)
