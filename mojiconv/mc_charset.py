#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Checks whether text is representable in a target (legacy) encoding such as shift_jis, euc-jp, big5 or gb2312.
A character is considered representable iff strict encoding followed by decoding reproduces it exactly.
This is a pragmatic test, not a repertoire table lookup.
"""
# -*- encoding: utf-8 -*-

import codecs
from dataclasses import dataclass
from typing import Optional
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_errors import CharacterNotRepresentable, UnsupportedEncoding
from mojiconv.mc_result import ConversionResult
from mojiconv.mc_unicode import describe_character, split_characters

UNDEFINED_CHARACTER_HANDLING = ('error', 'warn')


@dataclass
class CharacterSetValidation:
    """Optional check of the already converted text against a target encoding."""

    enabled: bool = False
    target_encoding: str = 'utf-8'
    undefined_character_handling: str = 'error'  # error | warn
    alt_char: Optional[str] = None


def validate_encoding(encoding: str) -> bool:
    """True iff encoding names a text encoding known to the codec registry, e.g. 'shift_jis' -> True,
    'rot13' -> False (not a text encoding), 'invalid-encoding' -> False"""
    if not encoding:
        return False
    try:
        codecs.lookup(encoding)
        ''.encode(encoding)  # LookupError for non-text codecs such as rot13, UnicodeError for 'undefined'
    except (LookupError, UnicodeError):
        return False
    return True


def canonical_encoding_name(encoding: str) -> str:
    """Example: 'Shift-JIS' -> 'shift_jis'"""
    return codecs.lookup(encoding).name


def is_character_encodable(char: str, encoding: str) -> bool:
    try:
        return char.encode(encoding).decode(encoding) == char
    except (UnicodeError, LookupError):
        return False


def validate_characters(text: str, target_encoding: str, undefined_character_handling: str = 'error',
                        alt_char: Optional[str] = None,
                        diagnostics: Optional[Diagnostics] = None) -> ConversionResult:
    """
    Checks each grapheme cluster of text for representability in target_encoding.
    undefined_character_handling 'error': first non-representable cluster fails the whole text.
    undefined_character_handling 'warn': non-representable clusters are replaced by alt_char (if not None)
        or kept unchanged; the result is flagged as warned.
    """
    if undefined_character_handling not in UNDEFINED_CHARACTER_HANDLING:
        raise ValueError(f'Unknown undefined character handling {undefined_character_handling!r}')
    if not validate_encoding(target_encoding):
        return ConversionResult.failure(UnsupportedEncoding(target_encoding))
    diagnostics = diagnostics or Diagnostics()
    validated_chars = []
    warned = False
    for char in split_characters(text):
        if is_character_encodable(char, target_encoding):
            validated_chars.append(char)
        elif undefined_character_handling == 'error':
            return ConversionResult.failure(CharacterNotRepresentable(char, target_encoding))
        else:
            warned = True
            if alt_char is not None:
                diagnostics.warning(f'Character {describe_character(char)} is not representable in '
                                    f'{target_encoding}; replaced by "{alt_char}"')
                validated_chars.append(alt_char)
            else:
                diagnostics.warning(f'Character {describe_character(char)} is not representable in '
                                    f'{target_encoding}; output unchanged')
                validated_chars.append(char)
    return ConversionResult(''.join(validated_chars), warned)


def check_character_set_validation(validation: Optional[CharacterSetValidation],
                                   diagnostics: Optional[Diagnostics] = None) -> None:
    """Raises UnsupportedEncoding if validation is enabled for an unknown encoding. Called once, before any record."""
    if validation is None or not validation.enabled:
        return
    if not validate_encoding(validation.target_encoding):
        raise UnsupportedEncoding(validation.target_encoding)
    if diagnostics:
        diagnostics.info(f'Character set validation enabled: {validation.target_encoding} '
                         f'({canonical_encoding_name(validation.target_encoding)})')
        diagnostics.info(f'Undefined character handling: {validation.undefined_character_handling}')
