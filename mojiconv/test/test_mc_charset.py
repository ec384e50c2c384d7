#!/usr/bin/env python3
# -*- encoding: utf-8 -*-
"""
Pytest for mc_charset.py
"""

import pytest
from mojiconv.mc_charset import (CharacterSetValidation, canonical_encoding_name, check_character_set_validation,
                                 is_character_encodable, validate_characters, validate_encoding)
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_errors import CharacterNotRepresentable, UnsupportedEncoding


def test_validate_encoding():
    for encoding in ('utf8', 'utf-8', 'shift_jis', 'euc-jp', 'gb2312', 'big5', 'cp932'):
        assert validate_encoding(encoding)
    assert not validate_encoding('invalid-encoding')
    assert not validate_encoding('')
    assert not validate_encoding('rot13')
    assert not validate_encoding('undefined')


def test_canonical_encoding_name():
    assert canonical_encoding_name('Shift-JIS') == 'shift_jis'
    assert canonical_encoding_name('utf8') == 'utf-8'


def test_is_character_encodable():
    for char in ('あ', '漢', '字', 'A', '1'):
        assert is_character_encodable(char, 'shift_jis')
    assert not is_character_encodable('\U0001D54F', 'shift_jis')  # MATHEMATICAL DOUBLE-STRUCK CAPITAL X
    assert not is_character_encodable('\U0001F642', 'shift_jis')
    assert not is_character_encodable('葛\U000E0100', 'shift_jis')
    assert is_character_encodable('中', 'gb2312')
    assert is_character_encodable('中', 'big5')
    assert is_character_encodable('\U0001F642', 'utf8')
    assert not is_character_encodable('\udc80', 'utf-8')  # lone surrogate
    assert not is_character_encodable('あ', 'invalid-encoding')


def test_validate_characters_error():
    result = validate_characters('あ\U0001F642い', 'shift_jis', 'error')
    assert not result.ok
    assert isinstance(result.error, CharacterNotRepresentable)
    assert result.error.character == '\U0001F642'
    assert 'shift_jis' in str(result.error)
    assert 'U+1F642' in str(result.error)


def test_validate_characters_without_problems():
    for handling in ('error', 'warn'):
        result = validate_characters('漢字ABC', 'shift_jis', handling)
        assert result.ok
        assert result.text == '漢字ABC'
        assert not result.warned


def test_validate_characters_warn():
    diagnostics = Diagnostics()
    result = validate_characters('あ\U0001F642い', 'shift_jis', 'warn', diagnostics=diagnostics)
    assert result.text == 'あ\U0001F642い'
    assert result.warned
    assert len(diagnostics.warnings) == 1


def test_validate_characters_alt_char():
    result = validate_characters('あ\U0001F642い\U0001D54F', 'shift_jis', 'warn', alt_char='?')
    assert result.text == 'あ?い?'
    assert result.warned


def test_validate_characters_keeps_clusters_whole():
    result = validate_characters('葛\U000E0100飾', 'shift_jis', 'warn', alt_char='〓')
    assert result.text == '〓飾'


def test_validate_characters_unsupported_encoding():
    result = validate_characters('abc', 'invalid-encoding', 'warn')
    assert not result.ok
    assert isinstance(result.error, UnsupportedEncoding)
    result = validate_characters('', 'invalid-encoding', 'warn')
    assert isinstance(result.error, UnsupportedEncoding)


def test_check_character_set_validation():
    with pytest.raises(UnsupportedEncoding):
        check_character_set_validation(CharacterSetValidation(enabled=True, target_encoding='invalid-encoding'))
    check_character_set_validation(CharacterSetValidation(enabled=False, target_encoding='invalid-encoding'))
    check_character_set_validation(None)
    diagnostics = Diagnostics()
    check_character_set_validation(CharacterSetValidation(enabled=True, target_encoding='shift_jis'),
                                   diagnostics=diagnostics)
    assert diagnostics.messages('info')
