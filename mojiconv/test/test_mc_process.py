#!/usr/bin/env python3
# -*- encoding: utf-8 -*-
"""
Pytest for mc_process.py
"""

import json
from mojiconv.mc_charset import CharacterSetValidation
from mojiconv.mc_config import ConversionConfig
from mojiconv.mc_csv import FileConfig
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_process import ProcessResult, process, process_conversion

table_text = '"龍","龙"\n"鳳","凤"\n"删",""\n'


def make_config(tmp_path, input_text: str, input_has_header: bool = True, output_has_header: bool = True,
                target_columns=None, missing_character_handling: str = 'skip',
                character_set_validation=None, input_encoding: str = 'utf-8') -> ConversionConfig:
    input_path = tmp_path / 'in.csv'
    input_path.write_bytes(input_text.encode(input_encoding))
    table_path = tmp_path / 'table.csv'
    table_path.write_text(table_text, encoding='utf-8')
    return ConversionConfig(input=FileConfig(path=str(input_path), encoding=input_encoding,
                                             has_header=input_has_header),
                            output=FileConfig(path=str(tmp_path / 'out.csv'), has_header=output_has_header),
                            conversion_table=str(table_path),
                            target_columns=target_columns or [1],
                            missing_character_handling=missing_character_handling,
                            character_set_validation=character_set_validation)


def read_output(tmp_path) -> str:
    return (tmp_path / 'out.csv').read_text(encoding='utf-8')


def test_process_conversion(tmp_path):
    config = make_config(tmp_path, 'ID,名前,備考\n1,龍王,龍\n2,鳳删凰,x\n')
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.processed_rows == 2
    assert not result.has_warnings
    assert result.exit_code == 0
    assert read_output(tmp_path) == '"ID","名前","備考"\n"1","龙王","龍"\n"2","凤凰","x"\n'


def test_process_conversion_warn(tmp_path):
    config = make_config(tmp_path, 'ID,名前\n1,龍A\n', missing_character_handling='warn')
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.has_warnings
    assert result.exit_code == 2
    assert read_output(tmp_path) == '"ID","名前"\n"1","龙A"\n'


def test_process_conversion_error_aborts(tmp_path):
    config = make_config(tmp_path, 'ID,名前\n1,龍\n2,龍A\n', missing_character_handling='error')
    diagnostics = Diagnostics()
    result = process_conversion(config, diagnostics=diagnostics)
    assert not result.success
    assert result.exit_code == 1
    assert 'U+0041' in result.error_message
    assert not (tmp_path / 'out.csv').exists()
    assert any('Row 3' in message for message in diagnostics.errors)


def test_process_conversion_header_handling(tmp_path):
    config = make_config(tmp_path, 'ID,名前\n1,龍\n', output_has_header=False)
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.processed_rows == 1
    assert read_output(tmp_path) == '"1","龙"\n'

    config = make_config(tmp_path, '1,龍\n2,鳳\n', input_has_header=False, output_has_header=False)
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.processed_rows == 2
    assert read_output(tmp_path) == '"1","龙"\n"2","凤"\n'

    config = make_config(tmp_path, '1,龍\n', input_has_header=False, output_has_header=True)
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.has_warnings
    assert read_output(tmp_path) == '"1","龙"\n'


def test_process_conversion_column_out_of_range(tmp_path):
    config = make_config(tmp_path, 'ID,名前\n1,龍王\n', target_columns=[1, 5])
    diagnostics = Diagnostics()
    result = process_conversion(config, diagnostics=diagnostics)
    assert result.success
    assert result.has_warnings
    assert read_output(tmp_path) == '"ID","名前"\n"1","龙王"\n'
    assert any('too few columns' in message for message in diagnostics.warnings)


def test_process_conversion_character_set_validation(tmp_path):
    validation = CharacterSetValidation(enabled=True, target_encoding='shift_jis',
                                        undefined_character_handling='warn', alt_char='?')
    config = make_config(tmp_path, 'ID,名前\n1,漢\U0001F642\n', character_set_validation=validation)
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.has_warnings
    assert read_output(tmp_path) == '"ID","名前"\n"1","漢?"\n'

    validation = CharacterSetValidation(enabled=True, target_encoding='shift_jis',
                                        undefined_character_handling='error')
    config = make_config(tmp_path, 'ID,名前\n1,漢字\n2,\U0001F642\n', character_set_validation=validation)
    result = process_conversion(config, diagnostics=Diagnostics())
    assert not result.success
    assert 'shift_jis' in result.error_message


def test_process_conversion_validation_warn_without_alt_char(tmp_path):
    validation = CharacterSetValidation(enabled=True, target_encoding='shift_jis',
                                        undefined_character_handling='warn')
    config = make_config(tmp_path, '1,漢\U0001F642\n', input_has_header=False, output_has_header=False,
                         character_set_validation=validation)
    config.output.encoding = 'shift_jis'
    diagnostics = Diagnostics()
    result = process_conversion(config, diagnostics=diagnostics)
    assert result.success
    assert result.has_warnings
    assert result.exit_code == 2
    assert (tmp_path / 'out.csv').read_bytes() == '"1","漢?"\n'.encode('shift_jis')
    assert any('U+1F642' in message for message in diagnostics.warnings)


def test_process_conversion_no_target_columns(tmp_path):
    config = make_config(tmp_path, 'ID,名前\n1,龍\n')
    config.target_columns = []
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.processed_rows == 1
    assert read_output(tmp_path) == '"ID","名前"\n"1","龍"\n'


def test_process_conversion_unsupported_encoding(tmp_path):
    validation = CharacterSetValidation(enabled=True, target_encoding='invalid-encoding',
                                        undefined_character_handling='warn')
    config = make_config(tmp_path, 'ID,名前\n1,龍\n', character_set_validation=validation)
    result = process_conversion(config, diagnostics=Diagnostics())
    assert not result.success
    assert 'invalid-encoding' in result.error_message


def test_process_conversion_empty_input(tmp_path):
    config = make_config(tmp_path, '')
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert result.processed_rows == 0
    assert result.has_warnings


def test_process_conversion_shift_jis_input(tmp_path):
    config = make_config(tmp_path, 'ID,名前\r\n1,龍鳳\r\n', input_encoding='shift_jis')
    result = process_conversion(config, diagnostics=Diagnostics())
    assert result.success
    assert read_output(tmp_path) == '"ID","名前"\n"1","龙凤"\n'


def test_process_result_exit_code():
    assert ProcessResult(success=True).exit_code == 0
    assert ProcessResult(success=True, has_warnings=True).exit_code == 2
    assert ProcessResult(success=False, error_message='x').exit_code == 1


def test_process_with_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / 'in.csv').write_text('ID,名前\n1,龍\n', encoding='utf-8')
    (tmp_path / 'table.csv').write_text(table_text, encoding='utf-8')
    config_dict = {
        'conversion': {
            'input': {'path': 'in.csv', 'hasHeader': True},
            'output': {'path': 'result/out.csv', 'hasHeader': True},
            'conversionTable': 'table.csv',
            'targetColumns': [1],
        },
    }
    (tmp_path / 'config.json').write_text(json.dumps(config_dict, ensure_ascii=False), encoding='utf-8')
    result = process('config.json')
    assert result.success
    assert result.exit_code == 0
    assert (tmp_path / 'result' / 'out.csv').read_text(encoding='utf-8') == '"ID","名前"\n"1","龙"\n'
    assert list((tmp_path / 'logs').glob('csv-converter-*.log'))

    result = process('config.json', input_path='missing.csv')
    assert not result.success
    assert 'missing.csv' in result.error_message
