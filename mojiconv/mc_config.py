#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Loads and validates the JSON configuration file of mc-convert.
Example:
{
  "conversion": {
    "input":  {"path": "data/in.csv", "encoding": "shift_jis", "lineBreak": "crlf", "quote": "\\"", "hasHeader": true},
    "output": {"path": "data/out.csv", "encoding": "utf-8", "lineBreak": "lf", "hasHeader": true, "quoted": true},
    "conversionTable": "tables/hk-to-mj.csv",
    "targetColumns": [1, 2],
    "missingCharacterHandling": "warn",
    "characterSetValidation": {"enabled": true, "targetEncoding": "shift_jis",
                               "undefinedCharacterHandling": "warn", "altChar": "〓"}
  },
  "logging": {"level": "info", "output": "file"}
}
"""

import copy
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import List, Optional, Union
import jsonschema
from jsonschema import ValidationError
from mojiconv.mc_charset import CharacterSetValidation
from mojiconv.mc_csv import FileConfig, LINE_BREAKS
from mojiconv.mc_errors import ConfigError

logger = logging.getLogger(__name__)

file_config_schema = {
    'type': 'object',
    'properties': {
        'path': {'type': 'string', 'minLength': 1},
        'encoding': {'type': 'string', 'minLength': 1},
        'lineBreak': {'enum': list(LINE_BREAKS)},
        'quote': {'type': 'string', 'minLength': 1, 'maxLength': 1},
        'hasHeader': {'type': 'boolean'},
        'quoted': {'type': 'boolean'},
    },
    'required': ['path'],
}

config_schema = {
    'type': 'object',
    'properties': {
        'conversion': {
            'type': 'object',
            'properties': {
                'input': file_config_schema,
                'output': file_config_schema,
                'conversionTable': {'type': 'string', 'minLength': 1},
                'targetColumns': {'type': 'array', 'items': {'type': 'integer'}, 'minItems': 1,
                                  'uniqueItems': True},
                'missingCharacterHandling': {'enum': ['error', 'warn', 'skip']},
                'characterSetValidation': {
                    'type': 'object',
                    'properties': {
                        'enabled': {'type': 'boolean'},
                        'targetEncoding': {'type': 'string'},
                        'undefinedCharacterHandling': {'enum': ['error', 'warn']},
                        'altChar': {'type': ['string', 'null']},
                    },
                    'required': ['enabled', 'targetEncoding', 'undefinedCharacterHandling'],
                },
            },
            'required': ['input', 'output', 'conversionTable', 'targetColumns'],
        },
        'logging': {
            'type': 'object',
            'properties': {
                'level': {'enum': ['error', 'warn', 'info', 'debug']},
                'output': {'enum': ['console', 'file']},
                'logFile': {'type': ['string', 'null']},
            },
        },
    },
    'required': ['conversion'],
}


@dataclass
class ConversionConfig:
    input: FileConfig
    output: FileConfig
    conversion_table: str
    target_columns: List[int]
    missing_character_handling: str = 'skip'
    character_set_validation: Optional[CharacterSetValidation] = None


@dataclass
class LoggingConfig:
    level: str = 'info'  # error | warn | info | debug
    output: str = 'file'  # console | file
    log_file: Optional[str] = None


@dataclass
class AppConfig:
    conversion: ConversionConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def file_config_from_dict(d: dict) -> FileConfig:
    return FileConfig(path=d['path'],
                      encoding=d.get('encoding', 'utf-8'),
                      line_break=d.get('lineBreak', 'lf'),
                      quote=d.get('quote', '"'),
                      has_header=d.get('hasHeader', False),
                      quoted=d.get('quoted', True))


def config_from_dict(d: dict, input_path: Optional[str] = None, output_path: Optional[str] = None) -> AppConfig:
    """Validates a parsed configuration; input_path/output_path (e.g. from the command line) override the file."""
    if not isinstance(d, dict) or not isinstance(d.get('conversion'), dict):
        raise ConfigError('Configuration file has no conversion section')
    d = copy.deepcopy(d)
    conversion = d['conversion']
    for key, override, option in (('input', input_path, '--input'), ('output', output_path, '--output')):
        file_dict = conversion.get(key)
        if file_dict is None:
            file_dict = conversion[key] = {}
        if not isinstance(file_dict, dict):
            raise ConfigError(f'Configuration entry conversion.{key} must be an object')
        if override:
            file_dict['path'] = str(override)
        if not file_dict.get('path'):
            raise ConfigError(f'No {key} file path specified (use the configuration file or the {option} option)')
    if not conversion.get('conversionTable'):
        raise ConfigError('No conversion table specified')
    target_columns = conversion.get('targetColumns')
    if not isinstance(target_columns, list) or not target_columns:
        raise ConfigError('No target columns specified')
    try:
        jsonschema.validate(instance=d, schema=config_schema)
    except ValidationError as error:
        location = '.'.join(str(elem) for elem in error.absolute_path)
        raise ConfigError(f"Invalid configuration{f' at {location}' if location else ''}: {error.message}") \
            from error
    input_config = file_config_from_dict(conversion['input'])
    output_config = file_config_from_dict(conversion['output'])
    if output_config.has_header and not input_config.has_header:
        raise ConfigError('Output header requested, but input file has no header')
    character_set_validation = None
    if validation_dict := conversion.get('characterSetValidation'):
        character_set_validation = CharacterSetValidation(
            enabled=validation_dict['enabled'],
            target_encoding=validation_dict['targetEncoding'],
            undefined_character_handling=validation_dict['undefinedCharacterHandling'],
            alt_char=validation_dict.get('altChar'))
    logging_dict = d.get('logging') or {}
    return AppConfig(
        conversion=ConversionConfig(input=input_config,
                                    output=output_config,
                                    conversion_table=conversion['conversionTable'],
                                    target_columns=target_columns,
                                    missing_character_handling=conversion.get('missingCharacterHandling') or 'skip',
                                    character_set_validation=character_set_validation),
        logging=LoggingConfig(level=logging_dict.get('level', 'info'),
                              output=logging_dict.get('output', 'file'),
                              log_file=logging_dict.get('logFile')))


def load_config(config_path: Union[str, Path], input_path: Optional[str] = None,
                output_path: Optional[str] = None) -> AppConfig:
    """Loads a JSON configuration file. Raises ConfigError if it is missing, malformed or incomplete."""
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f'Configuration file not found: {config_path}')
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            d = json.load(f)
    except json.JSONDecodeError as error:
        logger.error(f'Failed to load configuration from {config_path}: {error}')
        raise ConfigError(f'Configuration file {config_path} is not valid JSON: {error}') from error
    return config_from_dict(d, input_path=input_path, output_path=output_path)
