#!/usr/bin/env python3
# -*- encoding: utf-8 -*-
"""
Pytest for mc_logging.py and mc_diagnostics.py
"""

import datetime
import logging
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_logging import MAX_LOG_FILE_SIZE, init_logging, select_log_file


def test_select_log_file(tmp_path):
    now = datetime.datetime(2026, 10, 19, 12, 34, 56)
    new_log_file = select_log_file(tmp_path, now=now)
    assert new_log_file == tmp_path / 'csv-converter-2026-10-19-123456.log'
    old_log_file = tmp_path / 'csv-converter-2026-10-01-080000.log'
    old_log_file.write_text('x', encoding='utf-8')
    (tmp_path / 'other.log').write_text('x', encoding='utf-8')
    assert select_log_file(tmp_path, now=now) == old_log_file
    old_log_file.write_bytes(b'x' * MAX_LOG_FILE_SIZE)
    assert select_log_file(tmp_path, now=now) == new_log_file


def test_init_logging(tmp_path):
    log_path = init_logging(level='debug', output='file', log_dir=tmp_path, logger_name='mojiconv-test')
    logger = logging.getLogger('mojiconv-test')
    diagnostics = Diagnostics(logger)
    diagnostics.warning('Character "A" not found')
    diagnostics.debug('column 2: "龍" -> "龙"')
    for handler in logger.handlers:
        handler.flush()
    content = log_path.read_text(encoding='utf-8')
    assert '[WARNING] Character "A" not found' in content
    assert '[DEBUG] column 2: "龍" -> "龙"' in content
    assert init_logging(output='none', logger_name='mojiconv-test') is None


def test_diagnostics():
    diagnostics = Diagnostics()
    diagnostics.info('start')
    diagnostics.warning('w1')
    diagnostics.debug('hidden')
    diagnostics.error('e1')
    assert diagnostics.warnings == ['w1']
    assert diagnostics.errors == ['e1']
    assert diagnostics.messages() == ['start', 'w1', 'e1']
    assert diagnostics.increment('N') == 1
    assert diagnostics.increment('N', 2) == 3
    quiet_diagnostics = Diagnostics(keep_entries=False)
    quiet_diagnostics.warning('w')
    assert quiet_diagnostics.entries == []
