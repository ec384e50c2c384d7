#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging setup for mc-convert: optional console output plus a log file in a logs directory.
The most recent log file (csv-converter-YYYY-MM-DD-HHMMSS.log) is reused as long as it is smaller than 10 MB.
"""

import datetime
import logging
import logging.handlers
from pathlib import Path
import re
from typing import Optional, Union

MAX_LOG_FILE_SIZE = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5
log_filename_re = re.compile(r'csv-converter-\d{4}-\d{2}-\d{2}-\d{6}\.log$')
level_dict = {'error': logging.ERROR, 'warn': logging.WARNING, 'info': logging.INFO, 'debug': logging.DEBUG}


def select_log_file(log_dir: Union[str, Path] = 'logs', now: Optional[datetime.datetime] = None) -> Path:
    """Reuses the newest log file in log_dir if it is below MAX_LOG_FILE_SIZE, otherwise names a new one."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    existing_files = sorted((f for f in log_dir.iterdir() if log_filename_re.match(f.name)), reverse=True)
    if existing_files and existing_files[0].stat().st_size < MAX_LOG_FILE_SIZE:
        return existing_files[0]
    now = now or datetime.datetime.now()
    return log_dir / f"csv-converter-{now.strftime('%Y-%m-%d-%H%M%S')}.log"


def init_logging(level: str = 'info', output: str = 'file', log_file: Optional[Union[str, Path]] = None,
                 log_dir: Union[str, Path] = 'logs', logger_name: str = 'mojiconv') -> Optional[Path]:
    """Configures the mojiconv logger. Returns the path of the log file."""
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level_dict.get(level, logging.INFO))
    logger.propagate = False
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
    if output == 'console':
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
    log_path = None
    if output in ('file', 'console'):
        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
        else:
            log_path = select_log_file(log_dir)
        file_handler = logging.handlers.RotatingFileHandler(log_path, maxBytes=MAX_LOG_FILE_SIZE,
                                                            backupCount=LOG_FILE_BACKUP_COUNT, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info('Logging initialized')
    return log_path
