#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Diagnostics sink that is passed explicitly through table loading, conversion and record transformation.
It keeps a list of (level, message) entries plus a dictionary of counts, and forwards each message to a logger.
"""

import logging
from typing import List, Optional, Tuple

DEBUG, INFO, WARNING, ERROR = 'debug', 'info', 'warning', 'error'
level_dict = {DEBUG: logging.DEBUG, INFO: logging.INFO, WARNING: logging.WARNING, ERROR: logging.ERROR}


class Diagnostics:
    def __init__(self, logger: Optional[logging.Logger] = None, keep_entries: bool = True, keep_debug: bool = False):
        self.logger = logger or logging.getLogger('mojiconv')
        self.keep_entries = keep_entries  # False for long runs: messages are only forwarded to the logger
        self.keep_debug = keep_debug  # debug messages are only forwarded, not kept, unless requested
        self.entries: List[Tuple[str, str]] = []
        self.counts = {}

    def emit(self, level: str, message: str) -> None:
        if self.keep_entries and (level != DEBUG or self.keep_debug):
            self.entries.append((level, message))
        self.logger.log(level_dict[level], message)

    def debug(self, message: str) -> None:
        self.emit(DEBUG, message)

    def info(self, message: str) -> None:
        self.emit(INFO, message)

    def warning(self, message: str) -> None:
        self.emit(WARNING, message)

    def error(self, message: str) -> None:
        self.emit(ERROR, message)

    def increment(self, key: str, increment=1) -> int:
        """For example diagnostics.increment('N-WARNED-RECORDS')"""
        self.counts[key] = self.counts.get(key, 0) + increment
        return self.counts[key]

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [message for entry_level, message in self.entries if level is None or entry_level == level]

    @property
    def warnings(self) -> List[str]:
        return self.messages(WARNING)

    @property
    def errors(self) -> List[str]:
        return self.messages(ERROR)
