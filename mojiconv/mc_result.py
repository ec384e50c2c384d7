#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Results of field and record conversion: either converted output plus a warned flag, or a typed failure.
"""

from typing import List, Optional
from mojiconv.mc_errors import ConversionError


class ConversionResult:
    """Converted text of one field. On failure, text is None and error holds the reason (no partial output)."""
    def __init__(self, text: Optional[str], warned: bool = False, error: Optional[ConversionError] = None):
        self.text = text
        self.warned = warned
        self.error = error

    @classmethod
    def failure(cls, error: ConversionError, warned: bool = False) -> 'ConversionResult':
        return cls(None, warned=warned, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Converted text; raises the carried error for a failed result."""
        if self.error is not None:
            raise self.error
        return self.text

    def __repr__(self) -> str:
        if self.ok:
            return f'ConversionResult({self.text!r}, warned={self.warned})'
        return f'ConversionResult(error={self.error!r})'


class RecordResult:
    """Converted record (same number of fields as the input record), or the error of the first failing field."""
    def __init__(self, record: Optional[List[str]], warned: bool = False, error: Optional[ConversionError] = None,
                 column: Optional[int] = None):
        self.record = record
        self.warned = warned
        self.error = error
        self.column = column  # column of the failing field

    @classmethod
    def failure(cls, error: ConversionError, column: Optional[int] = None, warned: bool = False) -> 'RecordResult':
        return cls(None, warned=warned, error=error, column=column)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[str]:
        if self.error is not None:
            raise self.error
        return self.record

    def __repr__(self) -> str:
        if self.ok:
            return f'RecordResult({self.record!r}, warned={self.warned})'
        return f'RecordResult(error={self.error!r}, column={self.column})'
