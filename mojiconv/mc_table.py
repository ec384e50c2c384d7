#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversion table: an immutable mapping from source grapheme cluster to replacement text.
Table files are two-column CSV files (source character, replacement), UTF-8, without header, e.g.
  "龍","龙"
  "葛󠄀","葛"
  "删",""
An empty replacement denotes deletion of the source character.
"""
# -*- encoding: utf-8 -*-

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union
from mojiconv.mc_csv import FileConfig, read_csv
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_errors import CsvReadError, InvalidTableRow, NoValidRules


class ConversionTable:
    """Read-only after construction; safe to share across records (and threads)."""
    def __init__(self, mapping_dict: dict, n_valid: int = 0, row_errors: Optional[List[InvalidTableRow]] = None,
                 source: Optional[str] = None):
        self._mapping = MappingProxyType(dict(mapping_dict))
        self.n_valid = n_valid or len(mapping_dict)
        self.row_errors = tuple(row_errors or [])
        self.source = source

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]], diagnostics: Optional[Diagnostics] = None,
                  source: Optional[str] = None) -> 'ConversionTable':
        """
        Builds a table from rows of 2 or more fields (source character, replacement, ...).
        Leading/trailing whitespace is stripped from both fields.
        Rows with fewer than 2 fields or an empty source character are counted as errors and skipped.
        Duplicate source characters: the last row wins.
        Raises NoValidRules if no row is valid.
        """
        diagnostics = diagnostics or Diagnostics()
        mapping_dict = {}
        row_errors = []
        n_valid = 0
        row_number = 0
        for row in rows:
            row_number += 1
            if row is None or len(row) < 2:
                row_error = InvalidTableRow(row_number, f'invalid format (number of fields: {len(row or [])})')
            elif not (from_char := row[0].strip()):
                row_error = InvalidTableRow(row_number, 'empty source character')
            else:
                to_char = row[1].strip()
                if from_char in mapping_dict and mapping_dict[from_char] != to_char:
                    diagnostics.debug(f'Conversion table row {row_number}: "{from_char}" redefined '
                                      f'("{mapping_dict[from_char]}" -> "{to_char}")')
                mapping_dict[from_char] = to_char  # empty to_char: deletion
                n_valid += 1
                continue
            diagnostics.warning(str(row_error))
            row_errors.append(row_error)
        diagnostics.info(f'Loaded conversion table{f" {source}" if source else ""}: '
                         f'{n_valid} valid, {len(row_errors)} errors')
        if n_valid == 0:
            raise NoValidRules(source, len(row_errors))
        return cls(mapping_dict, n_valid=n_valid, row_errors=row_errors, source=source)

    def size(self) -> int:
        """Number of distinct source characters."""
        return len(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def get(self, cluster: str) -> Optional[str]:
        """Replacement for cluster ('' for deletion), or None if there is no rule."""
        return self._mapping.get(cluster)

    def __contains__(self, cluster: object) -> bool:
        return cluster in self._mapping

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def items(self) -> Iterable[Tuple[str, str]]:
        return self._mapping.items()

    @property
    def n_errors(self) -> int:
        return len(self.row_errors)

    def __repr__(self) -> str:
        return f'ConversionTable(size={self.size()}, errors={self.n_errors}, source={self.source!r})'


def load_conversion_table(path: Union[str, Path], diagnostics: Optional[Diagnostics] = None,
                          encoding: str = 'utf-8', quote: str = '"', line_break: str = 'lf') -> ConversionTable:
    """Loads a conversion table from a two-column CSV file (no header)."""
    diagnostics = diagnostics or Diagnostics()
    diagnostics.info(f'Loading conversion table: {path}')
    try:
        rows = read_csv(FileConfig(path=path, encoding=encoding, line_break=line_break, quote=quote))
        return ConversionTable.from_rows(rows, diagnostics=diagnostics, source=str(path))
    except (CsvReadError, NoValidRules) as error:
        diagnostics.error(f'Conversion table error: {error}')
        raise
