#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Builds the two directional conversion tables (MJ-to-HK and HK-to-MJ) from a character correspondence table.
Example:
  mc-mojimap mapping.csv mj-to-hk.csv hk-to-mj.csv
The input CSV file has a header line with (at least) the columns HKChar, IVSChar, RealChar and UnicodeChar, e.g.
  HKCode,HKChar,MJCode,KanjiLevel,RealCode,RealChar,IVSCode,IVSChar,UnicodeCode,UnicodeChar
  U+570B,國,U+56FD,1,U+56FD,国,U+56FD+E0101,国󠄁,U+56FD,国
The MJ character of a row is its IVSChar if present, else its RealChar if present, else its UnicodeChar.
Output files contain one "from","to" line per rule, the format expected by mojiconv.mc_table.
"""
# -*- encoding: utf-8 -*-

import argparse
import logging as log
from pathlib import Path
import sys
from typing import Dict, List, Tuple, Union
from mojiconv import __version__, last_mod_date
from mojiconv.mc_csv import FileConfig, format_csv, read_csv
from mojiconv.mc_errors import ConversionError


def determine_mj_char(row: Dict[str, str]) -> str:
    """IVSChar > RealChar > UnicodeChar"""
    if ivs_char := row.get('IVSChar', '').strip():
        return ivs_char
    if real_char := row.get('RealChar', '').strip():
        return real_char
    return row.get('UnicodeChar', '').strip()


def read_mapping_rows(input_path: Union[str, Path]) -> List[Dict[str, str]]:
    """Reads the correspondence table into dictionaries keyed by header names; cells are trimmed,
    empty lines skipped."""
    records = read_csv(FileConfig(path=input_path, has_header=True))
    if not records:
        return []
    header = [name.strip() for name in records[0]]
    rows = []
    for record in records[1:]:
        if all(not cell.strip() for cell in record):
            continue
        rows.append({name: cell.strip() for name, cell in zip(header, record)})
    return rows


def build_mapping_dicts(rows: List[Dict[str, str]]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Returns (mj_to_hk_dict, hk_to_mj_dict). Rows without HK or MJ character are skipped; later rows win."""
    mj_to_hk_dict, hk_to_mj_dict = {}, {}
    for row in rows:
        hk_char = row.get('HKChar', '')
        mj_char = determine_mj_char(row)
        if hk_char and mj_char:
            mj_to_hk_dict[mj_char] = hk_char
            hk_to_mj_dict[hk_char] = mj_char
    return mj_to_hk_dict, hk_to_mj_dict


def format_mapping(mapping_dict: Dict[str, str]) -> str:
    """Example: {'國': '国'} -> '"國","国"' (lines separated by LF, no final line break)"""
    return format_csv([[key, value] for key, value in mapping_dict.items()], quoted=True, line_break='lf')[:-1] \
        if mapping_dict else ''


def convert_mapping_table(input_path: Union[str, Path], output_mj_to_hk_path: Union[str, Path],
                          output_hk_to_mj_path: Union[str, Path]) -> Tuple[int, int]:
    """Writes MJ-to-HK and HK-to-MJ tables. Returns the number of entries of each."""
    mj_to_hk_dict, hk_to_mj_dict = build_mapping_dicts(read_mapping_rows(input_path))
    Path(output_mj_to_hk_path).write_text(format_mapping(mj_to_hk_dict), encoding='utf-8')
    Path(output_hk_to_mj_path).write_text(format_mapping(hk_to_mj_dict), encoding='utf-8')
    log.info(f'Generated MJ-to-HK mapping: {output_mj_to_hk_path} ({len(mj_to_hk_dict)} entries)')
    log.info(f'Generated HK-to-MJ mapping: {output_hk_to_mj_path} ({len(hk_to_mj_dict)} entries)')
    return len(mj_to_hk_dict), len(hk_to_mj_dict)


def main() -> int:
    log.basicConfig(level=log.INFO)
    parser = argparse.ArgumentParser(description='Converts a character correspondence table to MJ-to-HK and '
                                                 'HK-to-MJ conversion tables', prog='mc-mojimap')
    parser.add_argument('input', type=Path, metavar='INPUT-FILENAME', help='character correspondence table (CSV)')
    parser.add_argument('output_mj_to_hk', type=Path, metavar='MJ-TO-HK-FILENAME', help='output MJ-to-HK table')
    parser.add_argument('output_hk_to_mj', type=Path, metavar='HK-TO-MJ-FILENAME', help='output HK-to-MJ table')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} last modified: {last_mod_date}')
    args = parser.parse_args()
    log.info(f'Input: {args.input}')
    try:
        convert_mapping_table(args.input, args.output_mj_to_hk, args.output_hk_to_mj)
    except (ConversionError, OSError) as error:
        log.error(f'Error converting mapping table: {error}')
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
