#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Converts characters in selected columns of a CSV file according to a conversion table.
Examples:
  mc-convert -h  # for full usage info
  mc-convert --version
  mc-convert -c config.json
  mc-convert -c config.json -i data/in.csv -o data/out.csv --verbose
Exit codes: 0 (success), 2 (success, but with warnings), 1 (failure)
The conversion table, target columns, missing character handling, character set validation and the
input/output file formats are specified in the JSON configuration file (see mojiconv.mc_config).
"""
# -*- encoding: utf-8 -*-

import argparse
from dataclasses import dataclass
import datetime
import logging
from pathlib import Path
import sys
import time
from tqdm.auto import tqdm
from typing import List, Optional, Tuple
from mojiconv import __version__, last_mod_date
from mojiconv.mc_charset import check_character_set_validation
from mojiconv.mc_config import ConversionConfig, load_config
from mojiconv.mc_convert import convert_record
from mojiconv.mc_csv import read_csv, write_csv
from mojiconv.mc_diagnostics import Diagnostics
from mojiconv.mc_errors import CharacterNotRepresentable, ConversionError
from mojiconv.mc_logging import init_logging
from mojiconv.mc_table import load_conversion_table

N_HEADER_CHECK_ROWS = 5
PROGRESS_LOG_INTERVAL = 1000


@dataclass
class ProcessResult:
    success: bool
    processed_rows: int = 0
    error_message: Optional[str] = None
    has_warnings: bool = False

    @property
    def exit_code(self) -> int:
        if not self.success:
            return 1
        return 2 if self.has_warnings else 0


def aborts_run(error: ConversionError, config: ConversionConfig) -> bool:
    """Record-level errors that stop the whole run (as opposed to keeping the original record)."""
    validation = config.character_set_validation
    if (validation and validation.enabled and validation.undefined_character_handling == 'error'
            and isinstance(error, CharacterNotRepresentable)):
        return True
    return config.missing_character_handling == 'error'


def convert_records(records: List[List[str]], config: ConversionConfig, table, diagnostics: Diagnostics,
                    start_row_index: int = 0, progress_bar: bool = False) -> Tuple[List[List[str]], int, bool]:
    """Converts data records (records[start_row_index:]). Returns converted records, row count, warned flag."""
    output_records = []
    n_processed_rows = 0
    warned = False
    st = time.time()
    prefix = 'Converting'
    with tqdm(total=len(records) - start_row_index, disable=not progress_bar, unit='row',
              dynamic_ncols=True, desc=prefix) as data_bar:
        for row_index in range(start_row_index, len(records)):
            record = records[row_index]
            result = convert_record(record, config.target_columns, table, config.missing_character_handling,
                                    character_set_validation=config.character_set_validation,
                                    diagnostics=diagnostics)
            if result.ok:
                output_records.append(result.record)
                if result.warned:
                    diagnostics.increment('WARNED-RECORDS')
                    warned = True
                n_processed_rows += 1
                if n_processed_rows % PROGRESS_LOG_INTERVAL == 0:
                    diagnostics.info(f'Processing... {n_processed_rows} rows done')
            else:
                diagnostics.increment('FAILED-RECORDS')
                diagnostics.error(f'Row {row_index + 1}, column {result.column}: {result.error}')
                if aborts_run(result.error, config):
                    raise result.error
                output_records.append(list(record))
                warned = True
            if progress_bar:
                row_speed = int((row_index - start_row_index + 1) / max(time.time() - st, 1e-6))
                data_bar.set_postfix_str(f'{row_speed} rows/s', refresh=False)
                data_bar.update(1)
    return output_records, n_processed_rows, warned


def process_conversion(config: ConversionConfig, diagnostics: Optional[Diagnostics] = None,
                       progress_bar: bool = False) -> ProcessResult:
    """Main conversion: load table, read input CSV, convert target columns, write output CSV."""
    diagnostics = diagnostics or Diagnostics()
    try:
        diagnostics.info('=' * 60)
        diagnostics.info('Start CSV character conversion')
        diagnostics.info(f'Start: {datetime.datetime.now()}')
        diagnostics.info('=' * 60)
        diagnostics.info(f'Input: {Path(config.input.path).resolve()}')
        diagnostics.info(f'Output: {Path(config.output.path).resolve()}')
        diagnostics.info(f'Conversion table: {Path(config.conversion_table).resolve()}')
        diagnostics.info(f"Target columns: [{', '.join(map(str, config.target_columns))}] (0-based)")
        diagnostics.info(f'Input encoding: {config.input.encoding}')
        diagnostics.info(f'Output encoding: {config.output.encoding}')
        diagnostics.info(f"Input header: {'yes' if config.input.has_header else 'no'}")
        diagnostics.info(f"Output header: {'yes' if config.output.has_header else 'no'}")
        diagnostics.info(f'Missing character handling: {config.missing_character_handling}')
        diagnostics.info('-' * 60)

        table = load_conversion_table(config.conversion_table, diagnostics=diagnostics)
        diagnostics.info(f'Conversion rules: {table.size()}')
        check_character_set_validation(config.character_set_validation, diagnostics=diagnostics)

        diagnostics.info('Reading input CSV file ...')
        input_records = read_csv(config.input)
        diagnostics.info(f'Read {len(input_records)} rows')
        if not input_records:
            diagnostics.warning('Input file is empty')
            return ProcessResult(success=True, processed_rows=0, has_warnings=True)

        expected_n_columns = max(config.target_columns, default=-1) + 1
        for row_index, record in enumerate(input_records[:N_HEADER_CHECK_ROWS]):
            if len(record) < expected_n_columns:
                diagnostics.warning(f'Row {row_index + 1}: too few columns '
                                    f'(actual: {len(record)}, required: {expected_n_columns})')

        output_records = []
        warned = False
        start_row_index = 0
        header_record = None
        if config.input.has_header:
            header_record = input_records[0]
            start_row_index = 1
            diagnostics.info(f"Input header: [{', '.join(header_record)}]")
        if config.output.has_header:
            if header_record is not None:
                output_records.append(header_record)
            else:
                diagnostics.warning('Output header requested, but input file has no header')
                warned = True
        n_data_rows = len(input_records) - start_row_index
        diagnostics.info(f'Data rows: {n_data_rows} (rows {start_row_index + 1}-{len(input_records)})')
        diagnostics.info('-' * 60)

        converted_records, n_processed_rows, records_warned = \
            convert_records(input_records, config, table, diagnostics, start_row_index=start_row_index,
                            progress_bar=progress_bar)
        output_records.extend(converted_records)
        warned = warned or records_warned
        diagnostics.info('-' * 60)
        diagnostics.info(f'Processed {n_processed_rows} data rows')

        diagnostics.info('Writing output CSV file ...')
        write_csv(output_records, config.output)
        diagnostics.info(f'Wrote {len(output_records)} rows')

        diagnostics.info('=' * 60)
        diagnostics.info(f'End: {datetime.datetime.now()}')
        diagnostics.info(f"Status: {'completed with warnings' if warned else 'completed'}")
        diagnostics.info(f'Input: {Path(config.input.path).resolve()} ({len(input_records)} rows)')
        diagnostics.info(f'Output: {Path(config.output.path).resolve()} ({len(output_records)} rows)')
        diagnostics.info(f"Rows with warnings: {diagnostics.counts.get('WARNED-RECORDS', 0)}; "
                         f"rows kept unconverted: {diagnostics.counts.get('FAILED-RECORDS', 0)}")
        diagnostics.info(f'Conversion rules: {table.size()}')
        if warned:
            diagnostics.warning('Warnings occurred during conversion; see log messages above.')
        diagnostics.info('=' * 60)
        return ProcessResult(success=True, processed_rows=n_processed_rows, has_warnings=warned)
    except (ConversionError, OSError) as error:
        diagnostics.error(f'CSV character conversion failed: {error}')
        return ProcessResult(success=False, processed_rows=0, error_message=str(error))


def process_args(args) -> ProcessResult:
    """Performs a conversion run, using argparse args."""
    config = load_config(args.config, input_path=args.input, output_path=args.output)
    if args.verbose:
        config.logging.level = 'debug'
    log_path = init_logging(level=config.logging.level, output=config.logging.output,
                            log_file=config.logging.log_file)
    logger = logging.getLogger('mojiconv')
    diagnostics = Diagnostics(logger, keep_entries=False)
    if log_path:
        sys.stderr.write(f'Log file: {log_path.resolve()}\n')
    diagnostics.info('Script mc-convert')
    diagnostics.info(f'Configuration: {Path(args.config).resolve()}')
    if args.input:
        diagnostics.info(f'Input path overridden by --input: {args.input}')
    if args.output:
        diagnostics.info(f'Output path overridden by --output: {args.output}')
    conversion = config.conversion
    if not Path(conversion.input.path).is_file():
        message = f'Input file not found: {conversion.input.path}'
        diagnostics.error(message)
        return ProcessResult(success=False, error_message=message)
    if not Path(conversion.conversion_table).is_file():
        message = f'Conversion table not found: {conversion.conversion_table}'
        diagnostics.error(message)
        return ProcessResult(success=False, error_message=message)
    output_dir = Path(conversion.output.path).parent
    if not output_dir.exists():
        diagnostics.info(f'Creating output directory {output_dir}')
        output_dir.mkdir(parents=True, exist_ok=True)
    result = process_conversion(conversion, diagnostics=diagnostics, progress_bar=args.progress_bar)
    if result.success:
        diagnostics.info(f'Conversion completed. Processed rows: {result.processed_rows}')
        if result.has_warnings:
            diagnostics.warning('Warnings occurred during conversion. Please check the log file.')
    else:
        diagnostics.error(f'Conversion failed: {result.error_message}')
    return result


def process(config: str = 'config.json',
            input_path: Optional[str] = None,   # overrides input path of configuration file
            output_path: Optional[str] = None,  # overrides output path of configuration file
            verbose: bool = False,
            progress_bar: bool = False) -> ProcessResult:
    """Entry point for non-CLI use; maps to CLI interface"""
    return process_args(argparse.Namespace(config=config, input=input_path, output=output_path,
                                           verbose=verbose, progress_bar=progress_bar))


def main() -> int:
    """Wrapper around the conversion that takes care of argument parsing; returns exit code."""
    parser = argparse.ArgumentParser(description='Converts characters in selected CSV columns using a conversion table',
                                     prog='mc-convert')
    parser.add_argument('-c', '--config', type=str, default='config.json', metavar='CONFIG-FILENAME',
                        help='JSON configuration file (default: config.json)')
    parser.add_argument('-i', '--input', type=str, default=None, metavar='INPUT-FILENAME',
                        help='input CSV file (overrides configuration file)')
    parser.add_argument('-o', '--output', type=str, default=None, metavar='OUTPUT-FILENAME',
                        help='output CSV file (overrides configuration file)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='write debug log messages')
    parser.add_argument('-pb', '--progress_bar', action='store_true', default=False, help='Show progress bar')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} last modified: {last_mod_date}')
    args = parser.parse_args()
    try:
        result = process_args(args)
    except ConversionError as error:
        sys.stderr.write(f'Error: {error}\n')
        return 1
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
