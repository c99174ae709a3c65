"""
Input table checks and CSV reading.

The simulation consumes an (N, 4) table of
[generation, electrical load, heat load, month] in kWh per time step.
"""

import logging
import os

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

INPUT_COLUMNS = ('generation', 'electrical_load', 'heat_load', 'month')


class InputValidationError(ValueError):
    """Raised when an input table cannot be simulated."""
    pass


def _fail(message: str):
    logger.error(message)
    raise InputValidationError(message)


def validate_inputs(input_data) -> np.ndarray:
    """
    Check an input table and return it as a float array.

    Raises:
        InputValidationError: ragged or empty table, wrong column count,
            non-numeric or non-finite values, month outside 1-12
    """
    try:
        table = np.asarray(input_data, dtype=float)
    except (TypeError, ValueError) as e:
        _fail(f"Input table is ragged or non-numeric: {e}")

    if table.ndim != 2:
        _fail(f"Input table must be 2-dimensional, got {table.ndim} dimension(s)")
    if table.shape[0] == 0:
        _fail("Input table has no rows")
    if table.shape[1] != len(INPUT_COLUMNS):
        _fail(f"Input table must have {len(INPUT_COLUMNS)} columns "
              f"{list(INPUT_COLUMNS)}, got {table.shape[1]}")

    bad = ~np.isfinite(table)
    if bad.any():
        row, col = np.argwhere(bad)[0]
        _fail(f"Non-finite value in row {row}, column '{INPUT_COLUMNS[col]}'")

    months = table[:, 3]
    if np.any((months < 1) | (months > 12) | (months != np.round(months))):
        row = int(np.argmax((months < 1) | (months > 12) | (months != np.round(months))))
        _fail(f"Month must be an integer 1-12, got {months[row]} in row {row}")

    return table


def read_input_table(path: str, delimiter: str = ',') -> np.ndarray:
    """
    Read an input table from a CSV file.

    A header line is dropped only when none of its fields is numeric; any
    other non-numeric cell fails validation instead of being skipped.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    try:
        frame = pd.read_csv(path, sep=delimiter, header=None, encoding='utf-8-sig')
    except pd.errors.EmptyDataError:
        _fail(f"Input file {path} is empty")
    except pd.errors.ParserError as e:
        _fail(f"Input file {path} is not a rectangular table: {e}")

    if pd.to_numeric(frame.iloc[0], errors='coerce').isna().all():
        frame = frame.iloc[1:]

    data = frame.apply(pd.to_numeric, errors='coerce').to_numpy(dtype=float)
    logger.info(f"Read {data.shape[0]} rows from {path}")
    return validate_inputs(data)
