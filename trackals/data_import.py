"""
Reading and writing two-column position/value text files.
"""

import numpy as np

from .errors import ValidationError


def load_txt_file(filepath, delimiter=None, comments='#', skip_header=0):
    """
    Load a series from a TXT file with automatic header detection.

    Parameters
    ----------
    filepath : str
        Path to TXT file
    delimiter : str or None, optional
        Delimiter between columns. If None, split on whitespace
    comments : str, optional
        Character indicating comment lines, default '#'
    skip_header : int, optional
        Number of header lines to skip, default 0 (auto-detect)

    Returns
    -------
    positions : ndarray
        First column (m)
    values : ndarray
        Second column (mm)

    Raises
    ------
    ValidationError
        If file cannot be parsed or doesn't have at least 2 columns
    """
    # First, try to auto-detect header lines
    auto_skip = 0
    with open(filepath, 'r') as f:
        for line in f:
            line = line.strip()
            # Skip empty lines and comment lines
            if not line or line.startswith(comments):
                auto_skip += 1
                continue

            parts = line.split(delimiter) if delimiter else line.split()
            try:
                float(parts[0])
                float(parts[1])
                break
            except (ValueError, IndexError):
                # Not numeric - treat as header
                auto_skip += 1

    if skip_header == 0:
        skip_header = auto_skip

    try:
        data = np.loadtxt(filepath, delimiter=delimiter, comments=comments,
                          skiprows=skip_header, ndmin=2)
    except ValueError as e:
        raise ValidationError(f"Error loading file '{filepath}': {e}") from e

    if data.shape[1] < 2:
        raise ValidationError(f"File must have at least 2 columns, found {data.shape[1]}")

    positions = data[:, 0]
    values = data[:, 1]

    if not np.all(np.isfinite(positions)):
        raise ValidationError(f"Positions in '{filepath}' contain NaN or Inf values")
    if not np.all(np.isfinite(values)):
        raise ValidationError(f"Values in '{filepath}' contain NaN or Inf values")

    return positions, values


def auto_detect_delimiter(filepath, max_lines=10):
    """
    Automatically detect delimiter in text file.

    Parameters
    ----------
    filepath : str
        Path to file
    max_lines : int, optional
        Number of lines to check, default 10

    Returns
    -------
    str or None
        Detected delimiter (comma, tab, semicolon) or None for whitespace
    """
    with open(filepath, 'r') as f:
        lines = []
        for i, line in enumerate(f):
            if i >= max_lines:
                break
            line = line.strip()
            if line and not line.startswith('#'):
                lines.append(line)

    if not lines:
        return None

    for delim in (',', '\t', ';'):
        counts = [line.count(delim) for line in lines]
        # Header lines may differ; require agreement on the last lines
        if counts[-1] > 0 and len(set(counts[-3:])) == 1:
            return delim

    return None


def load_data_file(filepath):
    """
    Load a data file with automatic format detection.

    Parameters
    ----------
    filepath : str
        Path to data file

    Returns
    -------
    positions : ndarray
    values : ndarray
    """
    delimiter = auto_detect_delimiter(filepath)

    try:
        return load_txt_file(filepath, delimiter=delimiter)
    except ValidationError:
        if delimiter is None:
            raise
        # Retry as whitespace-separated
        return load_txt_file(filepath, delimiter=None)


def save_series(filepath, columns, header):
    """
    Write equal-length columns as a tab-separated text file.

    Parameters
    ----------
    filepath : str
        Output path
    columns : sequence of array_like
        Columns to write
    header : sequence of str
        Column names
    """
    if len(columns) != len(header):
        raise ValidationError(f"{len(columns)} columns but {len(header)} header names")
    table = np.column_stack([np.asarray(c, dtype=float) for c in columns])
    np.savetxt(filepath, table, delimiter='\t', fmt='%.6f',
               header='\t'.join(header), comments='')
