# csv_readers.py
# October 2026
# python3

"""
Code to read the spec, draws, and cases tables that stopping.py uses.

Every table is a CSV file whose first line names its columns.  Names
and values are whitespace-trimmed.  Empty cells at the end of the
header or of a data row (spreadsheet exports leave these behind) are
ignored, wholly empty rows are skipped, and a short row has its missing
trailing values filled in as "".

Each data row comes back as a dict from column name to string:

    Case id,Future cost,Quality 1,Quality 2
    1001,210.0,0.73,-0.11
    1002,54.0

gives

    [{'Case id': '1001', 'Future cost': '210.0', 'Quality 1': '0.73', 'Quality 2': '-0.11'},
     {'Case id': '1002', 'Future cost': '54.0', 'Quality 1': '', 'Quality 2': ''}]
"""

import csv
import logging
import math

import ids
import utils
from errors import InputError

logger = logging.getLogger(__name__)


def strip_trailing_blanks(cells):
    """ Return cleaned cells, less any empty cells at the end. """

    cells = [ids.clean_id(cell) for cell in cells]
    while cells and cells[-1] == "":
        cells.pop()
    return cells


def read_csv_file(filename, expected_fieldnames=None):
    """
    Return list of row dicts read from CSV file filename.
    If expected_fieldnames is given, the header must match it exactly.
    """

    logger.debug("Reading CSV file: %s", filename)
    try:
        with open(filename, newline="") as file:
            lines = list(csv.reader(file))
    except OSError as exc:
        raise InputError("Cannot read {}: {}".format(filename, exc)) from exc
    if len(lines) == 0:
        raise InputError("File {} is empty (no header row).".format(filename))

    header = strip_trailing_blanks(lines[0])
    if len(set(header)) < len(header):
        raise InputError("Duplicate field name in {}: {}".format(filename, header))
    if expected_fieldnames is not None:
        wanted = [ids.clean_id(name) for name in expected_fieldnames]
        if header != wanted:
            raise InputError("File {} has fieldnames {} instead of expected {}."
                             .format(filename, header, wanted))

    row_dicts = []
    for line_number, line in enumerate(lines[1:], start=2):
        values = strip_trailing_blanks(line)
        if not values:
            continue
        if len(values) > len(header):
            utils.mywarning("{} line {}: ignoring extra values {}"
                            .format(filename, line_number, values[len(header):]))
            values = values[:len(header)]
        values += [""] * (len(header) - len(values))
        row_dicts.append(dict(zip(header, values)))
    return row_dicts


def to_float(value, what, filename=""):
    """
    Convert string value to a finite float, raising InputError naming
    `what` if we can't.  "nan" and "inf" are rejected.
    """

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InputError("{}{} value `{}` is not a number."
                         .format(filename + ": " if filename else "", what, value))
    if not math.isfinite(number):
        raise InputError("{}{} value `{}` is not a finite number."
                         .format(filename + ": " if filename else "", what, value))
    return number


def to_int(value, what, filename=""):
    """ Convert string value to int, raising InputError naming `what` if we can't. """

    try:
        return int(value)
    except (TypeError, ValueError):
        raise InputError("{}{} value `{}` is not an integer."
                         .format(filename + ": " if filename else "", what, value))
