# utils.py
# October 2026
# python3

"""
Code to work with stopping.py on case-elimination runs.
Various utilities: date strings, printing to several files at once,
warnings and errors, csv trace logging, and version-labelled filenames.
"""

import datetime
import logging
import os
import sys

from errors import StoppingError

logger = logging.getLogger(__name__)


##############################################################################
# version labels
##############################################################################


def datetime_string():
    """ Return the time now as e.g. '2026-10-19-21-18-30', for output file versions. """

    return datetime.datetime.now().strftime("%Y-%m-%d-%H-%M-%S")


def date_string():
    """ Return today as e.g. '2026-10-19'. """

    return datetime.date.today().strftime("%Y-%m-%d")


##############################################################################
# myprint  (report output; diagnostics go through logging)
##############################################################################

myprint_files = {"stdout": sys.stdout}
# report destination name -> open file


def myprint(*args, **kwargs):
    """ print() to every file in myprint_files. """

    for file in myprint_files.values():
        print(*args, file=file, **kwargs)


def open_myprint_file(name, pathname):
    """ Open pathname for writing and add it to myprint_files as name. """

    myprint_files[name] = open(pathname, "w")
    return pathname


def close_myprint_files():
    """ Close and forget every report file except the standard streams. """

    for name in [name for name in myprint_files if name not in ("stdout", "stderr")]:
        myprint_files.pop(name).close()


##############################################################################
# errors and warnings


def myerror(msg):
    """ Log msg as an error and stop the run by raising StoppingError. """

    logger.error(msg)
    raise StoppingError(msg)


warnings_given = 0
# number of calls to mywarning since the last reset


def mywarning(msg):
    """ Log msg as a warning, count it, and carry on. """

    global warnings_given
    warnings_given += 1
    logger.warning(msg)


def reset_warnings():

    global warnings_given
    warnings_given = 0


##############################################################################
# csv trace logging
##############################################################################


def setup_csv_logger(name, dirpath="."):
    """ 
    Configure a logger for producing csv file <dirpath>/<name>.csv.
    Returns the pathname of the file being written.
    """

    pathname = os.path.join(dirpath, "{}.csv".format(name))
    csv_logger = logging.getLogger(name)
    fh = logging.FileHandler(pathname)
    fh.setLevel(logging.INFO)
    fh.setFormatter(logging.Formatter("%(message)s"))
    csv_logger.addHandler(fh)
    csv_logger.setLevel(logging.INFO)
    csv_logger.propagate = False
    return pathname


def close_csv_logger(name):

    csv_logger = logging.getLogger(name)
    for handler in list(csv_logger.handlers):
        handler.close()
        csv_logger.removeHandler(handler)


def log_csv(name, fields, level=logging.INFO):
    """ Log comma-separated fields to the named logger. """

    csv_logger = logging.getLogger(name)
    csv_logger.log(level, ",".join([str(f) for f in fields]))


##############################################################################
# version-labelled files


def matching_names(dirpath, startswith, endswith):
    """ Return names of files in dirpath with the given prefix and suffix. """

    return [name for name in os.listdir(dirpath)
            if os.path.isfile(os.path.join(dirpath, name)) and
            name.startswith(startswith) and name.endswith(endswith)]


def greatest_name(dirpath, startswith, endswith):
    """
    Return the lexicographically greatest file name in dirpath of the
    form <startswith><version label><endswith>, e.g.

        greatest_name("runs/wave3/2-cases", "draws", ".csv")

    picks "draws-2026-10-19.csv" over "draws-2026-10-12.csv".  It is an
    error (myerror) if dirpath is missing or nothing matches.
    """

    if not os.path.isdir(dirpath):
        myerror("Directory `{}` does not exist.".format(dirpath))
    names = matching_names(dirpath, startswith, endswith)
    if not names:
        myerror("No files in `{}` named `{}...{}`."
                .format(dirpath, startswith, endswith))
    return max(names)


def has_name(dirpath, startswith, endswith):
    """ Return True if greatest_name(dirpath, startswith, endswith) would succeed. """

    return os.path.isdir(dirpath) and len(matching_names(dirpath, startswith, endswith)) > 0
