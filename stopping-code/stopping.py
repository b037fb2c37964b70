# stopping.py
# October 2026

# python3
# clean up with autopep8
#   autopep8 -i stopping.py

"""
Case-elimination stopping rule for survey data collection.

Given a pool of unresolved sampling cases, each with a predicted
future interview cost and standardized quality variable(s), decide
which cases to stop pursuing, so as to trade remaining cost against
estimation error under a budget (risk-conscious variant, using Monte
Carlo cost draws) or against a baseline value (deterministic variant).

This program is the harness: it reads a prepared run directory, runs
the elimination loop (eliminate.py) and the truncation rule
(truncate.py), shows the results, and writes them out as CSV files.

A run directory looks like:

    runs/
       wave3-week6/
          1-spec/
             stopping-spec-2026-10-19.csv
          2-cases/
             draws-2026-10-19.csv          (risk-conscious)
             cases-2026-10-19.csv          (deterministic)
          3-stop/                          (written here)
             elimination-order-2026-10-19-21-18-30.csv
             stop-set-2026-10-19-21-18-30.csv
             report-2026-10-19-21-18-30.txt
             trace-2026-10-19-21-18-30.csv    (with --trace)
"""

# MIT License

import argparse
import csv
import logging
import os
import sys

import cases
import eliminate
import run_spec
import truncate
import utils
from errors import StoppingError

logger = logging.getLogger(__name__)

##############################################################################
# Runs
##############################################################################

RUNS_ROOT = "./runs"


class Stopping(object):

    """
    All settings, inputs, and results of one case-elimination run are
    stored within a Stopping object.  Settings come from the command
    line (sticky), then the run spec file, then the defaults below.

    Glossary:

        caseid   a case id (e.g. "1043"); one sampling unit still pending

        draw     one Monte Carlo scenario; gives a future cost for every case

        psi      remaining cost times estimated variance; the tradeoff
                 statistic used to rank cases for stopping

        P10/P90  empirical 10th/90th percentile across draws
    """

    def __init__(self):

        s = self

        # run directory

        s.runs_root = RUNS_ROOT
        # directory in which run directories are found

        s.run_dirname = ""
        # name of run directory within s.runs_root (e.g. "wave3-week6")

        s.run_name = ""
        # human-readable name for the run

        s.cases_filename = None
        # explicit input table pathname; if None, the greatest
        # 2-cases/draws-*.csv or 2-cases/cases-*.csv is used

        # settings

        s.variant = "risk"
        # "risk" (Monte Carlo draws, P90 selection, budget truncation)
        # or "deterministic" (point costs, two quality variables,
        # baseline truncation)

        s.n_draws = None
        # S, number of draws every case must have (None: take from input)

        s.sunk_cost = 0.0
        # cost incurred to date; part of every pool total

        s.budget = None
        # risk-conscious budget threshold on P90 remaining cost

        s.total_cost = None
        # deterministic total predicted cost for the pool
        # (None: sunk cost plus sum of predicted future costs)

        s.n_cases = None
        # expected number of active cases (None: not checked)

        s.lower_percentile = 0.10
        s.upper_percentile = 0.90
        # percentile bounds; selection uses the upper one

        s.stop_scope = truncate.PREFIX
        # risk-conscious output: every case up to the budget boundary
        # ("prefix") or only the boundary case ("boundary")

        s.strict = False
        # if True, failing to satisfy the budget is an error

        s.trace_name = None
        # name of csv trace logger recording each round, if any

        s.sticky = set()
        # names of attributes set from the command line

        # inputs and results

        s.table = None
        # cases.DrawTable or cases.CaseTable

        s.order = None
        # eliminate.EliminationOrder

        s.stop_set = None
        # truncate.StopSet

        s.output_pathnames = []
        # files written by write_outputs

        s.report_pathname = None
        # copy of the printed summary, 3-stop/report-<version>.txt


##############################################################################
# Command-line arguments

def parse_args(argv=None):

    parser = argparse.ArgumentParser(description="""stopping.py: choose survey cases to stop
            pursuing, by greedy case elimination under a budget or baseline.""")

    # Mandatory argument is dirname
    parser.add_argument("run_dirname", help="""
                        The name of the run directory within the runs root directory.""")
    # All others are optional
    parser.add_argument("--run_name", help="""
                        Human-readable name of the run.""")
    parser.add_argument("--runs_root", help="""The directory where the run directory
                        is to be found.  Defaults to "./runs".""",
                        default=RUNS_ROOT)
    parser.add_argument("--cases_file", help="""
                        Read input table from this file instead of the run directory.""")
    parser.add_argument("--variant", choices=run_spec.VARIANTS, help="""
                        Which variant to run (overrides run spec).""")
    parser.add_argument("--draws", type=int, help="""
                        Number of draws S each case must have.""")
    parser.add_argument("--sunk_cost", type=float, help="""
                        Cost incurred to date.""")
    parser.add_argument("--budget", type=float, help="""
                        Budget threshold (risk-conscious variant).""")
    parser.add_argument("--total_cost", type=float, help="""
                        Total predicted cost for the pool (deterministic variant).""")
    parser.add_argument("--lower_percentile", type=float, help="""
                        Lower percentile bound (default 0.10).""")
    parser.add_argument("--upper_percentile", type=float, help="""
                        Upper percentile bound used for selection (default 0.90).""")
    parser.add_argument("--stop_scope", choices=truncate.SCOPES, help="""
                        Stop every case up to the budget boundary (prefix),
                        or report only the boundary case (boundary).""")
    parser.add_argument("--strict", action="store_true", help="""
                        Fail if no case satisfies the budget.""")
    parser.add_argument("--trace", action="store_true", help="""
                        Write a csv trace of every elimination round to
                        3-stop/trace-<version>.csv.""")
    parser.add_argument("--no_write", action="store_true", help="""
                        Show results only; write nothing to 3-stop (no tables,
                        report, or trace).""")
    parser.add_argument("--verbose", action="store_true", help="""
                        Log per-round details.""")
    return parser.parse_args(argv)


ARG_ATTRIBUTES = [("run_name", "run_name"),
                  ("variant", "variant"),
                  ("draws", "n_draws"),
                  ("sunk_cost", "sunk_cost"),
                  ("budget", "budget"),
                  ("total_cost", "total_cost"),
                  ("lower_percentile", "lower_percentile"),
                  ("upper_percentile", "upper_percentile"),
                  ("stop_scope", "stop_scope")]


def process_args(s, args):
    """ Copy command-line values into run s; those given are sticky. """

    s.run_dirname = args.run_dirname
    s.runs_root = args.runs_root
    s.cases_filename = args.cases_file
    s.strict = args.strict
    for arg_name, name in ARG_ATTRIBUTES:
        value = getattr(args, arg_name)
        if value is not None:
            run_spec.set_attribute(s, name, value, sticky=True)


##############################################################################
# Inputs


def stop_dirpath(s):

    return os.path.join(s.runs_root, s.run_dirname, "3-stop")


def input_pathname(s):
    """ Return pathname of the input table for run s. """

    if s.cases_filename is not None:
        return s.cases_filename
    dirpath = os.path.join(s.runs_root, s.run_dirname, "2-cases")
    startswith = "draws" if s.variant == "risk" else "cases"
    return os.path.join(dirpath, utils.greatest_name(dirpath, startswith, ".csv"))


def get_inputs(s):
    """ Read run spec and input table into run s. """

    run_spec.read_run_spec(s)
    run_spec.check_run_spec(s)
    pathname = input_pathname(s)
    if s.variant == "risk":
        s.table = cases.read_draw_table(pathname, s.n_draws)
    else:
        s.table = cases.read_case_table(pathname)
    run_spec.check_case_count(s, s.table.n_cases)


##############################################################################
# Elimination and truncation


def compute_stop_set(s):
    """ Run elimination loop and truncation for run s (inputs already read). """

    if s.variant == "risk":
        s.order = eliminate.eliminate_risk(s.table,
                                           sunk_cost=s.sunk_cost,
                                           lower=s.lower_percentile,
                                           upper=s.upper_percentile,
                                           n_draws=s.n_draws,
                                           trace_name=s.trace_name)
        if s.budget is None:
            s.stop_set = None
        else:
            s.stop_set = truncate.truncate_by_budget(s.order, s.budget, strict=s.strict)
    else:
        s.order = eliminate.eliminate_deterministic(s.table,
                                                    total_cost=s.total_cost,
                                                    sunk_cost=s.sunk_cost,
                                                    trace_name=s.trace_name)
        s.stop_set = truncate.truncate_by_baseline(s.order, strict=s.strict)


def stop_caseids(s):
    """ Return ordered list of case ids designated for stopping in run s. """

    if s.stop_set is None:
        return []
    if s.variant == "risk":
        return s.stop_set.caseids(s.stop_scope)
    return s.stop_set.caseids(truncate.PREFIX)


##############################################################################
# Output


def show_elimination_order(s):

    utils.myprint("====== Elimination order ======")
    if s.variant == "risk":
        utils.myprint("    order  case        P10/P90 remaining cost      P10/P90 variance       P90 psi")
        for r in s.order:
            utils.myprint("    {:5d}  {:10s}  {:12.6g} {:12.6g}  {:10.4g} {:10.4g}  {:12.6g}"
                          .format(r.order, r.caseid, r.rc_lo, r.rc_hi,
                                  r.var_lo, r.var_hi, r.psi_hi))
    else:
        utils.myprint("    order  case        remaining cost    variance       psi")
        for r in s.order:
            utils.myprint("    {:5d}  {:10s}  {:14.6g}  {:10.4g}  {:12.6g}"
                          .format(r.order, r.caseid, r.rc_hi, r.var_hi, r.psi_hi))
    utils.myprint("    (last)  {}".format(s.order.last_caseid))


def show_stop_set(s):

    utils.myprint("====== Stop set ======")
    if s.stop_set is None:
        utils.myprint("No budget given; no stop set computed.")
        return
    if s.variant == "risk":
        utils.myprint("Budget: {}".format(s.stop_set.threshold))
    else:
        utils.myprint("Baseline psi_0 (average cost per case): {:g}"
                      .format(s.stop_set.threshold))
    if s.stop_set.is_empty:
        utils.myprint("No case qualifies; data collection should not be curtailed.")
        return
    boundary = s.stop_set.boundary
    utils.myprint("Boundary record: order {}, case {}".format(boundary.order, boundary.caseid))
    caseids = stop_caseids(s)
    utils.myprint("Cases to stop ({}, scope {}):".format(
        len(caseids), s.stop_scope if s.variant == "risk" else truncate.PREFIX))
    utils.myprint("    " + ", ".join(caseids))


def write_elimination_order(s, dirpath, version):

    pathname = os.path.join(dirpath, "elimination-order-{}.csv".format(version))
    with open(pathname, "w", newline="") as file:
        writer = csv.writer(file)
        if s.variant == "risk":
            writer.writerow(["Order", "Case id",
                             "P10 remaining cost", "P90 remaining cost",
                             "P10 variance", "P90 variance",
                             "P10 psi", "P90 psi"])
            for r in s.order:
                writer.writerow([r.order, r.caseid, r.rc_lo, r.rc_hi,
                                 r.var_lo, r.var_hi, r.psi_lo, r.psi_hi])
            writer.writerow(["", s.order.last_caseid, "", "", "", "", "", ""])
        else:
            writer.writerow(["Order", "Case id", "Remaining cost", "Variance", "Psi"])
            for r in s.order:
                writer.writerow([r.order, r.caseid, r.rc_hi, r.var_hi, r.psi_hi])
            writer.writerow(["", s.order.last_caseid, "", "", ""])
    return pathname


def write_stop_set(s, dirpath, version):

    pathname = os.path.join(dirpath, "stop-set-{}.csv".format(version))
    with open(pathname, "w", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(["Stop order", "Case id"])
        for i, caseid in enumerate(stop_caseids(s), start=1):
            writer.writerow([i, caseid])
    return pathname


def write_outputs(s, version):

    dirpath = stop_dirpath(s)
    os.makedirs(dirpath, exist_ok=True)
    s.output_pathnames = [write_elimination_order(s, dirpath, version),
                          write_stop_set(s, dirpath, version)]
    for pathname in s.output_pathnames:
        utils.myprint("Wrote", pathname)


##############################################################################
# Main


def stop(s, args):

    version = utils.datetime_string()
    get_inputs(s)
    if not args.no_write:
        os.makedirs(stop_dirpath(s), exist_ok=True)
        s.report_pathname = utils.open_myprint_file(
            "report", os.path.join(stop_dirpath(s), "report-{}.txt".format(version)))
    run_spec.show_run_spec(s)
    if args.trace and args.no_write:
        utils.mywarning("--trace ignored with --no_write; no trace file written.")
    elif args.trace:
        s.trace_name = "trace-{}".format(version)
        utils.setup_csv_logger(s.trace_name, stop_dirpath(s))
    try:
        compute_stop_set(s)
    finally:
        if s.trace_name is not None:
            utils.close_csv_logger(s.trace_name)
    show_elimination_order(s)
    show_stop_set(s)
    if not args.no_write:
        write_outputs(s, version)


def main(argv=None):

    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    utils.myprint("stopping.py -- case-elimination stopping rule.")
    utils.myprint("Starting date-time:", utils.datetime_string())

    s = Stopping()
    process_args(s, args)
    try:
        stop(s, args)
    except StoppingError as exc:
        utils.myprint("FATAL ERROR:", exc)
        return 1
    finally:
        utils.close_myprint_files()
    return 0


if __name__ == "__main__":
    sys.exit(main())
