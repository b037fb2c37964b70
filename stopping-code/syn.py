# syn.py
# October 2026
# python3

"""
Routines to generate a synthetic pool of cases, for experiments with
stopping.py, given the following parameters (defaults in brackets):

    variant = "risk" or "deterministic" ["risk"]
    n_cases = number of active cases [50]
    n_draws = number of Monte Carlo draws per case (risk only) [1000]
    mean_cost = average predicted future cost of a case [100.0]
    case_shape = gamma shape of the spread of case means [2.0]
    draw_shape = gamma shape of a case's draws around its mean [8.0]
    sunk_cost = cost incurred to date [0.0]
    budget_fraction = budget as a fraction of mean pool total (risk) [0.9]
    first_caseid = id of the first case; later ids count on from it [1001]
    seed = random number seed (for reproducibility) [1]
    RandomState = state for random number generator

Future costs are gamma distributed: each case gets a mean drawn around
mean_cost, and (risk variant) each draw is gamma around that case's
mean.  Quality variables are standard normal, as if already
standardized upstream.

We either return the tables directly (for tests and notebooks) or
write them out as a run directory that stopping.py can read.
"""

import argparse
import csv
import logging
import os

import numpy as np
import scipy.stats

import cases
import utils

logger = logging.getLogger(__name__)


class Syn_Params(object):
    """ An object we can hang synthesis generation parameters off of. """

    def __init__(self, **kwargs):

        self.variant = "risk"
        self.n_cases = 50
        self.n_draws = 1000
        self.mean_cost = 100.0
        self.case_shape = 2.0
        self.draw_shape = 8.0
        self.sunk_cost = 0.0
        self.budget_fraction = 0.9
        self.first_caseid = 1001
        self.seed = 1
        for name, value in kwargs.items():
            if not hasattr(self, name):
                raise TypeError("Unknown synthesis parameter `{}`.".format(name))
            setattr(self, name, value)
        self.RandomState = np.random.RandomState(self.seed)


def generate_caseids(syn):

    return [str(syn.first_caseid + i) for i in range(syn.n_cases)]


def generate_case_means(syn):
    """ Return [n] array of per-case mean future costs. """

    return scipy.stats.gamma.rvs(syn.case_shape,
                                 scale=syn.mean_cost / syn.case_shape,
                                 size=syn.n_cases,
                                 random_state=syn.RandomState)


def generate_draw_table(syn):
    """ Return synthetic cases.DrawTable. """

    means = generate_case_means(syn)
    costs = scipy.stats.gamma.rvs(syn.draw_shape,
                                  scale=means[:, np.newaxis] / syn.draw_shape,
                                  size=(syn.n_cases, syn.n_draws),
                                  random_state=syn.RandomState)
    quality = scipy.stats.norm.rvs(size=syn.n_cases, random_state=syn.RandomState)
    return cases.make_draw_table(generate_caseids(syn), costs, quality, syn.n_draws)


def generate_case_table(syn):
    """ Return synthetic cases.CaseTable, with two quality variables. """

    means = generate_case_means(syn)
    quality = scipy.stats.norm.rvs(size=(syn.n_cases, 2), random_state=syn.RandomState)
    return cases.CaseTable(generate_caseids(syn), means, quality)


def synthetic_budget(syn, table):
    """ Return budget_fraction of the mean (over draws) pool total. """

    return syn.budget_fraction * (syn.sunk_cost + float(np.mean(np.sum(table.costs, axis=0))))


##############################################################################
## writing a run directory


def write_run(syn, runs_root, run_dirname):
    """
    Generate a synthetic pool and write it, with a run spec, as run
    directory runs_root/run_dirname.  Return the table generated.
    """

    ds = utils.date_string()
    run_pathname = os.path.join(runs_root, run_dirname)
    spec_dirpath = os.path.join(run_pathname, "1-spec")
    cases_dirpath = os.path.join(run_pathname, "2-cases")
    os.makedirs(spec_dirpath, exist_ok=True)
    os.makedirs(cases_dirpath, exist_ok=True)

    if syn.variant == "risk":
        table = generate_draw_table(syn)
        spec_rows = [("Run name", "Synthetic seed {}".format(syn.seed)),
                     ("Variant", "risk"),
                     ("Draws", syn.n_draws),
                     ("Sunk cost", syn.sunk_cost),
                     ("Budget", "{:.2f}".format(synthetic_budget(syn, table))),
                     ("Cases", syn.n_cases)]
        write_draw_table(table, os.path.join(cases_dirpath, "draws-{}.csv".format(ds)))
    else:
        table = generate_case_table(syn)
        spec_rows = [("Run name", "Synthetic seed {}".format(syn.seed)),
                     ("Variant", "deterministic"),
                     ("Sunk cost", syn.sunk_cost),
                     ("Cases", syn.n_cases)]
        write_case_table(table, os.path.join(cases_dirpath, "cases-{}.csv".format(ds)))

    with open(os.path.join(spec_dirpath, "stopping-spec-{}.csv".format(ds)), "w", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(["Attribute", "Value"])
        writer.writerows(spec_rows)
    logger.info("wrote synthetic %s run with %d cases to %s",
                syn.variant, syn.n_cases, run_pathname)
    return table


def write_draw_table(table, pathname):

    with open(pathname, "w", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(cases.DRAW_FIELDNAMES)
        for i, caseid in enumerate(table.caseids):
            for s, draw in enumerate(table.draw_indices):
                writer.writerow([caseid, draw,
                                 "{:.4f}".format(table.costs[i, s]),
                                 "{:.6f}".format(table.quality[i])])


def write_case_table(table, pathname):

    with open(pathname, "w", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(cases.CASE_FIELDNAMES)
        for i, caseid in enumerate(table.caseids):
            writer.writerow([caseid,
                             "{:.4f}".format(table.costs[i]),
                             "{:.6f}".format(table.quality[i, 0]),
                             "{:.6f}".format(table.quality[i, 1])])


def parse_args(argv=None):

    parser = argparse.ArgumentParser(description="""syn.py: write a synthetic
            case pool as a run directory for stopping.py.""")
    parser.add_argument("run_dirname", help="Name of run directory to create.")
    parser.add_argument("--runs_root", default="./runs",
                        help="Directory holding run directories.")
    parser.add_argument("--variant", choices=["risk", "deterministic"], default="risk")
    parser.add_argument("--cases", type=int, default=50, help="Number of cases.")
    parser.add_argument("--draws", type=int, default=1000, help="Draws per case (risk).")
    parser.add_argument("--mean_cost", type=float, default=100.0)
    parser.add_argument("--sunk_cost", type=float, default=0.0)
    parser.add_argument("--budget_fraction", type=float, default=0.9)
    parser.add_argument("--seed", type=int, default=1)
    return parser.parse_args(argv)


def main(argv=None):

    args = parse_args(argv)
    syn = Syn_Params(variant=args.variant,
                     n_cases=args.cases,
                     n_draws=args.draws,
                     mean_cost=args.mean_cost,
                     sunk_cost=args.sunk_cost,
                     budget_fraction=args.budget_fraction,
                     seed=args.seed)
    write_run(syn, args.runs_root, args.run_dirname)
    utils.myprint("Synthetic {} run written to {}"
                  .format(syn.variant, os.path.join(args.runs_root, args.run_dirname)))
    return 0


if __name__ == "__main__":

    main()
