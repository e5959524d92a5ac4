#!/usr/bin/env python3
# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""CLI/Imperative shell for rabi."""

import os
import re
import sys
import logging
import warnings
import contextlib
from typing import List
from typing import Iterator
from typing import Optional
from typing import NamedTuple

import click

from . import codes
from . import __version__
from . import labels
from . import advisory
from . import distance
from . import parameters
from . import common_types as ct

try:
    import pretty_traceback

    pretty_traceback.install(envvar='ENABLE_PRETTY_TRACEBACK')
except ImportError:
    pass  # no need to fail because of missing dev dependency


logger = logging.getLogger("rabi.cli")


class LogConfig(NamedTuple):
    fmt: str
    lvl: int


LOG_FORMAT_DEFAULT = "%(levelname)-7s - %(message)s"

LOG_FORMAT_VERBOSE = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)-16s - %(message)s"


def _parse_logging_config(verbosity: int) -> LogConfig:
    if verbosity == 0:
        return LogConfig(LOG_FORMAT_DEFAULT, logging.WARNING)
    elif verbosity == 1:
        return LogConfig(LOG_FORMAT_VERBOSE, logging.INFO)
    else:
        assert verbosity >= 2
        return LogConfig(LOG_FORMAT_VERBOSE, logging.DEBUG)


_PREV_VERBOSITY: int = -1


def _configure_logging(verbosity: int = 0) -> None:
    # pylint: disable=global-statement
    global _PREV_VERBOSITY

    if verbosity <= _PREV_VERBOSITY:
        # allow function to be called multiple times
        return

    _PREV_VERBOSITY = verbosity

    # remove previous logging handlers
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)

    log_cfg = _parse_logging_config(verbosity)
    logging.basicConfig(level=log_cfg.lvl, format=log_cfg.fmt, datefmt="%Y-%m-%dT%H:%M:%S")


def echo(msg: str = "", err: bool = False) -> bool:
    click.echo(msg, err=err)
    return True


@contextlib.contextmanager
def _reported_errors() -> Iterator[None]:
    """Show warnings on stderr and turn validation errors into an abort."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield
        except (ct.InvalidParameter, ct.InvalidInput) as err:
            echo(f"Error: {err.args[0]}", err=True)
            raise click.Abort()
        finally:
            for warning in caught:
                echo(f"Warning: {warning.message}", err=True)


def _parse_labels(labels_arg: Optional[str]) -> Optional[ct.Labels]:
    if labels_arg is None:
        return None
    else:
        return [label.strip() for label in labels_arg.split(",")]


def _show_codes(
    code_set     : ct.Codes,
    redundancy   : int,
    labels_arg   : Optional[str],
    alphabet_size: Optional[int],
    check        : bool,
) -> None:
    label_list = _parse_labels(labels_arg)
    if label_list is None:
        for code in code_set:
            echo(" ".join(str(symbol) for symbol in code))
    else:
        for labeled_code in labels.codes_to_labels(code_set, label_list, alphabet_size):
            echo("-".join(labeled_code))

    echo(f"{len(code_set)} codes robust to {redundancy} erasure(s)", err=True)
    if check:
        min_dist = distance.min_distance(code_set)
        echo(f"Minimum distance: {min_dist}", err=True)


_COMMENT_RE = re.compile(r"#.*$")

_SEPARATOR_RE = re.compile(r"[\s,;]+")


def parse_candidates(lines: List[str]) -> List[List[int]]:
    """Parse one candidate per line, symbols separated by whitespace or commas."""
    candidates = []
    for lineno, line in enumerate(lines, start=1):
        line = _COMMENT_RE.sub("", line).strip()
        if not line:
            continue

        try:
            candidates.append([int(symbol) for symbol in _SEPARATOR_RE.split(line)])
        except ValueError as err:
            errmsg = f"Invalid candidate on line {lineno}: {line!r}"
            raise ct.InvalidInput(errmsg) from err
    return candidates


def _progress_cb(bar) -> ct.ProgressCallback:
    def progress_cb(incr: ct.ProgressIncrement) -> None:
        bar.update(incr)

    return progress_cb


@contextlib.contextmanager
def _progressbar(label: str) -> Iterator[ct.MaybeProgressCallback]:
    if os.getenv('RABI_PROGRESS_BAR', "1") == '1':
        with click.progressbar(length=100, label=label, file=sys.stderr) as bar:
            yield _progress_cb(bar)
    else:
        yield None


_opt_verbose = click.option(
    '-v',
    '--verbose',
    count=True,
    help="Control log level. -vv for debug level.",
)

_opt_total_length = click.option(
    '-n',
    '--total-length',
    type=int,
    required=True,
    help="Number of positions to be marked on each animal",
)

_opt_redundancy = click.option(
    '-r',
    '--redundancy',
    type=int,
    required=True,
    help="Number of erasures the codes must be robust to",
)

_opt_alphabet_size = click.option(
    '-a',
    '--alphabet-size',
    type=int,
    required=True,
    help="Number of distinct marks (colours, symbols) available",
)

_opt_labels = click.option(
    '-l',
    '--labels',
    'labels_arg',
    type=str,
    default=None,
    help="Comma separated names for each symbol, e.g. blue,red,green",
)

_opt_check = click.option(
    '--check',
    is_flag=True,
    default=False,
    help="Report the minimum pairwise distance of the generated codes",
)

_opt_num_trials = click.option(
    '-t',
    '--num-trials',
    type=int,
    default=parameters.DEFAULT_NUM_TRIALS,
    show_default=True,
    help="Number of randomized attempts, the largest result is kept",
)

_opt_seed = click.option(
    '--seed',
    type=int,
    default=None,
    envvar='RABI_SEED',
    help="Seed for reproducible results",
)

_opt_parallelism = click.option(
    '-p',
    '--parallelism',
    type=int,
    default=parameters.DEFAULT_PARALLELISM,
    show_default=True,
    help="Number of attempts to run concurrently",
)

_opt_timeout = click.option(
    '--timeout',
    type=float,
    default=None,
    help="Stop after this many seconds and keep the best result so far",
)


@click.group(context_settings={'help_option_names': ["-h", "--help"]})
@_opt_verbose
def cli(verbose: int = 0) -> None:
    """CLI for rabi: robust animal identification codes."""
    _configure_logging(verbose)


@cli.command()
def version() -> None:
    """Show version number."""
    echo(f"rabi version: {__version__}")


@cli.command()
@_opt_total_length
@_opt_redundancy
@_opt_alphabet_size
@_opt_labels
@_opt_check
@_opt_verbose
def exact(
    total_length : int,
    redundancy   : int,
    alphabet_size: int,
    labels_arg   : Optional[str] = None,
    check        : bool = False,
    verbose      : int  = 0,
) -> None:
    """Maximum size codes by polynomial oversampling (prime alphabet)."""
    _configure_logging(verbose)
    with _reported_errors():
        params, code_set = codes.build_exact_code(total_length, redundancy, alphabet_size)
        _show_codes(code_set, params.redundancy, labels_arg, params.alphabet_size, check)


@cli.command()
@_opt_total_length
@_opt_redundancy
@_opt_alphabet_size
@_opt_num_trials
@_opt_seed
@_opt_parallelism
@_opt_timeout
@_opt_labels
@_opt_check
@_opt_verbose
def greedy(
    total_length : int,
    redundancy   : int,
    alphabet_size: int,
    num_trials   : int = parameters.DEFAULT_NUM_TRIALS,
    seed         : Optional[int] = None,
    parallelism  : int = parameters.DEFAULT_PARALLELISM,
    timeout      : Optional[ct.Seconds] = None,
    labels_arg   : Optional[str] = None,
    check        : bool = False,
    verbose      : int  = 0,
) -> None:
    """Codes for any alphabet by randomized pruning of all sequences."""
    _configure_logging(verbose)
    with _reported_errors():
        with _progressbar("Searching") as progress_cb:
            code_set = codes.generate_greedy_code(
                total_length,
                redundancy,
                alphabet_size,
                num_trials,
                seed=seed,
                parallelism=parallelism,
                timeout=timeout,
                progress_cb=progress_cb,
            )
        _show_codes(code_set, redundancy, labels_arg, alphabet_size, check)


@cli.command()
@click.argument('candidates_file', type=click.File('r'))
@_opt_redundancy
@click.option(
    '-a',
    '--alphabet-size',
    type=int,
    default=None,
    help="Number of distinct marks, inferred from the candidates if omitted",
)
@_opt_num_trials
@_opt_seed
@_opt_parallelism
@_opt_timeout
@_opt_labels
@_opt_check
@_opt_verbose
def tweaked(
    candidates_file,
    redundancy   : int,
    alphabet_size: Optional[int] = None,
    num_trials   : int = parameters.DEFAULT_NUM_TRIALS,
    seed         : Optional[int] = None,
    parallelism  : int = parameters.DEFAULT_PARALLELISM,
    timeout      : Optional[ct.Seconds] = None,
    labels_arg   : Optional[str] = None,
    check        : bool = False,
    verbose      : int  = 0,
) -> None:
    """Codes from a file of acceptable sequences (one per line, - for stdin)."""
    _configure_logging(verbose)
    with _reported_errors():
        candidates = parse_candidates(candidates_file.readlines())
        with _progressbar("Searching") as progress_cb:
            code_set = codes.generate_greedy_code_from_candidates(
                candidates,
                redundancy,
                num_trials,
                alphabet_size=alphabet_size,
                seed=seed,
                parallelism=parallelism,
                timeout=timeout,
                progress_cb=progress_cb,
            )
        _show_codes(code_set, redundancy, labels_arg, alphabet_size, check)


@cli.command()
@_opt_total_length
@_opt_alphabet_size
@_opt_labels
@_opt_verbose
def checksum(
    total_length : int,
    alphabet_size: int,
    labels_arg   : Optional[str] = None,
    verbose      : int = 0,
) -> None:
    """Simple codes robust to a single erasure (sum is a multiple of the alphabet)."""
    _configure_logging(verbose)
    with _reported_errors():
        code_set = codes.generate_checksum_code(total_length, alphabet_size)
        _show_codes(code_set, 1, labels_arg, alphabet_size, check=False)


@cli.command()
@click.option('-n', '--total-length' , type=int, default=parameters.DEFAULT_TOTAL_LENGTH , show_default=True)
@click.option('-r', '--redundancy'   , type=int, default=parameters.DEFAULT_REDUNDANCY   , show_default=True)
@click.option('-a', '--alphabet-size', type=int, default=parameters.DEFAULT_ALPHABET_SIZE, show_default=True)
@_opt_verbose
def how_many(
    total_length : int = parameters.DEFAULT_TOTAL_LENGTH,
    redundancy   : int = parameters.DEFAULT_REDUNDANCY,
    alphabet_size: int = parameters.DEFAULT_ALPHABET_SIZE,
    verbose      : int = 0,
) -> None:
    """Tables of the maximum number of IDs around the given parameters."""
    _configure_logging(verbose)
    tables = advisory.how_many(total_length, redundancy, alphabet_size)
    echo(advisory.format_how_many(tables))


if __name__ == '__main__':
    cli()
