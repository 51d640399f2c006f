"""
Command-line entry point.

Fits a polynomial of the given degree to a count-header data file, writes
the result tables and optionally renders a plot.

Usage:
    pypolyfit 2
    pypolyfit 3 --data data/data.dat --output-dir data --plot report/plot_3.png
    python -m pypolyfit 1 --backend reference --summary
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pypolyfit.core.datasource import DataSource
from pypolyfit.core.exceptions import PyPolyFitError
from pypolyfit.core.logger import get_logger
from pypolyfit.polynomial.design import DEFAULT_SCALE
from pypolyfit.polynomial.export import write_results
from pypolyfit.polynomial.solvers import BACKEND_CHOICES, fit

DEFAULT_DATA = Path('data') / 'data.dat'
DEFAULT_OUTPUT_DIR = Path('data')


def _degree(value: str) -> int:
    try:
        d = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"degree must be an integer, got {value!r}") from None
    if d < 0:
        raise argparse.ArgumentTypeError(f"degree must be >= 0, got {d}")
    return d


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pypolyfit',
        description='Least squares polynomial fit via Cholesky-factored normal equations'
    )
    parser.add_argument(
        'degree',
        type=_degree,
        help='Degree of the polynomial to fit'
    )
    parser.add_argument(
        '--data',
        type=Path,
        default=DEFAULT_DATA,
        help=f'Observation file (default: {DEFAULT_DATA})'
    )
    parser.add_argument(
        '--output-dir', '-o',
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f'Directory for the result tables (default: {DEFAULT_OUTPUT_DIR})'
    )
    parser.add_argument(
        '--plot',
        type=Path,
        default=None,
        help='Render raw data and fit to this image file'
    )
    parser.add_argument(
        '--scale',
        type=float,
        default=DEFAULT_SCALE,
        help=f'Conditioning factor applied before solving (default: {DEFAULT_SCALE:g})'
    )
    parser.add_argument(
        '--backend',
        choices=BACKEND_CHOICES,
        default='auto',
        help='Computational backend (default: auto)'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print the fit summary, including intermediate matrices'
    )
    parser.add_argument(
        '--log-level',
        choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'),
        default='INFO',
        help='Logging threshold; DEBUG logs every intermediate matrix'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        metavar='DIR',
        help='Write the log under DIR/logs instead of the console'
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = getattr(logging, args.log_level)
    if args.log_file is not None:
        logger = get_logger('pypolyfit', 'file', str(args.log_file), level=level)
    else:
        logger = get_logger('pypolyfit', level=level)

    stage = 'load'
    try:
        ds = DataSource.from_file(args.data)

        stage = 'fit'
        solution = fit(ds, degree=args.degree, scale=args.scale, backend=args.backend)

        stage = 'write'
        write_results(solution, args.output_dir)
    except (PyPolyFitError, OSError) as e:
        logger.error("%s stage failed: %s", stage, e)
        return 1

    for w in solution.warnings:
        logger.warning(w)

    if args.summary:
        print(solution.summary(intermediates=True))

    if args.plot is not None:
        # The fit stands on its own; a failed plot only costs the image.
        try:
            from pypolyfit.polynomial.plotting import plot_fit
            plot_fit(solution, args.plot)
        except (ImportError, OSError, ValueError) as e:
            logger.warning("plot not written: %s", e)

    logger.info("R^2 = %f", solution.r_squared)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
