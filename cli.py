#!/usr/bin/env python3
"""
Compare page replacement policies on a synthetic locality trace.

    pagesim -P 1000 -e 10 -m 100 -t 0.1
"""

import argparse
import logging
import sys

from pagesim import run_all, sweep_frames
from plotting import plot_fault_counts, plot_frame_sweep
from refstring import (InvalidParameter, LocalityParameters, generate_reference_string,
                       load_reference_string, save_reference_string)
from simconfig import DEFAULT_FRAMES, DEFAULT_LENGTH, SimulationConfig

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='pagesim',
        description='Page faults of Optimal, FIFO, LRU and Second Chance replacement '
                    'over a synthetic reference string with locality of reference.')
    parser.add_argument('-P', type=int, required=True, help='address space size in pages')
    parser.add_argument('-e', type=int, required=True, help='locus window width')
    parser.add_argument('-m', type=int, required=True, help='references before the locus moves')
    parser.add_argument('-t', type=float, required=True, help='probability the locus jumps')
    parser.add_argument('-n', '--frames', type=int, default=DEFAULT_FRAMES,
                        help=f'number of frames (default {DEFAULT_FRAMES})')
    parser.add_argument('-l', '--length', type=int, default=DEFAULT_LENGTH,
                        help=f'reference string length (default {DEFAULT_LENGTH})')
    parser.add_argument('--lookahead-factor', type=float, default=1.0,
                        help='Optimal looks ahead e * m * factor references (default 1.0)')
    parser.add_argument('--seed', type=int, help='random seed for a reproducible trace')
    parser.add_argument('--sweep', type=int, metavar='MAX',
                        help='also report every policy for 1..MAX frames')
    parser.add_argument('--plot', metavar='FILE', help='save a chart of the results')
    parser.add_argument('--save-trace', metavar='FILE', help='save the reference string (.npy)')
    parser.add_argument('--load-trace', metavar='FILE',
                        help='replay a saved reference string instead of generating one')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    return parser


def print_results(results):
    print("Page faults:")
    for name, faults in results.items():
        print(f"{name}: {faults}")


def print_sweep(frame_counts, sweep):
    print(f"\n{'Frames':<8}" + "".join(f"{name:<15}" for name in sweep))
    print("-" * (8 + 15 * len(sweep)))
    for i, frames in enumerate(frame_counts):
        print(f"{frames:<8}" + "".join(f"{faults[i]:<15}" for faults in sweep.values()))


def run(args):
    config = SimulationConfig(frame_count=args.frames, length=args.length,
                              lookahead_factor=args.lookahead_factor, seed=args.seed).validate()
    params = LocalityParameters(P=args.P, e=args.e, m=args.m, t=args.t).validate()

    if args.load_trace:
        if args.seed is not None or args.length != DEFAULT_LENGTH:
            logger.warning("--seed and --length are ignored when replaying %s", args.load_trace)
        reference_string = load_reference_string(args.load_trace, P=params.P)
        logger.info("loaded %d references from %s", len(reference_string), args.load_trace)
    else:
        reference_string = generate_reference_string(params, config.length, seed=config.seed)
    if args.save_trace:
        save_reference_string(reference_string, args.save_trace)

    limit = config.lookahead_limit(params.e, params.m)
    logger.debug("frames=%d lookahead=%d", config.frame_count, limit)
    results = run_all(reference_string, config.frame_count, limit)
    print_results(results)

    if args.sweep:
        frame_counts = range(1, args.sweep + 1)
        sweep = sweep_frames(reference_string, frame_counts, limit)
        print_sweep(frame_counts, sweep)

    if args.plot:
        if args.sweep:
            plot_frame_sweep(frame_counts, sweep, args.plot)
        else:
            plot_fault_counts(results, args.plot)
    return results


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    try:
        run(args)
    except InvalidParameter as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
