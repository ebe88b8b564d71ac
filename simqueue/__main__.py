# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on September 29, 2019
# Last Update: Time-stamp: <2019-10-04 10:40:51 liux>
###############################################################

"""Command-line front end: python -m simqueue [options]."""

import sys, argparse, logging

from .driver import run_mm1

def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="simqueue",
        description="Simulate an M/M/1 queue and compare with the standard formulas.")
    parser.add_argument("-a", "--arrival-rate", type=float, metavar='RATE', default=1.0,
                        help="mean arrival rate (default: %(default)g)")
    parser.add_argument("-m", "--service-rate", type=float, metavar='RATE', default=2.0,
                        help="mean service rate (default: %(default)g)")
    parser.add_argument("-n", "--num-pax", type=int, metavar='COUNT', default=10000,
                        help="number of served customers to collect (default: %(default)d)")
    parser.add_argument("-s", "--seed", type=int, metavar='SEED', default=None,
                        help="set random seed")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable verbose information")
    parser.add_argument("-vv", "--debug", action="store_true",
                        help="enable debug information")
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)

    # turn logging info on if we are in verbose mode
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    elif args.verbose:
        logging.basicConfig(level=logging.INFO)

    try:
        r = run_mm1(args.arrival_rate, args.service_rate, args.num_pax,
                    seed=args.seed, name='mm1')
    except (ValueError, TypeError) as e:
        print("simqueue: %s" % e, file=sys.stderr)
        return 2
    r.report()
    return 0

if __name__ == '__main__':
    sys.exit(main())
