#!/usr/bin/env python3
"""
chromatin3d main entry point
Query 3dg structures by locus or bin range and export link geometry as TSV.
"""

import argparse
import sys
import time

from .obj import ChromatinModel, DEFAULT_RESOLUTION
from .utils.helper import MalformedLocusError


def _load(args):
    t0 = time.time()
    model = ChromatinModel.from_tdg(args.filename[0], resolution=args.resolution)
    sys.stderr.write("load: %d parts, %d bins in %.2fs\n" % (len(model), model.total_bins, time.time() - t0))
    return model


def _write(df, out_name):
    if out_name is None:
        df.to_csv(sys.stdout, sep="\t", index=False)
    else:
        df.to_csv(out_name, sep="\t", index=False)


def query_cli(args):
    model = _load(args)
    part = model.resolve_locus(args.locus)
    if part is None:
        sys.stderr.write("query: no part labelled like %s\n" % args.locus)
        return 1
    _write(part.to_dataframe(raw=args.raw), args.out_name)
    return 0


def slice_cli(args):
    model = _load(args)
    sliced = model.slice_by_bin_range(args.start, args.end)
    _write(sliced.to_dataframe(raw=args.raw), args.out_name)
    return 0


def links_cli(args):
    model = _load(args)
    if args.locus is not None:
        part = model.resolve_locus(args.locus)
        if part is None:
            sys.stderr.write("links: no part labelled like %s\n" % args.locus)
            return 1
        model = ChromatinModel([part], name=model.name)
    _write(model.links(), args.out_name)
    return 0


def _add_common(subparser):
    subparser.add_argument(
        dest="filename",
        metavar="INPUT_FILE",
        nargs=1,
        help="3dg file: chrom, pos, x, y, z separated by tabs")
    subparser.add_argument(
        "-r", "--resolution",
        dest="resolution",
        type=int,
        action="store",
        default=DEFAULT_RESOLUTION,
        help="bin size in base pairs")
    subparser.add_argument(
        "-o", "--output",
        dest="out_name",
        action="store",
        metavar="OUTPUT_FILE",
        help="output file name, stdout if omitted")


def cli(argv=None):
    parser = argparse.ArgumentParser(prog="chromatin3d", description="Query 3D chromatin structures")
    subcommands = parser.add_subparsers(title="These are sub-commands", metavar="command")

    # query sub command
    query_arg = subcommands.add_parser(
        "query",
        help="bins of a chromosome or a genomic range, e.g. chr1:10000-20000")
    query_arg.set_defaults(handle=query_cli)
    _add_common(query_arg)
    query_arg.add_argument(
        dest="locus",
        metavar="LOCUS")
    query_arg.add_argument(
        "--raw",
        dest="raw",
        action="store_true",
        help="write file coordinates instead of normalized ones")

    # slice sub command
    slice_arg = subcommands.add_parser(
        "slice",
        help="bins [START, END) counted across all parts in order")
    slice_arg.set_defaults(handle=slice_cli)
    _add_common(slice_arg)
    slice_arg.add_argument(dest="start", metavar="START", type=int)
    slice_arg.add_argument(dest="end", metavar="END", type=int)
    slice_arg.add_argument(
        "--raw",
        dest="raw",
        action="store_true",
        help="write file coordinates instead of normalized ones")

    # links sub command
    links_arg = subcommands.add_parser(
        "links",
        help="cylinder transforms between consecutive bins")
    links_arg.set_defaults(handle=links_cli)
    _add_common(links_arg)
    links_arg.add_argument(
        dest="locus",
        metavar="LOCUS",
        nargs="?",
        default=None,
        help="restrict to a chromosome or genomic range")

    args = parser.parse_args(argv)
    if not hasattr(args, 'handle'):
        parser.print_help()
        return 0
    try:
        return args.handle(args)
    except MalformedLocusError as e:
        parser.error(str(e))


if __name__ == "__main__":
    sys.exit(cli())
