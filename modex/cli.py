"""
Command-line interface for ModEx.

Provides commands for parsing network files, loading a directory of
uploads into a registry, and plotting a network.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .errors import ModexError, ParseError
from .network.parser import parse_network_file
from .registry.store import NetworkRegistry
from .service.uploads import UploadConfig, UploadService
from .visualization.plots import NetworkPlotter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def run_parse(args) -> int:
    """Parse one file and print it."""
    network = parse_network_file(args.file)

    if args.json:
        print(network.to_json())
        return 0

    plotter = NetworkPlotter()
    print(plotter.create_summary_report(os.path.basename(args.file), network))
    return 0


def run_load(args) -> int:
    """Upload every network file in a directory into a fresh registry."""
    registry = NetworkRegistry()
    service = UploadService(
        registry,
        UploadConfig(uploads_dir=args.uploads_dir, list_suffix=args.suffix),
    )

    names = sorted(
        name for name in os.listdir(args.directory)
        if name.endswith(args.suffix)
        and os.path.isfile(os.path.join(args.directory, name))
    )

    failures = 0
    for name in names:
        with open(os.path.join(args.directory, name), "rb") as f:
            data = f.read()
        try:
            service.upload(name, data)
        except ModexError as e:
            failures += 1
            print(f"  ! {name}: {e}")

    print(f"Loaded {len(registry)} of {len(names)} networks")
    for name in service.list_files():
        network = registry.require(name)
        print(f"  - {name}: agents={network.agent_count}, extremism={network.extremism:.4f}")

    return 1 if failures else 0


def run_plot(args) -> int:
    """Save opinion and effort figures for one file."""
    network = parse_network_file(args.file)
    stem = os.path.splitext(os.path.basename(args.file))[0]

    import matplotlib.pyplot as plt

    plotter = NetworkPlotter(args.output_dir)
    for kind, draw in (("opinions", plotter.plot_opinions), ("effort", plotter.plot_effort)):
        fig = draw(network, save_path=f"{stem}_{kind}.png")
        plt.close(fig)
        print(f"Saved {os.path.join(args.output_dir, f'{stem}_{kind}.png')}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modex",
        description="""
ModEx - Moderation of extremism in social-influence networks

Parses network files (agent count, opinion/receptivity lines and a
resource budget), computes the extremism of each network and the
effort of moderating every agent.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a network file and print a summary",
    )
    parse_parser.add_argument("file", help="Network file to parse")
    parse_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed network as JSON",
    )

    # Load command
    load_parser = subparsers.add_parser(
        "load",
        help="Upload every network file in a directory into a registry",
    )
    load_parser.add_argument("directory", help="Directory holding network files")
    load_parser.add_argument(
        "-u", "--uploads-dir",
        type=str,
        default=UploadConfig.uploads_dir,
        help=f"Where uploaded files are stored (default: {UploadConfig.uploads_dir})",
    )
    load_parser.add_argument(
        "-s", "--suffix",
        type=str,
        default=UploadConfig.list_suffix,
        help=f"File name suffix of network files (default: {UploadConfig.list_suffix})",
    )

    # Plot command
    plot_parser = subparsers.add_parser(
        "plot",
        help="Save opinion and effort figures for a network file",
    )
    plot_parser.add_argument("file", help="Network file to plot")
    plot_parser.add_argument(
        "-o", "--output-dir",
        type=str,
        default=".",
        help="Directory for output files (default: current directory)",
    )

    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show version information",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"ModEx v{__version__}")
        return 0

    configure_logging(args.verbose)

    commands = {
        "parse": run_parse,
        "load": run_load,
        "plot": run_plot,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
