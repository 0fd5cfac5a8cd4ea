"""Entry point for sqlscratch."""

import argparse
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlscratch",
        description="SQLScratch - scratch SQL editor that runs statements through SQL*Plus.",
    )
    parser.add_argument("scripts", nargs="*", metavar="FILE",
                        help="SQL scripts to open")
    parser.add_argument("-d", "--database",
                        help="target database (default: $ORACLE_SID)")
    parser.add_argument("--version", action="store_true",
                        help="print the version and exit")
    return parser


def main(argv=None):
    """Main entry point with argument handling."""
    args = build_parser().parse_args(argv)

    if args.version:
        from sqlscratch.version import __version__
        print(f"sqlscratch {__version__}")
        sys.exit(0)

    # Start the GUI application
    from sqlscratch.app import main as app_main
    sys.exit(app_main(args.scripts, args.database))


if __name__ == "__main__":
    main()
