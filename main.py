import argparse
import logging
import sys

import config_paths
import terminal
from file_type_handler import FileTypeHandler, stdin_rows
from logging_config import setup_logging
from table_format import TableOutputFormat
from table_options import TableOptions

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabstream",
        description="tabstream - print tabular data as a bordered terminal table",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="file to print (.csv, .tsv, .parquet, .xlsx, .h5); CSV on stdin if omitted",
    )
    parser.add_argument("-w", "--max-width", type=int, help="terminal width")
    parser.add_argument(
        "--header-interval",
        type=int,
        help="repeat the header every N rows (0 disables)",
    )
    parser.add_argument(
        "--no-header",
        dest="show_header",
        action="store_const",
        const=False,
        help="do not repeat the header or close the table",
    )
    parser.add_argument("--batch-size", type=int, help="rows per column-width batch")
    parser.add_argument(
        "--max-column-width", type=int, help="cap on column width (0 disables)"
    )
    parser.add_argument(
        "--no-header-baseline",
        dest="carry_header_baseline",
        action="store_const",
        const=False,
        help="only size the first batch against the header",
    )
    parser.add_argument("--accent", dest="accent_color", help="border and key color")
    parser.add_argument("--null-value", help="text shown for missing values")
    parser.add_argument(
        "-k",
        "--primary-key",
        dest="primary_keys",
        action="append",
        default=[],
        help="column to highlight as a primary key (repeatable)",
    )
    parser.add_argument(
        "--status-column",
        help="column holding deleted/updated/inserted row status",
    )
    parser.add_argument(
        "--no-color", dest="color", action="store_const", const=False
    )
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "-v", "-V", "--version", action="version", version=__version__
    )
    return parser


def resolve_options(args, stream=None) -> TableOptions:
    """Defaults, then the config file, then the terminal, then the command line."""
    stream = stream if stream is not None else sys.stdout
    cfg = config_paths.load_config()
    if args.max_width is None:
        cfg["MAX_WIDTH"] = terminal.terminal_width(cfg["MAX_WIDTH"], stream)
    if args.color is None and not terminal.supports_color(stream):
        cfg["COLOR"] = False
    return TableOptions.from_config(
        cfg,
        max_width=args.max_width,
        header_interval=args.header_interval,
        show_header=args.show_header,
        batch_size=args.batch_size,
        carry_header_baseline=args.carry_header_baseline,
        max_column_width=args.max_column_width,
        accent_color=args.accent_color,
        null_value=args.null_value,
        color=args.color,
    )


def _rows_summary(count: int) -> str:
    return f"{count} row{'' if count == 1 else 's'} selected"


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = resolve_options(args)
    except ValueError as exc:
        parser.error(str(exc))

    open_args = dict(
        chunksize=options.resolved_batch_size(),
        primary_keys=args.primary_keys,
        status_column=args.status_column,
        null_value=options.null_value,
    )
    try:
        if args.path:
            rows = FileTypeHandler(args.path).open_rows(**open_args)
        else:
            rows = stdin_rows(**open_args)
        with rows:
            count = TableOutputFormat(options).print(rows)
    except BrokenPipeError:
        raise
    except (OSError, KeyError, ValueError) as exc:
        log.debug("load failed", exc_info=True)
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    print(_rows_summary(count))
    return 0


if __name__ == "__main__":
    sys.exit(main())
