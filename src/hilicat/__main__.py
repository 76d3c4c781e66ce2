# hilicat/__main__.py

import argparse
import sys
from typing import List, Optional, Sequence

from .highlighter.line import OverlapMode
from .highlighter.processor import Highlighter, Options
from .settings.config import APP_VERSION, AppConstants, StreamDefaults, get_config_paths
from .settings.languages import (
    HighlightConfig,
    detect_language,
    ensure_config_exists,
    load_config,
)
from .streams.pager import open_sink
from .streams.pipeline import HighlightPipeline
from .streams.reader import ChunkReader, peek, resolve_line_ending
from .utils.exceptions import ConfigError, ConfigWriteError, HiliCatError, handle_exception
from .utils.logger import (
    enable_debug_mode,
    get_logger,
    log_app_start,
    set_console_log_level,
)
from .utils.translation_utils import _

EXAMPLES = _(
    """Examples:
  hilicat file.go                      # Highlight a Go file
  cat file.json | hilicat --lang json  # Highlight JSON from stdin
  hilicat --config /path/to/config.json file.py  # Use custom config
  hilicat --less large_file.go         # View highlighted file with pagination"""
)


def report_error(message: str) -> None:
    print(_("Error: {}").format(message), file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Main parser for the command-line interface."""
    parser = argparse.ArgumentParser(
        prog=AppConstants.APP_NAME,
        description=_("Print files with regex-driven syntax highlighting"),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"%(prog)s {APP_VERSION}"
    )
    parser.add_argument(
        "--debug", "-d", action="store_true", help=_("Enable debug mode")
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=_("Set logging level"),
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help=_("Path to the configuration file (default: {})").format(
            get_config_paths().config_file
        ),
    )
    parser.add_argument(
        "--lang",
        default="",
        help=_("Language for syntax highlighting (required when reading from stdin)"),
    )
    parser.add_argument(
        "--line-ending",
        choices=["auto", "lf", "crlf"],
        default="auto",
        help=_("Line ending to use (default: auto)"),
    )
    parser.add_argument(
        "-n", "--number", action="store_true", help=_("Number all output lines")
    )
    parser.add_argument(
        "-b",
        "--number-nonblank",
        action="store_true",
        help=_("Number non-blank output lines"),
    )
    parser.add_argument(
        "-s",
        "--squeeze-blank",
        action="store_true",
        help=_("Suppress repeated empty output lines"),
    )
    parser.add_argument(
        "-E", "--show-ends", action="store_true", help=_("Display $ at end of each line")
    )
    parser.add_argument(
        "--less",
        "--pager",
        dest="pager",
        action="store_true",
        help=_("Pipe output to 'less -R' for paged viewing"),
    )
    parser.add_argument(
        "--overlap",
        choices=[mode.value for mode in OverlapMode],
        default=OverlapMode.FIRST.value,
        help=_(
            "How overlapping matches are resolved: 'first' lets earlier rules win, "
            "'longest' keeps the leftmost-longest match"
        ),
    )
    parser.add_argument(
        "files", nargs="*", metavar="FILE", help=_("Files to highlight (default: stdin)")
    )
    return parser


def build_options(args: argparse.Namespace) -> Options:
    return Options(
        number_lines=args.number,
        number_nonblank=args.number_nonblank,
        squeeze_blank=args.squeeze_blank,
        show_ends=args.show_ends,
        overlap=OverlapMode(args.overlap),
    )


def load_configuration(config_path: Optional[str]) -> HighlightConfig:
    """
    Load the language configuration, writing the default file first if needed.

    Raises:
        ConfigError: If the file cannot be loaded.
    """
    logger = get_logger("hilicat.main")
    path = config_path or str(get_config_paths().config_file)
    try:
        ensure_config_exists(path)
    except ConfigWriteError as e:
        logger.warning(e.message)
    return load_config(path)


def highlight_source(
    reader: ChunkReader,
    path: str,
    config: HighlightConfig,
    language: str,
    line_ending_mode: str,
    options: Options,
    sink,
) -> bool:
    """
    Highlight one input (a file path, or "" for stdin) into ``sink``.

    Returns:
        True on success; failures are reported on stderr.
    """
    logger = get_logger("hilicat.main")
    try:
        with reader.open_source(path) as stream:
            line_ending = resolve_line_ending(line_ending_mode, peek(stream))
            highlighter = Highlighter.from_config(config, language, line_ending, options)
            pipeline = HighlightPipeline(highlighter, sink)
            ok = pipeline.run(reader.iter_chunks(stream, path or "stdin"))
    except HiliCatError as e:
        logger.debug(f"Skipping {path or 'stdin'}: {e}")
        report_error(e.message)
        return False

    if not ok:
        report_error(getattr(pipeline.error, "message", None) or str(pipeline.error))
    return ok


def process_stdin(
    reader: ChunkReader,
    config: HighlightConfig,
    language: str,
    line_ending_mode: str,
    options: Options,
    sink,
) -> bool:
    """Handle input from standard input."""
    if not language:
        report_error(_("--lang is required when reading from stdin"))
        return False
    return highlight_source(reader, "", config, language, line_ending_mode, options, sink)


def process_files(
    reader: ChunkReader,
    config: HighlightConfig,
    files: Sequence[str],
    language_override: str,
    line_ending_mode: str,
    options: Options,
    sink,
) -> bool:
    """
    Handle input from multiple files, one highlighter per file.

    A file that fails is reported and skipped; the others still run.
    """
    all_ok = True
    for file_path in files:
        if getattr(sink, "closed", False):
            break

        language = language_override or detect_language(config, file_path)
        if not language:
            report_error(
                _("Could not determine language for {}. Use --lang flag.").format(file_path)
            )
            all_ok = False
            continue

        if not highlight_source(
            reader, file_path, config, language, line_ending_mode, options, sink
        ):
            all_ok = False
    return all_ok


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    if argv is None:
        argv = sys.argv[1:]

    # Use a separate parser to handle debug/log flags before anything is logged
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--debug", "-d", action="store_true")
    pre_parser.add_argument("--log-level")
    pre_args, _remaining = pre_parser.parse_known_args(argv)

    if pre_args.debug:
        enable_debug_mode()
    elif pre_args.log_level:
        try:
            set_console_log_level(pre_args.log_level)
        except KeyError:
            print(f"Warning: Invalid log level '{pre_args.log_level}' provided.", file=sys.stderr)

    logger = get_logger("hilicat.main")

    try:
        import setproctitle

        setproctitle.setproctitle(AppConstants.APP_NAME)
    except Exception as e:
        logger.debug(f"Failed to set process title: {e}")

    args = build_parser().parse_args(argv)
    log_app_start()

    try:
        config = load_configuration(args.config)
    except ConfigError as e:
        report_error(e.message)
        return 1

    options = build_options(args)
    reader = ChunkReader(StreamDefaults.BUFFER_SIZE)
    sink = open_sink(args.pager)

    try:
        if args.files:
            ok = process_files(
                reader, config, args.files, args.lang, args.line_ending, options, sink
            )
        else:
            ok = process_stdin(reader, config, args.lang, args.line_ending, options, sink)
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130
    except Exception as e:
        handle_exception(e, "processing input", "hilicat.main")
        return 1
    finally:
        sink.close()

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
