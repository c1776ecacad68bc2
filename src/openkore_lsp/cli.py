"""
CLI entry point for openkore-lsp.

Usage:
    openkore-lsp serve                     Run the language server on stdio
    openkore-lsp serve --tcp --port 2087   Run the language server on TCP
    openkore-lsp lint <file>...            Print diagnostics for config files
    openkore-lsp parse <file>              Show the parsed config as YAML
    openkore-lsp symbols <file>            Show the document outline
"""

import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import yaml

from openkore_lsp import __version__

logger = logging.getLogger(__name__)


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8-sig", errors="replace")


def _load_registry(args):
    """Grammar from --grammar or the config file. Errors propagate to main()."""
    from .grammar import get_default_grammar, load_grammar

    path = args.grammar or args.config.grammar_path
    return load_grammar(path) if path else get_default_grammar()


def cmd_serve(args):
    """Run the language server."""
    from .server import create_server
    from .session import Session, create_session

    # An explicit --grammar must load; a configured one falls back to the bundled table
    if args.grammar:
        session = Session(_load_registry(args), args.config)
    else:
        session = create_session(args.config)
    server = create_server(session)

    if args.tcp:
        logger.info("Listening on %s:%d", args.host, args.port)
        server.start_tcp(args.host, args.port)
    else:
        server.start_io()
    return 0


def cmd_lint(args):
    """Validate files, choosing the dialect from each file name."""
    from .session import Session

    session = Session(_load_registry(args), args.config)
    total = 0

    for path in args.files:
        uri = Path(path).resolve().as_uri()
        session.open(uri, _read(path))
        for diagnostic in session.diagnostics(uri):
            print(f"{path}:{diagnostic}")
            total += 1
        session.close(uri)

    if total:
        print(f"\n{total} issues found")
        return 1

    print("No issues found")
    return 0


def cmd_parse(args):
    """Parse a file and print the result as YAML."""
    from .parser import parse_config
    from .validators import FileType, parse_item_control, parse_monster_control

    text = _read(args.file)
    file_type = _file_type(args)

    if file_type is FileType.ITEMS_CONTROL:
        entries = [parse_item_control(line) for line in text.split("\n")]
        result = [asdict(e) for e in entries if e is not None]
    elif file_type is FileType.MONSTER_CONTROL:
        entries = [parse_monster_control(line) for line in text.split("\n")]
        result = [asdict(e) for e in entries if e is not None]
    else:
        result = parse_config(text)

    print(yaml.safe_dump(result, sort_keys=False, allow_unicode=True), end="")
    return 0


def _file_type(args):
    from .validators import classify

    return classify(
        args.file,
        items_suffix=args.config.items_control_suffix,
        monster_suffix=args.config.monster_control_suffix,
    )


def cmd_symbols(args):
    """Print the document outline."""
    from .symbols import extract_symbols

    for symbol in extract_symbols(_read(args.file)):
        print(f"{symbol.line + 1:>5}  {symbol.kind.value:<8}  {symbol.name}  ({symbol.container_name})")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    from .config import ServerConfig
    from .grammar import GrammarError

    parser = argparse.ArgumentParser(
        prog="openkore-lsp",
        description="OpenKore config language server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    openkore-lsp serve
    openkore-lsp lint control/config.txt control/items_control.txt
    openkore-lsp parse control/mon_control.txt
    openkore-lsp symbols control/config.txt
"""
    )
    parser.add_argument("--version", action="version", version=f"openkore-lsp {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="Config YAML file")
    parser.add_argument("--grammar", type=Path, default=None, help="Grammar YAML file")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve
    serve_p = subparsers.add_parser("serve", help="Run the language server")
    serve_p.add_argument("--tcp", action="store_true", help="Use TCP instead of stdio")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=2087)
    serve_p.set_defaults(func=cmd_serve)

    # lint
    lint_p = subparsers.add_parser("lint", help="Validate config files")
    lint_p.add_argument("files", nargs="+", help="Files to validate")
    lint_p.set_defaults(func=cmd_lint)

    # parse
    parse_p = subparsers.add_parser("parse", help="Parse a config file")
    parse_p.add_argument("file", help="File to parse")
    parse_p.set_defaults(func=cmd_parse)

    # symbols
    symbols_p = subparsers.add_parser("symbols", help="Show the document outline")
    symbols_p.add_argument("file", help="File to outline")
    symbols_p.set_defaults(func=cmd_symbols)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    args.config = ServerConfig(args.config)
    # stdout carries the LSP stream when serving
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, (args.log_level or args.config.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Configuration: %s", args.config.to_dict())

    try:
        return args.func(args)
    except (OSError, yaml.YAMLError, GrammarError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
