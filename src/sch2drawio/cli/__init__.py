"""
sch2drawio CLI - render schematic JSON exports as draw.io diagrams.

Usage:
    sch2drawio symbols <schematic.json> [style] [output_dir]
    sch2drawio render <schematic.json> [symbols_dir] [style] [output.drawio]
    sch2drawio restyle <symbols_dir> <old_style> <new_style> [--output-dir DIR]
    sch2drawio config [--show | --init | --paths]

Arguments left out fall back to the [render] and [symbols] sections of
.sch2drawio.toml, then to built-in defaults.

Examples:
    sch2drawio symbols top.json style.json ./symbols
    sch2drawio render top.json ./symbols style.json top.drawio
    sch2drawio restyle ./symbols old.json new.yaml
    sch2drawio config --show
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config import Config
from ..exceptions import Sch2DrawioError
from ..logging import enable_verbose
from ..render import Renderer, SymbolLibrary, restyle_dir
from ..schema import load_schematic, load_style
from . import config_cmd
from .utils import print_error

__all__ = ["main", "render_schematic_main", "render_symbols_main"]


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each render step")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")


def _build_parser():
    """Return the top-level parser and its subcommand parsers by name."""
    parser = argparse.ArgumentParser(
        prog="sch2drawio",
        description="Render schematic JSON exports as draw.io diagrams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    render_parser = subparsers.add_parser("render", help="Render a schematic page")
    render_parser.add_argument("schematic", nargs="?", help="Schematic JSON file")
    render_parser.add_argument("symbols_dir", nargs="?", help="Rendered symbol directory")
    render_parser.add_argument("style", nargs="?", help="Layer style file (JSON or YAML)")
    render_parser.add_argument("output", nargs="?", help="Output .drawio file")
    _add_common(render_parser)

    symbols_parser = subparsers.add_parser("symbols", help="Render the symbol library")
    symbols_parser.add_argument("schematic", nargs="?", help="Schematic JSON file")
    symbols_parser.add_argument("style", nargs="?", help="Layer style file (JSON or YAML)")
    symbols_parser.add_argument("output_dir", nargs="?", help="Output directory")
    _add_common(symbols_parser)

    restyle_parser = subparsers.add_parser("restyle", help="Restyle rendered symbols")
    restyle_parser.add_argument("symbols_dir", nargs="?", help="Rendered symbol directory")
    restyle_parser.add_argument("old_style", nargs="?", help="Style the symbols were rendered with")
    restyle_parser.add_argument("new_style", nargs="?", help="Style to apply")
    restyle_parser.add_argument(
        "--output-dir", help="Write restyled symbols here instead of in place"
    )
    _add_common(restyle_parser)

    config_parser = subparsers.add_parser("config", help="Show or create configuration")
    config_cmd.add_arguments(config_parser)

    commands = {
        "render": render_parser,
        "symbols": symbols_parser,
        "restyle": restyle_parser,
        "config": config_parser,
    }
    return parser, commands


def _run_symbols(args: argparse.Namespace, config: Config) -> int:
    style_path = args.style or config.symbols.style
    output_dir = Path(args.output_dir or config.symbols.output_dir)

    schematic = load_schematic(args.schematic)
    styles = load_style(style_path)
    library = Renderer(schematic, styles).render_symbols()
    written = library.write_to_dir(output_dir)

    if not args.quiet:
        print(f"Rendered {len(written)} symbols to {output_dir}")
    return 0


def _run_render(args: argparse.Namespace, config: Config) -> int:
    symbols_dir = args.symbols_dir or config.render.symbols_dir
    style_path = args.style or config.render.style
    output = Path(args.output or config.render.output)

    schematic = load_schematic(args.schematic)
    styles = load_style(style_path)
    library = SymbolLibrary.load_from_dir(symbols_dir)
    Renderer(schematic, styles).render_schematic_file(library).write(output)

    if not args.quiet:
        print(f"Schematic rendered to: {output}")
    return 0


def _run_restyle(args: argparse.Namespace, config: Config) -> int:
    old_styles = load_style(args.old_style)
    new_styles = load_style(args.new_style)
    restyled = restyle_dir(args.symbols_dir, old_styles, new_styles, args.output_dir)

    if not args.quiet:
        target = args.output_dir or args.symbols_dir
        print(f"Restyled {len(restyled)} symbols in {target}")
    return 0


# Positionals that must be present for each command
_REQUIRED = {
    "render": ("schematic",),
    "symbols": ("schematic",),
    "restyle": ("symbols_dir", "old_style", "new_style"),
}

_RUNNERS = {
    "render": _run_render,
    "symbols": _run_symbols,
    "restyle": _run_restyle,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sch2drawio command."""
    parser, commands = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    subparser = commands[args.command]
    verbose = getattr(args, "verbose", False)

    try:
        if args.command == "config":
            return config_cmd.run(args)

        config = Config.load()
        verbose = verbose or config.defaults.verbose
        args.quiet = args.quiet or config.defaults.quiet
        if verbose:
            enable_verbose("DEBUG")

        missing = [name for name in _REQUIRED[args.command] if getattr(args, name) is None]
        if missing:
            subparser.print_usage()
            return 0

        return _RUNNERS[args.command](args, config)
    except Sch2DrawioError as e:
        print_error(e, verbose=verbose)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


def render_schematic_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``render-schematic SCHEMATIC SYMBOLS_DIR [STYLE] [OUTPUT]``."""
    if argv is None:
        argv = sys.argv[1:]
    return main(["render", *argv])


def render_symbols_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``render-symbols SCHEMATIC [STYLE] [OUTPUT_DIR]``."""
    if argv is None:
        argv = sys.argv[1:]
    return main(["symbols", *argv])


if __name__ == "__main__":
    sys.exit(main())
