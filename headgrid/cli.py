"""Command-line interface for headgrid."""

from __future__ import annotations

import argparse
import json
import os
import sys
import tomllib

from pathlib import Path
from typing import TYPE_CHECKING, Any

from .exceptions import HeadGridException
from .log import configure, exception


if TYPE_CHECKING:
    from .config import HeadGridSettings


def main(argv: list[str] | None = None) -> int:
    """Run the main CLI entry point.

    Returns
    -------
    int
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="headgrid",
        description="Build grouped table header grids from column trees",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # leaves / grid commands share their input options
    for name, help_text in (
        ("leaves", "Print the data columns of a column tree in order"),
        ("grid", "Print the header grid of a column tree"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("file", type=str, help="Column tree as a .json or .toml file")
        sub.add_argument(
            "--strict",
            action="store_true",
            default=None,
            help="Reject empty groups, duplicate keys and cycles",
        )
        sub.add_argument(
            "--indent",
            type=int,
            default=2,
            help="JSON indentation (default: 2)",
        )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show or export configuration",
    )
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )
    config_group.add_argument(
        "--toml",
        action="store_true",
        help="Export configuration as TOML",
    )
    config_group.add_argument(
        "--env",
        action="store_true",
        help="Export configuration as environment variables",
    )
    config_group.add_argument(
        "--sources",
        action="store_true",
        help="Show configuration file sources",
    )
    config_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file path (default: stdout)",
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a headgrid.toml configuration file",
    )
    init_parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Overwrite existing configuration file",
    )
    init_parser.add_argument(
        "--path",
        "-p",
        type=str,
        default="headgrid.toml",
        help="Path for configuration file (default: headgrid.toml)",
    )

    args = parser.parse_args(argv)

    if args.command in ("leaves", "grid"):
        return handle_tree(args)
    if args.command == "config":
        return handle_config(args)
    if args.command == "init":
        return handle_init(args)
    parser.print_help()
    return 0


def load_column_file(path: Path) -> list[Any]:
    """Read declarative columns from a JSON or TOML file.

    The document is either a list of columns or a mapping with a
    ``columns`` list (the only form TOML allows at top level).

    Parameters
    ----------
    path : Path
        File to read; ``.toml`` files are parsed as TOML, anything else as JSON.

    Returns
    -------
    list
        The raw top-level column definitions.
    """
    text = path.read_text(encoding="utf-8")
    document = tomllib.loads(text) if path.suffix == ".toml" else json.loads(text)
    if isinstance(document, dict):
        document = document.get("columns")
    if not isinstance(document, list):
        raise HeadGridException("Expected a list of columns", file=str(path))
    return document


def handle_tree(args: argparse.Namespace) -> int:
    """Handle the leaves and grid commands.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments.

    Returns
    -------
    int
        Exit code.
    """
    from .config import get_settings
    from .header_rows import build_header_grid
    from .leaves import collect_leaves

    configure(get_settings().log)

    try:
        data = load_column_file(Path(args.file))
        if args.command == "leaves":
            output: Any = [leaf.to_dict() for leaf in collect_leaves(data, validate=args.strict)]
        else:
            grid = build_header_grid(data, validate=args.strict)
            output = [[cell.to_dict() for cell in row] for row in grid]
    except (OSError, ValueError, HeadGridException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except IndexError:
        exception("Header grid construction failed")
        print("Error: malformed column tree (empty group?)", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=args.indent, ensure_ascii=False))
    return 0


def handle_config(args: argparse.Namespace) -> int:
    """Handle the config command.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments.

    Returns
    -------
    int
        Exit code.
    """
    from .config import HeadGridSettings

    if args.sources:
        return show_config_sources()

    settings = HeadGridSettings()

    if args.toml:
        output = settings.to_toml()
    elif args.env:
        output = settings.to_env()
    else:
        output = format_config_show(settings)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Configuration written to {args.output}")
    else:
        print(output)

    return 0


def handle_init(args: argparse.Namespace) -> int:
    """Handle the init command.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments.

    Returns
    -------
    int
        Exit code.
    """
    from .config import HeadGridSettings

    path = Path(args.path)

    if path.exists() and not args.force:
        print(f"Error: {path} already exists. Use --force to overwrite.", file=sys.stderr)
        return 1

    header = """# headgrid Configuration File
#
# Environment variables can override any setting:
#   HEADGRID_LOG__LEVEL=DEBUG
#   HEADGRID_GRID__STRICT=true
#
# Use nested keys with __ (double underscore) delimiter.

"""
    path.write_text(header + HeadGridSettings().to_toml(), encoding="utf-8")
    print(f"Created {path}")

    return 0


def show_config_sources() -> int:
    """Show configuration file sources and their status.

    Returns
    -------
    int
        Exit code.
    """
    from .config import _user_config_path

    sources = [
        ("pyproject.toml [tool.headgrid]", Path("pyproject.toml")),
        ("./headgrid.toml", Path("headgrid.toml")),
        ("User config", _user_config_path().expanduser()),
    ]
    env_file = os.environ.get("HEADGRID_CONFIG_FILE")
    if env_file:
        sources.append(("HEADGRID_CONFIG_FILE", Path(env_file)))

    print("Configuration Sources (in order of precedence):\n")
    print(f"{'Source':<40} {'Status':<15} {'Path'}")
    print("-" * 80)
    print(f"{'Built-in defaults':<40} {'✓ Active':<15}")

    for name, path in sources:
        status = "✓ Found" if path.exists() else "✗ Not found"
        print(f"{name:<40} {status:<15} {path}")

    env_vars = [k for k in os.environ if k.startswith("HEADGRID_")]
    if env_vars:
        status = f"✓ {len(env_vars)} vars"
        shown = ", ".join(env_vars[:3]) + ("..." if len(env_vars) > 3 else "")
    else:
        status = "✗ No vars"
        shown = ""
    print(f"{'Environment variables':<40} {status:<15} {shown}")

    print("\nNote: Later sources override earlier ones.")
    return 0


def format_config_show(settings: HeadGridSettings) -> str:
    """Format configuration for display.

    Parameters
    ----------
    settings : HeadGridSettings
        The settings object to format.

    Returns
    -------
    str
        Formatted configuration string.
    """
    lines = ["headgrid Configuration\n" + "=" * 40 + "\n"]

    for section_name, section in (("log", settings.log), ("grid", settings.grid)):
        if lines[-1] != "":
            lines.append("")
        lines.append(f"[{section_name}]")
        for field, value in section.model_dump().items():
            lines.append(f"  {field} = {value!r}")

    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
