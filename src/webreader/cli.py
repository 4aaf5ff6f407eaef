"""Command-line interface for webreader."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown

from . import __version__
from .core.reader import WebReader
from .http import TransportError, TransportHttpError
from .logging_config import setup_logging
from .models.config import ReaderConfig
from .models.results import MarkdownResult


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="webreader",
        description="Read a web page and print its main content as Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the main content of a page as Markdown
  webreader https://example.com/blog/post

  # Save to a file, with a shorter timeout
  webreader https://example.com --timeout 5 -o page.md

  # Show detection metadata as JSON
  webreader https://example.com --json

Note: TLS certificates are NOT verified by default so that self-signed and
internal sites can be read. Set network.verify_ssl in a config file to
turn verification on.
        """,
    )

    parser.add_argument(
        "url",
        help="URL to read",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )

    # Network settings
    network_group = parser.add_argument_group("network settings")
    network_group.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Request timeout (default: 10)",
    )
    network_group.add_argument(
        "--user-agent",
        type=str,
        help="Custom User-Agent string",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write Markdown to FILE instead of stdout",
    )
    output_group.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the result with its metadata as JSON",
    )
    output_group.add_argument(
        "--render",
        action="store_true",
        help="Pretty-print the Markdown in the terminal",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress status output",
    )

    return parser


def build_config(args: argparse.Namespace) -> ReaderConfig:
    """Build reader configuration from a config file and CLI overrides."""
    if args.config:
        config = ReaderConfig.from_yaml_file(args.config)
    else:
        config = ReaderConfig()

    network_kwargs: dict = {}
    if args.timeout is not None:
        network_kwargs["timeout"] = args.timeout
    if args.user_agent:
        network_kwargs["user_agent"] = args.user_agent

    config_kwargs: dict = {}
    if network_kwargs:
        config_kwargs["network"] = {**config.network.model_dump(), **network_kwargs}

    if args.verbose:
        config_kwargs["log_level"] = "DEBUG"
    elif args.quiet:
        config_kwargs["log_level"] = "ERROR"

    if config_kwargs:
        config = ReaderConfig.model_validate({**config.model_dump(), **config_kwargs})
    return config


def describe_error(error: TransportError) -> str:
    """Human-readable description of a transport failure."""
    if isinstance(error, TransportHttpError):
        return f"HTTP error {error.status_code}"
    return f"{error.kind.replace('_', ' ')}: {error}"


def write_result(result: MarkdownResult, args: argparse.Namespace, console: Console) -> None:
    """Emit the result according to the output options."""
    if args.as_json:
        text = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    else:
        text = result.markdown

    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        if not args.quiet:
            console.print(f"[green]Saved:[/green] {args.output}")
        return

    if args.render and not args.as_json:
        Console().print(Markdown(result.markdown))
        return

    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def run_reader(args: argparse.Namespace) -> int:
    """Run the reader with given arguments."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except (ValidationError, OSError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
    )

    async def run() -> MarkdownResult:
        async with WebReader(config) as reader:
            return await reader.read(args.url)

    try:
        if args.quiet:
            result = asyncio.run(run())
        else:
            with console.status(f"[cyan]Reading {args.url}"):
                result = asyncio.run(run())
    except TransportError as e:
        console.print(f"[red]Error:[/red] {describe_error(e)}")
        return 1

    if not args.quiet:
        console.print(
            f"[bold blue]webreader[/bold blue] {result.source_url} "
            f"[dim]({result.detection_method.value}, {len(result.markdown)} chars)[/dim]"
        )

    write_result(result, args, console)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_reader(args)


if __name__ == "__main__":
    sys.exit(main())
