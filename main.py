#!/usr/bin/env python3
"""
Route Scanner
=============
Static route discovery for web-application source trees.

Detects the framework (Next.js, Remix, React Router, Express, or a generic
fallback), extracts every statically visible route and sorts each one into
public / protected / api with the auth behaviour a security test should
expect.

Usage: python main.py [OPTIONS] <path>
"""

import argparse
import logging
import os
import sys
from typing import Optional

# =============================================================================
# DEPENDENCY CHECK
# =============================================================================
REQUIRED = {"rich": "rich>=13.7.0", "dotenv": "python-dotenv>=1.0.0", "yaml": "pyyaml>=6.0"}


def check_deps():
    missing = []
    for mod, pkg in REQUIRED.items():
        try:
            __import__(mod)
        except ImportError:
            missing.append(pkg)
    if missing:
        print(f"\nMissing: pip install {' '.join(missing)}\n")
        sys.exit(1)


check_deps()

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from route_scanner import ConfigError, ProjectScanner, ScannerConfig, __version__
from route_scanner.report import make_routes_table, make_summary, to_json, write_json

load_dotenv()
console = Console()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================
def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure logging for the scanner."""
    logger = logging.getLogger("route_scanner")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)  # Only warnings and errors to console
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            datefmt='%Y-%m-%dT%H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger


# =============================================================================
# MAIN CLI
# =============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Route Scanner v{__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py ./my-app                        # Scan and print a summary
  python main.py ./my-app -o routes.json         # Also write the JSON route model
  python main.py ./my-app --json                 # Print JSON only
  python main.py ./my-app --strict               # Exit 1 if no routes were discovered
        """
    )
    parser.add_argument("target", nargs="?", default=".", help="Project directory to scan")

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument("-o", "--output", help="Write the route model as JSON to this file")
    output_group.add_argument("--json", action="store_true", help="Print the route model as JSON")

    scan_group = parser.add_argument_group("Scan Options")
    scan_group.add_argument("--config", metavar="FILE", help="Configuration file (JSON/YAML)")
    scan_group.add_argument("--base-url", help="Override the inferred base URL")
    scan_group.add_argument("--login-url", help="Override the inferred login URL")
    scan_group.add_argument("--no-defaults", action="store_true",
                            help="Do not inject placeholder routes when nothing is discovered")
    scan_group.add_argument("--strict", action="store_true",
                            help="Exit with error if no routes were discovered")

    parser.add_argument("--log-file", metavar="FILE", help="Write a JSON-lines debug log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    return parser


def main():
    args = build_parser().parse_args()
    setup_logging("DEBUG" if args.verbose else "INFO", args.log_file)

    if not os.path.isdir(args.target):
        console.print(f"[red]Error: {args.target} is not a directory[/red]")
        sys.exit(1)

    try:
        config = ScannerConfig.from_file(args.config) if args.config else ScannerConfig.from_env()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if args.base_url:
        config.base_url = args.base_url
    if args.login_url:
        config.login_url = args.login_url
    if args.no_defaults:
        config.inject_defaults = False

    if not (args.quiet or args.json):
        console.print(Panel.fit(
            f"[bold cyan] Route Scanner v{__version__}[/bold cyan]\n"
            "[dim]Next.js | Remix | React Router | Express | Static[/dim]",
            border_style="cyan"
        ))

    try:
        result = ProjectScanner(args.target, config).scan()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)

    if args.json:
        print(to_json(result))
    elif not args.quiet:
        console.print(make_summary(result))
        console.print(make_routes_table(list(result.routes)))

    if args.output:
        path = write_json(result, args.output)
        if not (args.quiet or args.json):
            console.print(f"\n[green] Saved: {path}[/green]")

    if args.strict and result.discovered_count == 0:
        if not (args.quiet or args.json):
            console.print("\n[bold red] Failed: no routes discovered[/bold red]")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
