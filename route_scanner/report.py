"""
Report rendering: JSON for machines, rich tables for people.
"""

import json
from pathlib import Path
from typing import List

from rich import box
from rich.panel import Panel
from rich.table import Table

from .base import Bucket, ClassifiedRoute
from .scanner import ScanResult

MAX_TABLE_ROWS = 100


def to_json(result: ScanResult, indent: int = 2) -> str:
    return json.dumps(result.to_dict(), indent=indent)


def write_json(result: ScanResult, output_file: str) -> Path:
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(result), encoding="utf-8")
    return path


def fmt_bucket(bucket: Bucket) -> str:
    colors = {Bucket.PUBLIC: "green", Bucket.PROTECTED: "yellow", Bucket.API: "cyan"}
    color = colors.get(bucket, "white")
    return f"[{color}]{bucket.value}[/{color}]"


def fmt_expectation(route: ClassifiedRoute) -> str:
    if route.expected_redirect is not None:
        return f"-> {route.expected_redirect}"
    return str(route.expected_status)


def make_routes_table(routes: List[ClassifiedRoute]) -> Table:
    t = Table(title=" Discovered Routes", box=box.ROUNDED, header_style="bold magenta")
    t.add_column("#", style="dim", width=4)
    t.add_column("Bucket", width=10)
    t.add_column("Method", width=8)
    t.add_column("URL", max_width=40)
    t.add_column("Auth", width=6)
    t.add_column("Expect", width=12)
    t.add_column("Found By", style="dim", width=16)
    t.add_column("File", style="dim", max_width=30)

    for i, route in enumerate(routes[:MAX_TABLE_ROWS], 1):
        url = route.url[:37] + "..." if len(route.url) > 40 else route.url
        t.add_row(
            str(i), fmt_bucket(route.bucket), route.method, url,
            "yes" if route.requires_auth else "no", fmt_expectation(route),
            route.discovery_method.value, Path(route.source_file).name if route.source_file else "-",
        )

    if len(routes) > MAX_TABLE_ROWS:
        t.add_row("...", "", "", f"... +{len(routes) - MAX_TABLE_ROWS} more", "", "", "", "")

    return t


def make_summary(result: ScanResult) -> Panel:
    counts = result.routes.counts()
    framework = result.framework
    version = f" {framework.version}" if framework.version else ""

    txt = f"""
[bold cyan] Scan Summary[/bold cyan]

[bold]Framework:[/bold] {framework.name.value}{version} ([dim]{result.adapter.value} adapter[/dim])
[bold]Base URL:[/bold] {result.config['baseURL']}
[bold]Login URL:[/bold] {result.config['loginURL']}

[bold cyan]Routes:[/bold cyan]
   Public: {counts['public']}
   Protected: {counts['protected']}
   API: {counts['api']}
   Discovered: {result.discovered_count}
"""
    if result.defaults_injected:
        txt += "\n[yellow]No routes discovered - default placeholder routes were used[/yellow]\n"
    for warning in result.warnings:
        txt += f"\n[yellow]Warning:[/yellow] {warning}"

    return Panel(txt, border_style="cyan")
