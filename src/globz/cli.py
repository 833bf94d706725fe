"""Command-line interface for globz."""

import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .api import GlobMode, compile_glob, describe, lists_everything
from .config import Config, ConfigError, load_config, write_default_config
from .glob.compiler import glob_path_to_regexp
from .glob.dirglobs import glob_to_dir_globs
from .glob.errors import GlobError
from .log import setup_logger


app = typer.Typer(
    name="globz",
    help="Compile extended globs to regular expressions and work out which directories a walk must list",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _default_config_path() -> Path:
    return Path.home() / ".config" / "globz" / "config.toml"


def _write_lines(lines: List[str]) -> None:
    """Write raw lines to stdout, bypassing rich markup."""
    for line in lines:
        sys.stdout.write(line)
        sys.stdout.write("\n")
    sys.stdout.flush()


def _report_glob_error(error: GlobError) -> None:
    """Print a glob error with a caret under the offending character."""
    logger.debug(f"glob error: {error!r}")
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    if error.offset is not None:
        err_console.print(f"  {escape(error.pattern)}", highlight=False)
        err_console.print("  " + " " * error.offset + "[red]^[/red]")


def _resolve(
    config: Config,
    string: Optional[bool],
    anchor: Optional[bool],
    ignore_case: Optional[bool],
) -> Tuple[str, bool, bool]:
    """Merge command line flags over the configured defaults."""
    if string is None:
        mode = config.mode
    else:
        mode = GlobMode.STRING if string else GlobMode.PATH
    return (
        mode,
        config.anchor if anchor is None else anchor,
        config.ignore_case if ignore_case is None else ignore_case,
    )


def _use_json(config: Config, json_output: Optional[bool]) -> bool:
    return config.json if json_output is None else json_output


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Config file (default: $GLOBZ_CONFIG or ~/.config/globz/config.toml)"
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Show debug logging"
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Also write a debug log under this directory"
    ),
) -> None:
    setup_logger(level="DEBUG" if verbose else "WARNING", log_root=log_dir)
    try:
        ctx.obj = load_config(config_path)
    except ConfigError as e:
        logger.debug(f"config error: {e}")
        err_console.print(f"[bold red]Config error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2)


@app.command()
def regex(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help="Glob pattern"),
    string: Optional[bool] = typer.Option(
        None,
        "--string/--path",
        help="Compile as a plain string glob instead of a path glob"
    ),
    anchor: Optional[bool] = typer.Option(
        None,
        "--anchor/--no-anchor",
        help="Anchor a string glob at both ends (path globs always are)"
    ),
    ignore_case: Optional[bool] = typer.Option(
        None,
        "--ignore-case/--match-case",
        "-i/-I",
        help="Match case-insensitively"
    ),
) -> None:
    """Print the regular expression a glob compiles to."""
    mode, anchor, ignore_case = _resolve(ctx.obj, string, anchor, ignore_case)
    try:
        matcher = compile_glob(pattern, mode=mode, anchor=anchor, ignore_case=ignore_case)
    except GlobError as e:
        _report_glob_error(e)
        raise typer.Exit(2)
    _write_lines([matcher.regex])


@app.command()
def match(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help="Glob pattern"),
    candidates: List[str] = typer.Argument(..., help="Paths or strings to test"),
    string: Optional[bool] = typer.Option(
        None,
        "--string/--path",
        help="Compile as a plain string glob instead of a path glob"
    ),
    anchor: Optional[bool] = typer.Option(
        None,
        "--anchor/--no-anchor",
        help="Anchor a string glob at both ends (path globs always are)"
    ),
    ignore_case: Optional[bool] = typer.Option(
        None,
        "--ignore-case/--match-case",
        "-i/-I",
        help="Match case-insensitively"
    ),
    json_output: Optional[bool] = typer.Option(
        None,
        "--json/--text",
        help="Output JSON"
    ),
) -> None:
    """Test candidates against a glob. Exits with 1 if none matched."""
    mode, anchor, ignore_case = _resolve(ctx.obj, string, anchor, ignore_case)
    try:
        matcher = compile_glob(pattern, mode=mode, anchor=anchor, ignore_case=ignore_case)
    except GlobError as e:
        _report_glob_error(e)
        raise typer.Exit(2)

    results = [(c, matcher.matches(c)) for c in candidates]
    logger.debug(f"{sum(ok for _, ok in results)}/{len(results)} candidates matched {matcher.regex!r}")

    if _use_json(ctx.obj, json_output):
        payload = {
            "pattern": pattern,
            "regex": matcher.regex,
            "results": [{"candidate": c, "matches": ok} for c, ok in results],
        }
        _write_lines([json.dumps(payload, ensure_ascii=False, indent=2)])
    else:
        for candidate, ok in results:
            status = "[green]match[/green]   " if ok else "[dim]no match[/dim]"
            console.print(f"{status} {escape(candidate)}", highlight=False)

    if not any(ok for _, ok in results):
        raise typer.Exit(1)


@app.command()
def dirs(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help="Path glob"),
    json_output: Optional[bool] = typer.Option(
        None,
        "--json/--text",
        help="Output JSON"
    ),
) -> None:
    """Print the directory globs a walk must list, deepest first."""
    try:
        glob_path_to_regexp(pattern)
    except GlobError as e:
        _report_glob_error(e)
        raise typer.Exit(2)

    dir_globs = glob_to_dir_globs(pattern)
    if _use_json(ctx.obj, json_output):
        payload = {
            "pattern": pattern,
            "dir_globs": dir_globs,
            "lists_everything": lists_everything(pattern),
        }
        _write_lines([json.dumps(payload, ensure_ascii=False, indent=2)])
    else:
        _write_lines(dir_globs)


@app.command()
def check(
    ctx: typer.Context,
    patterns: List[str] = typer.Argument(..., help="Glob patterns to validate"),
    string: Optional[bool] = typer.Option(
        None,
        "--string/--path",
        help="Validate as plain string globs instead of path globs"
    ),
    anchor: Optional[bool] = typer.Option(
        None,
        "--anchor/--no-anchor",
        help="Anchor string globs at both ends"
    ),
    ignore_case: Optional[bool] = typer.Option(
        None,
        "--ignore-case/--match-case",
        "-i/-I",
        help="Match case-insensitively"
    ),
    json_output: Optional[bool] = typer.Option(
        None,
        "--json/--text",
        help="Output JSON"
    ),
) -> None:
    """Validate globs. Exits with 1 if any is malformed."""
    mode, anchor, ignore_case = _resolve(ctx.obj, string, anchor, ignore_case)
    results = [describe(p, mode=mode, anchor=anchor, ignore_case=ignore_case) for p in patterns]

    if _use_json(ctx.obj, json_output):
        _write_lines([json.dumps(results, ensure_ascii=False, indent=2)])
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Pattern", style="cyan")
        table.add_column("Valid", justify="center")
        table.add_column("Regex / error")
        for r in results:
            if r["valid"]:
                table.add_row(escape(r["pattern"]), "[green]yes[/green]", escape(r["regex"]))
            else:
                table.add_row(escape(r["pattern"]), "[red]no[/red]", f"[red]{escape(r['error'])}[/red]")
        console.print(table)

    if not all(r["valid"] for r in results):
        raise typer.Exit(1)


@app.command("init-config")
def init_config(
    path: Optional[Path] = typer.Argument(
        None,
        help="Where to write the config (default: ~/.config/globz/config.toml)"
    ),
) -> None:
    """Write the default configuration file."""
    target = write_default_config(path or _default_config_path())
    console.print(f"[green]Default config written to[/green] {escape(str(target))}")


if __name__ == "__main__":
    app()
