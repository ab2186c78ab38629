"""CLI for SeedPass: test a password, suggest seeded passwords, run the HTTP API."""

import argparse
import logging
from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .breach import PwnedPasswordsOracle
from .config import load_config, save_config, config_path, DEFAULTS
from .errors import SeedPassError
from .evaluator import evaluate_password
from .suggestions import SuggestionController

logger = logging.getLogger("seedpass")

def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )

def _print_feedback(feedback):
    if feedback.get("warning"):
        print(f"[yellow]Warning:[/yellow] {escape(feedback['warning'])}")
    if feedback.get("suggestions"):
        print("[bold]Suggestions:[/bold]")
        for s in feedback["suggestions"]:
            print(f" • {escape(s)}")

def cmd_test(args):
    cfg = load_config(args.config)
    result = evaluate_password(args.password, PwnedPasswordsOracle.from_config(cfg))
    header = f"Strength: {result['strength_score']} / 4"
    if result["pwned"]:
        body = f"[red]Found in breaches {result['pwned_count']:,} times.[/red]"
    else:
        body = "[green]Not found in the breach corpus.[/green]"
    print(Panel(body, title=header))
    _print_feedback(result["strength_feedback"])

def cmd_suggest(args):
    cfg = load_config(args.config)
    controller = SuggestionController(
        PwnedPasswordsOracle.from_config(cfg),
        max_attempts=int(cfg["max_attempts"]),
        hash_name=cfg["hash_name"],
    )
    length = args.length or int(cfg["default_length"])
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", width=4)
    table.add_column("Suggested password")
    table.add_column("Score", justify="right")
    table.add_column("Attempts", justify="right")
    for i in range(args.copies):
        result = controller.suggest(args.seed, length=length, use_symbols=args.symbols)
        attempts = f"{result.attempts_used}" + (" (fallback)" if result.exhausted else "")
        table.add_row(str(i + 1), escape(result.password), f"{result.strength['score']} / 4", attempts)
    print(table)

def cmd_serve(args):
    from .spweb.api import app
    if args.config:
        app.config["SEEDPASS"] = load_config(args.config)
    app.run(host=args.host, port=args.port, debug=args.debug)

def cmd_init_config(args):
    path = args.config or config_path()
    save_config(DEFAULTS.copy(), path)
    print(f"[green]Wrote default settings to:[/green] {path}")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seedpass")
    parser.add_argument("--config", "-c", type=str, help="Path to settings JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    t = sub.add_parser("test", help="Score a password and check it against known breaches")
    t.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    t.set_defaults(func=cmd_test)

    s = sub.add_parser("suggest", help="Suggest seeded passwords not found in breaches")
    s.add_argument("seed", type=str, help="Memorable seed to derive from")
    s.add_argument("--length", type=int, default=None, help="Password length")
    s.add_argument("--symbols", action="store_true", help="Include symbols")
    s.add_argument("--copies", type=int, default=1, help="How many suggestions to produce")
    s.set_defaults(func=cmd_suggest)

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=5000)
    srv.add_argument("--debug", action="store_true")
    srv.set_defaults(func=cmd_serve)

    ic = sub.add_parser("init-config", help="Write a settings file with the defaults")
    ic.set_defaults(func=cmd_init_config)
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except (SeedPassError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"[red]{type(e).__name__}: {e}[/red]")
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
