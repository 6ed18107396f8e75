#!/usr/bin/env python3
# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "typer>=0.15",
#     "rich",
#     "platformdirs",
#     "readchar",
#     "httpx",
#     "truststore>=0.10.4",
#     "jinja2",
# ]
# ///
"""
c-init - scaffold a new C project

Usage:
    c-init my-project
    c-init --cc gcc -s strictest my-project
    c-init -i
    c-init --force .

Generates a Makefile, compile_flags.txt, .clang-tidy, README, a hello world
and (optionally) acutest-based tests, then initializes a git repository.
"""


import sys
from typing import Optional

import typer
from rich.live import Live
from rich.markup import escape
from typer.core import TyperCommand

from . import vendor
from .display import PLAIN, DisplayOptions, error, info, make_console, muted, success, warn
from .errors import CancellationError, CInitError, HelpRequested, UsageError
from .options import RawOptions, ResolvedConfig
from .progress import StepTracker
from .resolver import ConfigResolver
from .scaffold import init_git_repo, write_project
from .templates import render_project
from .wizard import WizardController

__version__ = "0.3.0"

BANNER = """
┌─┐   ┬┌┐┌┬┌┬┐
│  ── │││││ │
└─┘   ┴┘└┘┴ ┴
"""

TAGLINE = "Scaffold a new C project"

GENERATION_STEPS = [
    ("resolve", "Resolve configuration"),
    ("fetch", "Fetch acutest.h"),
    ("write", "Write project files"),
    ("git", "Initialize git repository"),
    ("final", "Finalize"),
]


def _click_exceptions():
    """The exceptions module of the click that typer's parser raises from.

    Recent typer releases bundle their own copy of click, whose errors do
    not derive from the standalone package's classes.
    """
    usage_error = next(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "UsageError")
    return sys.modules[usage_error.__module__]


click_exceptions = _click_exceptions()


def _usage_message(exc) -> str:
    if isinstance(exc, click_exceptions.NoSuchOption):
        return f"Unknown option: {exc.option_name}"
    if isinstance(exc, click_exceptions.BadOptionUsage) and "requires an argument" in exc.format_message():
        return f"{exc.option_name} requires a value"
    return exc.format_message()


class InitCommand(TyperCommand):
    """Command that shows the banner in help and reports usage errors with exit 1."""

    def format_help(self, ctx, formatter):
        formatter.write(BANNER.lstrip("\n"))
        formatter.write(f"{TAGLINE}\n\n")
        super().format_help(ctx, formatter)

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click_exceptions.UsageError as e:
            error(PLAIN, _usage_message(e))
            typer.echo(err=True)
            typer.echo(self.get_help(ctx), err=True)
            raise typer.Exit(UsageError.exit_code)


app = typer.Typer(
    name="c-init",
    help="Scaffold a new C project",
    add_completion=False,
    rich_markup_mode=None,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _fail(display: DisplayOptions, exc: CInitError) -> None:
    error(display, str(exc))
    raise typer.Exit(exc.exit_code)


def _version_callback(value: bool):
    if value:
        typer.echo(f"c-init {__version__}")
        raise typer.Exit()


def print_next_steps(display: DisplayOptions, config: ResolvedConfig, platform: str) -> None:
    info(display, f"{success('Created')} project '{escape(config.name)}' at {escape(config.path)} (using {escape(config.actual_compiler)})")
    info(display)
    info(display, "Next steps:")
    info(display, f"  make         {muted('# debug build')}")
    info(display, f"  make run     {muted('# build+run')}")
    info(display, f"  make watch   {muted('# run in watch mode')}")
    if not config.skip_tests:
        info(display, f"  make test    {muted('# build and run tests')}")
    info(display, f"  make release {muted('# release build')}")
    info(display, "\nHappy Hacking!")

    if platform == "darwin" and config.actual_compiler.startswith("gcc"):
        warn(
            display,
            muted("Sanitizers may fail with GCC on macOS (ASan runtime missing). Prefer clang for 'make sanitize'."),
        )


@app.command(cls=InitCommand)
def init(
    ctx: typer.Context,
    path: Optional[str] = typer.Argument(None, help="Project directory (defaults to the current directory)"),
    name: Optional[str] = typer.Option(None, "--name", help="Project name (defaults to directory name)"),
    cc: Optional[str] = typer.Option(None, "--cc", help="Compiler: clang (default) or gcc"),
    strictness: Optional[str] = typer.Option(None, "-s", "--strictness", help="loose | strict (default) | strictest"),
    linter_strictness: Optional[str] = typer.Option(None, "--linter-strictness", help="loose | strict | strictest (overrides -s for lint only)"),
    color: Optional[str] = typer.Option(None, "--color", help="Color: auto (default) | always | never"),
    force: bool = typer.Option(False, "-f", "--force", help="Allow non-empty directory"),
    no_git: bool = typer.Option(False, "--no-git", help="Skip git init and .gitignore"),
    no_commit: bool = typer.Option(False, "--no-commit", help="Skip initial git commit"),
    no_hello: bool = typer.Option(False, "--no-hello", help="Skip generating src/main.c"),
    no_tests: bool = typer.Option(False, "--no-tests", help="Skip generating tests and vendoring acutest"),
    interactive: bool = typer.Option(False, "-i", "--interactive", help="Run interactive wizard"),
    version: Optional[bool] = typer.Option(None, "-V", "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
):
    """
    Create a new C project in PATH.

    Examples:
        c-init my-project
        c-init --cc gcc -s strictest my-project
        c-init --linter-strictness loose --no-tests my-project
        c-init -i
        c-init --force .
    """
    # Flags can only switch toggles on, so "not given" stays unset for the wizard.
    # An empty --name or path counts as not given.
    raw = RawOptions(
        name=name or None,
        path=path or None,
        cc=cc,
        strictness=strictness,
        linter_strictness=linter_strictness,
        color=color,
        force=force or None,
        skip_git=no_git or None,
        skip_commit=no_commit or None,
        skip_hello=no_hello or None,
        skip_tests=no_tests or None,
        interactive=interactive,
    )

    resolver = ConfigResolver()
    try:
        display = resolver.resolve_display(raw)
    except CInitError as e:
        _fail(PLAIN, e)

    try:
        resolver.check_help(raw)
        if raw.interactive:
            raw = WizardController(display).run(raw)
        config = resolver.resolve(raw, display)
        header = None if config.skip_tests else vendor.fetch_header(display=display)
    except HelpRequested:
        typer.echo(ctx.get_help())
        raise typer.Exit(HelpRequested.exit_code)
    except CancellationError as e:
        info(display, escape(str(e)))
        raise typer.Exit(e.exit_code)
    except KeyboardInterrupt:
        info(display, "\n[yellow]Selection cancelled[/yellow]")
        raise typer.Exit(CancellationError.exit_code)
    except CInitError as e:
        _fail(display, e)

    files = render_project(config)

    tracker = StepTracker(f"Create {config.name}", GENERATION_STEPS)
    tracker.complete("resolve", f"{config.compiler.value}, {config.strictness.value}, lint {config.linter_strictness.value}")
    if header is None:
        tracker.skip("fetch", "--no-tests")
    else:
        tracker.complete("fetch", f"{len(header):,} bytes")

    console = make_console(display)
    write_error: Optional[OSError] = None
    with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
        tracker.on_change = lambda: live.update(tracker.render())
        tracker.start("write")
        try:
            written = write_project(config.target, files, header, vendor.HEADER_PATH)
        except OSError as e:
            write_error = e
            tracker.error("write", str(e))
            tracker.error("final", "aborted")
        else:
            tracker.complete("write", f"{len(written)} files")

        if write_error is None:
            if config.skip_git:
                tracker.skip("git", "--no-git flag")
            else:
                tracker.start("git")
                result = init_git_repo(config.target, commit=not config.skip_commit)
                if result.status in ("failed", "unavailable"):
                    tracker.error("git", result.detail)
                elif result.status == "existing":
                    tracker.skip("git", result.detail)
                else:
                    tracker.complete("git", result.detail)
            tracker.complete("final", "project ready")

    console.print(tracker.render())
    if write_error is not None:
        error(display, f"failed to write {write_error.filename or config.path}: {write_error.strerror or write_error}")
        raise typer.Exit(1)
    if tracker.status("git") == "error":
        warn(display, "git repository was not initialized")

    info(display)
    print_next_steps(display, config, resolver.platform)


def main():
    app()


if __name__ == "__main__":
    main()
