from __future__ import annotations

import os
from pathlib import Path

import typer
from typer.core import TyperCommand

from relkit.core.config import load_settings
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.output.console import RichConsole, Style
from relkit.output.errors import pipeline_exit_code, print_aborted
from relkit.release.args import parse_arguments, usage
from relkit.release.model import Aborted, Stage
from relkit.release.pipeline import run_release

ROOT_ENV_VAR = "RELKIT_ROOT"
_RAW_ARGS_KEY = "relkit.raw_args"

app = typer.Typer(add_completion=False)


def project_root() -> Path:
    """Project to release: $RELKIT_ROOT when set, else the current directory."""
    env = os.environ.get(ROOT_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


class RawArgsCommand(TyperCommand):
    """Keeps the argv tokens exactly as given.

    click drops a bare ``--`` while parsing, so ``ctx.args`` cannot be trusted
    to carry every token.
    """

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        ctx.meta[_RAW_ARGS_KEY] = list(args)
        return super().parse_args(ctx, args)


# Flags are parsed by parse_arguments, not click: the CLI contract is exactly
# --draft / --dry-run / -h / --help, with exit 1 on anything else.
@app.command(
    cls=RawArgsCommand,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
def release(ctx: typer.Context) -> None:
    """Build, package and publish a GitHub release."""
    console = RichConsole()

    parsed = parse_arguments(ctx.meta.get(_RAW_ARGS_KEY, ctx.args))
    if isinstance(parsed, Err):
        aborted = Aborted(stage=Stage.ARGUMENTS, error=parsed.error)
        print_aborted(aborted, console)
        raise typer.Exit(code=pipeline_exit_code(aborted))

    run = parsed.value
    if run.show_help:
        typer.echo(usage())
        raise typer.Exit(code=int(ErrorCode.OK))

    root = project_root()
    settings = load_settings(root)
    if isinstance(settings, Err):
        console.error(f"[configuration] {settings.error.message}")
        if settings.error.path is not None:
            console.print(f"hint: fix or remove {settings.error.path}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    result = run_release(root=root, run=run, settings=settings.value, console=console)
    if isinstance(result, Err):
        print_aborted(result.error, console)
        raise typer.Exit(code=pipeline_exit_code(result.error))

    console.success("Process completed successfully!")


def main() -> None:
    app()
