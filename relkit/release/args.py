from __future__ import annotations

from collections.abc import Sequence

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import ArgumentError, UnknownOption
from relkit.release.model import RunConfig

USAGE = """\
Usage: {prog} [OPTIONS]
Options:
  --draft     Create a draft release
  --dry-run   Show what would be done without executing
  --help      Show this help message"""


def usage(prog: str = "relkit") -> str:
    return USAGE.format(prog=prog)


def parse_arguments(args: Sequence[str]) -> Result[RunConfig, ArgumentError]:
    """Interpret the command-line tokens.

    Flags are position independent and may repeat. Help wins over everything
    else, including unknown tokens, so ``--help`` always exits cleanly.
    """
    if any(token in ("-h", "--help") for token in args):
        return Ok(RunConfig(show_help=True))

    draft = False
    dry_run = False
    for token in args:
        match token:
            case "--draft":
                draft = True
            case "--dry-run":
                dry_run = True
            case _:
                return Err(UnknownOption(token=token))

    return Ok(RunConfig(draft=draft, dry_run=dry_run))
