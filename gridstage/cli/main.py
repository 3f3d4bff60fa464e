import logging
import sys
from typing import NoReturn, Optional, Sequence

import click

from gridstage import __version__ as about
from gridstage.application.secrets import enrich
from gridstage.cli.exit_codes import FAILURE, SUCCESS, UNEXPECTED
from gridstage.cli.presenter import emit_diagnostics, err_msg, format_unexpected
from gridstage.cli.settings import Settings, get_settings, put_settings
from gridstage.errors import StagingError
from gridstage.grid.transfer import iget_command, iput_command
from gridstage.validation import validate_get, validate_put

# Get a logger for this module.
log = logging.getLogger(__name__)

USAGE = f"Usage: {about.__title__} get|put [options]"
VERBS = ("get", "put", "--version")


def version_info() -> str:
    """Return the text printed for ``--version``."""
    return (
        f"{about.__title__} version {about.__version__}\n"
        f"Check {about.__url__} for more info"
    )


def command(all_args: Sequence[str]) -> str:
    """
    Return the verb named by the first argument.

    Prints usage and exits with status 1 when the verb is missing or unknown.
    """
    if not all_args or all_args[0] not in VERBS:
        click.echo(USAGE)
        sys.exit(FAILURE)
    return all_args[0].strip()


def settings(cmd: str, cmd_args: Sequence[str]) -> Settings:
    """
    Parse the arguments following the verb.

    Parser errors are printed and end the process with status 1.
    """
    if cmd == "--version":
        return None, (), ""
    try:
        if cmd == "get":
            return get_settings(cmd_args)
        if cmd == "put":
            return put_settings(cmd_args)
    except click.ClickException as exc:
        click.echo(exc.format_message())
        sys.exit(FAILURE)
    click.echo(USAGE)
    sys.exit(FAILURE)


def dispatch(args: Sequence[str]) -> int:
    """Parse, enrich, validate and execute one invocation."""
    cmd = command(args)
    if cmd == "--version":
        click.echo(version_info())
        return SUCCESS

    cmd_args = list(args[1:])
    options, remnants, banner = settings(cmd, cmd_args)
    emit_diagnostics(args, cmd, options, remnants)

    if not cmd_args:
        click.echo(banner)
        return FAILURE
    if options.help:
        click.echo(banner)
        return SUCCESS

    options = enrich(options)
    if cmd == "get":
        validate_get(options)
        iget_command(options)
    else:
        validate_put(options)
        iput_command(options)
    log.info("SUCCESS")
    return SUCCESS


def run(args: Sequence[str]) -> int:
    """
    Run one invocation and return its exit status.

    Classified failures print their message and return 1. Anything else is
    reported generically and returns 2.
    """
    try:
        return dispatch(list(args))
    except StagingError as err:
        click.echo(err_msg(err))
        return FAILURE
    except Exception as exc:
        log.debug("Unexpected failure", exc_info=True)
        click.echo(format_unexpected(exc))
        return UNEXPECTED


def main(args: Optional[Sequence[str]] = None) -> NoReturn:
    """Console entry point."""
    sys.exit(run(sys.argv[1:] if args is None else args))


if __name__ == "__main__":
    main()
