"""Per-verb flag schemas and their translation into option models."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import click

from gridstage.domain.options import GetOptions, MetaGroup, PutOptions

META_HELP = "Comma-delimited ATTR,VALUE,UNIT (repeatable)"

Settings = tuple[Any, tuple[str, ...], str]


def split_meta(value: str) -> MetaGroup:
    """Split one ``--meta`` value into its comma-separated fields."""
    return tuple(value.split(","))


def fold_meta(values: Iterable[str]) -> tuple[MetaGroup, ...]:
    """Fold repeated ``--meta`` occurrences into ordered metadata groups."""
    return tuple(split_meta(value) for value in values)


@click.command("get", add_help_option=False)
@click.option(
    "--user", "-u",
    default=None,
    help="The user the tool should run as.",
)
@click.option(
    "--debug-config", "-z",
    default=None,
    metavar="<file>",
    help="The path to a local storage config. Used for debugging purposes only.",
)
@click.option(
    "--source", "-s",
    default=None,
    metavar="<path>",
    help="A path in the grid to be downloaded.",
)
@click.option(
    "--source-list", "-l",
    default=None,
    metavar="<file>",
    help="A local file listing grid paths to be downloaded, one per line.",
)
@click.option(
    "--destination", "-d",
    default=".",
    show_default=True,
    metavar="<directory>",
    help="The local directory that the files will be downloaded into.",
)
@click.option("--meta", "-m", multiple=True, metavar="<attr,value,unit>", help=META_HELP)
@click.option("--help", "-h", is_flag=True, default=False, help="Prints this help.")
@click.argument("remnants", nargs=-1)
def get_command(**_params: Any) -> None:
    """Download files from the storage grid into a local directory."""


@click.command("put", add_help_option=False)
@click.option(
    "--user", "-u",
    default=None,
    help="The user the tool should run as.",
)
@click.option(
    "--debug-config", "-z",
    default=None,
    metavar="<file>",
    help="The path to a local storage config. Used for debugging purposes only.",
)
@click.option(
    "--exclude", "-e",
    default="",
    metavar="<file>",
    help="The path to a file containing a list of paths to be excluded from uploads.",
)
@click.option(
    "--exclude-delimiter", "-x",
    default="\n",
    show_default=r"\n",
    help="Delimiter for the list of files to be excluded from uploads.",
)
@click.option(
    "--include", "-i",
    default="",
    help="List of files to make sure are uploaded.",
)
@click.option(
    "--include-delimiter", "-n",
    default=",",
    show_default=True,
    help="Delimiter for the list of files that should be included in uploads.",
)
@click.option(
    "--source", "-s",
    default=".",
    show_default=True,
    metavar="<directory>",
    help="The local directory containing files to be transferred.",
)
@click.option(
    "--destination", "-d",
    default=None,
    metavar="<path>",
    help="The destination directory in the grid.",
)
@click.option("--meta", "-m", multiple=True, metavar="<attr,value,unit>", help=META_HELP)
@click.option(
    "--skip-parent-meta", "-p",
    is_flag=True,
    default=False,
    help="Skip applying metadata to the parent directories of an upload.",
)
@click.option("--help", "-h", is_flag=True, default=False, help="Prints this help.")
@click.argument("remnants", nargs=-1)
def put_command(**_params: Any) -> None:
    """Upload a local directory into the storage grid."""


def _parse(command: click.Command, args: Sequence[str]) -> tuple[dict[str, Any], str]:
    """Parse ``args`` against ``command`` and return its params and help banner."""
    ctx = command.make_context(f"gridstage {command.name}", list(args))
    return dict(ctx.params), command.get_help(ctx)


def get_settings(args: Sequence[str]) -> Settings:
    """Parse ``get`` arguments into ``(options, remnants, banner)``.

    Raises:
        click.ClickException: On unknown flags or malformed flag syntax.
    """
    params, banner = _parse(get_command, args)
    remnants = tuple(params.pop("remnants"))
    params["meta"] = fold_meta(params["meta"])
    return GetOptions(**params), remnants, banner


def put_settings(args: Sequence[str]) -> Settings:
    """Parse ``put`` arguments into ``(options, remnants, banner)``.

    Raises:
        click.ClickException: On unknown flags or malformed flag syntax.
    """
    params, banner = _parse(put_command, args)
    remnants = tuple(params.pop("remnants"))
    params["meta"] = fold_meta(params["meta"])
    return PutOptions(**params), remnants, banner
