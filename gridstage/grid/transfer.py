"""Transfer execution through the grid command-line client."""

from __future__ import annotations

import logging
import os
import posixpath
import subprocess
import tempfile
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from gridstage.config import TRANSFER_TOOL
from gridstage.domain.options import GetOptions, MetaGroup, PutOptions
from gridstage.errors import ErrorCode, StagingError

log = logging.getLogger(__name__)


@contextmanager
def staged_config(config: bytes) -> Iterator[str]:
    """Write ``config`` to a private temporary file that lives for the block."""
    fd, path = tempfile.mkstemp(prefix="gridstage-", suffix=".yaml")
    try:
        with os.fdopen(fd, "wb") as config_file:
            config_file.write(config)
        yield path
    finally:
        os.remove(path)


class GridClient:
    """Run grid client subcommands against one staged config."""

    def __init__(
        self,
        config_path: str,
        user: Optional[str] = None,
        tool: str = TRANSFER_TOOL,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.config_path = config_path
        self.tool = tool
        self.env = dict(os.environ if environ is None else environ)
        if user:
            self.env["IRODS_CLIENT_USER_NAME"] = user

    def run(self, *args: str) -> None:
        """Run one subcommand, raising on a non-zero exit status."""
        argv = [self.tool, "-c", self.config_path, *args]
        log.debug("Running %s", " ".join(argv))
        completed = subprocess.run(argv, env=self.env, check=False)
        if completed.returncode != 0:
            log.error("%s exited with status %d", self.tool, completed.returncode)
            raise StagingError(ErrorCode.BAD_EXIT_CODE, exit_code=completed.returncode)

    def get(self, source: str, destination: str) -> None:
        log.info("Downloading %s to %s", source, destination)
        self.run("get", source, destination)

    def put(self, source: str, destination: str) -> None:
        log.info("Uploading %s to %s", source, destination)
        self.run("put", source, destination)

    def add_meta(self, path: str, group: MetaGroup) -> None:
        """Tag ``path`` with one ``attr,value[,unit]`` group."""
        fields = list(group[:3])
        if len(group) > 3:
            log.warning("Ignoring extra metadata fields in %r for %s", ",".join(group), path)
        if len(fields) < 2:
            log.warning("Skipping malformed metadata %r for %s", ",".join(group), path)
            return
        if len(fields) == 3 and not fields[2]:
            fields.pop()
        self.run("addmeta", path, *fields)

    def tag(self, paths: Iterable[str], meta: Sequence[MetaGroup]) -> None:
        for path in paths:
            for group in meta:
                self.add_meta(path, group)


def split_list(value: str, delimiter: str) -> list[str]:
    """Split a delimited path list, dropping blank entries."""
    if not value:
        return []
    return [entry.strip() for entry in value.split(delimiter) if entry.strip()]


def read_source_list(path: str) -> list[str]:
    """Read grid paths from a path-list file, skipping blanks and comments."""
    with open(path, "r", encoding="utf-8") as source_list:
        return [
            line.strip()
            for line in source_list
            if line.strip() and not line.lstrip().startswith("#")
        ]


def read_exclusions(path: str, delimiter: str) -> list[str]:
    """Read the exclusion list file, if one was given."""
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as exclusions:
        return split_list(exclusions.read(), delimiter)


def _relative_to(source: str, entry: str) -> str:
    """Normalize a listed path to a POSIX path relative to ``source``."""
    if os.path.isabs(entry):
        entry = os.path.relpath(entry, source)
    return posixpath.normpath(entry.replace(os.sep, "/"))


def _is_inside(rel: str) -> bool:
    """Return whether a normalized relative path stays below its root."""
    return not (posixpath.isabs(rel) or rel == ".." or rel.startswith("../"))


def plan_uploads(source: str, excludes: Iterable[str], includes: Iterable[str]) -> list[str]:
    """
    Return the relative paths of the files under ``source`` to upload.

    Excluded paths are dropped, then included paths that exist under
    ``source`` are added back. Listed paths that resolve outside ``source``
    are ignored.
    """
    excluded = {
        rel for rel in (_relative_to(source, entry) for entry in excludes) if _is_inside(rel)
    }
    planned: set[str] = set()
    for root, _dirs, files in os.walk(source):
        for name in files:
            rel = _relative_to(source, os.path.relpath(os.path.join(root, name), source))
            if rel not in excluded:
                planned.add(rel)

    for entry in includes:
        rel = _relative_to(source, entry)
        if not _is_inside(rel):
            log.warning("Skipping include %r outside %s", entry, source)
            continue
        if os.path.isfile(os.path.join(source, rel)):
            planned.add(rel)
    return sorted(planned)


def parent_folders(destination: str, relative_paths: Iterable[str]) -> list[str]:
    """Return ``destination`` and every grid folder created beneath it."""
    folders = {destination}
    for rel in relative_paths:
        parent = posixpath.dirname(rel)
        while parent:
            folders.add(posixpath.join(destination, parent))
            parent = posixpath.dirname(parent)
    return sorted(folders)


def iget_command(options: GetOptions, tool: str = TRANSFER_TOOL) -> None:
    """Download each requested grid path into the destination folder."""
    sources = [options.source] if options.source else read_source_list(options.source_list)
    with staged_config(options.config or b"") as config_path:
        client = GridClient(config_path, user=options.user, tool=tool)
        for source in sources:
            client.get(source, options.destination)
        client.tag(sources, options.meta)
    log.info("Downloaded %d path(s)", len(sources))


def iput_command(options: PutOptions, tool: str = TRANSFER_TOOL) -> None:
    """Upload the source folder into the destination grid folder."""
    uploads = plan_uploads(
        options.source,
        read_exclusions(options.exclude, options.exclude_delimiter),
        split_list(options.include, options.include_delimiter),
    )
    destination = options.destination.rstrip("/") or "/"
    remote_files = [posixpath.join(destination, rel) for rel in uploads]

    with staged_config(options.config or b"") as config_path:
        client = GridClient(config_path, user=options.user, tool=tool)
        for rel, remote in zip(uploads, remote_files):
            client.put(os.path.join(options.source, *rel.split("/")), remote)
        client.tag(remote_files, options.meta)
        if not options.skip_parent_meta:
            client.tag(parent_folders(destination, uploads), options.meta)
    log.info("Uploaded %d file(s)", len(uploads))
