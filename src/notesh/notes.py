"""Works out where a new note should go, and which notes changed most recently."""

from __future__ import annotations
from datetime import datetime
import os
import os.path
import readline
from typing import Iterator, List, Optional, Tuple
from notesh.conf import NoteshConf
from notesh.models import Error


TIMESTAMP_FORMAT = '%Y%m%d-%H%M%S'


def split_note_arg(conf: NoteshConf, arg: Optional[str]) -> Tuple[str, Optional[str]]:
    """Returns the subdirectory and filename (possibly None) indicated by the argument to ``--new``.

    * With no argument, the subdirectory is :attr:`notesh.conf.NoteshConf.default_subdir`.
    * If the argument names an existing directory (relative to the notes root, or absolute), that is the
      subdirectory.
    * Otherwise the argument is split into its directory and base name.
    """
    if not arg:
        return conf.default_subdir, None
    if os.path.isdir(os.path.join(conf.root, arg)):
        return arg.rstrip(os.sep) or arg, None
    subdir, filename = os.path.split(arg)
    return subdir, filename or None


def note_filename(conf: NoteshConf, filename: Optional[str] = None) -> str:
    """Returns filename with the default extension added if needed, or a timestamp-based name if it is None."""
    if not filename:
        filename = datetime.now().strftime(TIMESTAMP_FORMAT)
    if os.path.splitext(filename)[1].lower() not in conf.note_extensions:
        filename += conf.default_extension
    return filename


def new_note_path(conf: NoteshConf, arg: Optional[str] = None) -> str:
    """Proposes the full path for a new note. The file is not created."""
    subdir, filename = split_note_arg(conf, arg)
    return os.path.join(conf.root, subdir, note_filename(conf, filename))


def prompt_path(conf: NoteshConf, proposed: str) -> str:
    """Asks the user to confirm or edit the path, with proposed already typed in.

    An empty answer keeps the proposal. A relative answer is taken to be relative to the notes root.
    """
    readline.set_startup_hook(lambda: readline.insert_text(proposed))
    try:
        answer = input('New note: ').strip()
    finally:
        readline.set_startup_hook()
    if not answer:
        return proposed
    return os.path.join(conf.root, os.path.expanduser(answer))


def check_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if not os.path.isdir(parent):
        raise Error(f'target directory not found: {parent}')


def _walk_files(root: str, vcs_dirs) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in vcs_dirs]
        for name in filenames:
            path = os.path.join(dirpath, name)
            if os.path.isfile(path):
                yield path


def recent_notes(conf: NoteshConf, count: Optional[int] = None) -> List[Tuple[str, datetime]]:
    """Returns (path, modification time) pairs for regular files under the notes root, newest first.

    Paths are relative to the root. Anything inside a version control directory is skipped.
    If count is given, at most that many entries are returned.
    """
    entries = []
    for path in _walk_files(conf.root, conf.vcs_dirs):
        mtime = datetime.fromtimestamp(os.path.getmtime(path))
        entries.append((os.path.relpath(path, conf.root), mtime))
    entries.sort(key=lambda e: (e[1], e[0]), reverse=True)
    if count is not None:
        entries = entries[:count]
    return entries
