"""Defines the values passed between the resolver, the tool locator and the dispatcher.

The most important classes are :class:`Invocation` and :class:`SearchQuery`.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Error(Exception):
    """A fatal problem with the environment, such as a missing directory or tool."""
    pass


class UsageError(Error):
    """The command-line arguments cannot be acted on."""
    pass


class Mode(Enum):
    FILE_VIEW = 'fileview'
    SEARCH = 'search'
    RECENT = 'recent'
    NEW = 'new'


class Action(Enum):
    VIEW = 'view'
    EDIT = 'edit'
    EDIT2 = 'edit2'
    LAUNCH = 'launch'
    SEARCH = 'search'
    LIST = 'list'
    TITLES = 'titles'
    RECENT = 'recent'


DEFAULT_ACTIONS = {
    Mode.FILE_VIEW: Action.VIEW,
    Mode.SEARCH: Action.SEARCH,
    Mode.RECENT: Action.RECENT,
}


@dataclass(frozen=True)
class SearchQuery:
    """What to hand to the search tool, kept apart so that an expression starting with ``-`` is never
    mistaken for an option."""

    options: Tuple[str, ...] = ()
    """Configured extra search arguments followed by any passthrough flags from the command line."""

    paths: Tuple[str, ...] = ()
    """Files or directories to restrict the search to. Relative paths are relative to the notes root."""

    expression: Optional[str] = None
    """The search expression, or None if the user did not give one."""


@dataclass(frozen=True)
class Invocation:
    """The outcome of parsing the command line.

    Instances are created by :func:`notesh.resolver.resolve`.
    """

    mode: Mode = Mode.FILE_VIEW

    action: Optional[Action] = None
    """The sub-action flag given last, or None if there was none. See :attr:`effective_action`."""

    search_args: Tuple[str, ...] = ()
    """Unrecognized ``-`` tokens, in the order they appeared, to be passed to the search tool."""

    tail: Tuple[str, ...] = ()
    """The remaining tokens after the flags: file paths, a search expression, a note path or a count."""

    editor: Optional[str] = None
    """Primary editor given with ``--editor``."""

    debug: bool = False
    help: bool = False

    @property
    def search_args_string(self) -> str:
        return ' '.join(self.search_args)

    @property
    def effective_action(self) -> Optional[Action]:
        return self.action or DEFAULT_ACTIONS.get(self.mode)

    @property
    def wants_recent(self) -> bool:
        return self.mode == Mode.RECENT or (self.mode == Mode.SEARCH and self.action == Action.RECENT)

    def query(self, extra_options: Tuple[str, ...] = ()) -> SearchQuery:
        """Splits the tail into paths and a trailing expression.

        extra_options are placed before the passthrough flags, so flags given on the command line can
        override configured defaults.
        """
        options = tuple(extra_options) + self.search_args
        if not self.tail:
            return SearchQuery(options=options)
        return SearchQuery(options=options, paths=self.tail[:-1], expression=self.tail[-1])
