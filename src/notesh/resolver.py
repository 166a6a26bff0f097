"""Turns command-line tokens into an :class:`notesh.models.Invocation`.

Unknown flags are kept, in their original order, for the search tool. The first flag that selects a mode wins over
later ones; for sub-actions the last flag wins.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple
from notesh.models import Action, Invocation, Mode, UsageError


FLAGS: Dict[str, Tuple[Optional[Mode], Optional[Action]]] = {
    '-s': (Mode.SEARCH, None),
    '--search': (Mode.SEARCH, None),
    '--grep': (Mode.SEARCH, None),
    '--ag': (Mode.SEARCH, None),
    '--rg': (Mode.SEARCH, None),
    '-e': (None, Action.EDIT),
    '--edit': (None, Action.EDIT),
    '-e2': (None, Action.EDIT2),
    '--edit2': (None, Action.EDIT2),
    '--fancyedit': (None, Action.EDIT2),
    '-b': (None, Action.LAUNCH),
    '--launch': (None, Action.LAUNCH),
    '-v': (None, Action.VIEW),
    '--view': (None, Action.VIEW),
    '-l': (Mode.SEARCH, Action.LIST),
    '--list': (Mode.SEARCH, Action.LIST),
    '-t': (Mode.SEARCH, Action.TITLES),
    '--title': (Mode.SEARCH, Action.TITLES),
    '-r': (Mode.RECENT, Action.RECENT),
    '--recent': (Mode.RECENT, Action.RECENT),
    '--history': (Mode.RECENT, Action.RECENT),
    '-n': (Mode.NEW, None),
    '--new': (Mode.NEW, None),
}
"""Maps each flag to the mode it selects and the sub-action it sets; either may be None."""

HELP_FLAGS = {'-h', '--help'}
DEBUG_FLAG = '-D'
EDITOR_FLAG = '--editor'
END_OF_FLAGS = '--'

EXPRESSION_ACTIONS = {Action.SEARCH, Action.EDIT, Action.VIEW}


def parse(tokens: Iterable[str]) -> Invocation:
    """Consumes flags from the front of tokens; the first token that is not a flag starts the tail.

    Raises :exc:`notesh.models.UsageError` only if ``--editor`` is missing its value. Use :func:`resolve` to also
    check that the result makes sense.
    """
    tokens = list(tokens)
    mode = None
    action = None
    search_args: List[str] = []
    editor = None
    debug = False
    show_help = False

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == END_OF_FLAGS:
            i += 1
            break
        if not token.startswith('-') or token == '-':
            break
        i += 1
        if token in HELP_FLAGS:
            show_help = True
        elif token == DEBUG_FLAG:
            debug = True
        elif token == EDITOR_FLAG:
            if i >= len(tokens):
                raise UsageError(f'{EDITOR_FLAG} needs the name of an editor')
            editor = tokens[i]
            i += 1
        elif token in FLAGS:
            flag_mode, flag_action = FLAGS[token]
            if mode is None:
                mode = flag_mode
            if flag_action is not None:
                action = flag_action
        else:
            search_args.append(token)

    return Invocation(
        mode=mode or Mode.FILE_VIEW,
        action=action,
        search_args=tuple(search_args),
        tail=tuple(tokens[i:]),
        editor=editor,
        debug=debug,
        help=show_help
    )


def validate(inv: Invocation) -> None:
    """Raises :exc:`notesh.models.UsageError` if the invocation cannot be carried out."""
    action = inv.effective_action
    if inv.mode == Mode.SEARCH:
        if action == Action.EDIT2:
            raise UsageError('the secondary editor cannot open multiple files; use -e with a search')
        if action == Action.LAUNCH:
            raise UsageError('search results cannot be launched; use -e or -v with a search')
        if action in EXPRESSION_ACTIONS and not inv.tail:
            raise UsageError('no search expression given')
        if action in (Action.LIST, Action.TITLES) and len(inv.tail) > 1:
            raise UsageError('listing files takes at most one expression')
    elif inv.mode == Mode.FILE_VIEW:
        if not inv.tail:
            raise UsageError('no files given')
    elif inv.mode == Mode.NEW:
        if len(inv.tail) > 1:
            raise UsageError('only one path may be given for a new note')

    if inv.wants_recent:
        recent_count(inv)


def recent_count(inv: Invocation) -> Optional[int]:
    """Returns how many recent notes were asked for, or None to list them all."""
    if not inv.tail:
        return None
    if len(inv.tail) > 1:
        raise UsageError('recent takes at most one argument, a number of notes')
    try:
        count = int(inv.tail[0])
    except ValueError:
        raise UsageError(f'not a number: {inv.tail[0]}')
    if count < 1:
        raise UsageError(f'number of notes must be positive: {count}')
    return count


def resolve(tokens: Iterable[str]) -> Invocation:
    """Parses and validates the command-line tokens (not including the program name).

    A request for help is returned without validation, since the rest of the arguments do not matter then.
    """
    tokens = list(tokens)
    if not tokens:
        raise UsageError('no arguments given')
    inv = parse(tokens)
    if not inv.help:
        validate(inv)
    return inv
