"""Command-line interface for notesh."""


import logging
import os.path
import sys
from notesh.conf import NoteshConf
from notesh.dispatch import dispatch
from notesh.models import Error, UsageError
from notesh.resolver import resolve
from notesh.tools import locate_tools


log = logging.getLogger(__name__)

HELP = """\
usage: notesh [FLAGS] FILE...
       notesh -s [-e|-v] [SEARCH-FLAGS] [PATH...] EXPRESSION
       notesh -l|-t [EXPRESSION]
       notesh -r [COUNT]
       notesh -n [PATH]

View, edit, search, list and create notes in your notes directory ($NOTES_DIR, default ~/notes).
Paths are relative to the notes directory.

Modes (the first one given wins):
  (none)                          show FILEs in the pager
  -s, --search, --grep, --ag, --rg
                                  search note contents for EXPRESSION
  -l, --list                      list notes whose path matches EXPRESSION, or all notes
  -t, --title                     list notes whose filename matches EXPRESSION
  -r, --recent, --history         list the COUNT most recently modified notes, or page through all of them
  -n, --new                       create a note at PATH (a directory, or a path without an extension);
                                  by default a timestamped note in capture/

Actions (the last one given wins):
  -v, --view                      open in the pager (default)
  -e, --edit                      open in the editor ($NOTES_EDITOR or $EDITOR)
  -e2, --edit2, --fancyedit       open a single file in the secondary editor ($NOTES_EDITOR2)
  -b, --launch                    render markdown in the browser ($NOTES_LAUNCH_CMD)

Other:
  --editor NAME                   use NAME as the editor
  -D                              print the commands being run
  -h, --help                      show this help
  --                              stop reading flags

Any other flag is passed to the search tool.
"""


def print_help(file=sys.stdout) -> None:
    print(HELP, end='', file=file)


def setup_logging(debug: bool) -> None:
    logging.basicConfig(format='%(name)s: %(message)s', stream=sys.stderr)
    logging.getLogger('notesh').setLevel(logging.DEBUG if debug else logging.WARNING)


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    if args is None:
        args = sys.argv[1:]
    try:
        inv = resolve(args)
        if inv.help:
            print_help()
            return 0
        setup_logging(inv.debug)
        log.debug('resolved %s', inv)
        if inv.search_args:
            log.debug('passing through to the search tool: %s', inv.search_args_string)

        conf = NoteshConf.for_user()
        if inv.editor:
            conf = conf.with_editor(inv.editor)
        if not os.path.isdir(conf.root):
            raise Error(f'notes directory not found: {conf.root}')
        tools = locate_tools(conf)
        return dispatch(inv, conf, tools)
    except UsageError as e:
        print(f'notesh: {e}', file=sys.stderr)
        print_help(file=sys.stderr)
        return 1
    except Error as e:
        print(f'notesh: {e}', file=sys.stderr)
        return 1
