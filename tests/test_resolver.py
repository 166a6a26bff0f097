import pytest
from notesh.models import Action, Mode, UsageError
from notesh.resolver import parse, recent_count, resolve


def test_defaults_to_file_view():
    inv = parse(['journal/today.md', 'todo.md'])
    assert inv.mode == Mode.FILE_VIEW
    assert inv.action is None
    assert inv.effective_action == Action.VIEW
    assert inv.tail == ('journal/today.md', 'todo.md')
    assert inv.search_args == ()


def test_unknown_flags_pass_through_in_order():
    inv = parse(['-i', '--word-regexp', '-s', '-C3', '--foo', 'needle'])
    assert inv.mode == Mode.SEARCH
    assert inv.search_args == ('-i', '--word-regexp', '-C3', '--foo')
    assert inv.search_args_string == '-i --word-regexp -C3 --foo'
    assert inv.tail == ('needle',)


def test_first_mode_wins():
    assert parse(['-n', '-s', 'x']).mode == Mode.NEW
    assert parse(['-s', '-n', 'x']).mode == Mode.SEARCH
    inv = parse(['-l', '-r'])
    assert inv.mode == Mode.SEARCH
    assert inv.action == Action.RECENT
    assert parse(['-r', '-l']).mode == Mode.RECENT


def test_last_action_wins():
    assert parse(['-e', '-v', 'a.md']).action == Action.VIEW
    assert parse(['-v', '-b', '-e', 'a.md']).action == Action.EDIT
    assert parse(['-s', '-e', '-v', 'x']).action == Action.VIEW


def test_aliases():
    for flag in ['-s', '--search', '--grep', '--ag', '--rg']:
        assert parse([flag, 'x']).mode == Mode.SEARCH
    for flag in ['-e2', '--edit2', '--fancyedit']:
        assert parse([flag, 'x']).action == Action.EDIT2
    for flag in ['-r', '--recent', '--history']:
        assert parse([flag]).mode == Mode.RECENT
    assert parse(['-t', 'x']).action == Action.TITLES
    assert parse(['--title', 'x']).mode == Mode.SEARCH
    assert parse(['--list']).action == Action.LIST
    assert parse(['--launch', 'a.md']).action == Action.LAUNCH
    assert parse(['--new']).mode == Mode.NEW


def test_flags_are_case_sensitive():
    inv = parse(['-S', '-E', 'a.md'])
    assert inv.mode == Mode.FILE_VIEW
    assert inv.search_args == ('-S', '-E')


def test_first_non_flag_ends_flags():
    inv = parse(['-e', 'a.md', '-v', 'b.md'])
    assert inv.action == Action.EDIT
    assert inv.tail == ('a.md', '-v', 'b.md')


def test_double_dash_ends_flags():
    inv = parse(['-s', '--', '-weird-expression'])
    assert inv.tail == ('-weird-expression',)
    assert inv.search_args == ()


def test_single_dash_is_not_a_flag():
    assert parse(['-']).tail == ('-',)


def test_editor_consumes_value():
    inv = parse(['--editor', 'nano', '-e', 'a.md'])
    assert inv.editor == 'nano'
    assert inv.action == Action.EDIT
    assert inv.tail == ('a.md',)
    # the value is taken even if it looks like a flag
    assert parse(['--editor', '-e', 'a.md']).editor == '-e'


def test_editor_without_value():
    with pytest.raises(UsageError):
        parse(['-e', '--editor'])


def test_debug_and_help():
    inv = parse(['-D', 'a.md'])
    assert inv.debug
    assert not inv.help
    assert parse(['--help']).help
    assert parse(['-h']).help


def test_resolve_no_arguments():
    with pytest.raises(UsageError, match='no arguments'):
        resolve([])


def test_resolve_help_skips_validation():
    assert resolve(['-s', '-e2', '-h']).help


def test_resolve_search_with_secondary_editor():
    with pytest.raises(UsageError, match='secondary editor'):
        resolve(['-s', '-e', '-e2', 'needle'])
    with pytest.raises(UsageError, match='secondary editor'):
        resolve(['-e2', '-s', 'needle'])


def test_resolve_search_with_launch():
    with pytest.raises(UsageError):
        resolve(['-s', '-b', 'needle'])


def test_resolve_search_needs_expression():
    for args in (['-s'], ['-s', '-e'], ['-s', '-v'], ['-s', '-i']):
        with pytest.raises(UsageError, match='no search expression'):
            resolve(args)
    assert resolve(['-l']).action == Action.LIST
    assert resolve(['-t']).action == Action.TITLES


def test_resolve_list_takes_one_expression():
    assert resolve(['-l', 'recipes']).tail == ('recipes',)
    for args in (['-l', 'journal', 'recipes'], ['-t', 'a', 'b']):
        with pytest.raises(UsageError, match='at most one expression'):
            resolve(args)


def test_resolve_file_view_needs_files():
    with pytest.raises(UsageError, match='no files'):
        resolve(['-e'])
    with pytest.raises(UsageError, match='no files'):
        resolve(['-i'])


def test_resolve_new():
    assert resolve(['-n']).tail == ()
    assert resolve(['-n', 'journal/meeting']).tail == ('journal/meeting',)
    with pytest.raises(UsageError):
        resolve(['-n', 'one', 'two'])
    # a sub-action after -n does not make it a recent listing
    assert resolve(['-n', '-r', 'journal/meeting']).mode == Mode.NEW


def test_resolve_recent():
    assert recent_count(resolve(['-r'])) is None
    assert recent_count(resolve(['-r', '5'])) == 5
    assert recent_count(resolve(['-s', '-r', '3'])) == 3
    for args in (['-r', 'five'], ['-r', '0'], ['-r', '1', '2']):
        with pytest.raises(UsageError):
            resolve(args)
