from notesh.models import Action, Invocation, Mode, SearchQuery


def test_effective_action_defaults():
    assert Invocation().effective_action == Action.VIEW
    assert Invocation(mode=Mode.SEARCH).effective_action == Action.SEARCH
    assert Invocation(mode=Mode.RECENT).effective_action == Action.RECENT
    assert Invocation(mode=Mode.NEW).effective_action is None
    assert Invocation(mode=Mode.SEARCH, action=Action.EDIT).effective_action == Action.EDIT


def test_wants_recent():
    assert Invocation(mode=Mode.RECENT).wants_recent
    assert Invocation(mode=Mode.RECENT, action=Action.EDIT).wants_recent
    assert Invocation(mode=Mode.SEARCH, action=Action.RECENT).wants_recent
    assert not Invocation(mode=Mode.NEW, action=Action.RECENT).wants_recent
    assert not Invocation(mode=Mode.SEARCH).wants_recent


def test_search_args_string():
    inv = Invocation(search_args=('-i', '--word-regexp', '-C3'))
    assert inv.search_args_string == '-i --word-regexp -C3'
    assert Invocation().search_args_string == ''


def test_query():
    inv = Invocation(mode=Mode.SEARCH, search_args=('-i',), tail=('journal', 'work', 'standup'))
    assert inv.query(('--smart-case',)) == SearchQuery(options=('--smart-case', '-i'),
                                                       paths=('journal', 'work'),
                                                       expression='standup')


def test_query_without_tail():
    inv = Invocation(mode=Mode.SEARCH, action=Action.LIST, search_args=('-w',))
    assert inv.query() == SearchQuery(options=('-w',))
    assert inv.query().expression is None
