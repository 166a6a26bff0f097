import pytest
from notesh.conf import NoteshConf
from notesh.tools import Tools, RipgrepBackend, FdBackend


ENV_VARS = ['NOTES_DIR', 'NOTES_SEARCH_CMD', 'NOTES_FIND_CMD', 'NOTES_SEARCH_ARGS', 'NOTES_EDITOR', 'EDITOR',
            'NOTES_EDITOR2', 'NOTES_PAGER', 'PAGER', 'NOTES_PAGER_OPTS', 'NOTES_LAUNCH_CMD',
            'NOTES_EDITOR_POSITIONS', 'NOTES_PAGER_POSITIONS']


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('HOME', '/home/user')


@pytest.fixture
def conf():
    return NoteshConf(root='/notes').standardize()


@pytest.fixture
def tools():
    return Tools(search=RipgrepBackend(('rg',)), find=FdBackend(('fd',)))


@pytest.fixture
def installed(mocker):
    """Call with program names to make shutil.which find only those programs, in /usr/bin."""
    def install(*names):
        return mocker.patch('shutil.which', side_effect=lambda name: f'/usr/bin/{name}' if name in names else None)
    return install
