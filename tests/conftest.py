import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zit_site.settings")
django.setup()

from zit.repository import Repository  # noqa: E402
from zit.storage import MemoryStateStore  # noqa: E402


@pytest.fixture
def worktree(tmp_path):
    return tmp_path


@pytest.fixture
def write_file(worktree):
    def write(name, text):
        path = worktree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return write


@pytest.fixture
def repo(worktree):
    repo = Repository(str(worktree))
    repo.init()
    return repo


@pytest.fixture
def memory_repo(worktree):
    repo = Repository(str(worktree), store=MemoryStateStore())
    repo.init()
    return repo
