import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .errors import (
    AlreadyInitializedError,
    MissingWorkingFileError,
    NotARepositoryError,
    RepositoryPathError,
)
from .history import History
from .ignore import iter_tracked_files, load_ignores
from .index import StagingArea
from .objects import ObjectStore
from .records import StagingEntry
from .refs import CommitChain
from .storage import REPO_DIR, FileStateStore

logger = logging.getLogger(__name__)


@dataclass
class Status:
    head: Optional[str]
    staged: List[StagingEntry]


class Repository:
    """A working tree plus the zit state that tracks it."""

    def __init__(self, worktree='.', store=None):
        self.worktree = os.path.abspath(worktree)
        self.repo_dir = os.path.join(self.worktree, REPO_DIR)
        self.state = store if store is not None else FileStateStore(self.repo_dir)
        self.objects = ObjectStore(self.state)
        self.staging = StagingArea(self.state)
        self.chain = CommitChain(self.state, self.objects, self.staging)
        self.history = History(self.objects, self.chain)

    def exists(self):
        return self.state.exists()

    def require_repository(self):
        if not self.state.exists():
            raise NotARepositoryError(self.repo_dir)

    def init(self):
        if self.state.exists():
            raise AlreadyInitializedError(self.repo_dir)
        self.state.initialize()
        logger.info("Initialized empty repository in %s", self.repo_dir)

    def _working_path(self, path):
        full_path = path if os.path.isabs(path) else os.path.join(self.worktree, path)
        return os.path.normpath(full_path)

    def _tracked_name(self, full_path):
        rel_path = os.path.relpath(full_path, self.worktree)
        if rel_path == os.pardir or rel_path.startswith(os.pardir + os.sep):
            rel_path = full_path
        return rel_path.replace(os.sep, '/')

    def _inside_repo_dir(self, full_path):
        resolved = os.path.realpath(full_path)
        repo_dir = os.path.realpath(self.repo_dir)
        return resolved == repo_dir or resolved.startswith(repo_dir + os.sep)

    def _read_working_file(self, full_path):
        try:
            with open(full_path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise MissingWorkingFileError(self._tracked_name(full_path), e.strerror) from e

    def add(self, path):
        """Stage a file, or every non-ignored file below a directory."""
        self.require_repository()
        full_path = self._working_path(path)
        if self._inside_repo_dir(full_path):
            raise RepositoryPathError(self._tracked_name(full_path))

        if os.path.isdir(full_path):
            ignores = load_ignores(self.worktree)
            names = list(iter_tracked_files(self.worktree, ignores, start=full_path))
        else:
            names = [self._tracked_name(full_path)]

        # Objects are written as we go; the index only changes once every read succeeded.
        pairs = []
        for name in names:
            data = self._read_working_file(self._working_path(name))
            pairs.append((name, self.objects.put(data)))
        if pairs:
            self.staging.stage_all(pairs)
        return [StagingEntry(name, sha1) for name, sha1 in pairs]

    def commit(self, message, timestamp=None):
        self.require_repository()
        return self.chain.commit(message, timestamp=timestamp)

    def log(self):
        return self.history.log()

    def diff(self, commit_sha):
        return self.history.diff(commit_sha)

    def status(self):
        return Status(self.chain.get_head(), self.staging.load())
