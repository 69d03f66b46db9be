"""Persistence backends for a zit repository.

A state store holds the three pieces of repository state: the object
files, the staging index and the HEAD pointer. The staging and commit
logic only talk to this interface, so the on-disk store used by the CLI
and the in-memory store used by tests are interchangeable.
"""
import logging
import os
import tempfile

from .errors import HeadLockedError, HeadMovedError, ObjectNotFoundError
from .records import parse_head

REPO_DIR = ".zit"
OBJECTS_DIR = "objects"
HEAD_FILE = "HEAD"
INDEX_FILE = "index"
LOCK_SUFFIX = ".lock"
EMPTY_INDEX = "[]"

logger = logging.getLogger(__name__)


class StateStore:
    def exists(self):
        raise NotImplementedError

    def initialize(self):
        """Create any missing state. Returns False if nothing had to be created."""
        raise NotImplementedError

    def has_object(self, digest):
        raise NotImplementedError

    def read_object(self, digest):
        raise NotImplementedError

    def write_object(self, digest, data):
        """Store data under digest unless present. Returns True on a physical write."""
        raise NotImplementedError

    def read_index(self):
        raise NotImplementedError

    def write_index(self, text):
        raise NotImplementedError

    def read_head(self):
        raise NotImplementedError

    def write_head(self, digest, expected):
        """Point HEAD at digest, provided it still points at expected."""
        raise NotImplementedError


def _atomic_write(path, data):
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix=".tmp-")
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class FileStateStore(StateStore):
    def __init__(self, repo_dir):
        self.repo_dir = repo_dir
        self.objects_dir = os.path.join(repo_dir, OBJECTS_DIR)
        self.head_file = os.path.join(repo_dir, HEAD_FILE)
        self.index_file = os.path.join(repo_dir, INDEX_FILE)

    def exists(self):
        return os.path.isdir(self.objects_dir) and os.path.isfile(self.head_file)

    def initialize(self):
        created = not os.path.isdir(self.objects_dir)
        os.makedirs(self.objects_dir, exist_ok=True)
        for path, content in ((self.head_file, ""), (self.index_file, EMPTY_INDEX)):
            try:
                with open(path, 'x', encoding='utf-8') as f:
                    f.write(content)
            except FileExistsError:
                continue
            created = True
        return created

    def _object_path(self, digest):
        return os.path.join(self.objects_dir, digest)

    def has_object(self, digest):
        return os.path.isfile(self._object_path(digest))

    def read_object(self, digest):
        try:
            with open(self._object_path(digest), 'rb') as f:
                return f.read()
        except FileNotFoundError:
            raise ObjectNotFoundError(digest) from None

    def write_object(self, digest, data):
        path = self._object_path(digest)
        if os.path.exists(path):
            return False
        os.makedirs(self.objects_dir, exist_ok=True)
        _atomic_write(path, data)
        return True

    def _read_text(self, path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            return None

    def read_index(self):
        return self._read_text(self.index_file)

    def write_index(self, text):
        _atomic_write(self.index_file, text.encode('utf-8'))

    def read_head(self):
        return self._read_text(self.head_file)

    def write_head(self, digest, expected):
        # The lock file doubles as the new HEAD and is renamed into place.
        lock_path = self.head_file + LOCK_SUFFIX
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            raise HeadLockedError(lock_path) from None

        committed = False
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(digest)
            current = parse_head(self.read_head())
            if current != expected:
                raise HeadMovedError(expected, current)
            os.replace(lock_path, self.head_file)
            committed = True
        finally:
            if not committed:
                os.remove(lock_path)
        logger.debug("HEAD %s -> %s", expected, digest)


class MemoryStateStore(StateStore):
    def __init__(self):
        self.objects = {}
        self.index = None
        self.head = None

    def exists(self):
        return self.head is not None

    def initialize(self):
        if self.exists():
            return False
        self.head = ""
        if self.index is None:
            self.index = EMPTY_INDEX
        return True

    def has_object(self, digest):
        return digest in self.objects

    def read_object(self, digest):
        try:
            return self.objects[digest]
        except KeyError:
            raise ObjectNotFoundError(digest) from None

    def write_object(self, digest, data):
        if digest in self.objects:
            return False
        self.objects[digest] = bytes(data)
        return True

    def read_index(self):
        return self.index

    def write_index(self, text):
        self.index = text

    def read_head(self):
        return self.head

    def write_head(self, digest, expected):
        current = parse_head(self.head)
        if current != expected:
            raise HeadMovedError(expected, current)
        self.head = digest
