from .errors import (
    AlreadyInitializedError,
    CommitNotFoundError,
    CorruptStateError,
    HeadLockedError,
    HeadMovedError,
    MissingWorkingFileError,
    NotARepositoryError,
    ObjectNotFoundError,
    RepositoryPathError,
    ZitError,
)
from .objects import ObjectStore, hash_object
from .records import CommitRecord, StagingEntry
from .repository import Repository
from .storage import FileStateStore, MemoryStateStore

__version__ = "0.1.0"
