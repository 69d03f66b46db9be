import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .diff import Hunk, compute_line_diff, visible_hunks
from .errors import CommitNotFoundError, CorruptStateError, ObjectNotFoundError
from .records import CommitRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    digest: str
    timestamp: str
    message: str

    def to_dict(self):
        return {"digest": self.digest, "timestamp": self.timestamp, "message": self.message}


@dataclass
class FileDiff:
    path: str
    digest: str
    hunks: List[Hunk] = field(default_factory=list)
    error: Optional[str] = None
    is_new: bool = False

    def visible_hunks(self):
        return visible_hunks(self.hunks)


@dataclass
class CommitDiff:
    digest: str
    record: CommitRecord
    files: List[FileDiff]


class History:
    def __init__(self, objects, chain):
        self.objects = objects
        self.chain = chain

    def log(self) -> Iterator[LogEntry]:
        sha = self.chain.get_head()
        seen = set()
        while sha and sha not in seen:
            seen.add(sha)
            try:
                record = self.chain.read_commit(sha)
            except CommitNotFoundError:
                logger.warning("History stops at %s: commit object is missing", sha)
                return
            yield LogEntry(sha, record.timestamp, record.message)
            sha = record.parent

    def diff(self, commit_sha) -> CommitDiff:
        record = self.chain.read_commit(commit_sha)

        parent = None
        parent_error = None
        if record.parent is not None:
            try:
                parent = self.chain.read_commit(record.parent)
            except CommitNotFoundError as e:
                parent_error = str(e)
            except CorruptStateError as e:
                parent_error = f"Parent commit {record.parent} is unreadable: {e}"

        files = [self._diff_file(entry, record, parent, parent_error) for entry in record.files]
        return CommitDiff(commit_sha, record, files)

    def _read_text(self, digest):
        return self.objects.get(digest).decode('utf-8', errors='replace')

    def _diff_file(self, entry, record, parent, parent_error):
        try:
            new_text = self._read_text(entry.digest)
        except ObjectNotFoundError as e:
            return FileDiff(entry.path, entry.digest, error=str(e))

        if record.parent is None:
            return FileDiff(entry.path, entry.digest, compute_line_diff("", new_text), is_new=True)
        if parent_error:
            return FileDiff(entry.path, entry.digest, error=parent_error)

        previous = parent.find(entry.path)
        if previous is None:
            return FileDiff(entry.path, entry.digest, compute_line_diff("", new_text), is_new=True)
        try:
            old_text = self._read_text(previous.digest)
        except ObjectNotFoundError as e:
            return FileDiff(entry.path, entry.digest, error=str(e))
        return FileDiff(entry.path, entry.digest, compute_line_diff(old_text, new_text))
