import logging

from .errors import CommitNotFoundError, ObjectNotFoundError
from .records import CommitRecord, now_timestamp, parse_head

logger = logging.getLogger(__name__)


class CommitChain:
    def __init__(self, state, objects, staging):
        self.state = state
        self.objects = objects
        self.staging = staging

    def get_head(self):
        return parse_head(self.state.read_head())

    def read_commit(self, digest):
        try:
            data = self.objects.get(digest)
        except ObjectNotFoundError:
            raise CommitNotFoundError(digest) from None
        return CommitRecord.deserialize(data)

    def commit(self, message, timestamp=None):
        entries = self.staging.load()
        parent = self.get_head()
        record = CommitRecord(
            timestamp=timestamp or now_timestamp(),
            message=message,
            files=tuple(entries),
            parent=parent,
        )
        commit_sha = self.objects.put(record.serialize())

        # A failure past this point leaves an unreachable but harmless object.
        self.state.write_head(commit_sha, expected=parent)
        self.staging.clear()

        logger.info("Committed %s (%d files) on top of %s",
                    commit_sha[:7], len(entries), parent[:7] if parent else "root")
        return commit_sha
