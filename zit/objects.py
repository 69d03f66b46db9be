import hashlib
import logging

from .errors import ObjectNotFoundError
from .records import is_digest

logger = logging.getLogger(__name__)


def hash_object(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


class ObjectStore:
    """Content-addressed blobs and commit records. Objects are only ever added."""

    def __init__(self, state):
        self.state = state

    def put(self, data: bytes) -> str:
        sha1 = hash_object(data)
        if self.state.write_object(sha1, data):
            logger.debug("Stored object %s (%d bytes)", sha1, len(data))
        return sha1

    def get(self, digest) -> bytes:
        if not is_digest(digest):
            raise ObjectNotFoundError(digest)
        return self.state.read_object(digest)

    def contains(self, digest):
        return is_digest(digest) and self.state.has_object(digest)
