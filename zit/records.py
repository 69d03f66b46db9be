import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from .errors import CorruptStateError

DIGEST_RE = re.compile(r"[0-9a-f]{40}")


def is_digest(value):
    return isinstance(value, str) and DIGEST_RE.fullmatch(value) is not None


def now_timestamp():
    stamp = datetime.now(timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_head(text):
    """Return the digest stored in a HEAD file, or None when there are no commits."""
    if text is None:
        return None
    digest = text.strip()
    if not digest:
        return None
    if not is_digest(digest):
        raise CorruptStateError(f"HEAD does not hold a commit digest: {digest!r}")
    return digest


@dataclass(frozen=True)
class StagingEntry:
    path: str
    digest: str

    def to_dict(self):
        return {"path": self.path, "hash": self.digest}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise CorruptStateError(f"Malformed file entry: {data!r}")
        path = data.get("path")
        digest = data.get("hash")
        if not isinstance(path, str) or not path:
            raise CorruptStateError(f"File entry has no path: {data!r}")
        if not is_digest(digest):
            raise CorruptStateError(f"File entry for {path} has a bad hash: {digest!r}")
        return cls(path, digest)


@dataclass(frozen=True)
class CommitRecord:
    timestamp: str
    message: str
    files: Tuple[StagingEntry, ...] = ()
    parent: Optional[str] = None

    def find(self, path):
        for entry in self.files:
            if entry.path == path:
                return entry
        return None

    def to_dict(self):
        return {
            "timeStamp": self.timestamp,
            "message": self.message,
            "files": [entry.to_dict() for entry in self.files],
            "parent": self.parent,
        }

    def serialize(self) -> bytes:
        # These bytes are both the stored object and the digest preimage.
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    @classmethod
    def deserialize(cls, data: bytes) -> "CommitRecord":
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise CorruptStateError(f"Unreadable commit record: {e}") from e
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, dict):
            raise CorruptStateError("Commit record is not an object")
        missing = {"timeStamp", "message", "files", "parent"} - raw.keys()
        if missing:
            raise CorruptStateError(
                f"Commit record is missing {', '.join(sorted(missing))}"
            )
        timestamp, message = raw["timeStamp"], raw["message"]
        files, parent = raw["files"], raw["parent"]
        if not isinstance(timestamp, str) or not isinstance(message, str):
            raise CorruptStateError("Commit timestamp and message must be strings")
        if not isinstance(files, list):
            raise CorruptStateError("Commit files must be a list")
        if parent is not None and not is_digest(parent):
            raise CorruptStateError(f"Commit parent is not a digest: {parent!r}")
        return cls(
            timestamp=timestamp,
            message=message,
            files=tuple(StagingEntry.from_dict(item) for item in files),
            parent=parent,
        )
