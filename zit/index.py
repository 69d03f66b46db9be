import json
import logging

from .errors import CorruptStateError
from .records import StagingEntry

logger = logging.getLogger(__name__)


class StagingArea:
    def __init__(self, state):
        self.state = state

    def load(self):
        text = self.state.read_index()
        if text is None:
            return []
        try:
            raw = json.loads(text)
        except ValueError as e:
            raise CorruptStateError(f"Unreadable index: {e}") from e
        if not isinstance(raw, list):
            raise CorruptStateError("Index is not a list of entries")

        entries = [StagingEntry.from_dict(item) for item in raw]
        paths = {entry.path for entry in entries}
        if len(paths) != len(entries):
            raise CorruptStateError("Index lists the same path more than once")
        return entries

    def save(self, entries):
        self.state.write_index(json.dumps([entry.to_dict() for entry in entries], indent=2))

    def stage(self, path, digest):
        return self.stage_all([(path, digest)])

    def stage_all(self, pairs):
        """Stage (path, digest) pairs with one write. A known path keeps its position."""
        entries = self.load()
        positions = {entry.path: i for i, entry in enumerate(entries)}
        for path, digest in pairs:
            entry = StagingEntry(path, digest)
            if path in positions:
                entries[positions[path]] = entry
            else:
                positions[path] = len(entries)
                entries.append(entry)
            logger.debug("Staged %s as %s", path, digest)
        self.save(entries)
        return entries

    def clear(self):
        self.save([])
