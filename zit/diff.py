"""Line-level diffs between two versions of a text file.

``compute_line_diff`` is the pure alignment. It compares whole lines,
endings included, and returns hunk lines with the endings stripped.
``visible_hunks`` is the display policy applied on top of it: blank
lines take part in the alignment but are not shown.
"""
import difflib
from dataclasses import dataclass
from typing import List, Tuple

ADDED = "added"
REMOVED = "removed"
UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Hunk:
    kind: str
    lines: Tuple[str, ...]

    @property
    def added(self):
        return self.kind == ADDED

    @property
    def removed(self):
        return self.kind == REMOVED

    def to_dict(self):
        return {"kind": self.kind, "lines": list(self.lines)}


def _append(hunks, kind, lines):
    if not lines:
        return
    if hunks and hunks[-1].kind == kind:
        hunks[-1] = Hunk(kind, hunks[-1].lines + tuple(lines))
    else:
        hunks.append(Hunk(kind, tuple(lines)))


def split_lines(text):
    """Split on '\\n' only, keeping the terminators."""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _strip_terminator(line):
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _append_lines(hunks, kind, lines):
    _append(hunks, kind, [_strip_terminator(line) for line in lines])


def compute_line_diff(old: str, new: str) -> List[Hunk]:
    old_lines = split_lines(old)
    new_lines = split_lines(new)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    hunks = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append_lines(hunks, UNCHANGED, old_lines[i1:i2])
            continue
        if tag in ("delete", "replace"):
            _append_lines(hunks, REMOVED, old_lines[i1:i2])
        if tag in ("insert", "replace"):
            _append_lines(hunks, ADDED, new_lines[j1:j2])
    return hunks


def visible_hunks(hunks):
    visible = []
    for hunk in hunks:
        _append(visible, hunk.kind, [line for line in hunk.lines if line.strip()])
    return visible
