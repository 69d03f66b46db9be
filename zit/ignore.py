import fnmatch
import os

from .storage import REPO_DIR

IGNORE_FILE = ".zitignore"


def load_ignores(root='.'):
    try:
        with open(os.path.join(root, IGNORE_FILE), 'r', encoding='utf-8') as f:
            patterns = []
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                patterns.append(line)
            return patterns
    except FileNotFoundError:
        return []


def is_ignored(path, ignores):
    norm = path.replace(os.sep, '/')
    for pattern in ignores:
        if pattern.endswith('/'):
            base = pattern.rstrip('/')
            if norm == base or norm.startswith(base + '/'):
                return True
            # a bare directory name matches at any depth
            if '/' not in base and base in norm.split('/'):
                return True
            continue
        if fnmatch.fnmatch(norm, pattern):
            return True
    return False


def iter_tracked_files(root='.', ignores=None, start=None):
    """Yield '/'-separated paths, relative to root, of the files under start."""
    if ignores is None:
        ignores = []

    root = os.path.abspath(root)
    start = os.path.abspath(start) if start else root
    for dirpath, dirnames, filenames in os.walk(start):
        rel_dir = os.path.relpath(dirpath, root)
        if rel_dir == '.':
            rel_dir = ''
        dirnames[:] = sorted(
            d for d in dirnames
            if d != REPO_DIR and not is_ignored(os.path.join(rel_dir, d), ignores)
        )
        for filename in sorted(filenames):
            rel_path = os.path.join(rel_dir, filename) if rel_dir else filename
            if is_ignored(rel_path, ignores):
                continue
            yield rel_path.replace(os.sep, '/')
