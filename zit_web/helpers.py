from django.conf import settings
from django.http import Http404

from zit.history import CommitDiff, FileDiff
from zit.repository import Repository


def get_repository_or_404() -> Repository:
    repo = Repository(settings.ZIT_REPO_ROOT)
    if not repo.exists():
        raise Http404(f"No zit repository at {repo.worktree}")
    return repo


def file_diff_to_dict(file_diff: FileDiff):
    return {
        "path": file_diff.path,
        "hash": file_diff.digest,
        "is_new": file_diff.is_new,
        "error": file_diff.error,
        "hunks": [hunk.to_dict() for hunk in file_diff.visible_hunks()],
    }


def commit_diff_to_dict(result: CommitDiff):
    record = result.record
    return {
        "digest": result.digest,
        "timestamp": record.timestamp,
        "message": record.message,
        "parent": record.parent,
        "files": [file_diff_to_dict(f) for f in result.files],
    }
