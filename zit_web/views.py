from itertools import islice

from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from zit.errors import CommitNotFoundError, CorruptStateError, ObjectNotFoundError

from .helpers import commit_diff_to_dict, get_repository_or_404


@require_GET
def repo_overview(request: HttpRequest) -> JsonResponse:
    repo = get_repository_or_404()
    status = repo.status()
    return JsonResponse({
        "head": status.head,
        "staged": [entry.to_dict() for entry in status.staged],
    })


@require_GET
def commit_list(request: HttpRequest) -> JsonResponse:
    repo = get_repository_or_404()
    entries = repo.log()
    limit = request.GET.get("limit")
    if limit is not None:
        try:
            entries = islice(entries, max(int(limit), 0))
        except ValueError:
            return JsonResponse({"error": "limit must be an integer"}, status=400)

    # A corrupt record ends the listing; the commits read so far are still returned.
    commits = []
    error = None
    try:
        for entry in entries:
            commits.append(entry.to_dict())
    except CorruptStateError as e:
        error = str(e)
    return JsonResponse({"commits": commits, "error": error})


@require_GET
def commit_detail(request: HttpRequest, commit_sha: str) -> JsonResponse:
    repo = get_repository_or_404()
    try:
        result = repo.diff(commit_sha)
    except (CommitNotFoundError, CorruptStateError):
        raise Http404(f"Commit '{commit_sha}' not found")
    return JsonResponse(commit_diff_to_dict(result))


@require_GET
def blob_view(request: HttpRequest, sha: str) -> HttpResponse:
    repo = get_repository_or_404()
    try:
        body = repo.objects.get(sha)
    except ObjectNotFoundError:
        raise Http404(f"Object '{sha}' not found")
    return HttpResponse(body.decode(errors="replace"), content_type="text/plain; charset=utf-8")
