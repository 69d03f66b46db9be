import argparse
import logging
import os
import sys

from .errors import AlreadyInitializedError, ZitError
from .repository import Repository

SEPARATOR = "-" * 66


def hunk_prefix(hunk):
    if hunk.added:
        return "+ "
    if hunk.removed:
        return "- "
    return "  "


def cmd_init(repo, args):
    try:
        repo.init()
    except AlreadyInitializedError as e:
        print(e)
        return 0
    print(f"Initialized empty zit repository in {repo.repo_dir}")
    return 0


def cmd_add(repo, args):
    for path in args.paths:
        for entry in repo.add(path):
            print(f"Added {entry.path}")
    return 0


def cmd_commit(repo, args):
    commit_sha = repo.commit(args.message)
    print(f"Commit successfully created: {commit_sha}")
    return 0


def cmd_log(repo, args):
    for entry in repo.log():
        print(SEPARATOR)
        print(f"Commit: {entry.digest}")
        print(f"Date: {entry.timestamp}")
        print(f"\n{entry.message}\n")
    return 0


def cmd_diff(repo, args):
    result = repo.diff(args.commit)
    print(f"Changes in commit {result.digest}:")
    for file_diff in result.files:
        print(f"File: {file_diff.path}")
        if file_diff.error:
            print(f"! {file_diff.error}")
            continue
        for hunk in file_diff.visible_hunks():
            for line in hunk.lines:
                print(hunk_prefix(hunk) + line)
    return 0


def cmd_status(repo, args):
    status = repo.status()
    print(f"HEAD: {status.head or '(no commits yet)'}")
    if not status.staged:
        print("Nothing staged.")
    for entry in status.staged:
        print(f"staged: {entry.path} {entry.digest[:7]}")
    return 0


def cmd_serve(repo, args):
    repo.require_repository()
    os.environ["ZIT_REPO_ROOT"] = repo.worktree
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zit_site.settings")
    from django.core.management import execute_from_command_line

    execute_from_command_line(["zit", "runserver", args.addrport, "--noreload"])
    return 0


COMMANDS = {
    'init': cmd_init,
    'add': cmd_add,
    'commit': cmd_commit,
    'log': cmd_log,
    'diff': cmd_diff,
    'status': cmd_status,
    'serve': cmd_serve,
}


def build_parser():
    parser = argparse.ArgumentParser(prog="zit", description="zit command")
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')
    subparsers = parser.add_subparsers(dest='command', metavar='command')
    subparsers.required = True

    subparsers.add_parser('init', help='Initialize a repository in the current directory')

    add = subparsers.add_parser('add', help='Stage files or directories')
    add.add_argument('paths', nargs='+', help='Files or directories to stage')

    commit = subparsers.add_parser('commit', help='Commit the staged files')
    commit.add_argument('-m', '--message', type=str, help='Commit message')

    subparsers.add_parser('log', help='Show commit history')

    diff = subparsers.add_parser('diff', help='Show the changes introduced by a commit')
    diff.add_argument('commit', help='Commit hash')

    subparsers.add_parser('status', help='Show HEAD and the staged files')

    serve = subparsers.add_parser('serve', help='Browse the repository over HTTP')
    serve.add_argument('addrport', nargs='?', default='127.0.0.1:8000', help='Address and port')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'commit' and not args.message:
        parser.error("the commit command requires a -m message")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    repo = Repository(os.getcwd())
    try:
        return COMMANDS[args.command](repo, args)
    except ZitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
