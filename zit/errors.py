class ZitError(Exception):
    pass


class AlreadyInitializedError(ZitError):
    def __init__(self, path):
        super().__init__(f"Already initialized {path}")
        self.path = path


class NotARepositoryError(ZitError):
    def __init__(self, path):
        super().__init__(f"Not a zit repository: {path}")
        self.path = path


class ObjectNotFoundError(ZitError, KeyError):
    def __init__(self, digest):
        super().__init__(f"Object not found: {digest}")
        self.digest = digest

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class CommitNotFoundError(ObjectNotFoundError):
    def __init__(self, digest):
        super().__init__(digest)
        self.args = (f"Commit not found: {digest}",)


class CorruptStateError(ZitError):
    pass


class MissingWorkingFileError(ZitError):
    def __init__(self, path, reason=None):
        message = f"Cannot read {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class HeadMovedError(ZitError):
    def __init__(self, expected, actual):
        super().__init__(
            f"HEAD moved from {expected or '(none)'} to {actual or '(none)'} during commit"
        )
        self.expected = expected
        self.actual = actual


class HeadLockedError(ZitError):
    def __init__(self, lock_path):
        super().__init__(
            f"Unable to lock HEAD: {lock_path} exists. "
            "Another zit process may be running; remove the file if it is stale."
        )
        self.lock_path = lock_path


class RepositoryPathError(ZitError):
    def __init__(self, path):
        super().__init__(f"Refusing to add {path}: it is inside the repository directory")
        self.path = path
