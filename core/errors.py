from typing import Any


class WorkerError(Exception):
    """Base class for every failure that terminates a trigger request."""

    status_code: int = 400
    message: str = "Worker Error"

    def __init__(self, details: Any = None):
        self.details = details
        super().__init__(self.message if details is None else f"{self.message}: {details}")

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        body = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class NonPermissibleOrigin(WorkerError):
    status_code = 403
    message = "Non-Permissible Origin"


class BrokenCredentialStore(WorkerError):
    status_code = 502
    message = "Broken GitHub Secrets"


class EmptyCredentialSet(WorkerError):
    status_code = 503
    message = "No GitHub Secrets"


class NonPermissibleKey(WorkerError):
    status_code = 401
    message = "Non-Permissible Key"


class NoPermissibleRepositories(WorkerError):
    status_code = 503
    message = "No Permissible Repositories"


class NonPermissibleRepository(WorkerError):
    status_code = 403
    message = "Non-Permissible Repository"


class NonPermissibleRepositoryForKey(WorkerError):
    status_code = 403
    message = "Non-Permissible Repository for Key"


class NonPermissibleTrigger(WorkerError):
    status_code = 404
    message = "Non-Permissible Trigger"


class UnexpectedRequestBody(WorkerError):
    status_code = 400
    message = "Unexpected Request Body"


class NoBranchProvided(WorkerError):
    status_code = 400
    message = "No Branch Provided"


class BrokenNotifier(WorkerError):
    status_code = 502
    message = "Broken GitHub Comment"


class UpstreamTimeout(WorkerError):
    status_code = 504
    message = "Upstream Timeout"
