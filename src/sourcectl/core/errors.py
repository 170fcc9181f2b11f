"""Errors raised while converging a package source."""


class SourceReconcileError(RuntimeError):
    """Base class for apply failures.

    Attributes:
        name: Package source name
        detail: Error reported by the registry
    """

    action = "reconcile"

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Failed to {self.action} package source '{name}': {detail}")


class RegistrationFailedError(SourceReconcileError):
    """The registry reported an error while registering a source."""

    action = "register"


class UnregistrationFailedError(SourceReconcileError):
    """The registry reported an error while unregistering a source."""

    action = "unregister"
