"""Declarative management of package source registrations."""

from sourcectl.core.errors import (
    RegistrationFailedError,
    SourceReconcileError,
    UnregistrationFailedError,
)
from sourcectl.core.reconciler import SourceReconciler
from sourcectl.core.types import (
    DesiredState,
    DriftReason,
    DriftReport,
    ObservedState,
    Presence,
    SourceCredential,
    TrustPolicy,
)

__all__ = [
    "DesiredState",
    "DriftReason",
    "DriftReport",
    "ObservedState",
    "Presence",
    "RegistrationFailedError",
    "SourceCredential",
    "SourceReconcileError",
    "SourceReconciler",
    "TrustPolicy",
    "UnregistrationFailedError",
]
