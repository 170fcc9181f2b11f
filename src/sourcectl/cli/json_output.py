"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sourcectl.cli.output import machine_output
from sourcectl.core.types import (
    DesiredState,
    DriftReason,
    DriftReport,
    ObservedState,
    Presence,
    TrustPolicy,
)


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "RegistrationFailedError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


class ObservedStateResponse(BaseModel):
    """Observed state of a package source.

    source_location and trust_policy are omitted when the source is absent.
    """

    presence: Presence
    name: str
    provider_name: str
    source_location: str | None = None
    trust_policy: TrustPolicy | None = None

    @classmethod
    def from_observed(cls, observed: ObservedState) -> "ObservedStateResponse":
        return cls(
            presence=observed.presence,
            name=observed.name,
            provider_name=observed.provider_name,
            source_location=observed.source_location,
            trust_policy=observed.trust_policy,
        )

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class DriftResponse(BaseModel):
    """Result of comparing a package source with its desired state."""

    in_desired_state: bool
    reason: DriftReason | None = None
    observed: ObservedStateResponse

    @classmethod
    def from_report(cls, report: DriftReport) -> "DriftResponse":
        return cls(
            in_desired_state=report.in_desired_state,
            reason=report.reason,
            observed=ObservedStateResponse.from_observed(report.observed),
        )

    def to_json_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["observed"] = self.observed.to_json_dict()
        return data


class DesiredStateResponse(BaseModel):
    """Desired state as applied. The credential is never serialized."""

    name: str
    provider_name: str
    source_location: str
    presence: Presence
    trust_policy: TrustPolicy

    @classmethod
    def from_desired(cls, desired: DesiredState) -> "DesiredStateResponse":
        return cls(
            name=desired.name,
            provider_name=desired.provider_name,
            source_location=desired.source_location,
            presence=desired.presence,
            trust_policy=desired.trust_policy,
        )


class ApplyResponse(BaseModel):
    """Result of a successful set."""

    applied: bool = True
    dry_run: bool
    desired: DesiredStateResponse


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption.

    Routes JSON through machine_output() to keep data on stdout and human
    messages on stderr. For Pydantic models, call model.model_dump(mode='json')
    (or to_json_dict) before passing to this function.
    """
    machine_output(json.dumps(data, indent=2))


def emit_error(error: Exception, exit_code: int = 1) -> None:
    """Output an error as an ErrorResponse JSON document."""
    response = ErrorResponse(
        error=str(error), error_type=type(error).__name__, exit_code=exit_code
    )
    emit_json(response.model_dump(mode="json"))
