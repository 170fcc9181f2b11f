"""Human-readable rendering of package source state."""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sourcectl.core.messages import MessageCatalog
from sourcectl.core.types import DesiredState, DriftReason, DriftReport, ObservedState, Presence


def _stderr_console() -> Console:
    return Console(stderr=True, highlight=False)


def build_state_table(observed: ObservedState) -> Table:
    """Build a two-column table describing an observed source."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("property", style="bold")
    table.add_column("value")

    presence_style = "green" if observed.presence is Presence.PRESENT else "yellow"
    table.add_row("Name", Text(observed.name))
    table.add_row("ProviderName", Text(observed.provider_name))
    table.add_row("Presence", Text(observed.presence.value, style=presence_style))
    if observed.source_location is not None:
        table.add_row("SourceLocation", Text(observed.source_location))
    if observed.trust_policy is not None:
        table.add_row("TrustPolicy", Text(observed.trust_policy.value))
    return table


def render_observed_state(observed: ObservedState, console: Console | None = None) -> None:
    if console is None:
        console = _stderr_console()
    console.print(build_state_table(observed))


def describe_drift(report: DriftReport, desired: DesiredState, messages: MessageCatalog) -> str:
    """Explain a drift report in one line using the message catalog."""
    observed = report.observed
    if report.reason is None:
        return messages.format("in_desired_state", name=desired.name)
    if report.reason is DriftReason.PRESENCE_MISMATCH:
        return messages.format(
            "presence_mismatch",
            name=desired.name,
            observed=observed.presence,
            desired=desired.presence,
        )
    if report.reason is DriftReason.LOCATION_MISMATCH:
        return messages.format(
            "location_mismatch",
            name=desired.name,
            observed=observed.source_location,
            desired=desired.source_location,
        )
    return messages.format(
        "trust_policy_mismatch",
        name=desired.name,
        observed=observed.trust_policy,
        desired=desired.trust_policy,
    )


def render_drift_report(
    report: DriftReport,
    desired: DesiredState,
    messages: MessageCatalog,
    console: Console | None = None,
) -> None:
    if console is None:
        console = _stderr_console()
    style = "green" if report.in_desired_state else "red"
    marker = "✓" if report.in_desired_state else "✗"
    console.print(Text(f"{marker} {describe_drift(report, desired, messages)}", style=style))
