"""Production package source registry using PowerShell PackageManagement.

Every operation renders a small PowerShell script and runs it through
``pwsh -NoProfile -NonInteractive -Command``. Cmdlet arguments are splatted
from a hashtable of single-quoted literals, so user input is never
interpolated as code. Credentials travel through the child process
environment, never on the command line.
"""

import json
import logging
import os
from collections.abc import Mapping
from typing import Any

from sourcectl.core.types import SourceCredential, TrustPolicy
from sourcectl.registry.abc import PackageSourceRegistry
from sourcectl.registry.types import (
    PackageSourceInfo,
    RegistrationRequest,
    UnregistrationRequest,
)
from sourcectl.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)

CREDENTIAL_USERNAME_VAR = "SOURCECTL_CREDENTIAL_USERNAME"
CREDENTIAL_PASSWORD_VAR = "SOURCECTL_CREDENTIAL_PASSWORD"

_CREDENTIAL_EXPR = (
    "New-Object System.Management.Automation.PSCredential("
    f"$env:{CREDENTIAL_USERNAME_VAR}, "
    f"(ConvertTo-SecureString $env:{CREDENTIAL_PASSWORD_VAR} -AsPlainText -Force))"
)


def quote_ps_literal(value: str) -> str:
    """Render value as a single-quoted PowerShell string literal."""
    return "'" + value.replace("'", "''") + "'"


def _render_params(params: Mapping[str, str | bool], *, with_credential: bool) -> list[str]:
    """Render a splatting hashtable named $params."""
    lines = ["$params = @{"]
    for key, value in params.items():
        if isinstance(value, bool):
            rendered = "$true" if value else "$false"
        else:
            rendered = quote_ps_literal(value)
        lines.append(f"    {key} = {rendered}")
    lines.append("}")
    if with_credential:
        lines.append(f"$params.Credential = {_CREDENTIAL_EXPR}")
    return lines


def build_query_script(
    name: str, provider_name: str, location: str, *, force_bootstrap: bool
) -> str:
    params: dict[str, str | bool] = {
        "Name": name,
        "ProviderName": provider_name,
        "Location": location,
        "ErrorAction": "SilentlyContinue",
        "WarningAction": "SilentlyContinue",
    }
    if force_bootstrap:
        params["ForceBootstrap"] = True
    lines = _render_params(params, with_credential=False)
    lines.append("$sources = @(Get-PackageSource @params)")
    lines.append(
        "ConvertTo-Json -Compress -InputObject @($sources | "
        "Select-Object Name, Location, ProviderName, IsRegistered, IsTrusted)"
    )
    return "\n".join(lines)


def build_register_script(request: RegistrationRequest, *, force: bool) -> str:
    params: dict[str, str | bool] = {
        "Name": request.name,
        "ProviderName": request.provider_name,
    }
    if request.location is not None:
        params["Location"] = request.location
    params["Trusted"] = request.trusted
    params["Force"] = force
    lines = ["$ErrorActionPreference = 'Stop'"]
    lines.extend(_render_params(params, with_credential=request.credential is not None))
    lines.append("Register-PackageSource @params | Out-Null")
    return "\n".join(lines)


def build_unregister_script(request: UnregistrationRequest, *, force: bool) -> str:
    params: dict[str, str | bool] = {
        "Name": request.name,
        "ProviderName": request.provider_name,
    }
    if request.location is not None:
        params["Location"] = request.location
    params["Force"] = force
    lines = ["$ErrorActionPreference = 'Stop'"]
    lines.extend(_render_params(params, with_credential=request.credential is not None))
    lines.append("Unregister-PackageSource @params | Out-Null")
    return "\n".join(lines)


def build_gallery_update_script(name: str, location: str, trust_policy: TrustPolicy) -> str:
    params: dict[str, str | bool] = {
        "Name": name,
        "SourceLocation": location,
        "InstallationPolicy": trust_policy.value,
    }
    lines = ["$ErrorActionPreference = 'Stop'"]
    lines.extend(_render_params(params, with_credential=False))
    lines.append("Set-PSRepository @params")
    return "\n".join(lines)


def parse_query_output(stdout: str) -> list[PackageSourceInfo]:
    """Parse ConvertTo-Json output from the query script.

    ConvertTo-Json emits a bare object instead of a one-element array in
    some PowerShell versions, so both shapes are accepted.
    """
    stripped = stdout.strip()
    if not stripped:
        return []

    data: Any = json.loads(stripped)
    if isinstance(data, dict):
        data = [data]

    return [
        PackageSourceInfo(
            name=str(row.get("Name") or ""),
            location=str(row.get("Location") or ""),
            provider_name=str(row.get("ProviderName") or ""),
            is_registered=bool(row.get("IsRegistered", False)),
            is_trusted=bool(row.get("IsTrusted", False)),
        )
        for row in data
    ]


class RealPackageSourceRegistry(PackageSourceRegistry):
    """Production implementation using pwsh via subprocess.

    Example:
        registry = RealPackageSourceRegistry()
        sources = registry.query_sources(
            "PSGallery", "PowerShellGet", "https://www.powershellgallery.com/api/v2",
            force_bootstrap=True,
        )
    """

    def __init__(self, powershell_executable: str = "pwsh") -> None:
        """Create registry bound to a PowerShell executable.

        Args:
            powershell_executable: Name or path of the PowerShell binary
        """
        self._powershell_executable = powershell_executable

    def _run(
        self,
        script: str,
        operation_context: str,
        credential: SourceCredential | None = None,
    ) -> str:
        env = dict(os.environ)
        if credential is not None:
            env[CREDENTIAL_USERNAME_VAR] = credential.username
            env[CREDENTIAL_PASSWORD_VAR] = credential.password

        cmd = [self._powershell_executable, "-NoProfile", "-NonInteractive", "-Command", script]
        logger.debug("Running pwsh to %s", operation_context)
        result = run_subprocess_with_context(cmd, operation_context, env=env)
        return result.stdout

    def query_sources(
        self,
        name: str,
        provider_name: str,
        location: str,
        *,
        force_bootstrap: bool,
    ) -> list[PackageSourceInfo]:
        script = build_query_script(
            name, provider_name, location, force_bootstrap=force_bootstrap
        )
        stdout = self._run(script, f"query package source '{name}'")
        try:
            return parse_query_output(stdout)
        except (json.JSONDecodeError, AttributeError, TypeError) as e:
            msg = f"Unexpected Get-PackageSource output for '{name}': {stdout.strip()}"
            raise RuntimeError(msg) from e

    def register_source(self, request: RegistrationRequest, *, force: bool) -> None:
        script = build_register_script(request, force=force)
        self._run(script, f"register package source '{request.name}'", request.credential)

    def unregister_source(self, request: UnregistrationRequest, *, force: bool) -> None:
        script = build_unregister_script(request, force=force)
        self._run(script, f"unregister package source '{request.name}'", request.credential)

    def update_gallery_source(self, name: str, location: str, trust_policy: TrustPolicy) -> None:
        script = build_gallery_update_script(name, location, trust_policy)
        self._run(script, f"update gallery source '{name}'")
