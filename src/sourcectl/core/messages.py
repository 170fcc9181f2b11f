"""Operator-facing message templates.

A MessageCatalog is passed to the reconciler instead of living in module
state, so a localized catalog can be swapped in per context (for example
from the ``[messages]`` table of the config file).
"""

import re
import string
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

_ENGLISH_TEMPLATES: dict[str, str] = {
    "query_source": (
        "Querying package source '{name}' (provider '{provider_name}', location '{location}')"
    ),
    "source_found": "Package source '{name}' is registered at '{location}' with policy {policy}",
    "source_not_found": "Package source '{name}' is not registered with provider '{provider_name}'",
    "query_failed": "Query for package source '{name}' failed, treating it as absent: {detail}",
    "install_policy_warning": (
        "Registering package source '{name}' with provider '{provider_name}' and "
        "installation policy {policy}. Packages from a Trusted source are installed "
        "without validation or confirmation; only use Trusted for sources you control."
    ),
    "register_source": "Registering package source '{name}' at '{location}'",
    "register_succeeded": "Registered package source '{name}'",
    "update_gallery_source": "Updating existing gallery source '{name}' to policy {policy}",
    "unregister_source": "Unregistering package source '{name}'",
    "unregister_succeeded": "Unregistered package source '{name}'",
    "presence_mismatch": "Package source '{name}' is {observed}, expected {desired}",
    "location_mismatch": (
        "Package source '{name}' location '{observed}' does not match '{desired}'"
    ),
    "trust_policy_mismatch": (
        "Package source '{name}' installation policy {observed} does not match {desired}"
    ),
    "in_desired_state": "Package source '{name}' is in the desired state",
}


def placeholder_names(template: str) -> set[str]:
    """Top-level field names used by a str.format template.

    Raises:
        ValueError: If the template has unbalanced braces
    """
    names: set[str] = set()
    for _, field_name, _, _ in string.Formatter().parse(template):
        if field_name is None:
            continue
        names.add(re.split(r"[.\[]", field_name, maxsplit=1)[0])
    return names


@dataclass(frozen=True)
class MessageCatalog:
    """Immutable set of message templates keyed by message id.

    Templates use str.format placeholders.
    """

    templates: Mapping[str, str]

    def format(self, key: str, **values: object) -> str:
        """Render the template for key.

        Raises:
            KeyError: If the catalog has no template for key
        """
        return self.templates[key].format(**values)

    def with_overrides(self, overrides: Mapping[str, str]) -> "MessageCatalog":
        """Return a catalog with some templates replaced.

        Raises:
            ValueError: If an override names an unknown message id, or uses a
                placeholder the original template does not provide
        """
        unknown = sorted(set(overrides) - set(self.templates))
        if unknown:
            msg = f"Unknown message ids: {', '.join(unknown)}"
            raise ValueError(msg)
        for key, template in overrides.items():
            try:
                used = placeholder_names(template)
            except ValueError as e:
                msg = f"Invalid template for message '{key}': {e}"
                raise ValueError(msg) from e
            extra = sorted(used - placeholder_names(self.templates[key]))
            if extra:
                msg = f"Unknown placeholders in message '{key}': {', '.join(extra)}"
                raise ValueError(msg)
        merged = dict(self.templates)
        merged.update(overrides)
        return MessageCatalog(templates=MappingProxyType(merged))


DEFAULT_MESSAGES = MessageCatalog(templates=MappingProxyType(_ENGLISH_TEMPLATES))
