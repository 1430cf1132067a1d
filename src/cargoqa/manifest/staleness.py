# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Flag pinned git dependencies whose branch is not a current release tag."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable, Sequence
from typing import Final
from urllib.parse import parse_qsl, urlsplit

from ..config import StalenessPolicy
from ..models import Dependency, Finding, FindingKind, ManifestPackage
from ..severity import Severity

GIT_TRANSPORT_PREFIX: Final[str] = "git+"
BRANCH_PARAMETER: Final[str] = "branch"
# Characters that may not appear in a host name, in addition to controls and whitespace.
FORBIDDEN_HOST_CHARACTERS: Final[frozenset[str]] = frozenset("#%/:<>?@[\\]^|")


class InvalidSourceError(ValueError):
    """Raised when a dependency source cannot be parsed as a URL."""


def branch_parameters(source: str) -> list[str]:
    """Return every ``branch`` query value of ``source`` in order of appearance.

    Args:
        source: Dependency source such as ``git+https://host/repo?branch=v1#sha``.

    Returns:
        list[str]: Branch values; empty when the URL pins no branch.

    Raises:
        InvalidSourceError: If the URL cannot be split, lacks a scheme or has an
            invalid host.
    """

    url = source.removeprefix(GIT_TRANSPORT_PREFIX)
    try:
        parts = urlsplit(url)
        # Accessing the port validates the authority component.
        _ = parts.port
    except ValueError as exc:
        raise InvalidSourceError(f"invalid source URL '{source}': {exc}") from exc
    if not parts.scheme or not parts.hostname:
        raise InvalidSourceError(f"invalid source URL '{source}': missing scheme or host")
    problem = _host_problem(parts.hostname)
    if problem is not None:
        raise InvalidSourceError(f"invalid source URL '{source}': {problem}")
    return [value for key, value in parse_qsl(parts.query, keep_blank_values=True) if key == BRANCH_PARAMETER]


def _host_problem(host: str) -> str | None:
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return f"invalid IPv6 host '{host}'"
        return None
    if any(ch.isspace() or not ch.isprintable() or ch in FORBIDDEN_HOST_CHARACTERS for ch in host):
        return f"invalid character in host '{host}'"
    try:
        host.encode("idna")
    except UnicodeError:
        return f"invalid host name '{host}'"
    return None


def in_scope(dependency: Dependency, policy: StalenessPolicy) -> bool:
    """Return ``True`` when ``dependency`` is sourced from the policy's prefix."""

    source = dependency.source_reference
    return source is not None and source.startswith(policy.source_prefix)


def evaluate_dependency(dependency: Dependency, policy: StalenessPolicy) -> list[Finding]:
    """Return staleness findings for ``dependency`` under ``policy``.

    Sources that are absent or outside the policy prefix are skipped. Each
    ``branch`` value outside the current tag set yields one warning; a source
    that fails to parse yields a single error finding for this dependency only.
    """

    if not in_scope(dependency, policy):
        return []
    source = dependency.source_reference or ""
    try:
        branches = branch_parameters(source)
    except InvalidSourceError as exc:
        return [
            Finding(
                kind=FindingKind.INVALID_SOURCE,
                severity=Severity.ERROR,
                message=f"could not parse source for '{dependency.name}': {exc}",
                subject=dependency.name,
            )
        ]
    return [
        Finding(
            kind=FindingKind.STALE_DEPENDENCY,
            severity=Severity.WARNING,
            message=f"{branch} for '{dependency.name}' is out of date",
            subject=dependency.name,
        )
        for branch in branches
        if branch not in policy.current_tags
    ]


def check_consistency(packages: Iterable[ManifestPackage], policies: Sequence[StalenessPolicy]) -> list[Finding]:
    """Warn when dependencies from one policy prefix pin different branches.

    Args:
        packages: Manifest packages in source order.
        policies: Staleness policies whose prefixes group the dependencies.

    Returns:
        list[Finding]: At most one warning per policy listing the distinct branches
        in order of first appearance.
    """

    seen: dict[str, list[str]] = {policy.source_prefix: [] for policy in policies}
    for package in packages:
        for dependency in package.dependencies:
            for policy in policies:
                if not in_scope(dependency, policy):
                    continue
                try:
                    branches = branch_parameters(dependency.source_reference or "")
                except InvalidSourceError:
                    continue
                bucket = seen[policy.source_prefix]
                bucket.extend(branch for branch in branches if branch not in bucket)

    findings: list[Finding] = []
    for prefix, branches in seen.items():
        if len(branches) > 1:
            findings.append(
                Finding(
                    kind=FindingKind.INCONSISTENT_SOURCE,
                    severity=Severity.WARNING,
                    message=f"dependencies from {prefix} pin {len(branches)} different branches: {', '.join(branches)}",
                    subject=prefix,
                )
            )
    return findings


__all__ = [
    "InvalidSourceError",
    "branch_parameters",
    "check_consistency",
    "evaluate_dependency",
    "in_scope",
]
