# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deserialise the build-manifest inspector's JSON document."""

from __future__ import annotations

from pydantic import ValidationError

from ..models import Manifest


class ManifestError(Exception):
    """Raised when the manifest document cannot be deserialised."""


def parse_manifest(text: str | bytes) -> Manifest:
    """Return the :class:`Manifest` described by ``text``.

    Args:
        text: JSON document shaped like ``{"packages": [...]}``.

    Returns:
        Manifest: Packages and dependencies in source order.

    Raises:
        ManifestError: If ``text`` is not valid JSON or does not match the schema.
    """

    try:
        return Manifest.model_validate_json(text)
    except ValidationError as exc:
        raise ManifestError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    detail = first.get("msg", "invalid value")
    suffix = f" (and {len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{location}: {detail}{suffix}" if location else f"{detail}{suffix}"


__all__ = ["ManifestError", "parse_manifest"]
