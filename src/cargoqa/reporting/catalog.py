# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reference links for lint rules that have browsable documentation."""

from __future__ import annotations

import re
from typing import Final

CLIPPY_NAMESPACE: Final[str] = "clippy::"
CLIPPY_CATALOG_URL: Final[str] = "https://rust-lang.github.io/rust-clippy/master/index.html#"
ERROR_INDEX_URL: Final[str] = "https://doc.rust-lang.org/error_codes/{code}.html"
_ERROR_CODE = re.compile(r"^E\d{4}$")


def normalise_rule_name(code: str) -> str:
    """Return the catalog anchor for a clippy code (``clippy::Too-Many`` -> ``too_many``)."""

    return code.removeprefix(CLIPPY_NAMESPACE).strip().lower().replace("-", "_")


def rule_reference(code: str | None) -> str | None:
    """Return the documentation URL for ``code`` or ``None`` when it has none.

    Args:
        code: Diagnostic code such as ``clippy::unwrap_used`` or ``E0308``.

    Returns:
        str | None: Catalog URL for clippy lints and compiler error codes.
    """

    if not code:
        return None
    candidate = code.strip()
    if candidate.startswith(CLIPPY_NAMESPACE):
        name = normalise_rule_name(candidate)
        return f"{CLIPPY_CATALOG_URL}{name}" if name else None
    if _ERROR_CODE.match(candidate):
        return ERROR_INDEX_URL.format(code=candidate)
    return None


__all__ = ["CLIPPY_CATALOG_URL", "ERROR_INDEX_URL", "normalise_rule_name", "rule_reference"]
