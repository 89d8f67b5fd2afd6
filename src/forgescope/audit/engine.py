"""Compare the scopes an app's API calls need with the scopes it declares.

For each call the permission table is consulted:

- If an endpoint matches and lists scopes, at least one of them must be in
  the manifest's ``permissions.scopes``. Specification scope entries are
  alternatives (classic and granular scopes for the same operation), so a
  single declared scope satisfies the call. Otherwise a HIGH
  ``missing_scope`` finding is produced.
- If no endpoint matches, the requirement is unknown and a LOW
  ``unknown_endpoint`` finding records it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from forgescope.audit.models import ApiCall, AuditResult, Finding, Severity
from forgescope.exceptions import InvalidDocument
from forgescope.manifest.loader import read_document
from forgescope.manifest.models import Manifest
from forgescope.permissions.matcher import find_endpoint
from forgescope.permissions.table import PermissionTable

logger = logging.getLogger(__name__)


def load_calls(path: Path | str) -> list[ApiCall]:
    """Read a YAML or JSON list of ``{method, url[, function]}`` mappings.

    Entries missing ``method`` or ``url`` are skipped.

    Raises:
        InvalidDocument: If the file cannot be read or is not a list.
    """
    data = read_document(Path(path))
    if isinstance(data, Mapping):
        data = data.get("calls")
    if not isinstance(data, list):
        raise InvalidDocument(f"{path} must contain a list of calls")
    calls: list[ApiCall] = []
    for item in data:
        call = _decode_call(item)
        if call is None:
            logger.debug("Skipping incomplete call entry: %r", item)
            continue
        calls.append(call)
    return calls


def _decode_call(item: Any) -> ApiCall | None:
    if not isinstance(item, Mapping):
        return None
    method, url = item.get("method"), item.get("url")
    if not method or not url:
        return None
    return ApiCall(method=str(method), url=str(url), function=str(item.get("function") or ""))


def check_call(
    call: ApiCall,
    table: PermissionTable,
    declared: frozenset[str],
) -> Finding | None:
    """Check one call against the declared scopes.

    Returns:
        A finding, or None when the call is covered.
    """
    key = find_endpoint(table, call.method, call.url)
    if key is None:
        return Finding(
            severity=Severity.LOW,
            finding_type="unknown_endpoint",
            message=f"No scope requirement found for {call.method.upper()} {call.url}",
            call=call,
        )
    template, _ = key
    required = table[key]
    if not required or required & declared:
        return None
    return Finding(
        severity=Severity.HIGH,
        finding_type="missing_scope",
        message=(
            f"{call.method.upper()} {call.url} needs one of "
            f"{', '.join(sorted(required))}; none is declared"
        ),
        call=call,
        endpoint=template,
        required_scopes=required,
    )


def audit_calls(
    manifest: Manifest,
    table: PermissionTable,
    calls: Iterable[ApiCall],
) -> AuditResult:
    """Audit every call against the manifest's declared scopes."""
    declared = manifest.permissions.scopes
    result = AuditResult(app_id=manifest.app.id, declared_scopes=declared)
    for call in calls:
        result.calls_checked += 1
        finding = check_call(call, table, declared)
        if finding is not None:
            result.findings.append(finding)
    return result
