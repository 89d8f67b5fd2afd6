"""Data models for the scope audit: Severity, ApiCall, Finding, AuditResult.

Kept apart from the audit engine so output formatters can import them
without pulling in manifest or specification handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class Severity(IntEnum):
    """Four-level severity scale for audit findings.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH < CRITICAL.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


@dataclass(frozen=True)
class ApiCall:
    """An outbound API request discovered in an app's source.

    Attributes:
        method: HTTP method, case-insensitive.
        url: Request path or absolute URL.
        function: Key of the function making the call, if known.
    """

    method: str
    url: str
    function: str = ""


@dataclass(frozen=True)
class Finding:
    """A single audit observation.

    Attributes:
        severity: How serious the finding is.
        finding_type: ``"missing_scope"`` or ``"unknown_endpoint"``.
        message: Human-readable description.
        call: The request the finding is about.
        endpoint: The matched URL template, empty when nothing matched.
        required_scopes: Scopes any one of which would satisfy the call.
    """

    severity: Severity
    finding_type: str
    message: str
    call: ApiCall
    endpoint: str = ""
    required_scopes: frozenset[str] = frozenset()


@dataclass
class AuditResult:
    """The complete result of auditing one app.

    Attributes:
        app_id: The manifest's ``app.id``.
        declared_scopes: Scopes the manifest requests.
        findings: All findings (may be empty).
        calls_checked: Number of calls examined.
    """

    app_id: str
    declared_scopes: frozenset[str]
    findings: list[Finding] = field(default_factory=list)
    calls_checked: int = 0

    @property
    def max_severity(self) -> Severity | None:
        """Return the highest severity among all findings, or None if none."""
        if not self.findings:
            return None
        return max(f.severity for f in self.findings)

    @property
    def is_safe(self) -> bool:
        """True when no finding reaches MEDIUM severity."""
        sev = self.max_severity
        return sev is None or sev < Severity.MEDIUM
