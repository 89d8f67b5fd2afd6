"""Scope audit: do an app's API calls have the scopes they need?

Public names are re-exported here::

    from forgescope.audit import ApiCall, AuditResult, audit_calls
"""

from forgescope.audit.engine import audit_calls, check_call, load_calls
from forgescope.audit.models import ApiCall, AuditResult, Finding, Severity

__all__ = [
    "ApiCall",
    "AuditResult",
    "Finding",
    "Severity",
    "audit_calls",
    "check_call",
    "load_calls",
]
