"""Structured logging helpers (PII-safe)."""

from typing import Any
from uuid import UUID


def build_log_context(
    *,
    user_id: UUID | str | None = None,
    org_id: UUID | str | None = None,
    case_id: UUID | str | None = None,
    request_id: str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Return a PII-safe log context dict.

    Identifiers are stringified so log formatters never see UUID objects.
    Extra keyword fields are kept only when they carry a value.
    """
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = str(user_id)
    if org_id:
        context["org_id"] = str(org_id)
    if case_id:
        context["case_id"] = str(case_id)
    if request_id:
        context["request_id"] = request_id
    for key, value in fields.items():
        if value is None or value == "":
            continue
        context[key] = str(value) if isinstance(value, UUID) else value
    return context
