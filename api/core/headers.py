"""
Alert headers for client UIs.

Write endpoints tell the client what happened through a pair of headers:

- X-{app}-alert: `{app}.{entity}.created` (or `.updated` / `.deleted`)
- X-{app}-params: the affected identifier

Failures use X-{app}-error instead of X-{app}-alert.
"""

from __future__ import annotations

from urllib.parse import quote

from . import settings


def _alert(message: str, param: str) -> dict[str, str]:
    app = settings.application_name()
    return {
        f"X-{app}-alert": message,
        f"X-{app}-params": quote(param, safe=""),
    }


def entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return _alert(f"{settings.application_name()}.{entity_name}.created", param)


def entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return _alert(f"{settings.application_name()}.{entity_name}.updated", param)


def entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return _alert(f"{settings.application_name()}.{entity_name}.deleted", param)


def failure_alert(entity_name: str, error_key: str) -> dict[str, str]:
    app = settings.application_name()
    return {
        f"X-{app}-error": f"error.{error_key}",
        f"X-{app}-params": entity_name,
    }
