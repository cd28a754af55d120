"""Audit trail for account events (login, failed login, registration)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger("casework.audit")


def mask_phone(phone: Optional[str]) -> str:
    """Keep only the last four digits of a phone number."""

    if not phone:
        return "unknown"
    return "*" * max(len(phone) - 4, 0) + phone[-4:]


class AuditLogger:
    """Emit one JSON line per account event on the ``casework.audit`` logger."""

    def record(self, action: str, actor: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        entry = {
            "at": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "actor": actor,
            "details": details or {},
        }
        logger.info(json.dumps(entry, default=str, sort_keys=True))
        return entry


audit_logger = AuditLogger()

__all__ = ["AuditLogger", "audit_logger", "mask_phone"]
