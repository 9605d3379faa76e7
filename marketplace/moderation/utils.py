"""
utils.py – Append-only audit log of moderation decisions.

Entries are written once and never edited or deleted. A failed write is
raised as InternalError so the calling moderation step aborts.
"""

import logging
from typing import List, Optional
from marketplace import storage
from marketplace.errors import InternalError
from marketplace.moderation import schemas

logger = logging.getLogger(__name__)

LOGS_FILE = storage.collection_path("moderation_logs")


def load_logs() -> List[dict]:
    return storage.load_collection(LOGS_FILE)


def _append_log(entry: dict) -> None:
    with storage.locked_collection(LOGS_FILE) as logs:
        logs.append(entry)


def record_action(
    admin_id: str,
    action: schemas.ModerationAction,
    target_type: schemas.LogTargetType,
    target_id: str,
    reason: str,
    details: str = "",
    related_report: Optional[str] = None,
) -> schemas.ModerationLog:
    entry = schemas.ModerationLog(
        id=storage.new_id(),
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        related_report=related_report,
        reason=reason,
        details=details,
        timestamp=storage.utcnow(),
    )
    try:
        _append_log(entry.model_dump(mode="json"))
    except (OSError, ValueError) as exc:
        logger.error("Could not write moderation log for %s on %s %s", action.value, target_type.value, target_id)
        raise InternalError("Failed to record moderation action") from exc
    return entry


def get_logs(limit: int) -> List[schemas.ModerationLog]:
    """Newest entries first."""
    logs = [schemas.ModerationLog(**entry) for entry in load_logs()]
    logs.sort(key=lambda entry: entry.timestamp, reverse=True)
    return logs[:limit]
