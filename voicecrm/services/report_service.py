"""
Inbound Reporting Service
Date-window filtering, call summaries and lead bucketing over call logs
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ValidationError
from voicecrm.db.models import AgentSettings, CallLog, Client, LeadStatus
from voicecrm.utils import parse_datetime

logger = get_logger(__name__)

ALLOWED_FILTERS = ["today", "yesterday", "last7days"]

# Bucket name -> lead statuses it collects. Legacy values very_interested
# and medium are still counted for older logs.
LEAD_BUCKETS: List[Tuple[str, Tuple[str, ...]]] = [
    ("veryInterested", ("vvi", "very_interested")),
    ("maybe", ("maybe", "medium")),
    ("enrolled", ("enrolled",)),
    ("junkLead", ("junk_lead",)),
    ("notRequired", ("not_required",)),
    ("enrolledOther", ("enrolled_other",)),
    ("decline", ("decline",)),
    ("notEligible", ("not_eligible",)),
    ("wrongNumber", ("wrong_number",)),
    ("hotFollowup", ("hot_followup",)),
    ("coldFollowup", ("cold_followup",)),
    ("schedule", ("schedule",)),
    ("notConnected", ("not_connected",)),
]


@dataclass
class DateWindow:
    """Inclusive [start, end] time range; both None means unbounded"""
    applied: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "applied": self.applied,
            "startDate": self.start.isoformat() if self.start else None,
            "endDate": self.end.isoformat() if self.end else None,
        }


def _end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999000)


def _start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_date_window(
    filter_name: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    now: Optional[datetime] = None
) -> DateWindow:
    """
    Turn the filter query parameters into a time window

    Named filters win over explicit dates. An unknown filter is accepted only
    when both explicit dates are supplied.

    Raises:
        ValidationError: Unknown filter without dates, or unparseable dates
    """
    if filter_name and filter_name not in ALLOWED_FILTERS and not (start_date and end_date):
        raise ValidationError(
            f"Filter must be one of: {', '.join(ALLOWED_FILTERS)} or provide both startDate and endDate",
            field="filter",
            details={"allowedFilters": ALLOWED_FILTERS}
        )

    now = now or datetime.utcnow()
    applied = filter_name or "all"

    if filter_name == "today":
        return DateWindow(applied, _start_of_day(now), _end_of_day(now))

    if filter_name == "yesterday":
        yesterday = now - timedelta(days=1)
        return DateWindow(applied, _start_of_day(yesterday), _end_of_day(yesterday))

    if filter_name == "last7days":
        return DateWindow(applied, now - timedelta(days=7), now)

    if start_date and end_date:
        start = parse_datetime(start_date)
        end = parse_datetime(end_date)
        if start is None or end is None:
            raise ValidationError("Invalid date format", field="startDate/endDate")
        return DateWindow(applied, start, _end_of_day(end))

    return DateWindow(applied)


def summarize_calls(logs: Iterable[CallLog]) -> Dict[str, Any]:
    """Totals, connected split and average duration (0 when there are no calls)"""
    logs = list(logs)
    total_calls = len(logs)
    total_not_connected = sum(1 for log in logs if log.lead_status == LeadStatus.NOT_CONNECTED.value)
    total_duration = sum(log.duration or 0 for log in logs)

    return {
        "totalCalls": total_calls,
        "totalConnected": total_calls - total_not_connected,
        "totalNotConnected": total_not_connected,
        "totalConversationTime": total_duration,
        "avgCallDuration": total_duration / total_calls if total_calls else 0,
    }


def group_leads(logs: Iterable[CallLog]) -> Dict[str, Dict[str, Any]]:
    """Bucket logs by lead category; every bucket is present, possibly empty"""
    buckets: Dict[str, List[Dict[str, Any]]] = {name: [] for name, _ in LEAD_BUCKETS}
    status_to_bucket = {
        status: name
        for name, statuses in LEAD_BUCKETS
        for status in statuses
    }

    for log in logs:
        bucket = status_to_bucket.get(log.lead_status)
        if bucket:
            buckets[bucket].append(log.to_dict())

    return {
        name: {"data": entries, "count": len(entries)}
        for name, entries in buckets.items()
    }


class ReportService:
    """Call-log queries scoped to one client"""

    def __init__(self, db: Session):
        self.db = db

    def fetch_logs(self, client_id: str, window: DateWindow) -> List[CallLog]:
        query = self.db.query(CallLog).filter(CallLog.client_id == client_id)
        if window.start is not None:
            query = query.filter(CallLog.time >= window.start)
        if window.end is not None:
            query = query.filter(CallLog.time <= window.end)
        return query.order_by(CallLog.time.desc()).all()

    def report(self, client_id: str, window: DateWindow) -> Dict[str, Any]:
        logs = self.fetch_logs(client_id, window)
        logger.debug("Inbound report", client_id=client_id, filter=window.applied, calls=len(logs))
        return {"clientId": client_id, **summarize_calls(logs)}

    def leads(self, client_id: str, window: DateWindow) -> Dict[str, Dict[str, Any]]:
        return group_leads(self.fetch_logs(client_id, window))

    def logs(self, client_id: str, window: DateWindow) -> Dict[str, Any]:
        client = self.db.query(Client).filter(Client.id == client_id).first()
        return {
            "clientName": {"_id": client.id, "name": client.name} if client else None,
            "data": [log.to_dict() for log in self.fetch_logs(client_id, window)],
        }


class InboundSettingsService:
    """Free-form per-client inbound settings document"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, client_id: str) -> Optional[AgentSettings]:
        return self.db.query(AgentSettings).filter(AgentSettings.client_id == client_id).first()

    def upsert(self, client_id: str, update: Dict[str, Any]) -> AgentSettings:
        """Shallow-merge update into the stored document, creating it if needed"""
        record = self.get(client_id)
        if record is None:
            record = AgentSettings(client_id=client_id, settings={})
            self.db.add(record)

        merged = dict(record.settings or {})
        merged.update({k: v for k, v in update.items() if k not in ("_id", "clientId")})
        record.settings = merged

        self.db.commit()
        self.db.refresh(record)
        return record
