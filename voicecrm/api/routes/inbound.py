"""
Inbound Routes
Call-log reports, lead buckets and per-client inbound settings
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from voicecrm.db import get_db
from voicecrm.services import InboundSettingsService, ReportService, resolve_date_window
from voicecrm.services.report_service import DateWindow
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


def get_date_window(
    filter: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate")
) -> DateWindow:
    return resolve_date_window(filter, start_date, end_date)


@router.get("/inbound/report")
async def inbound_report(
    client_id: str = Depends(require_client),
    window: DateWindow = Depends(get_date_window),
    db: Session = Depends(get_db)
):
    data = ReportService(db).report(client_id, window)
    return {"success": True, "data": data, "filter": window.to_dict()}


@router.get("/inbound/logs")
async def inbound_logs(
    client_id: str = Depends(require_client),
    window: DateWindow = Depends(get_date_window),
    db: Session = Depends(get_db)
):
    result = ReportService(db).logs(client_id, window)
    return {"success": True, **result, "filter": window.to_dict()}


@router.get("/inbound/leads")
async def inbound_leads(
    client_id: str = Depends(require_client),
    window: DateWindow = Depends(get_date_window),
    db: Session = Depends(get_db)
):
    data = ReportService(db).leads(client_id, window)
    return {"success": True, "data": data, "filter": window.to_dict()}


@router.get("/inbound/settings")
async def get_inbound_settings(client_id: str = Depends(require_client), db: Session = Depends(get_db)):
    """The stored settings document, or null when none was saved yet"""
    record = InboundSettingsService(db).get(client_id)
    return record.to_dict() if record else None


@router.put("/inbound/settings")
async def update_inbound_settings(
    update: Dict[str, Any] = Body(default_factory=dict),
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
):
    record = InboundSettingsService(db).upsert(client_id, update)
    return record.to_dict()
