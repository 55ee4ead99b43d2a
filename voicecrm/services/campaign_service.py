"""
Campaign Service
Time-windowed campaigns over contact groups
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import NotFoundError, ValidationError
from voicecrm.db.models import Campaign, Group
from voicecrm.utils import is_blank, parse_datetime

logger = get_logger(__name__)


class CampaignService:
    """
    Campaigns scoped to one client. Status is recomputed from the date
    window on every write (mapper hook) and every read.
    """

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    def _owned_groups(self, group_ids: List[str]) -> List[Group]:
        unique_ids = list(dict.fromkeys(group_ids))
        groups = self.db.query(Group).filter(
            Group.id.in_(unique_ids),
            Group.client_id == self.client_id
        ).all()
        if len(groups) != len(unique_ids):
            raise ValidationError("Some groups not found or don't belong to client", field="groupIds")
        return groups

    def _refresh_status(self, campaign: Campaign, now: Optional[datetime] = None) -> Campaign:
        campaign.update_status(now)
        return campaign

    def list(self) -> List[Campaign]:
        campaigns = (
            self.db.query(Campaign)
            .filter(Campaign.client_id == self.client_id)
            .order_by(Campaign.created_at.desc())
            .all()
        )
        return [self._refresh_status(c) for c in campaigns]

    def get(self, campaign_id: str) -> Campaign:
        campaign = self.db.query(Campaign).filter(
            Campaign.id == campaign_id,
            Campaign.client_id == self.client_id
        ).first()
        if not campaign:
            raise NotFoundError("Campaign")
        return self._refresh_status(campaign)

    def create(
        self,
        name: Optional[str],
        start_date: Any,
        end_date: Any,
        description: Optional[str] = None,
        group_ids: Optional[List[str]] = None
    ) -> Campaign:
        """
        Raises:
            ValidationError: Missing name or dates, unparseable dates, or start >= end
        """
        if is_blank(name):
            raise ValidationError("Campaign name is required", field="name")
        if not start_date or not end_date:
            raise ValidationError("Start date and end date are required")

        start = parse_datetime(start_date)
        end = parse_datetime(end_date)
        if start is None or end is None:
            raise ValidationError("Invalid date format")
        if start >= end:
            raise ValidationError("End date must be after start date")

        campaign = Campaign(
            client_id=self.client_id,
            name=name.strip(),
            description=(description or "").strip(),
            start_date=start,
            end_date=end
        )
        if group_ids:
            campaign.groups = self._owned_groups(group_ids)

        self.db.add(campaign)
        self.db.commit()
        self.db.refresh(campaign)

        logger.info("Campaign created", campaign_id=campaign.id, status=campaign.status)
        return campaign

    def update(self, campaign_id: str, changes: Dict[str, Any]) -> Campaign:
        """Name is required; dates are re-validated when supplied"""
        if is_blank(changes.get("name")):
            raise ValidationError("Campaign name is required", field="name")

        campaign = self.get(campaign_id)

        start = end = None
        if changes.get("startDate"):
            start = parse_datetime(changes["startDate"])
            if start is None:
                raise ValidationError("Invalid start date format", field="startDate")
        if changes.get("endDate"):
            end = parse_datetime(changes["endDate"])
            if end is None:
                raise ValidationError("Invalid end date format", field="endDate")
        if start and end and start >= end:
            raise ValidationError("End date must be after start date")

        campaign.name = changes["name"].strip()
        campaign.description = (changes.get("description") or "").strip()
        if start:
            campaign.start_date = start
        if end:
            campaign.end_date = end
        if changes.get("groupIds") is not None:
            campaign.groups = self._owned_groups(changes["groupIds"])

        campaign.update_status()
        self.db.commit()
        self.db.refresh(campaign)

        logger.info("Campaign updated", campaign_id=campaign.id, status=campaign.status)
        return campaign

    def delete(self, campaign_id: str) -> None:
        campaign = self.get(campaign_id)
        self.db.delete(campaign)
        self.db.commit()
        logger.info("Campaign deleted", campaign_id=campaign_id)

    def set_groups(self, campaign_id: str, group_ids: Any) -> Campaign:
        """Replace the campaign's groups; every group must belong to the client"""
        if not isinstance(group_ids, list):
            raise ValidationError("groupIds array is required", field="groupIds")

        campaign = self.get(campaign_id)
        campaign.groups = self._owned_groups(group_ids)
        self.db.commit()
        self.db.refresh(campaign)
        return campaign
