"""
Business Info Service
Free-text business descriptions used to brief agents
"""

from typing import Optional

from sqlalchemy.orm import Session

from voicecrm.core.exceptions import NotFoundError, ValidationError
from voicecrm.db.models import BusinessInfo
from voicecrm.utils import is_blank


class BusinessInfoService:

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    def get(self, info_id: str) -> BusinessInfo:
        info = self.db.query(BusinessInfo).filter(
            BusinessInfo.id == info_id,
            BusinessInfo.client_id == self.client_id
        ).first()
        if not info:
            raise NotFoundError("Business info")
        return info

    def create(self, text: Optional[str]) -> BusinessInfo:
        if is_blank(text):
            raise ValidationError("Text is required", field="text")
        info = BusinessInfo(client_id=self.client_id, text=text.strip())
        self.db.add(info)
        self.db.commit()
        self.db.refresh(info)
        return info

    def update(self, info_id: str, text: Optional[str]) -> BusinessInfo:
        if is_blank(text):
            raise ValidationError("Text is required", field="text")
        info = self.get(info_id)
        info.text = text.strip()
        self.db.commit()
        self.db.refresh(info)
        return info
