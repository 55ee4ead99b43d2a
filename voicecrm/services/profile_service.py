"""
Profile Service
Business profiles and the Client.isprofileCompleted mirror

The client flag is written after the profile commit in a separate commit.
A failure between the two leaves them out of step until the next profile
read or write re-syncs it.
"""

import math
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ConflictError, NotFoundError, ValidationError
from voicecrm.db.models import Client, HumanAgent, Profile, is_valid_id

logger = get_logger(__name__)

# Attribute name -> wire name
PROFILE_FIELDS = {
    "business_name": "businessName",
    "business_type": "businessType",
    "contact_number": "contactNumber",
    "contact_name": "contactName",
    "pincode": "pincode",
    "city": "city",
    "state": "state",
    "website": "website",
    "pancard": "pancard",
    "gst": "gst",
    "annual_turnover": "annualTurnover",
    "address": "address",
}

REQUIRED_FOR_COMPLETION = [
    "business_name",
    "business_type",
    "contact_number",
    "contact_name",
    "pincode",
    "city",
    "state",
    "pancard",
    "gst",
]

REQUIRED_ON_WRITE = {
    "business_name": "Business name is required",
    "business_type": "Business type is required",
    "contact_number": "Contact number is required",
    "contact_name": "Contact name is required",
    "pincode": "Pincode is required",
    "city": "City is required",
    "state": "State is required",
}


def _filled(value: Any) -> bool:
    if value is None:
        return False
    return bool(str(value).strip())


def check_profile_completed(fields: Dict[str, Any]) -> bool:
    """True iff every completion field is non-empty"""
    return all(_filled(fields.get(name)) for name in REQUIRED_FOR_COMPLETION)


def validate_profile_data(fields: Dict[str, Any]) -> List[str]:
    """Messages for each missing or blank required field"""
    return [message for name, message in REQUIRED_ON_WRITE.items() if not _filled(fields.get(name))]


def profile_fields_of(profile: Profile) -> Dict[str, Any]:
    return {name: getattr(profile, name) for name in PROFILE_FIELDS}


class ProfileService:
    """
    Create/read/update/delete for profiles, keeping the owning client's
    completion flag equal to the profile's
    """

    def __init__(self, db: Session):
        self.db = db

    def _sync_client_flag(self, client_id: Optional[str], completed: bool) -> None:
        if not client_id:
            return
        updated = self.db.query(Client).filter(Client.id == client_id).update(
            {Client.isprofile_completed: completed},
            synchronize_session="fetch"
        )
        self.db.commit()
        if updated:
            logger.debug("Synced client profile flag", client_id=client_id, completed=completed)

    def _require_valid_id(self, client_id: str) -> None:
        if not client_id:
            raise ValidationError("Client ID is required", field="clientId")
        if not is_valid_id(client_id):
            raise ValidationError("Invalid client ID format", field="clientId")

    def _find(self, client_id: str) -> Profile:
        profile = self.db.query(Profile).filter(Profile.client_id == client_id).first()
        if not profile:
            raise NotFoundError("Profile")
        return profile

    def create_profile(
        self,
        client: Client,
        fields: Dict[str, Any],
        human_agent_id: Optional[str] = None
    ) -> Profile:
        """Create the profile for a client, or for one of its human agents"""
        if not any(_filled(v) for v in fields.values()):
            raise ValidationError("Request body is required")

        errors = validate_profile_data(fields)
        if errors:
            raise ValidationError("Validation failed", errors=errors)

        if human_agent_id:
            owned = self.db.query(HumanAgent).filter(
                HumanAgent.id == human_agent_id,
                HumanAgent.client_id == client.id
            ).first()
            if not owned:
                raise NotFoundError("Human agent")
            if self.db.query(Profile).filter(Profile.human_agent_id == human_agent_id).first():
                raise ConflictError(
                    "Profile already exists for this human agent. Use update endpoint to modify existing profile."
                )
        elif self.db.query(Profile).filter(Profile.client_id == client.id).first():
            raise ConflictError(
                "Profile already exists for this client. Use update endpoint to modify existing profile."
            )

        profile = Profile(
            client_id=None if human_agent_id else client.id,
            human_agent_id=human_agent_id,
            **{name: fields.get(name) for name in PROFILE_FIELDS}
        )
        profile.is_profile_completed = check_profile_completed(fields)

        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)

        if not human_agent_id:
            self._sync_client_flag(client.id, profile.is_profile_completed)

        logger.info("Profile created", profile_id=profile.id, completed=profile.is_profile_completed)
        return profile

    def get_profile(self, client_id: str) -> Dict[str, Any]:
        """Profile plus the owning client's email; re-syncs the client flag"""
        self._require_valid_id(client_id)
        profile = self._find(client_id)
        client = self.db.query(Client).filter(Client.id == client_id).first()

        self._sync_client_flag(client_id, profile.is_profile_completed)

        return {
            "email": client.email if client else None,
            "profile": profile,
        }

    def update_profile(self, client_id: str, fields: Dict[str, Any]) -> Profile:
        """Merge supplied fields, recompute completion and re-sync"""
        if not any(_filled(v) for v in fields.values()):
            raise ValidationError("Request body is required")
        self._require_valid_id(client_id)

        errors = validate_profile_data(fields)
        if errors:
            raise ValidationError("Validation failed", errors=errors)

        profile = self._find(client_id)

        for name in PROFILE_FIELDS:
            if name in fields and fields[name] is not None:
                setattr(profile, name, fields[name])

        profile.is_profile_completed = check_profile_completed(profile_fields_of(profile))
        self.db.commit()
        self.db.refresh(profile)

        self._sync_client_flag(profile.client_id, profile.is_profile_completed)

        logger.info("Profile updated", client_id=client_id, completed=profile.is_profile_completed)
        return profile

    def delete_profile(self, client_id: str) -> None:
        """Mark incomplete, delete, then clear the client flag"""
        self._require_valid_id(client_id)
        profile = self._find(client_id)

        profile.is_profile_completed = False
        self.db.commit()

        self.db.delete(profile)
        self.db.commit()

        self._sync_client_flag(client_id, False)
        logger.info("Profile deleted", client_id=client_id)

    def list_profiles(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> Dict[str, Any]:
        """Paginated, newest first, optional case-insensitive search"""
        query = self.db.query(Profile)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Profile.business_name.ilike(pattern),
                Profile.contact_name.ilike(pattern),
                Profile.business_type.ilike(pattern),
            ))

        total = query.count()
        profiles = (
            query.order_by(Profile.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return {
            "profiles": profiles,
            "totalPages": math.ceil(total / limit) if limit else 0,
            "currentPage": page,
            "total": total,
        }
