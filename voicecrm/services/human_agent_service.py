"""
Human Agent Service
CRUD for human operator sub-accounts
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import DuplicateError, NotFoundError, ValidationError
from voicecrm.db.models import Agent, HumanAgent
from voicecrm.utils import clean_str, is_blank

logger = get_logger(__name__)


class HumanAgentService:

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    def _query(self):
        return self.db.query(HumanAgent).filter(HumanAgent.client_id == self.client_id)

    def _resolve_agents(self, agent_ids: List[str]) -> List[Agent]:
        agents = self.db.query(Agent).filter(
            Agent.id.in_(agent_ids),
            Agent.client_id == self.client_id
        ).all()
        if len(agents) != len(set(agent_ids)):
            raise ValidationError("Some agents not found or don't belong to client", field="agentIds")
        return agents

    def list(self) -> List[HumanAgent]:
        return self._query().order_by(HumanAgent.created_at.desc()).all()

    def get(self, human_agent_id: str) -> HumanAgent:
        human_agent = self._query().filter(HumanAgent.id == human_agent_id).first()
        if not human_agent:
            raise NotFoundError("Human agent")
        return human_agent

    def create(
        self,
        human_agent_name: Optional[str],
        email: Optional[str],
        mobile_number: Optional[str],
        did: Optional[str],
        agent_ids: Optional[List[str]] = None
    ) -> HumanAgent:
        """
        Create an approved, profile-complete human agent

        Raises:
            ValidationError: Any of name, email, mobile number or DID missing
            DuplicateError: Name taken within the client, or email taken anywhere
        """
        if any(is_blank(v) for v in (human_agent_name, email, mobile_number, did)):
            raise ValidationError("Human agent name, email, mobile number, and DID are required")

        name = human_agent_name.strip()
        email = email.strip().lower()

        if self._query().filter(HumanAgent.human_agent_name == name).first():
            raise DuplicateError("Human agent with this name already exists for this client")

        if self.db.query(HumanAgent).filter(HumanAgent.email == email).first():
            raise DuplicateError("Email already registered")

        human_agent = HumanAgent(
            client_id=self.client_id,
            human_agent_name=name,
            email=email,
            mobile_number=mobile_number.strip(),
            did=did.strip(),
            isprofile_completed=True,
            is_approved=True
        )
        if agent_ids:
            human_agent.agents = self._resolve_agents(agent_ids)

        self.db.add(human_agent)
        self.db.commit()
        self.db.refresh(human_agent)

        logger.info("Human agent created", human_agent_id=human_agent.id, client_id=self.client_id)
        return human_agent

    def update(self, human_agent_id: str, changes: Dict[str, Any]) -> HumanAgent:
        """Apply the supplied fields; omitted fields are left unchanged"""
        human_agent = self.get(human_agent_id)

        name = clean_str(changes.get("humanAgentName"))
        if name and name != human_agent.human_agent_name:
            clash = self._query().filter(
                HumanAgent.human_agent_name == name,
                HumanAgent.id != human_agent.id
            ).first()
            if clash:
                raise DuplicateError("Human agent with this name already exists for this client")
            human_agent.human_agent_name = name

        email = clean_str(changes.get("email"))
        if email and email.lower() != human_agent.email:
            clash = self.db.query(HumanAgent).filter(
                HumanAgent.email == email.lower(),
                HumanAgent.id != human_agent.id
            ).first()
            if clash:
                raise DuplicateError("Email already registered")
            human_agent.email = email

        if changes.get("mobileNumber"):
            human_agent.mobile_number = clean_str(changes["mobileNumber"])
        if changes.get("did"):
            human_agent.did = clean_str(changes["did"])
        if changes.get("agentIds") is not None:
            human_agent.agents = self._resolve_agents(changes["agentIds"])

        self.db.commit()
        self.db.refresh(human_agent)

        logger.info("Human agent updated", human_agent_id=human_agent.id)
        return human_agent

    def delete(self, human_agent_id: str) -> None:
        human_agent = self.get(human_agent_id)
        self.db.delete(human_agent)
        self.db.commit()
        logger.info("Human agent deleted", human_agent_id=human_agent_id)
