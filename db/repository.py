import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from models import TriggerType, WorkflowRule

from .converters import db_to_pydantic_workflow, pydantic_to_db_workflow
from .models import WorkflowModel

logger = logging.getLogger("workflow_store")


def _trigger_values(trigger_types: Iterable[TriggerType | str]) -> List[str]:
    return [TriggerType(t).value for t in trigger_types]


class WorkflowRepository(ABC):
    """
    Abstract persistence boundary for workflow rules. Implementations are
    responsible for durability, conflicts, and connectivity. The engine only
    reads through ``fetch_rules``.
    """

    @abstractmethod
    def save(self, rule: WorkflowRule) -> str:
        """Persist the rule and return its identifier."""
        raise NotImplementedError

    @abstractmethod
    def get(self, record_id: str) -> WorkflowRule | None:
        """Fetch a rule by id, or None if missing."""
        raise NotImplementedError

    @abstractmethod
    def fetch_rules(self, module_id: str, trigger_types: Iterable[TriggerType | str]) -> List[WorkflowRule]:
        """Active rules for ``module_id`` whose trigger type is one of ``trigger_types``."""
        raise NotImplementedError


class InMemoryWorkflowRepository(WorkflowRepository):
    """
    Minimal in-memory implementation for local testing. Not intended for prod.
    """

    def __init__(self) -> None:
        self._storage: Dict[str, WorkflowRule] = {}

    def save(self, rule: WorkflowRule) -> str:
        record_id = rule.id or str(uuid.uuid4())
        self._storage[record_id] = rule.model_copy(update={"id": record_id})
        return record_id

    def get(self, record_id: str) -> WorkflowRule | None:
        return self._storage.get(record_id)

    def fetch_rules(self, module_id: str, trigger_types: Iterable[TriggerType | str]) -> List[WorkflowRule]:
        wanted = _trigger_values(trigger_types)
        return [
            rule
            for rule in self._storage.values()
            if rule.is_active and rule.module_id == module_id and rule.trigger_type.value in wanted
        ]


class SqlAlchemyWorkflowRepository(WorkflowRepository):
    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, rule: WorkflowRule) -> str:
        try:
            db_workflow = self.session.merge(pydantic_to_db_workflow(rule, rule.id or str(uuid.uuid4())))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return db_workflow.id

    def get(self, record_id: str) -> WorkflowRule | None:
        db_workflow = self.session.get(WorkflowModel, record_id)
        if db_workflow is None:
            return None
        return db_to_pydantic_workflow(db_workflow)

    def fetch_rules(self, module_id: str, trigger_types: Iterable[TriggerType | str]) -> List[WorkflowRule]:
        stmt = (
            select(WorkflowModel)
            .where(WorkflowModel.module_id == module_id)
            .where(WorkflowModel.is_active.is_(True))
            .where(WorkflowModel.trigger_type.in_(_trigger_values(trigger_types)))
            .order_by(WorkflowModel.created_at)
        )
        rules: List[WorkflowRule] = []
        for db_workflow in self.session.scalars(stmt):
            try:
                rules.append(db_to_pydantic_workflow(db_workflow))
            except ValidationError as exc:
                logger.warning("Skipping malformed workflow %s (%s): %s", db_workflow.id, db_workflow.name, exc)
        return rules
