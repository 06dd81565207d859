from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator


class TriggerType(str, Enum):
    ON_CREATE = "on_create"
    ON_UPSERT = "on_upsert"
    INTERVAL = "interval"


class EventKind(str, Enum):
    CREATE = "create"
    UPSERT = "upsert"


class ActionKind(str, Enum):
    SEND_NOTE = "send_note"
    SEND_SMS = "send_sms"
    SEND_EMAIL = "send_email"
    UPDATE_RECORD = "update_record"
    CREATE_RELATED_RECORD = "create_related_record"


class IntervalUnit(str, Enum):
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"


class Condition(BaseModel):
    id: str | None = None
    field: str = Field(..., description="Record key the condition reads")
    # Kept as a plain string: unknown operators must load and then fail closed.
    operator: str = Field(default="eq", description="Identifier registered in operator registry")
    value: Any = Field(default=None, description="Operand, for operators that take one")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("field", mode="before")
    @classmethod
    def field_as_text(cls, value: Any) -> Any:
        return "" if value is None else str(value)


class Action(BaseModel):
    id: str | None = None
    type: ActionKind
    config: Dict[str, Any] = Field(default_factory=dict, description="Action-specific parameters")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("config", mode="before")
    @classmethod
    def null_config_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class WorkflowRule(BaseModel):
    id: str | None = None
    module_id: str = Field(..., description="Module whose record events this rule listens to")
    name: str = Field(default="", description="Human friendly name for the rule")
    description: str | None = None
    trigger_type: TriggerType
    interval_value: int | None = None
    interval_unit: IntervalUnit | None = None
    interval_at: str | None = None
    batch_size: int | None = None
    conditions_all: List[Condition] = Field(default_factory=list, description="Every entry must hold")
    conditions_any: List[Condition] = Field(default_factory=list, description="At least one must hold, empty passes")
    actions: List[Action] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("conditions_all", "conditions_any", "actions", mode="before")
    @classmethod
    def null_lists_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def check_interval_fields(self) -> "WorkflowRule":
        if self.interval_value is not None and self.interval_value <= 0:
            raise ValueError("interval_value must be a positive number")
        if self.batch_size is not None and self.batch_size <= 0:
            raise ValueError("batch_size must be a positive number")
        return self

    @property
    def label(self) -> str:
        return self.name or str(self.id or "-")


class WorkflowEvent(BaseModel):
    """A record write, as seen by the automation engine. Never persisted."""

    module_id: str
    event_kind: EventKind
    current_record: Dict[str, Any]
    previous_record: Dict[str, Any] | None = None
