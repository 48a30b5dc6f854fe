"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field

from src.alerting.domain.models import RuleExpression, TriggerMode


# Alert Rule Schemas
class AlertRuleForm(BaseModel):
    """Schema for creating or updating an alert rule."""

    name: str = Field("", max_length=255, description="Display name")
    rules: list[RuleExpression] = Field(default_factory=list, description="Conditions, at least one required")
    fail_trigger_tasks: list[int] = Field(default_factory=list, description="Task IDs run when the rule fails")
    recover_trigger_tasks: list[int] = Field(default_factory=list, description="Task IDs run when the rule recovers")
    notification_group_id: int = Field(0, ge=0, description="Notification group to alert")
    enable: bool | None = Field(None, description="Whether the rule is active; omitted means unset")
    trigger_mode: TriggerMode = Field(TriggerMode.ALWAYS, description="Notification policy")
    id: int | None = Field(None, description="Ignored on create; must match the path ID on update")


class AlertRuleResponse(BaseModel):
    """Schema for alert rule response."""

    id: int
    name: str
    rules: list[RuleExpression]
    fail_trigger_tasks: list[int]
    recover_trigger_tasks: list[int]
    notification_group_id: int
    enable: bool | None
    trigger_mode: TriggerMode


class AlertRuleIdResponse(BaseModel):
    """Schema for the ID of a created or updated alert rule."""

    id: int
