from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PlanBase(BaseModel):
    plan_name: str = Field(min_length=3, max_length=100)
    yoga_type: str = Field(min_length=1, max_length=50)
    meditation_time: int = Field(ge=1, le=180)
    duration_weeks: int = Field(ge=1, le=52)
    daily_schedule: List[Any] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=1000)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("plan_name", "yoga_type", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("daily_schedule", mode="before")
    @classmethod
    def default_schedule(cls, value):
        return [] if value is None else value

class PlanCreate(PlanBase):
    pass

class Plan(PlanBase):
    id: int
    user_id: int
    completed: bool
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class PlanResponse(BaseModel):
    message: str
    plan: Plan

class PlanStats(BaseModel):
    total_plans: int
    completed_plans: int
    pending_plans: int
    completion_rate: float

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
