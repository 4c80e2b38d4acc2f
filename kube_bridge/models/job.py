"""Job and task domain models consumed at task launch."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JobDescriptor(BaseModel):
    """Job descriptor as submitted by the job owner."""

    model_config = ConfigDict(frozen=True)

    application_name: str
    capacity_group: str | None = None
    image: str | None = None
    hard_constraints: dict[str, str] = Field(default_factory=dict)
    soft_constraints: dict[str, str] = Field(default_factory=dict)
    attributes: dict[str, str] = Field(default_factory=dict)
    container_attributes: dict[str, Any] = Field(default_factory=dict)


class Job(BaseModel):
    """Job snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str
    descriptor: JobDescriptor

    @property
    def hard_constraints(self) -> dict[str, str]:
        return self.descriptor.hard_constraints

    @property
    def attributes(self) -> dict[str, str]:
        return self.descriptor.attributes


class Task(BaseModel):
    """Task snapshot with its free-form context."""

    model_config = ConfigDict(frozen=True)

    id: str
    job_id: str
    task_context: dict[str, str] = Field(default_factory=dict)
