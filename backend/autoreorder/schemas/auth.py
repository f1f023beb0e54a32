from typing import List

from pydantic import BaseModel, Field


SCHEDULER_ROLE = "scheduler"


class Principal(BaseModel):
    subject: str
    roles: List[str] = Field(default_factory=list)
