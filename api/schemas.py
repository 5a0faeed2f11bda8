from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class RecordModel(BaseModel):
    ID: str = ""
    Name: str = ""
    Email: str = ""
    Age: str = ""
    City: str = ""


class DataResponse(BaseModel):
    data: List[RecordModel] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    type: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
