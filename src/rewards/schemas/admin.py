"""Admin registry schemas."""

from typing import List

from pydantic import BaseModel, Field


class AdminIdentifierCreate(BaseModel):
    identifier: str = Field(..., description="E-mail or employee id to grant admin rights.")


class AdminIdentifiers(BaseModel):
    identifiers: List[str]
