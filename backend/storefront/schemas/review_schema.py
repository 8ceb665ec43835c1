from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ReviewIn(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    text: Optional[str] = None


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    title: str
    text: str
    created_at: int = Field(serialization_alias="createdAt")
    approved: bool


def review_to_dict(r) -> dict:
    return ReviewOut.model_validate(r).model_dump(by_alias=True)
