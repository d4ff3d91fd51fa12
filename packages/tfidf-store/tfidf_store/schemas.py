"""Pydantic schemas for validation and serialization"""
from pydantic import BaseModel, Field, field_validator
from typing import List


class PushDocumentRequest(BaseModel):
    """Document pushed for indexing"""
    title: str = Field(..., min_length=1, max_length=500, description="Unique document title")
    content: str = Field("", description="Raw document text")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class SiblingResponse(BaseModel):
    """Related document with its cosine similarity"""
    id: int
    similarity: float = Field(..., gt=0.0, le=1.0)


class DocumentResponse(BaseModel):
    """Document with its ranked siblings; the vector stays server side"""
    id: int
    title: str
    siblings: List[SiblingResponse] = Field(default_factory=list)


class CorpusResponse(BaseModel):
    """Full corpus view returned after every update"""
    message: str = "OK"
    documents: List[DocumentResponse] = Field(default_factory=list)


class StoreStats(BaseModel):
    """Row counts of the three relations"""
    documents: int = Field(0, ge=0)
    words: int = Field(0, ge=0)
    counters: int = Field(0, ge=0)
