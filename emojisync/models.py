from typing import List, Optional
from pydantic import BaseModel


class Message(BaseModel):
    role: str
    content: str


class OperationResult(BaseModel):
    """Outcome of a store-mutating call."""
    successful: bool
    status: str = ""
    error: str = ""


class SearchHit(BaseModel):
    key: str
    text: Optional[str] = None
    score: float
    distance: float


class SearchResult(BaseModel):
    collection: str
    method: str
    hits: List[SearchHit] = []


class InsertRequest(BaseModel):
    emoji: str


class UpdateRequest(BaseModel):
    emoji: str
    text: str


class EmbedRequest(BaseModel):
    texts: List[str]


class EmbedResponse(BaseModel):
    embeddings: List[List[float]]


class StatusResponse(BaseModel):
    status: str
