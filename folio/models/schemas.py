# folio/models/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ProxyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str
    cv_text: Optional[str] = Field(default=None, alias="cvText")
    context_text: Optional[str] = Field(default=None, alias="contextText")


class ErrorResponse(BaseModel):
    error: str


class SearchRequest(BaseModel):
    query: str = ""


class SearchResponse(BaseModel):
    query: str
    cleared: bool = False
    answer: str = ""
    html: str = ""


class ReferenceStatusResponse(BaseModel):
    loaded: bool
    source: str
    cv_chars: int
    context_chars: int


class ThemeResponse(BaseModel):
    theme: str


class CredentialRequest(BaseModel):
    key: str = ""


class CredentialResponse(BaseModel):
    stored: bool
