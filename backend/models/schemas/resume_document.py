"""Uploaded resume files and their decoded text. Live for one request only."""

from pydantic import BaseModel, ConfigDict


class ResumeFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes


class ResumeDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    text: str
