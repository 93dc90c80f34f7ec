"""Requirement set derived from a job description, shared by every resume in a batch."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class RequirementItem(BaseModel):
    """One competency with its lower-cased, de-duplicated synonym variants."""

    model_config = ConfigDict(frozen=True)

    canonical_name: str
    synonyms: tuple[str, ...] = ()

    @property
    def variants(self) -> tuple[str, ...]:
        """Canonical name first, then synonyms, without repeats."""
        if self.canonical_name in self.synonyms:
            return self.synonyms
        return (self.canonical_name, *self.synonyms)


class RequirementSet(BaseModel):
    """Must-have and nice-to-have tiers. Built once per batch, read-only."""

    model_config = ConfigDict(frozen=True)

    must: tuple[RequirementItem, ...] = ()
    nice: tuple[RequirementItem, ...] = ()
    source: str = "heuristic"  # "model" | "heuristic"


class DraftItem(BaseModel):
    name: str = ""
    synonyms: list[str] = []

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("synonyms", mode="before")
    @classmethod
    def _synonyms(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [s for s in v if isinstance(s, str) and s.strip()]


class RequirementDraft(BaseModel):
    """Raw must/nice items as returned by the language model, before cleanup."""

    must: list[DraftItem] = []
    nice: list[DraftItem] = []

    @field_validator("must", "nice", mode="before")
    @classmethod
    def _items(cls, v: Any) -> list[Any]:
        # Bare strings are accepted as items without synonyms
        if not isinstance(v, list):
            return []
        out: list[Any] = []
        for item in v:
            if isinstance(item, str):
                out.append({"name": item})
            elif isinstance(item, dict):
                out.append(item)
        return out
