"""Evidence Scorer output: how much of the requirement set a resume covers."""

from pydantic import BaseModel, ConfigDict


class EvidenceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    coverage: float = 0.0  # 0.0-1.0, 75% must / 25% nice
    matched: tuple[str, ...] = ()  # canonical names, both tiers, requirement order
    missing: tuple[str, ...] = ()  # unmatched must items only, requirement order
