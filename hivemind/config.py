"""Regulator configuration — tunable knobs for scanning and assignment."""

from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field


class RegulatorConfig(BaseModel):
    """Validated, immutable settings shared by the regulator, policies and game loop."""

    model_config = ConfigDict(frozen=True)

    scan_interval: int = Field(default=10, ge=1, description="Ticks between offer pool rebuilds")
    repair_multiplier: int = Field(default=4, ge=1, description="Repair only below capacity × multiplier hits")
    attack_places: int = Field(default=5, ge=1, description="Units that may focus one hostile")
    heal_places: int = Field(default=1, ge=1, description="Units that may heal one friendly creep")
    repair_places: int = Field(default=1, ge=1, description="Units that may repair one structure")
    low_lifetime_threshold: int = Field(default=50, ge=0, description="Creeps below this many ticks stop harvesting")
    workers_take_combat_jobs: bool = Field(default=False, description="Let creeps win attack/heal offers")
    memory_cleanup_interval: int = Field(default=32, ge=1, description="Ticks between dead-creep memory sweeps")
    memory_cleanup_offset: int = Field(default=3, ge=0, description="Tick phase of the memory sweep")

    @classmethod
    def from_file(cls, path: str | Path) -> "RegulatorConfig":
        """Load a config from a JSON file; unspecified fields keep their defaults."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
