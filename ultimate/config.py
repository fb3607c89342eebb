# ultimate/config.py
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple
import os
import tomllib

# (normal depth, late-game depth) per seat; seat 1 stands in for the human player
DEPTH_TABLE = {
    1: (4, 5),
    2: (5, 4),
}

@dataclass
class SearchConfig:
    time_budget: float = 5.0          # seconds; deepening only happens while under it
    endgame_empty_cells: int = 30     # branches with fewer empty cells get the bonus ply
    endgame_depth_bonus: int = 1
    role_endgame_empty_cells: int = 60
    depth_table: Dict[int, Tuple[int, int]] = field(default_factory=lambda: dict(DEPTH_TABLE))
    fixed_depth: Optional[int] = None  # overrides depth_table for both seats

    def __post_init__(self):
        if self.time_budget < 0:
            raise ValueError("time_budget must be non-negative")
        if self.endgame_depth_bonus < 0:
            raise ValueError("endgame_depth_bonus must be non-negative")
        if self.fixed_depth is not None and self.fixed_depth < 0:
            raise ValueError("fixed_depth must be non-negative")
        # toml tables come back keyed by strings
        self.depth_table = {int(k): tuple(v) for k, v in self.depth_table.items()}

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "ultimate.toml") -> "Config":
        cfg = Config()
        if os.path.exists(path):
            with open(path, "rb") as f:
                raw = tomllib.load(f)
            if "search" in raw:
                unknown = set(raw["search"]) - set(SearchConfig.__dataclass_fields__)
                if unknown:
                    raise ValueError(f"unknown [search] keys: {sorted(unknown)}")
                cfg.search = SearchConfig(**raw["search"])
            if "log_level" in raw:
                cfg.log_level = raw["log_level"]
        override_depth = os.environ.get("ULTIMATE_SEARCH_DEPTH")
        if override_depth:
            cfg.search = replace(cfg.search, fixed_depth=int(override_depth))
        return cfg
