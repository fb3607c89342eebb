from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import Config
from .match import run_matches


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ultimate-ttt", description="Ultimate Tic Tac Toe engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--config", type=Path, default=Path("ultimate.toml"), help="TOML config file (default: ultimate.toml)"
    )

    p_self = sub.add_parser("selfplay", help="Play bot-vs-bot games and report the tally")
    p_self.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    p_self.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    p_self.add_argument(
        "--depth", type=int, default=None, help="Fixed search depth for both seats (default: per-seat table)"
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    cfg = Config.load_from_toml(str(ns.config))
    level = logging.DEBUG if ns.verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if ns.cmd == "selfplay":
        if ns.games < 1:
            logging.error("--games must be at least 1")
            return 2
        if ns.depth is not None:
            if ns.depth < 0:
                logging.error("--depth must be non-negative")
                return 2
            cfg.search = replace(cfg.search, fixed_depth=ns.depth)
        stats = run_matches(ns.games, cfg.search, seed=ns.seed)
        print(f"{stats.wins} Wins")
        print(f"{stats.losses} Losses")
        print(f"{stats.ties} Ties")
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
