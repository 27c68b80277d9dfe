"""
Evaluation Harness
==================

Plays an agent through every seed of the seed bank and reports how well it
catches: score, catch rate, how long it survived and how fast the item was
falling when the run ended.

Usage:
    python -m fallcatch.evaluation.run_eval --agent contestants/baseline_tracker
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from fallcatch.catch_core.config_loader import GameConfig
from fallcatch.catch_core.env_gym import CatchEnv

logger = logging.getLogger(__name__)

AgentFn = Callable[[Dict[str, np.ndarray]], int]

SEED_BANK = Path(__file__).with_name("seed_bank.json")


@dataclass
class SeedRun:
    """One agent run on one seed."""
    seed: int
    score: int
    catches: int
    misses: int
    frames: int
    seconds: float        # simulated play time
    fall_speed: float     # item speed when the run ended
    milestones: int
    ended_by: str         # "game_over" or "frame_cap"
    actions: Optional[List[int]] = field(default=None, repr=False)

    @property
    def catch_rate(self) -> float:
        """Share of finished falls that were caught rather than missed."""
        seen = self.catches + self.misses
        return self.catches / seen if seen else 0.0


@dataclass
class BankReport:
    """All runs of one agent over a seed bank."""
    runs: List[SeedRun]

    @property
    def scores(self) -> np.ndarray:
        return np.array([r.score for r in self.runs], dtype=np.int64)

    @property
    def mean_score(self) -> float:
        return float(self.scores.mean())

    @property
    def median_score(self) -> float:
        return float(np.median(self.scores))

    @property
    def best(self) -> SeedRun:
        return max(self.runs, key=lambda r: r.score)

    @property
    def worst(self) -> SeedRun:
        return min(self.runs, key=lambda r: r.score)

    @property
    def mean_catch_rate(self) -> float:
        return float(np.mean([r.catch_rate for r in self.runs]))

    @property
    def survived_cap(self) -> int:
        """Runs that reached the frame cap without losing all health."""
        return sum(1 for r in self.runs if r.ended_by == "frame_cap")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean_score": self.mean_score,
            "median_score": self.median_score,
            "mean_catch_rate": self.mean_catch_rate,
            "survived_cap": self.survived_cap,
            "runs": [
                dict(asdict(r), catch_rate=r.catch_rate, actions=None)
                for r in self.runs
            ],
        }


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """Seeds from a JSON file of the form {"seeds": [...]}."""
    with open(path or SEED_BANK, "r") as f:
        return [int(s) for s in json.load(f)["seeds"]]


def load_agent(agent_path: str) -> AgentFn:
    """
    Import a contestant and return its act callable.

    The module (a directory's agent.py, or the file itself) must define a
    `CatchAgent` class or a module-level `act(obs)` function.

    Raises:
        FileNotFoundError: If there is no agent file.
        AttributeError: If the module defines neither entry point.
    """
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    module_name = f"contestant_{agent_file.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, agent_file)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import {agent_file}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)

    agent_cls = getattr(module, "CatchAgent", None)
    if agent_cls is not None:
        return agent_cls().act
    act = getattr(module, "act", None)
    if callable(act):
        return act
    raise AttributeError(f"{agent_file} defines neither CatchAgent nor act()")


def play_seed(
    agent_fn: AgentFn,
    seed: int,
    config: Optional[GameConfig] = None,
    record_actions: bool = False
) -> SeedRun:
    """
    Play one episode until game over or the frame cap.

    Args:
        agent_fn: Maps an observation to 0 (left), 1 (stay) or 2 (right).
        seed: Item placement seed.
        config: Game configuration. Uses default if None.
        record_actions: Keep the action sequence on the returned run.
    """
    env = CatchEnv(config=config)
    try:
        obs, info = env.reset(seed=seed)
        actions: Optional[List[int]] = [] if record_actions else None

        terminated = truncated = False
        while not (terminated or truncated):
            action = int(agent_fn(obs))
            if actions is not None:
                actions.append(action)
            obs, _, terminated, truncated, info = env.step(action)

        score = info["score"]
        run = SeedRun(
            seed=seed,
            score=score,
            catches=info["catches"],
            misses=info["misses"],
            frames=info["frames"],
            seconds=info["elapsed"],
            fall_speed=info["fall_speed"],
            milestones=env.game.rules.speed.milestone(score),
            ended_by="game_over" if terminated else "frame_cap",
            actions=actions
        )
    finally:
        env.close()

    logger.debug("Seed %d: %s", seed, run)
    return run


def play_bank(
    agent_fn: AgentFn,
    seeds: Optional[List[int]] = None,
    config: Optional[GameConfig] = None,
    record_actions: bool = False,
    verbose: bool = True
) -> BankReport:
    """Play every seed and collect the runs."""
    if seeds is None:
        seeds = load_seed_bank()

    runs = []
    for i, seed in enumerate(seeds, 1):
        run = play_seed(agent_fn, seed, config=config, record_actions=record_actions)
        runs.append(run)
        if verbose:
            print(f"[{i}/{len(seeds)}] seed {seed:>5}: score {run.score:>4}  "
                  f"caught {run.catches}/{run.catches + run.misses}  "
                  f"{run.seconds:6.1f}s  ({run.ended_by})")

    return BankReport(runs)


def print_report(report: BankReport) -> None:
    print()
    print(f"Seeds:            {len(report.runs)}")
    print(f"Mean score:       {report.mean_score:.2f}")
    print(f"Median score:     {report.median_score:.1f}")
    print(f"Best / worst:     {report.best.score} (seed {report.best.seed}) / "
          f"{report.worst.score} (seed {report.worst.seed})")
    print(f"Mean catch rate:  {report.mean_catch_rate:.1%}")
    print(f"Reached the cap:  {report.survived_cap}/{len(report.runs)}")
    print(f"Top fall speed:   {max(r.fall_speed for r in report.runs):.0f} px/s")


def write_report(report: BankReport, agent_name: str, output_path: str) -> None:
    data = dict(report.to_dict(), agent=agent_name)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Report written to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a Fall Catch agent")
    parser.add_argument("--agent", required=True, help="Agent directory or agent.py file")
    parser.add_argument("--seeds", default=None, help="Seed bank JSON (default: bundled bank)")
    parser.add_argument("--output", default=None, help="Write the report as JSON")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for the game core")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        agent_fn = load_agent(args.agent)
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error loading agent: {e}")
        return 1

    report = play_bank(agent_fn, seeds=load_seed_bank(args.seeds), verbose=not args.quiet)
    print_report(report)

    if args.output:
        write_report(report, Path(args.agent).name, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
