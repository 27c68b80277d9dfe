"""
Performance Benchmark
=====================

Measures update and environment step throughput.

Usage:
    python -m tools.benchmark_speed [--envs N ...] [--steps S]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import List

import numpy as np

import gymnasium as gym

from fallcatch.catch_core.config_loader import load_config
from fallcatch.catch_core.env_gym import CatchEnv
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.input_state import Direction


def benchmark_core_game(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CatchGame.update without Gym overhead.

    Held direction flips at random every frame so the paddle keeps moving.
    """
    config = load_config()
    game = CatchGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)
    dt = config.loop.env_dt

    game.restart(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        go_left = bool(rng.integers(0, 2))
        game.set_discrete_held(Direction.LEFT, go_left)
        game.set_discrete_held(Direction.RIGHT, not go_left)
        result = game.update(dt)
        if result.game_over:
            game.restart()

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_envs": 1,
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_single_env(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark single environment performance.

    Args:
        num_steps: Number of steps to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    env = CatchEnv()
    rng = np.random.default_rng(seed)

    obs, _ = env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        action = int(rng.integers(0, 3))
        obs, _, terminated, truncated, _ = env.step(action)
        if terminated or truncated:
            obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "single",
        "num_envs": 1,
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_vector_env(
    num_envs: int = 16,
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark a gymnasium SyncVectorEnv of CatchEnv instances.

    Finished sub-environments are reset automatically by the vector wrapper.
    """
    vec_env = gym.vector.SyncVectorEnv([CatchEnv for _ in range(num_envs)])
    rng = np.random.default_rng(seed)

    vec_env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        actions = rng.integers(0, 3, size=num_envs)
        vec_env.step(actions)

    elapsed = time.perf_counter() - start
    vec_env.close()

    total_steps = num_steps * num_envs
    return {
        "mode": "vector",
        "num_envs": num_envs,
        "num_steps": num_steps,
        "total_env_steps": total_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": total_steps / elapsed,
        "batch_steps_per_second": num_steps / elapsed,
        "ms_per_batch": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(
    vector_env_sizes: List[int],
    steps: int = 500
) -> list:
    """Run all benchmarks and print a summary table."""
    results = []

    print("=" * 60)
    print("FALL CATCH PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking CatchGame (raw)...")
    result = benchmark_core_game(num_steps=steps)
    results.append(result)
    print(f"  Steps/sec: {result['steps_per_second']:.1f}")
    print(f"  ms/step:   {result['ms_per_step']:.3f}")
    print()

    print("Benchmarking CatchEnv (single)...")
    result = benchmark_single_env(num_steps=steps)
    results.append(result)
    print(f"  Steps/sec: {result['steps_per_second']:.1f}")
    print(f"  ms/step:   {result['ms_per_step']:.3f}")
    print()

    for num_envs in vector_env_sizes:
        print(f"Benchmarking SyncVectorEnv (n={num_envs})...")
        result = benchmark_vector_env(num_envs=num_envs, num_steps=steps)
        results.append(result)
        print(f"  Env steps/sec:   {result['steps_per_second']:.1f}")
        print(f"  Batch steps/sec: {result['batch_steps_per_second']:.1f}")
        print(f"  ms/batch:        {result['ms_per_batch']:.3f}")
        print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Envs':>6} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 50)

    for r in results:
        ms = r["ms_per_step"] if "ms_per_step" in r else r["ms_per_batch"]
        print(f"{r['mode']:<20} {r['num_envs']:>6} {r['steps_per_second']:>12.1f} {ms:>10.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Fall Catch performance")
    parser.add_argument("--steps", type=int, default=500, help="Steps per benchmark")
    parser.add_argument("--envs", type=int, nargs="+", default=[1, 4, 16],
                        help="Vector env sizes to test")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 100 if args.quick else args.steps

    run_all_benchmarks(
        vector_env_sizes=args.envs,
        steps=steps
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
