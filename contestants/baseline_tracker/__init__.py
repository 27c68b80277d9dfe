"""
Baseline Tracker Agent Package

A simple heuristic agent that keeps the paddle under the falling item.
Serves as a benchmark and example.
"""

from .agent import CatchAgent, create_agent

__all__ = ["CatchAgent", "create_agent"]
