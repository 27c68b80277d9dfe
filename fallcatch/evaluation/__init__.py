"""
Evaluation Package
==================

Contains the seed bank and evaluation harness for scoring agents.
"""

from fallcatch.evaluation.run_eval import load_seed_bank, play_bank, play_seed

__all__ = ["load_seed_bank", "play_bank", "play_seed"]
