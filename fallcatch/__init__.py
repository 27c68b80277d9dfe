"""
Fall Catch
==========

A paddle catches a single falling item. Misses cost health; every catch
scores a point and every ten points make the item fall faster.

This package contains the simulation core, the Gymnasium wrapper, the
pygame presentation layer, and the evaluation harness. All tunable
parameters live in game_config.yaml.
"""
