"""Adaptive random testing generators (random, FSCS, LHS, KD-tree) and simulated fault zones."""

__version__ = "0.1.0"

__all__ = ["point", "fault_zone", "rt", "fscs_art", "lhs_art", "kdfc_art"]