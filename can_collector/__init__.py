"""Genetic-algorithm evolution of can-collecting robot rule tables."""
