"""Path construction helpers for evolution output directories.

Centralises the directory/file naming conventions used by the persistence
layer and experiment orchestration.
"""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Return *path* made absolute against *base_dir*, refusing anything outside it.

    Absolute paths are kept as given; ``..`` segments and symlinks are resolved
    before the containment check.
    """
    base = base_dir.resolve()
    resolved = (base / path).resolve()
    if not resolved.is_relative_to(base):
        raise ValueError(f"{path} resolves outside {base}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def genomes_dir(out_dir: Path) -> Path:
    """Return path to the genomes subdirectory within an output directory."""
    return out_dir / "genomes"


def generation_log_path(out_dir: Path) -> Path:
    """Return path to the per-generation Parquet log."""
    return logs_dir(out_dir) / "generation_log.parquet"


def best_genome_path(out_dir: Path) -> Path:
    """Return path to the best final genome JSON report."""
    return genomes_dir(out_dir) / "best_genome.json"
