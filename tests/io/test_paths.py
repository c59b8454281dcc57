from pathlib import Path

import pytest

from can_collector.io.paths import (
    best_genome_path,
    generation_log_path,
    genomes_dir,
    logs_dir,
    resolve_within_base,
)


def test_artifact_layout(tmp_path: Path) -> None:
    assert logs_dir(tmp_path) == tmp_path / "logs"
    assert genomes_dir(tmp_path) == tmp_path / "genomes"
    assert generation_log_path(tmp_path) == tmp_path / "logs" / "generation_log.parquet"
    assert best_genome_path(tmp_path) == tmp_path / "genomes" / "best_genome.json"


def test_resolve_within_base_accepts_relative_child(tmp_path: Path) -> None:
    resolved = resolve_within_base(Path("runs/a"), tmp_path)
    assert resolved == (tmp_path / "runs" / "a").resolve()


def test_resolve_within_base_accepts_base_itself(tmp_path: Path) -> None:
    assert resolve_within_base(tmp_path, tmp_path) == tmp_path.resolve()


def test_resolve_within_base_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        resolve_within_base(Path("../elsewhere"), tmp_path)


def test_resolve_within_base_checks_absolute_paths(tmp_path: Path) -> None:
    inside = tmp_path / "runs"
    assert resolve_within_base(inside, tmp_path) == inside.resolve()
    with pytest.raises(ValueError):
        resolve_within_base(tmp_path.parent / "sibling", tmp_path)
