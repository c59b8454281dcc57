"""Parquet/JSON persistence helpers for generation logs and the best genome."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from can_collector.config.types import GenerationResult
from can_collector.domain.genome import Genome
from can_collector.io.schemas import (
    GENERATION_LOG_SCHEMA,
    GENERATION_LOG_SCHEMA_VERSION,
    GENOME_PAYLOAD_SCHEMA_VERSION,
)


def write_generation_log(results: Sequence[GenerationResult], path: Path) -> Path:
    """Write one row per generation to a Parquet file and return its path."""
    rows = [
        {"schema_version": GENERATION_LOG_SCHEMA_VERSION, **asdict(result)} for result in results
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(pa.Table.from_pylist(rows, schema=GENERATION_LOG_SCHEMA), path)
    return path


def write_best_genome(genome: Genome, path: Path, metadata: dict[str, object]) -> Path:
    """Write the genome's action table and run metadata as a JSON report."""
    payload = {
        "table": genome.to_codes(),
        "score": genome.score,
        "metadata": {**metadata, "schema_version": GENOME_PAYLOAD_SCHEMA_VERSION},
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2))
    return path
