"""Parquet schema definitions and schema-version constants for run artifacts.

Every Arrow schema used for persisting evolution logs is centralised here so
that writers and tests work against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

GENERATION_LOG_SCHEMA_VERSION = 1
GENOME_PAYLOAD_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Generation log
# ---------------------------------------------------------------------------

GENERATION_LOG_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("generation", pa.int64()),
        ("max_score", pa.float64()),
        ("mean_score", pa.float64()),
        ("min_score", pa.float64()),
        ("median_score", pa.float64()),
        ("rule_diversity", pa.float64()),
        ("best_raw_score", pa.float64()),
    ]
)
