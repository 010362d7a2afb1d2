"""Prometheus metrics for template migration.

Counts analyses, migrations and alias applications, and tracks how long a
template change takes end to end.
"""

from prometheus_client import Counter, Histogram

ANALYSIS_COUNT = Counter(
    "templateshift_analysis_total",
    "Total number of template compatibility analyses",
    labelnames=["outcome"],
)

MIGRATION_COUNT = Counter(
    "templateshift_migration_total",
    "Total number of template changes attempted",
    labelnames=["outcome"],
)

ALIAS_APPLIED = Counter(
    "templateshift_alias_applied_total",
    "Number of times an alias rule carried a section across templates",
    labelnames=["rule"],
)

SECTIONS_DROPPED = Counter(
    "templateshift_sections_dropped_total",
    "Authored sections with no home in the destination template",
)

MIGRATION_LATENCY = Histogram(
    "templateshift_migration_latency_seconds",
    "Latency of a full template change (analysis and migration)",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)
