"""Quick validation script for the dashboard's data artifacts.

Run with `python scripts/validate_artifacts.py [DATA_ROOT]` to ensure the
manifest, record files, monthly stats and observation logs can be read the
way the dashboard reads them.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from estate_trends.config import CATEGORIES, DEFAULT_DATA_ROOT, DEFAULT_MONETARY_FIELD
from estate_trends.data.aggregates import parse_aggregate, region_vocabulary
from estate_trends.data.manifest import ManifestRegistry
from estate_trends.data.observations import parse_observation_log, target_months
from estate_trends.data.records import fetch_records, summarize
from estate_trends.data.source import observation_log_path, open_source, stats_path
from estate_trends.exceptions import ArtifactMissing, DashboardError


def validate(root: str, monetary_field: str = DEFAULT_MONETARY_FIELD) -> List[str]:
    """Return one line per problem found; an empty list means every artifact is readable."""
    source = open_source(root)
    registry = ManifestRegistry(source)
    try:
        registry.load()
    except DashboardError as exc:
        return [f"manifest: {exc}"]

    problems: List[str] = []
    for category in CATEGORIES:
        for filename in registry.files_for(category):
            try:
                records = fetch_records(source, category, filename)
            except DashboardError as exc:
                problems.append(f"{category}/{filename}: {exc}")
                continue
            summary = summarize(records, monetary_field)
            print(f"{category}/{filename}: {summary.total_records} records, {summary.amount_count} with {monetary_field}")

        # Trend artifacts are optional, only malformed ones are reported
        try:
            aggregate = parse_aggregate(source.fetch_json(stats_path(category)))
            print(f"{stats_path(category)}: {len(aggregate)} months, {len(region_vocabulary(aggregate))} regions")
        except ArtifactMissing:
            pass
        except DashboardError as exc:
            problems.append(f"{stats_path(category)}: {exc}")
        try:
            log = parse_observation_log(source.fetch_json(observation_log_path(category)))
            print(f"{observation_log_path(category)}: {len(log)} snapshots, targets {target_months(log)}")
        except ArtifactMissing:
            pass
        except DashboardError as exc:
            problems.append(f"{observation_log_path(category)}: {exc}")
    return problems


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    root = args[0] if args else DEFAULT_DATA_ROOT
    problems = validate(root)
    if problems:
        raise SystemExit("Artifact validation failed:\n" + "\n".join(f"- {p}" for p in problems))
    print("Artifact validation passed:", root)


if __name__ == "__main__":
    main()
