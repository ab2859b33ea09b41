"""Export JSON schemas for Trip and TripProgress."""

import json
from pathlib import Path

from trip_tracker.models import Trip, TripProgress


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Trip as it appears on the wire (durations and costs as text)
    trip_schema = Trip.model_json_schema(mode="serialization")
    trip_path = schemas_dir / "Trip.schema.json"
    with open(trip_path, "w") as f:
        json.dump(trip_schema, f, indent=2)
    print(f"Exported Trip schema to {trip_path}")

    progress_schema = TripProgress.model_json_schema()
    progress_path = schemas_dir / "TripProgress.schema.json"
    with open(progress_path, "w") as f:
        json.dump(progress_schema, f, indent=2)
    print(f"Exported TripProgress schema to {progress_path}")


if __name__ == "__main__":
    main()
