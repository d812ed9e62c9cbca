from __future__ import annotations

from pathlib import Path
from typing import Any

from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

from fuel_finder.exceptions import NoRouteDataError
from fuel_finder.schemas import EnrichmentOptions
from fuel_finder.services.pipeline import FuelFinderService


class Command(BaseCommand):
    help = "Add fuel station waypoints along a GPX route using OpenStreetMap data."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("gpx_path", type=str, help="Path to the input GPX file")
        parser.add_argument(
            "--output",
            type=str,
            default=None,
            help="Where to write the enhanced GPX (default: <input>-fuel.gpx)",
        )
        parser.add_argument(
            "--max-distance",
            type=float,
            default=None,
            help="Search radius around each sample point in meters",
        )
        parser.add_argument(
            "--min-interval",
            type=float,
            default=None,
            help="Minimum kilometers between sample points",
        )
        parser.add_argument(
            "--max-interval",
            type=float,
            default=None,
            help="Maximum kilometers between fuel stops (advisory)",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        gpx_path = Path(options["gpx_path"])
        if not gpx_path.exists():
            raise CommandError(f"GPX file does not exist: {gpx_path}")

        output_path = (
            Path(options["output"])
            if options["output"]
            else gpx_path.with_name(f"{gpx_path.stem}-fuel.gpx")
        )

        try:
            enrichment_options = EnrichmentOptions(
                max_distance=options["max_distance"],
                min_interval=options["min_interval"],
                max_interval=options["max_interval"],
            )
        except ValidationError as exc:
            raise CommandError(f"Invalid options: {exc}") from exc

        try:
            result = FuelFinderService().process(
                gpx_path.read_text(encoding="utf-8", errors="replace"),
                enrichment_options,
            )
        except NoRouteDataError as exc:
            raise CommandError(str(exc)) from exc

        output_path.write_text(result.gpx_xml, encoding="utf-8")
        self.stdout.write(
            self.style.SUCCESS(
                f"Wrote {output_path}: {len(result.stations)} fuel stations "
                f"over {result.total_distance_km} km ({result.sample_count} samples)"
            )
        )
