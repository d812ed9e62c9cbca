from __future__ import annotations

from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import ValidationError

from fuel_finder.exceptions import NoRouteDataError
from fuel_finder.schemas import EnrichmentOptions, ProcessGpxResponse, StationResponse
from fuel_finder.services import storage
from fuel_finder.services.pipeline import FuelFinderService

OPTION_FIELDS = (
    "maxDistance",
    "minInterval",
    "maxInterval",
    "max_distance",
    "min_interval",
    "max_interval",
)


def get_fuel_finder() -> FuelFinderService:
    return FuelFinderService()


@require_GET
def upload_view(request: HttpRequest) -> HttpResponse:
    return render(
        request,
        "fuel_finder/upload.html",
        {
            "defaults": {
                "max_distance": float(settings.FUEL_MAX_DISTANCE_METERS),
                "min_interval": float(settings.FUEL_MIN_INTERVAL_KM),
                "max_interval": float(settings.FUEL_MAX_INTERVAL_KM),
            }
        },
    )


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse({"status": "ok"})


@csrf_exempt
@require_POST
def process_gpx_view(request: HttpRequest) -> HttpResponse:
    upload = request.FILES.get("gpxFile")
    if upload is None:
        return _error_response("missing_file", "No GPX file provided", status=400)
    if upload.size is not None and upload.size > settings.GPX_MAX_UPLOAD_BYTES:
        return _error_response("file_too_large", "GPX file is too large", status=413)

    try:
        options = EnrichmentOptions.model_validate(_option_values(request.POST))
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid enrichment options",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    gpx_text = upload.read().decode("utf-8", errors="replace")
    try:
        result = get_fuel_finder().process(gpx_text, options)
    except NoRouteDataError as exc:
        return _error_response("no_route_data", str(exc), status=400)

    filename = storage.save_output(result.gpx_xml)
    response = ProcessGpxResponse(
        fuel_stations=len(result.stations),
        total_distance_km=result.total_distance_km,
        samples=result.sample_count,
        output_filename=filename,
        download_url=f"/api/v1/download/{filename}",
        stations=[
            StationResponse(
                number=number,
                station_id=enriched.station.station_id,
                name=enriched.station.name,
                brand=enriched.station.brand,
                latitude=enriched.station.location.latitude,
                longitude=enriched.station.location.longitude,
                distance_from_start_km=round(enriched.distance_along_route / 1000.0, 1),
                distance_from_sample_m=round(enriched.station.straight_line_distance, 1),
            )
            for number, enriched in enumerate(result.stations, start=1)
        ],
    )
    return JsonResponse(response.model_dump(mode="json"), status=200)


@require_GET
def download_view(_: HttpRequest, filename: str) -> HttpResponse:
    if not storage.is_valid_output_name(filename):
        return _error_response("invalid_file", "Invalid file type", status=400)

    path = storage.resolve_output(filename)
    if path is None:
        return _error_response("not_found", "File not found", status=404)

    response = HttpResponse(path.read_bytes(), content_type="application/gpx+xml")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def _option_values(data: Any) -> dict[str, str]:
    return {key: data[key] for key in OPTION_FIELDS if data.get(key) not in (None, "")}


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
