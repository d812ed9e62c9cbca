from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EnrichmentOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    max_distance: float | None = Field(default=None, alias="maxDistance", ge=100.0, le=10000.0)
    min_interval: float | None = Field(default=None, alias="minInterval", ge=1.0, le=500.0)
    max_interval: float | None = Field(default=None, alias="maxInterval", ge=1.0, le=1000.0)

    @model_validator(mode="after")
    def check_interval_order(self) -> EnrichmentOptions:
        if (
            self.min_interval is not None
            and self.max_interval is not None
            and self.max_interval < self.min_interval
        ):
            raise ValueError("maxInterval must not be smaller than minInterval")
        return self


class StationResponse(BaseModel):
    number: int
    station_id: str
    name: str
    brand: str
    latitude: float
    longitude: float
    distance_from_start_km: float
    distance_from_sample_m: float


class ProcessGpxResponse(BaseModel):
    success: bool = True
    fuel_stations: int
    total_distance_km: float
    samples: int
    output_filename: str
    download_url: str
    stations: list[StationResponse]
