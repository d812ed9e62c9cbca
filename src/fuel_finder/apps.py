from django.apps import AppConfig


class FuelFinderConfig(AppConfig):
    name = "fuel_finder"
    verbose_name = "GPX fuel finder"
