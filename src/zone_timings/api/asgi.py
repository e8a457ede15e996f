"""ASGI entrypoint for the zone timings API."""

from zone_timings.api.app import create_app

app = create_app()
