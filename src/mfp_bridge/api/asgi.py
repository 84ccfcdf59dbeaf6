"""ASGI entrypoint for the MyFitnessPal bridge API."""

from mfp_bridge.api.app import create_app
from mfp_bridge.containers import build_container

app = create_app(build_container())
