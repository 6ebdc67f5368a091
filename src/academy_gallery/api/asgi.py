"""ASGI entrypoint for the academy gallery API."""

from academy_gallery.api.app import create_app
from academy_gallery.containers import build_container

app = create_app(build_container())
