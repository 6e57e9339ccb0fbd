"""ASGI entrypoint for the MacroFit API."""

from macrofit.api.app import create_app
from macrofit.containers import build_container

app = create_app(build_container())
