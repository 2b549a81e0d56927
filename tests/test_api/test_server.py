"""Tests for build_server()."""

from fastapi import FastAPI

from config.settings import Settings
from src.api.server import build_server


def test_binds_configured_host_and_port():
    app = FastAPI()
    server = build_server(Settings(api_host="127.0.0.1", api_port=9999), app=app)
    assert server.config.host == "127.0.0.1"
    assert server.config.port == 9999
    assert server.config.app is app
    assert server.config.access_log is False


def test_builds_rebalancer_app_by_default():
    server = build_server(Settings(api_port=4010))
    assert server.config.port == 4010
    paths = {route.path for route in server.config.app.routes}
    assert {"/health", "/strategy/suggest", "/snapshots"} <= paths
