"""HTTP surface for the now-playing status.

Exposes GET /now-playing for the polling display. The resolver is injected,
so one long-lived service instance owns all cached state.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from spotify_status.config import get_config
from spotify_status.services.now_playing import NowPlayingService, build_service

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def _force_refresh_requested() -> bool:
    return any(
        request.args.get(name, "").lower() in _TRUTHY
        for name in ("refresh", "forceRefresh")
    )


def create_app(service: NowPlayingService) -> Flask:
    """Build the Flask app around a resolver instance."""
    app = Flask(__name__)
    CORS(
        app,
        origins="*",
        send_wildcard=True,
        methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.after_request
    def _no_store(response):
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.get("/now-playing")
    def now_playing():
        try:
            snapshot = service.resolve(force_refresh=_force_refresh_requested())
        except Exception as e:
            logger.exception("Failed to resolve now playing")
            return jsonify({"error": f"Failed to fetch {e}"}), 500

        if snapshot is None:
            return jsonify(False)
        return jsonify(snapshot.to_payload())

    @app.get("/health")
    def health():
        return jsonify({
            "status": "ok",
            "cache": service.cache_status().model_dump(mode="json", by_alias=True),
            "token": service.token_status().model_dump(mode="json"),
        })

    return app


def create_app_from_env() -> Flask:
    """App factory for `flask --app spotify_status.web:create_app_from_env run` or a WSGI server."""
    return create_app(build_service(get_config()))
