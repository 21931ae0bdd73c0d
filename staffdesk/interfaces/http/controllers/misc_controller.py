# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from staffdesk.infrastructure.health import check_database
from staffdesk.infrastructure.observability import render_metrics
from staffdesk.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine, metrics_enabled: bool = True) -> None:
        self._engine = engine
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.warning(f"health: database unavailable ({type(exc).__name__})")
            status["ok"] = False
            status["database"] = "error"
            return jsonify(status), 503
        return jsonify(status)

    def metrics(self) -> Response:
        body, content_type = render_metrics()
        return Response(body, mimetype=None, content_type=content_type)
