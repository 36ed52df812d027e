from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    def api_employees():
        """Roster for autocomplete; never fails towards the client."""
        return jsonify({"status": "ok", "employees": container.roster_service.list_employees()})
