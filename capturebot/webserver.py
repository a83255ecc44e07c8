# capturebot/webserver.py

import threading
from pathlib import Path

from flask import Flask, Response, jsonify, request, send_from_directory

from .config import WEB_SERVER_HOST, WEB_SERVER_PORT
from .errors import CaptureBotError, NoActiveCaptureError, ValidationError


def _field(name):
    """Request value from the JSON/form body, falling back to the query string."""
    data = request.get_json(silent=True)
    if isinstance(data, dict) and data.get(name) not in (None, ""):
        return data[name]
    if request.form.get(name):
        return request.form[name]
    return request.args.get(name)


def _fail(error, status=400):
    return jsonify({"ok": False, "error": str(error)}), status


def create_app(service, web_dir, control=True):
    """Flask app serving the static site and JSON state.

    With ``control`` the start-capture and declare-winner endpoints are
    registered too (HTTP mode); without it only the read side is exposed.
    """
    web_dir = Path(web_dir)
    app = Flask(__name__, static_folder=None)
    app.config["CAPTURE_SERVICE"] = service

    @app.errorhandler(404)
    def not_found(e):
        return Response(f"File Not Found: {request.path.lstrip('/')}", status=404)

    @app.errorhandler(CaptureBotError)
    def handle_capture_error(e):
        app.logger.error(f"Unhandled capture error: {e}")
        return _fail(e, 500)

    @app.get("/stats")
    def get_stats():
        return jsonify(service.stats_snapshot())

    @app.get("/capture")
    def get_capture():
        return jsonify(service.capture_snapshot())

    if control:
        @app.route("/capture", methods=["POST"])
        @app.route("/capture-start", methods=["GET"])
        def start_capture():
            gang1, gang2, start, weapon = (_field(k) for k in ("gang1", "gang2", "start", "weapon"))
            try:
                site_url = service.start_capture(gang1, gang2, start, weapon)
            except ValidationError as e:
                app.logger.warning(f"Rejected capture start: {e}")
                return _fail(e)
            capture = service.capture_snapshot()
            return jsonify({
                "ok": True,
                "gang1": capture["gang1"],
                "gang2": capture["gang2"],
                "start": capture["start"],
                "weapon": capture["weapon"],
                "siteUrl": site_url,
            })

        @app.route("/winner", methods=["GET", "POST"])
        def declare_winner():
            try:
                site_url = service.declare_winner(_field("winner"))
            except (ValidationError, NoActiveCaptureError) as e:
                app.logger.warning(f"Rejected winner: {e}")
                return _fail(e)
            return jsonify({"ok": True, "winner": service.capture_snapshot()["winner"], "siteUrl": site_url})

    @app.route("/<path:path>")
    def serve_static(path):
        app.logger.debug(f"Attempting to serve file: {web_dir / path}")
        return send_from_directory(web_dir, path)

    @app.route("/")
    def index():
        if (web_dir / "index.html").exists():
            return send_from_directory(web_dir, "index.html")
        return Response("Capture server is running!", status=200)

    return app


def start_server(app, host=WEB_SERVER_HOST, port=WEB_SERVER_PORT):
    """Run the Flask app on a daemon thread and return the thread."""
    server_thread = threading.Thread(target=app.run, kwargs={
        "host": host,
        "port": port,
        "debug": False,
        "use_reloader": False,
        "threaded": True,
    })
    server_thread.daemon = True
    server_thread.start()
    app.logger.info(f"Web server running at http://{host}:{port}")
    return server_thread
