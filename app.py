import os
import logging

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from flask import Flask, Response, request, jsonify
from flask_cors import CORS

import analysis_endpoint
from geo_engine import GEO_ENGINE_VERSION, get_settings, list_engines

# ============================================================
# GEO OPTIMIZER SERVICE
#
# Rule-based content scoring for generative answer engines.
# No LLM, no persistence: each request is one pure analysis.
# ============================================================

logging.basicConfig(level=get_settings()["log_level"], format="%(asctime)s %(message)s")
log = logging.getLogger("geo")

sentry_dsn = os.getenv("SENTRY_DSN")
if sentry_dsn:
    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[FlaskIntegration()],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_RATE", "0.1")),
        environment=os.getenv("ENVIRONMENT", "production"),
        release=GEO_ENGINE_VERSION,
    )
    log.info("Sentry initialized")

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": os.getenv("CORS_ORIGINS", "*").split(",")}})


@app.route("/")
@app.route("/health")
def health():
    return jsonify({"status": "ok", "service": "geo-optimizer", "version": GEO_ENGINE_VERSION})


@app.route("/api/engines", methods=["GET"])
def engines():
    return jsonify({"engines": list_engines()})


@app.route("/api/analyze", methods=["POST"])
def analyze():
    """Score content for the selected target engine."""
    payload = request.get_json(silent=True) or {}
    body, status = analysis_endpoint.handle_analyze(payload)
    return jsonify(body), status


@app.route("/api/report", methods=["POST"])
def report():
    """Download the plaintext report as GEO_Report_{epochMillis}.txt."""
    payload = request.get_json(silent=True) or {}
    body, status = analysis_endpoint.handle_report(payload)
    if status != 200:
        return jsonify(body), status
    return Response(
        body["report"],
        mimetype="text/plain",
        headers={"Content-Disposition": f'attachment; filename="{body["filename"]}"'},
    )


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=False)
