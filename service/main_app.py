# main_app.py

from flask import Flask, request, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from core.config import config
from core.logger_config import setup_logger
from util.name_fivegrid_wuxing import analyze_five_grids

# --- 初始化 ---
logger = setup_logger('app')
app = Flask(__name__)
app.json.ensure_ascii = False

limiter = Limiter(app=app,
                  key_func=get_remote_address,
                  default_limits=[config.RATELIMIT_DEFAULT],
                  storage_uri=config.RATELIMIT_STORAGE_URI)


def _bad_request(message: str):
    logger.warning(f"Rejected five grid request: {message}")
    return jsonify({"error": message}), 400


# --- 路由 ---
@app.route("/health", methods=["GET"])
@limiter.exempt
def health():
    return jsonify({"status": "ok"})


@app.route("/api/five-grids", methods=["POST"])
def five_grids():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _bad_request("Request body must be a JSON object.")

    entries = payload.get("entries")
    if not isinstance(entries, list):
        return _bad_request("'entries' must be a list.")
    if not all(isinstance(entry, dict) for entry in entries):
        return _bad_request("Every entry must be a JSON object.")

    surname_length = payload.get("surname_length")
    if surname_length is not None and (isinstance(surname_length, bool) or not isinstance(surname_length, int)):
        return _bad_request("'surname_length' must be an integer.")

    try:
        data = analyze_five_grids(entries, surname_length=surname_length)
    except (TypeError, ValueError) as e:
        return _bad_request(str(e))

    return jsonify(data)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT)
