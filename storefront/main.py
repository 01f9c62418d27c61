import os
import re
import logging
from datetime import datetime
from flask import Flask, jsonify, request, make_response
from flask_cors import CORS
from dotenv import load_dotenv

# --- Logging ---
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# .env must be loaded before helpers builds the Supabase client
load_dotenv()

# --- Blueprint imports ---
try:
    from storefront.routes.shipping import shipping_bp
    from storefront.routes.checkout import checkout_bp
    from storefront.utils.helpers import supabase
except ImportError as e:
    logging.error(f"Import error: {e}")
    raise

# --- App ---
app = Flask(__name__)
app.url_map.strict_slashes = False

# ---------------- CORS ----------------
PROD_ORIGINS = [
    "https://guptatraders.in",
    "https://www.guptatraders.in",
    "https://admin.guptatraders.in",
]

LOCAL_HOSTS = [
    "http://localhost:5173", "http://127.0.0.1:5173",
    "http://localhost:8080", "http://127.0.0.1:8080",
]

EXTRA = [o.strip() for o in os.environ.get("EXTRA_ALLOWED_ORIGINS", "").split(",") if o.strip()]

ALLOWED_ORIGINS = set(PROD_ORIGINS + LOCAL_HOSTS + EXTRA)

# any localhost port during development
LOCAL_ORIGIN_PATTERNS = [
    re.compile(r"^http://localhost:\d+$"),
    re.compile(r"^http://127\.0\.0\.1:\d+$"),
]


def is_allowed_origin(origin: str) -> bool:
    if not origin:
        return False
    if origin in ALLOWED_ORIGINS:
        return True
    return any(pattern.match(origin) for pattern in LOCAL_ORIGIN_PATTERNS)


# only allow-listed origins get CORS headers
CORS(
    app,
    resources={r"/api/*": {"origins": sorted(ALLOWED_ORIGINS) + LOCAL_ORIGIN_PATTERNS}},
    supports_credentials=True,
    allow_headers=["Content-Type", "Authorization"],
    methods=["GET", "POST", "OPTIONS"]
)


@app.before_request
def handle_preflight():
    if request.method == "OPTIONS":
        origin = request.headers.get("Origin", "")
        resp = make_response()
        resp.headers["Vary"] = "Origin"
        if not is_allowed_origin(origin):
            return resp, 204
        resp.headers["Access-Control-Allow-Origin"] = origin
        resp.headers["Access-Control-Allow-Credentials"] = "true"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return resp, 204


@app.after_request
def add_cors_headers(response):
    origin = request.headers.get("Origin", "")
    if is_allowed_origin(origin):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Credentials"] = "true"
    return response


# --- Blueprints ---
app.register_blueprint(shipping_bp, url_prefix='/api/shipping')
app.register_blueprint(checkout_bp, url_prefix='/api/checkout')


# --- Status ---
@app.route('/')
def index():
    return jsonify({"status": "online", "message": "Gupta Traders storefront API is running"})


@app.route('/health')
def health_check_simple():
    return jsonify({
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now().isoformat(),
        "service": "Gupta Traders Storefront API"
    }), 200


@app.route('/api/health')
def health_check():
    return jsonify({
        "status": "healthy",
        "database": "connected" if supabase else "disconnected",
        "cors_enabled": True
    })


# --- Error handlers ---
@app.errorhandler(404)
def not_found(error):
    return jsonify({"status": "error", "error": "Endpoint not found", "path": request.path}), 404


@app.errorhandler(405)
def method_not_allowed(error):
    return jsonify({"status": "error", "error": "Method not allowed", "method": request.method}), 405


@app.errorhandler(500)
def internal_error(error):
    logger.error(f"Internal error: {error}", exc_info=True)
    return jsonify({"status": "error", "error": "Internal server error"}), 500


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    logger.info(f"Starting server on port {port} (debug: {debug})")
    app.run(host='0.0.0.0', port=port, debug=debug, use_reloader=debug)
