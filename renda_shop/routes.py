"""renda_shop.routes – API de la boutique

Montants
--------
* `lineItems[].amount` : **cents** (int), transmis tel quel à Stripe.
* la taxe est calculée ici et ajoutée comme article séparé.

Les erreurs métier (`ShopError`) sont converties en JSON `{"error": ...}` par
les handlers de `create_app`.
"""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, render_template, request

from . import checkout_service, webhook_service
from .product_service import list_products
from .search import search

# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------
shop_bp = Blueprint("shop", __name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

# ---------------------------------------------------------------------------
# GET /api/config – clé publique Stripe
# ---------------------------------------------------------------------------
@shop_bp.route("/api/config", methods=["GET"])
def get_config():
    return jsonify({"publishableKey": current_app.config["STRIPE_PUBLISHABLE_KEY"]})

@shop_bp.route("/api/test", methods=["GET"])
def api_test():
    return jsonify({"message": "Server is working!", "timestamp": _now()})

@shop_bp.route("/api/health", methods=["GET"])
def health():
    return jsonify({
        "status": "ok",
        "timestamp": _now(),
        "stripe_configured": bool(current_app.config["STRIPE_SECRET_KEY"]),
    })

# ---------------------------------------------------------------------------
# GET /api/products – catalogue complet
# ---------------------------------------------------------------------------
@shop_bp.route("/api/products", methods=["GET"])
def products():
    """Retourne la liste complète des produits."""
    return jsonify({"products": list_products()})

# ---------------------------------------------------------------------------
# POST /api/create-checkout-session
# ---------------------------------------------------------------------------
@shop_bp.route("/api/create-checkout-session", methods=["POST"])
def create_checkout_session():
    data = request.get_json(silent=True)
    session_id = checkout_service.create_checkout_session(
        data,
        host=request.host,
        idempotency_key=request.headers.get("Idempotency-Key"),
    )
    return jsonify({"sessionId": session_id})

# ---------------------------------------------------------------------------
# POST /api/webhook – corps brut, signé par Stripe
# ---------------------------------------------------------------------------
@shop_bp.route("/api/webhook", methods=["POST"])
def webhook():
    ack = webhook_service.handle_event(
        request.get_data(),
        request.headers.get("Stripe-Signature"),
        current_app.config["STRIPE_WEBHOOK_SECRET"],
    )
    return jsonify(ack)

# ---------------------------------------------------------------------------
# Recherche : page HTML et équivalent JSON
# ---------------------------------------------------------------------------
def _search(query):
    # sans requête, le catalogue n'est pas lu
    return search(query, list_products() if query else [])

@shop_bp.route("/search", methods=["GET"])
def search_page():
    outcome = _search(request.args.get("q"))
    return render_template("search.html", outcome=outcome)

@shop_bp.route("/api/search", methods=["GET"])
def search_api():
    return jsonify(_search(request.args.get("q")).to_dict())
