from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider

import click

from .errors import ShopError, SignatureVerificationError


# Provider UTF-8 sans échappement \uXXXX (catégories du type « Notions ✚ Trims »)
class UTF8JSONProvider(DefaultJSONProvider):
    def dumps(self, obj, **kwargs):
        kwargs.setdefault("ensure_ascii", False)
        return super().dumps(obj, **kwargs)


def create_app():
    app = Flask(__name__)

    app.config.from_object("config.config")
    app.json = UTF8JSONProvider(app)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    from .models import db

    # --- Connexion Peewee par requête ---
    @app.before_request
    def _db_connect():
        if db.is_closed():
            db.connect(reuse_if_open=True)

    @app.teardown_request
    def _db_close(exc):
        if not db.is_closed():
            db.close()

    # --- Blueprints ---
    from .routes import shop_bp
    app.register_blueprint(shop_bp)

    # ---------- Handlers d'erreurs globaux ----------
    @app.errorhandler(ShopError)
    def shop_error(err):
        return jsonify({"error": err.message}), err.status_code

    @app.errorhandler(SignatureVerificationError)
    def webhook_error(err):
        return f"Webhook Error: {err.message}", err.status_code, {"Content-Type": "text/plain"}

    @app.errorhandler(404)
    def not_found(err):
        return jsonify({"error": "The requested resource was not found"}), 404

    @app.errorhandler(500)
    def internal_error(err):
        return jsonify({"error": "An internal error occurred"}), 500
    # ------------------------------------------------

    # --- Commandes CLI ---
    @app.cli.command("init-db")
    def init_db():
        from .models import create_tables
        from .product_service import fetch_and_cache_products
        create_tables()
        count = fetch_and_cache_products()
        click.echo(f"Database ready, {count} products imported.")

    @app.cli.command("tax-rates")
    def tax_rates():
        from .utils import TAX_RATES, tax_label
        for rate in TAX_RATES.values():
            parts = ", ".join(f"{k.upper()} {v}" for k, v in rate.components.items())
            click.echo(f"{tax_label(rate):<22} {parts}")

    app.logger.info("Stripe configured: %s", bool(app.config["STRIPE_SECRET_KEY"]))
    return app
