import os

from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Les variables de .env n'écrasent jamais celles déjà présentes dans l'environnement
load_dotenv(os.path.join(BASE_DIR, ".env"))


def _split(value):
    return [v.strip().upper() for v in value.split(",") if v.strip()]


class Config:
    DEBUG = os.environ.get("FLASK_DEBUG") == "1"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", 4242))

    # --- Catalogue ---
    DATABASE = os.environ.get("DATABASE", os.path.join(BASE_DIR, "shop.db"))
    CATALOG_PATH = os.environ.get(
        "CATALOG_PATH", os.path.join(BASE_DIR, "renda_shop", "data", "catalog.json")
    )
    CATALOG_URL = os.environ.get("CATALOG_URL")

    # --- Stripe ---
    STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY")
    STRIPE_PUBLISHABLE_KEY = os.environ.get("STRIPE_PUBLISHABLE_KEY")
    STRIPE_WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET")
    STRIPE_SHIPPING_RATE_ID = os.environ.get("STRIPE_SHIPPING_RATE_ID")

    # --- Checkout ---
    DOMAIN = os.environ.get("DOMAIN")
    CURRENCY = "cad"
    DEFAULT_PROVINCE = "BC"
    ALLOWED_COUNTRIES = _split(os.environ.get("ALLOWED_COUNTRIES", "US,CA"))

config = Config()
