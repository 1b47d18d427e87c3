import json

import requests
from flask import current_app
from playhouse.shortcuts import model_to_dict

from .models import Product, db


def load_catalog():
    """Lit le catalogue : URL distante si `CATALOG_URL` est défini, sinon le fichier JSON local."""
    url = current_app.config.get("CATALOG_URL")
    if url:
        r = requests.get(url, timeout=10)
        r.raise_for_status()
        return r.json()["products"]

    with open(current_app.config["CATALOG_PATH"], encoding="utf-8") as f:
        return json.load(f)["products"]


def fetch_and_cache_products():
    """Importe le catalogue dans la base (1 fois au lancement, via `flask init-db`)."""
    products = load_catalog()

    allowed_fields = {field.name for field in Product._meta.sorted_fields}

    with db.atomic():
        for p in products:
            clean_p = {k: v for k, v in p.items() if k in allowed_fields}
            Product.insert(**clean_p).on_conflict_replace().execute()

    current_app.logger.info("%d products imported", len(products))
    return len(products)


def list_products():
    """Produits dans l'ordre du catalogue."""
    return [model_to_dict(p) for p in Product.select().order_by(Product.id)]
