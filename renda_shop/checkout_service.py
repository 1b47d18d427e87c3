"""renda_shop.checkout_service – panier → session Stripe Checkout

Le panier arrive du navigateur sous la forme
`{"lineItems": [{name, description?, amount, quantity}], "province": "ON"}`
avec `amount` en cents. La taxe provinciale est ajoutée comme un article
supplémentaire (Stripe ne calcule pas la taxe : `automatic_tax` désactivé).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from flask import current_app

from . import payment_service
from .errors import InvalidCartError
from .utils import TaxRate, apply_rate, calculate_subtotal, get_tax_rate, round_cents, tax_label

SUCCESS_PATH = "/checkout/success.html?session_id={CHECKOUT_SESSION_ID}"
CANCEL_PATH = "/checkout/cancelled.html"

# Plafonds acceptés par Stripe pour `unit_amount` (cents) et `quantity`
MAX_UNIT_AMOUNT = 99_999_999
MAX_QUANTITY = 999_999


@dataclass(frozen=True)
class CartLineItem:
    name: str
    unit_amount: int
    quantity: int
    description: str = ""


# ---------------------------------------------------------------------------
# Validation du panier
# ---------------------------------------------------------------------------

def _parse_amount(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidCartError("Item amount must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidCartError("Item amount must be a number")
    if not amount.is_finite() or amount < 0 or amount > MAX_UNIT_AMOUNT:
        raise InvalidCartError("Item amount must be a non-negative number")
    return round_cents(amount)


def _parse_quantity(value: Any) -> int:
    try:
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(value)
        qty = int(value)
        if not 1 <= qty <= MAX_QUANTITY:
            raise ValueError(qty)
    except (TypeError, ValueError):
        raise InvalidCartError("Item quantity must be a positive integer")
    return qty


def parse_line_items(payload: Optional[Dict[str, Any]]) -> List[CartLineItem]:
    """Convertit le JSON reçu en `CartLineItem` ; lève InvalidCartError."""
    raw_items = payload.get("lineItems") if isinstance(payload, dict) else None
    if not raw_items or not isinstance(raw_items, list):
        raise InvalidCartError("No items in cart")

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise InvalidCartError("Each item needs a name")
        items.append(
            CartLineItem(
                name=str(raw["name"]),
                description=str(raw.get("description") or ""),
                unit_amount=_parse_amount(raw.get("amount")),
                quantity=_parse_quantity(raw.get("quantity")),
            )
        )
    return items


# ---------------------------------------------------------------------------
# Assemblage des articles Stripe
# ---------------------------------------------------------------------------

def _price_data(name: str, description: str, unit_amount: int, currency: str) -> Dict[str, Any]:
    product_data = {"name": name}
    # Stripe refuse une description vide
    if description:
        product_data["description"] = description
    return {
        "currency": currency,
        "product_data": product_data,
        "unit_amount": unit_amount,
    }


def build_line_items(
    items: Sequence[CartLineItem],
    rate: TaxRate,
    currency: str = "cad",
) -> List[Dict[str, Any]]:
    """Articles Stripe du panier, suivis d'un article « taxe » si elle est > 0."""
    line_items = [
        {
            "price_data": _price_data(i.name, i.description, i.unit_amount, currency),
            "quantity": i.quantity,
        }
        for i in items
    ]

    tax_amount = apply_rate(calculate_subtotal(items), rate)
    if tax_amount > 0:
        line_items.append(
            {
                "price_data": _price_data(tax_label(rate), "Sales Tax", tax_amount, currency),
                "quantity": 1,
            }
        )
    return line_items


def build_session_params(
    line_items: List[Dict[str, Any]],
    domain: str,
    shipping_rate_id: Optional[str] = None,
    allowed_countries: Sequence[str] = ("US", "CA"),
) -> Dict[str, Any]:
    domain = domain.rstrip("/")
    params = {
        "payment_method_types": ["card"],
        "line_items": line_items,
        "mode": "payment",
        "success_url": domain + SUCCESS_PATH,
        "cancel_url": domain + CANCEL_PATH,
        "shipping_address_collection": {"allowed_countries": list(allowed_countries)},
        "automatic_tax": {"enabled": False},
    }
    if shipping_rate_id:
        params["shipping_options"] = [{"shipping_rate": shipping_rate_id}]
    return params


# ---------------------------------------------------------------------------
# Point d'entrée utilisé par la route
# ---------------------------------------------------------------------------

def create_checkout_session(
    payload: Optional[Dict[str, Any]],
    host: str,
    idempotency_key: Optional[str] = None,
) -> str:
    cfg = current_app.config
    items = parse_line_items(payload)
    rate = get_tax_rate(payload.get("province"), cfg["DEFAULT_PROVINCE"])

    line_items = build_line_items(items, rate, currency=cfg["CURRENCY"])
    params = build_session_params(
        line_items,
        cfg["DOMAIN"] or f"https://{host}",
        shipping_rate_id=cfg["STRIPE_SHIPPING_RATE_ID"],
        allowed_countries=cfg["ALLOWED_COUNTRIES"],
    )

    session_id = payment_service.create_session(params, idempotency_key)
    current_app.logger.info(
        "Checkout session %s created (%d items, province %s)",
        session_id, len(items), rate.code,
    )
    return session_id
