"""renda_shop.webhook_service – événements Stripe

La signature (`Stripe-Signature: t=...,v1=...`) est un HMAC-SHA256 horodaté
du corps brut ; elle est vérifiée par `stripe.Webhook.construct_event`.
Le corps doit donc arriver non décodé.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import stripe
from flask import current_app

from .errors import SignatureVerificationError

CHECKOUT_COMPLETED = "checkout.session.completed"


def fulfill_order(session: Any) -> None:
    """Réaction à un paiement réussi (journalisation seulement pour l'instant)."""
    current_app.logger.info("Payment successful for session: %s", session["id"])


def handle_event(payload: bytes, signature: Optional[str], secret: Optional[str]) -> Dict[str, bool]:
    if not secret:
        current_app.logger.warning("Webhook secret not configured, event accepted unverified")
        return {"received": True}

    if not signature:
        raise SignatureVerificationError("No signatures found matching the expected signature for payload")

    try:
        event = stripe.Webhook.construct_event(payload, signature, secret)
    except (ValueError, stripe.SignatureVerificationError) as exc:
        current_app.logger.warning("Webhook signature verification failed: %s", exc)
        raise SignatureVerificationError(str(exc)) from exc

    if event["type"] == CHECKOUT_COMPLETED:
        fulfill_order(event["data"]["object"])
    else:
        current_app.logger.debug("Ignoring webhook event %s", event["type"])

    return {"received": True}
