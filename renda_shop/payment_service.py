"""
renda_shop/payment_service.py
-----------------------------

Couche d'accès à Stripe Checkout.

• Les montants sont déjà en CENTIMES (int) : aucune conversion ici.
• Lève PaymentProviderError si Stripe refuse la requête ou est inaccessible.
• Aucune nouvelle tentative : l'erreur est renvoyée telle quelle au client.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import stripe
from flask import current_app

from .errors import PaymentProviderError


def create_session(params: Dict[str, Any], idempotency_key: Optional[str] = None) -> str:
    """
    Crée une session Stripe Checkout et retourne son identifiant.

    Parameters
    ----------
    params : dict
        Paramètres de `stripe.checkout.Session.create` (voir
        `checkout_service.build_session_params`).
    idempotency_key : str, optional
        Transmise à Stripe pour dédupliquer les soumissions répétées. Sans
        clé, deux requêtes identiques créent deux sessions.

    Raises
    ------
    PaymentProviderError
        Porte le message de Stripe (carte, clé API, réseau, ...).
    """
    options = {"api_key": current_app.config["STRIPE_SECRET_KEY"]}
    if idempotency_key:
        options["idempotency_key"] = idempotency_key

    try:
        session = stripe.checkout.Session.create(**options, **params)
    except stripe.StripeError as exc:
        message = exc.user_message or str(exc)
        current_app.logger.error("Error creating checkout session: %s", message)
        raise PaymentProviderError(message) from exc

    return session["id"]
