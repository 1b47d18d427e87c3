"""renda_shop.errors – exceptions métier

Chaque exception porte le code HTTP sous lequel elle est renvoyée au client ;
les handlers enregistrés dans `create_app` se chargent de la conversion.
"""


class ShopError(Exception):
    """Classe de base : `message` est renvoyé tel quel dans le champ `error`."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidCartError(ShopError):
    """Panier absent, vide ou article mal formé (corrigeable par le client)."""

    status_code = 400


class PaymentProviderError(ShopError):
    """Stripe a refusé ou n'a pas pu créer la session."""

    status_code = 500


class SignatureVerificationError(ShopError):
    """Webhook non authentifié : l'événement est ignoré."""

    status_code = 400
