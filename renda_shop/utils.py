"""renda_shop.utils – taxes de vente canadiennes

Tous les montants sont en **cents** (int). Les taux sont des `Decimal` pour
que `subtotal × taux` soit exact avant l'arrondi.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Optional

DEFAULT_PROVINCE = "BC"


@dataclass(frozen=True)
class TaxRate:
    code: str
    total: Decimal
    components: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def percent(self) -> Decimal:
        return (self.total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def _rate(code: str, total: str, **components: str) -> TaxRate:
    return TaxRate(code, Decimal(total), {k: Decimal(v) for k, v in components.items()})


# --- Taxes (TPS / TVP / TVH) ---
TAX_RATES = {
    r.code: r
    for r in (
        _rate("BC", "0.12", gst="0.05", pst="0.07"),
        _rate("AB", "0.05", gst="0.05", pst="0.00"),
        _rate("ON", "0.13", hst="0.13"),
        _rate("QC", "0.14975", gst="0.05", pst="0.09975"),
        _rate("SK", "0.11", gst="0.05", pst="0.06"),
        _rate("MB", "0.12", gst="0.05", pst="0.07"),
        _rate("NB", "0.15", hst="0.15"),
        _rate("NS", "0.15", hst="0.15"),
        _rate("PE", "0.15", hst="0.15"),
        _rate("NL", "0.15", hst="0.15"),
    )
}


def get_tax_rate(province: Optional[str], default: str = DEFAULT_PROVINCE) -> TaxRate:
    """Taux de la province ; une province inconnue retombe sur `default`."""
    code = str(province or "").strip().upper()
    return TAX_RATES.get(code) or TAX_RATES[default]


def round_cents(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_subtotal(items: Iterable) -> int:
    return sum(item.unit_amount * item.quantity for item in items)


def apply_rate(subtotal: int, rate: TaxRate) -> int:
    return round_cents(Decimal(subtotal) * rate.total)


def calculate_tax(subtotal: int, province: Optional[str], default: str = DEFAULT_PROVINCE) -> int:
    return apply_rate(subtotal, get_tax_rate(province, default))


def tax_label(rate: TaxRate) -> str:
    return f"{rate.code} Tax ({rate.percent}%)"
