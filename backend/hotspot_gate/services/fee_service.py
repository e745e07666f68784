from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class FeePolicy:
    percent: Decimal = Decimal("0")
    flat: int = 0

    def apply(self, amount: int) -> Decimal:
        return Decimal(amount) * self.percent / Decimal(100) + Decimal(self.flat)


_WALLET = FeePolicy(percent=Decimal("2"))
_QRIS = FeePolicy(percent=Decimal("0.7"))
_CARD = FeePolicy(percent=Decimal("2.9"), flat=2000)
_VIRTUAL_ACCOUNT = FeePolicy(flat=4000)
_RETAIL_COUNTER = FeePolicy(flat=5000)

FEE_TABLE: dict[str, FeePolicy] = {
    "gopay": _WALLET,
    "shopeepay": _WALLET,
    "akulaku": _WALLET,
    "kredivo": _WALLET,
    "other_qris": _QRIS,
    "credit_card": _CARD,
    "echannel": _VIRTUAL_ACCOUNT,
    "bri_va": _VIRTUAL_ACCOUNT,
    "cimb_va": _VIRTUAL_ACCOUNT,
    "bni_va": _VIRTUAL_ACCOUNT,
    "permata_va": _VIRTUAL_ACCOUNT,
    "other_va": _VIRTUAL_ACCOUNT,
    "indomaret": _RETAIL_COUNTER,
    "alfamart": _RETAIL_COUNTER,
    "alfamidi": _RETAIL_COUNTER,
    "dan_dan": _RETAIL_COUNTER,
}

VAT_APPLICABLE_METHODS = frozenset(
    {
        "credit_card",
        "akulaku",
        "kredivo",
        "echannel",
        "bri_va",
        "cimb_va",
        "bni_va",
        "permata_va",
        "other_va",
    }
)


def round_currency(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class FeeVatCalculator:
    def __init__(self, vat_percent: float) -> None:
        # str() keeps 11 as 11, not 11.000000000000000177...
        self.vat_percent = Decimal(str(vat_percent))

    def compute_fee(self, amount: int, method: str) -> int:
        policy = FEE_TABLE.get(method)
        if policy is None:
            return 0
        return round_currency(policy.apply(amount))

    def compute_vat(self, amount: int, method: str) -> int:
        if method not in VAT_APPLICABLE_METHODS:
            return 0
        return round_currency(Decimal(amount) * self.vat_percent / Decimal(100))
