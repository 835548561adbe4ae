"""Domain constants for finance tracking."""

from decimal import Decimal

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

CREDIT = "credit"
DEBIT = "debit"
CASH = "cash"
PAYMENT_METHOD_TYPES = (CREDIT, DEBIT, CASH)

STOCK = "stock"
CEDEAR = "cedear"
BOND = "bond"
NEGOTIABLE_OBLIGATION = "on"
CRYPTO = "crypto"
FCI = "fci"
ASSET_TYPES = (STOCK, CEDEAR, BOND, NEGOTIABLE_OBLIGATION, CRYPTO, FCI)

ARS = "ARS"
USD = "USD"
CURRENCIES = (ARS, USD)

# Plans within this amount of zero count as finished (float drift in
# per-installment amounts never reaches it).
INSTALLMENT_FINISHED_TOLERANCE = Decimal("100")

DEFAULT_PRICE_BATCH_SIZE = 5
DEFAULT_PRICE_TIMEOUT_SECONDS = 10.0

UNCATEGORIZED_LABEL = "Otros"


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSACTION_TYPES",
    "CREDIT",
    "DEBIT",
    "CASH",
    "PAYMENT_METHOD_TYPES",
    "STOCK",
    "CEDEAR",
    "BOND",
    "NEGOTIABLE_OBLIGATION",
    "CRYPTO",
    "FCI",
    "ASSET_TYPES",
    "ARS",
    "USD",
    "CURRENCIES",
    "INSTALLMENT_FINISHED_TOLERANCE",
    "DEFAULT_PRICE_BATCH_SIZE",
    "DEFAULT_PRICE_TIMEOUT_SECONDS",
    "UNCATEGORIZED_LABEL",
]
