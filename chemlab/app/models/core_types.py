import enum
from decimal import Decimal

class Role(str, enum.Enum):
    admin = "Admin"
    manager = "Manager"
    staff = "Staff"

class TransactionType(str, enum.Enum):
    stock_in = "IN"
    stock_out = "OUT"

class Currency(str, enum.Enum):
    usd = "USD"
    twd = "TWD"

# Fill level of an opened container, in percent.
UNIT_LEVELS = (25, 50, 75, 100)

# Fixed conversion from the cost-table base (USD) to the display currency.
CURRENCY_RATES = {
    Currency.usd: Decimal("1"),
    Currency.twd: Decimal("32"),
}

CURRENCY_SYMBOLS = {
    Currency.usd: "$",
    Currency.twd: "NT$",
}
