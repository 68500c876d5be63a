"""sales_report.py

Seller performance report built from raw transaction data (configurable):
- Inputs: three collections in one bundle (sellers, products, purchase_records).
- Per line item: revenue from a pluggable revenue calculator,
  profit = revenue - purchase_price * quantity when the sku is known.
- Per seller: total revenue, profit, number of purchase records, units per sku.
- Ranking: sellers sorted by profit (descending), bonus from a pluggable
  bonus calculator:
    * last place          -> 0 (checked first, so a lone seller gets 0)
    * 1st place           -> 15% of profit
    * 2nd and 3rd places  -> 10% of profit
    * everyone else       -> 5% of profit
- Money is accumulated unrounded and rounded once, half away from zero, when
  the report rows are built.
- The module exposes:
    * analyze_sales_data(data, options)        -> list of ReportRow, best profit first
    * calculate_simple_revenue(item, product)  -> default revenue calculator
    * calculate_bonus_by_profit(index, total, seller) -> default bonus calculator
    * report_to_frame(rows)                    -> leaderboard DataFrame
    * recommended_config()                     -> default config dict (for tuning)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

# Default configuration (tune these values to match a real bonus plan)
DEFAULT_CONFIG = {
    "first_place_bonus_rate": 0.15,   # 15% of profit for rank 0
    "podium_bonus_rate": 0.10,        # 10% of profit for ranks 1..podium_last_index
    "podium_last_index": 2,
    "base_bonus_rate": 0.05,          # 5% for the rest, except last place
    "top_products_limit": 10,         # best sellers kept per report row
    "money_decimals": 2,
}

REQUIRED_COLLECTIONS = ("sellers", "products", "purchase_records")

REPORT_COLUMNS = [
    "rank", "seller_id", "name", "revenue", "profit",
    "sales_count", "bonus", "top_products",
]


def recommended_config():
    return DEFAULT_CONFIG.copy()


class InvalidInput(ValueError):
    """Raised when the input bundle or the options cannot be analysed."""


# ------------------------------------------------------------
# DATA MODEL
# ------------------------------------------------------------

@dataclass
class SellerAggregate:
    """Running totals for one seller while purchase records are folded in."""
    id: Any
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class TopProduct:
    sku: str
    quantity: int


@dataclass(frozen=True)
class ReportRow:
    """One line of the final report."""
    seller_id: Any
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: Tuple[TopProduct, ...]
    bonus: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seller_id": self.seller_id,
            "name": self.name,
            "revenue": self.revenue,
            "profit": self.profit,
            "sales_count": self.sales_count,
            "top_products": [
                {"sku": p.sku, "quantity": p.quantity} for p in self.top_products
            ],
            "bonus": self.bonus,
        }


# ------------------------------------------------------------
# STRATEGIES
# ------------------------------------------------------------

class RevenueCalculator(Protocol):
    def __call__(self, item: Mapping, product: Optional[Mapping] = None) -> float:
        ...


class BonusCalculator(Protocol):
    def __call__(self, index: int, total: int, seller: SellerAggregate) -> float:
        ...


def round_money(value, decimals=2):
    """Round half away from zero on the shortest decimal form of ``value``.

    ``repr`` gives the digits a person would type (1.005, not
    1.00499999999999989...), so ties land where they are expected.
    """
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def calculate_simple_revenue(item, product=None):
    """Revenue of one line item: sale price less percentage discount, times quantity.

    The product card is not needed, so items with an unknown sku still earn
    revenue. No rounding here; the report rounds once at the end.
    """
    discount_coefficient = item["discount"] / 100
    discounted_price = item["sale_price"] * (1 - discount_coefficient)
    return discounted_price * item["quantity"]


def calculate_bonus_by_profit(index, total, seller, config=None):
    """Bonus for the seller at 0-based ``index`` out of ``total`` ranked sellers."""
    cfg = DEFAULT_CONFIG if config is None else config

    # Last place first: with a single seller this beats the first-place rule
    if index == total - 1:
        return 0.0

    if index == 0:
        rate = cfg["first_place_bonus_rate"]
    elif index <= cfg["podium_last_index"]:
        rate = cfg["podium_bonus_rate"]
    else:
        rate = cfg["base_bonus_rate"]
    return seller.profit * rate


def make_bonus_calculator(config) -> BonusCalculator:
    """Bind a config dict into a three-argument bonus calculator."""
    def _calculate(index, total, seller):
        return calculate_bonus_by_profit(index, total, seller, config)
    return _calculate


@dataclass
class AnalysisOptions:
    calculate_revenue: RevenueCalculator
    calculate_bonus: BonusCalculator


def default_options() -> AnalysisOptions:
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
    )


# ------------------------------------------------------------
# VALIDATION
# ------------------------------------------------------------

def _is_sequence(value) -> bool:
    return isinstance(value, (list, tuple))


def validate_input(data) -> None:
    """Check the bundle shape. Individual records are not inspected."""
    if data is None or not isinstance(data, Mapping):
        raise InvalidInput("No data supplied for analysis")

    for name in REQUIRED_COLLECTIONS:
        if name not in data:
            raise InvalidInput(f"Invalid data structure: missing collection `{name}`")
        if not _is_sequence(data[name]):
            raise InvalidInput(
                f"Invalid data structure: `{name}` must be a list, "
                f"got {type(data[name]).__name__}"
            )
        if len(data[name]) == 0:
            raise InvalidInput(f"Empty collection: `{name}`")


def validate_options(options) -> Tuple[RevenueCalculator, BonusCalculator]:
    """Return the (revenue, bonus) calculators held by ``options``."""
    if options is None:
        raise InvalidInput("No options supplied for analysis")

    strategies = []
    for name in ("calculate_revenue", "calculate_bonus"):
        if isinstance(options, Mapping):
            strategy = options.get(name)
        else:
            strategy = getattr(options, name, None)
        if strategy is None:
            raise InvalidInput(f"Missing option `{name}`")
        if not callable(strategy):
            raise InvalidInput(f"Option `{name}` must be callable")
        strategies.append(strategy)
    return strategies[0], strategies[1]


# ------------------------------------------------------------
# INDEXES & AGGREGATION
# ------------------------------------------------------------

def build_product_index(products) -> Dict[str, Mapping]:
    # Duplicate skus: the last one in input order wins
    return {product["sku"]: product for product in products}


def build_seller_index(sellers) -> Dict[Any, SellerAggregate]:
    return {
        seller["id"]: SellerAggregate(
            id=seller["id"],
            name=f"{seller['first_name']} {seller['last_name']}",
        )
        for seller in sellers
    }


def aggregate_purchases(purchase_records, sellers_index, products_index,
                        calculate_revenue) -> int:
    """Fold purchase records into the seller aggregates, in input order.

    Records whose seller is unknown are skipped whole. Returns how many
    records were skipped.
    """
    skipped = 0
    for record in purchase_records:
        seller = sellers_index.get(record["seller_id"])
        if seller is None:
            skipped += 1
            continue

        seller.sales_count += 1

        for item in record["items"]:
            sku = item["sku"]
            product = products_index.get(sku)

            item_revenue = calculate_revenue(item, product)
            seller.revenue += item_revenue

            # Profit only when the cost is known
            if product is not None:
                item_cost = product["purchase_price"] * item["quantity"]
                seller.profit += item_revenue - item_cost

            seller.products_sold[sku] = seller.products_sold.get(sku, 0) + item["quantity"]

    if skipped:
        logger.debug("Skipped %d purchase record(s) with unknown seller_id", skipped)
    return skipped


# ------------------------------------------------------------
# RANKING & REPORT
# ------------------------------------------------------------

def rank_sellers(aggregates) -> List[SellerAggregate]:
    """Sort by profit, best first. Ties keep their incoming order."""
    return sorted(aggregates, key=lambda seller: seller.profit, reverse=True)


def top_products(products_sold, limit=10) -> Tuple[TopProduct, ...]:
    ranked = sorted(products_sold.items(), key=lambda entry: entry[1], reverse=True)
    return tuple(TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit])


def build_report_row(seller, bonus, config=None) -> ReportRow:
    cfg = DEFAULT_CONFIG if config is None else config
    decimals = cfg["money_decimals"]
    return ReportRow(
        seller_id=seller.id,
        name=seller.name,
        revenue=round_money(seller.revenue, decimals),
        profit=round_money(seller.profit, decimals),
        sales_count=seller.sales_count,
        top_products=top_products(seller.products_sold, cfg["top_products_limit"]),
        bonus=round_money(bonus, decimals),
    )


def analyze_sales_data(data, options, config=None) -> List[ReportRow]:
    """Build the seller report: validate, index, aggregate, rank, project.

    Raises InvalidInput for a malformed bundle or options. Errors raised by
    the calculators propagate unchanged.
    """
    validate_input(data)
    calculate_revenue, calculate_bonus = validate_options(options)

    products_index = build_product_index(data["products"])
    sellers_index = build_seller_index(data["sellers"])
    logger.debug(
        "Indexed %d product(s) and %d seller(s)", len(products_index), len(sellers_index)
    )

    aggregate_purchases(
        data["purchase_records"], sellers_index, products_index, calculate_revenue
    )

    ranked = rank_sellers(sellers_index.values())
    total = len(ranked)
    rows = [
        build_report_row(seller, calculate_bonus(index, total, seller), config)
        for index, seller in enumerate(ranked)
    ]
    logger.info("Built seller report with %d row(s)", len(rows))
    return rows


# ------------------------------------------------------------
# EXPORT
# ------------------------------------------------------------

def _format_top_products(products) -> str:
    return ", ".join(f"{p.sku}:{p.quantity}" for p in products)


def report_to_frame(rows) -> pd.DataFrame:
    """Leaderboard table, one row per seller in report order (rank starts at 1)."""
    records = [{
        "rank": position,
        "seller_id": row.seller_id,
        "name": row.name,
        "revenue": row.revenue,
        "profit": row.profit,
        "sales_count": row.sales_count,
        "bonus": row.bonus,
        "top_products": _format_top_products(row.top_products),
    } for position, row in enumerate(rows, start=1)]
    return pd.DataFrame(records, columns=REPORT_COLUMNS)


def top_products_frame(rows) -> pd.DataFrame:
    """Long-form table of every seller's top products."""
    records = [
        {"seller_id": row.seller_id, "name": row.name,
         "sku": product.sku, "quantity": product.quantity}
        for row in rows
        for product in row.top_products
    ]
    return pd.DataFrame(records, columns=["seller_id", "name", "sku", "quantity"])


def summarize_report(rows) -> Dict[str, Any]:
    """Totals across all report rows."""
    return {
        "sellers": len(rows),
        "revenue": round_money(sum(row.revenue for row in rows)),
        "profit": round_money(sum(row.profit for row in rows)),
        "bonus": round_money(sum(row.bonus for row in rows)),
        "sales_count": sum(row.sales_count for row in rows),
    }


if __name__ == '__main__':
    # quick demo when run directly
    import json
    sample = {
        "sellers": [
            {"id": "seller_1", "first_name": "Aisha", "last_name": "Bello"},
            {"id": "seller_2", "first_name": "Tunde", "last_name": "Okafor"},
        ],
        "products": [{"sku": "SKU_001", "purchase_price": 40.0}],
        "purchase_records": [
            {"seller_id": "seller_1", "items": [
                {"sku": "SKU_001", "quantity": 2, "sale_price": 100.0, "discount": 10},
            ]},
            {"seller_id": "seller_2", "items": [
                {"sku": "SKU_001", "quantity": 1, "sale_price": 100.0, "discount": 0},
            ]},
        ],
    }
    print('Config:', json.dumps(DEFAULT_CONFIG, indent=2))
    report = analyze_sales_data(sample, default_options())
    print(report_to_frame(report).head())
