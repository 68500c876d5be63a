import pytest


def make_seller(seller_id, first_name="First", last_name=None):
    return {"id": seller_id, "first_name": first_name, "last_name": last_name or seller_id}


def make_item(sku, quantity=1, sale_price=100.0, discount=0):
    return {"sku": sku, "quantity": quantity, "sale_price": sale_price, "discount": discount}


def make_record(seller_id, *items):
    return {"seller_id": seller_id, "items": list(items)}


@pytest.fixture
def zero_cost_products():
    # Profit equals revenue for these skus
    return [{"sku": sku, "purchase_price": 0.0} for sku in ("P1", "P2", "P3", "P4", "P5", "P6")]


@pytest.fixture
def ranked_bundle(zero_cost_products):
    """Four sellers with profits 1000, 500, 200 and 50, listed out of order."""
    return {
        "sellers": [make_seller(s) for s in ("s_200", "s_1000", "s_50", "s_500")],
        "products": zero_cost_products,
        "purchase_records": [
            make_record("s_200", make_item("P1", sale_price=200.0)),
            make_record("s_1000", make_item("P1", sale_price=1000.0)),
            make_record("s_50", make_item("P2", sale_price=50.0)),
            make_record("s_500", make_item("P3", sale_price=500.0)),
        ],
    }
