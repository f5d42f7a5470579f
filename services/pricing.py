from core.imports import datetime, random

ORDER_NUMBER_PREFIX = "ORD"


def shipping_cost_for(shipping_method, express_fee):
    """Flat fee for express delivery, nothing for store pickup."""
    return float(express_fee) if shipping_method == "express" else 0.0


def line_total(unit_price, quantity):
    return unit_price * quantity


def order_totals(line_totals, shipping_cost):
    subtotal = float(sum(line_totals))
    return subtotal, subtotal + shipping_cost


def generate_order_number(now=None, rng=random):
    """``ORD`` + ``YYYYMMDD`` + a random zero-padded 3-digit suffix."""
    now = now or datetime.now()
    return f"{ORDER_NUMBER_PREFIX}{now:%Y%m%d}{rng.randint(0, 999):03d}"


def format_rupiah(amount):
    return "Rp " + f"{int(round(amount)):,}".replace(",", ".")
