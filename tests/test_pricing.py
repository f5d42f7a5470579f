"""Unit tests for pricing and rating arithmetic."""

import random
import re
from datetime import datetime

import pytest

from services.pricing import shipping_cost_for, order_totals, generate_order_number, format_rupiah, line_total
from services.rating import average_rating


@pytest.mark.parametrize("method, expected", [("express", 15000.0), ("pickup", 0.0)])
def test_shipping_cost_depends_only_on_method(method, expected):
    assert shipping_cost_for(method, 15000) == expected


def test_order_totals_for_reference_basket():
    lines = [line_total(15300, 2), line_total(8500, 1)]
    subtotal, total = order_totals(lines, shipping_cost_for("express", 15000))

    assert subtotal == 39100
    assert total == 54100


def test_pickup_total_equals_subtotal():
    subtotal, total = order_totals([line_total(8500, 3)], shipping_cost_for("pickup", 15000))
    assert subtotal == total == 25500


def test_order_number_is_date_coded():
    number = generate_order_number(now=datetime(2025, 3, 7, 10, 0), rng=random.Random(1))
    assert re.fullmatch(r"ORD20250307\d{3}", number)


def test_order_number_suffix_is_zero_padded():
    class Fixed:
        @staticmethod
        def randint(a, b):
            return 7

    assert generate_order_number(now=datetime(2025, 12, 31), rng=Fixed) == "ORD20251231007"


def test_format_rupiah_uses_dot_grouping():
    assert format_rupiah(54100) == "Rp 54.100"
    assert format_rupiah(0) == "Rp 0"


@pytest.mark.parametrize(
    "ratings, expected",
    [
        ([5, 4, 4], 4.3),
        ([4, 4, 5, 4], 4.3),  # 4.25 rounds half up
        ([1, 2], 1.5),
        ([5], 5.0),
        ([], 0.0),
    ],
)
def test_average_rating_rounds_to_one_decimal(ratings, expected):
    assert average_rating(sum(ratings), len(ratings)) == expected
