import logging
from decimal import Decimal, ROUND_HALF_UP

from core.extensions import db
from core.imports import func
from models.productModels import Products
from models.reviewModels import ProductReview

logger = logging.getLogger(__name__)


def average_rating(total, count):
    """Mean rating rounded half-up to one decimal; 0 when there are no reviews."""
    if not count:
        return 0.0
    mean = Decimal(int(total)) / Decimal(int(count))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def recompute_product_rating(product_id):
    """Rebuild a product's ``rating``/``review_count`` from all of its reviews.

    Runs after the triggering review write has committed. Errors are logged
    and swallowed, so the stored aggregate can lag the review set until the
    next successful recompute.
    """
    try:
        total, count = (
            db.session.query(func.coalesce(func.sum(ProductReview.rating), 0), func.count(ProductReview.id))
            .filter(ProductReview.product_id == product_id)
            .one()
        )
        product = db.session.get(Products, product_id)
        if product is None:
            logger.warning("Rating recompute skipped, product %s no longer exists", product_id)
            return None

        product.rating = average_rating(total, count)
        product.review_count = int(count)
        db.session.commit()
        return product.rating, product.review_count
    except Exception:
        db.session.rollback()
        logger.exception("Error updating rating for product %s", product_id)
        return None
