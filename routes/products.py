import logging

from core.extensions import db
from core.imports import Blueprint, request
from core.responses import success, failure, internal_error
from models.orderModels import resolve_image_url
from models.productModels import Category, Products, ProductVariant

logger = logging.getLogger(__name__)

products_bp = Blueprint('products', __name__)

DEMO_CATALOG = [
    {
        "name": "Daging Sapi Has Dalam",
        "slug": "daging-sapi-has-dalam",
        "description": "Tenderloin sapi lokal, dipotong segar setiap pagi.",
        "variants": [
            {"sku": "SAPI-HD-500", "weight": "500 gr", "price": 75000, "original_price": 80000},
            {"sku": "SAPI-HD-1000", "weight": "1 kg", "price": 145000, "original_price": None},
        ],
    },
    {
        "name": "Ayam Kampung Utuh",
        "slug": "ayam-kampung-utuh",
        "description": "Ayam kampung utuh, sudah dibersihkan.",
        "variants": [
            {"sku": "AYAM-KU-800", "weight": "800 gr", "price": 15300, "original_price": 17000},
        ],
    },
    {
        "name": "Telur Ayam Negeri",
        "slug": "telur-ayam-negeri",
        "description": "Telur ayam negeri segar per 10 butir.",
        "variants": [
            {"sku": "TELUR-10", "weight": "10 butir", "price": 8500, "original_price": None},
        ],
    },
]


def seed_catalog():
    category = Category.query.filter_by(name="Daging & Unggas").first()
    if not category:
        category = Category(name="Daging & Unggas", description="Daging segar dan unggas")
        db.session.add(category)
        db.session.flush()

    for entry in DEMO_CATALOG:
        if Products.query.filter_by(slug=entry["slug"]).first():
            logger.info("Product already exists: %s", entry["name"])
            continue

        product = Products(
            name=entry["name"],
            slug=entry["slug"],
            description=entry["description"],
            base_price=entry["variants"][0]["price"],
            category_id=category.id,
        )
        product.variants = [ProductVariant(**variant) for variant in entry["variants"]]
        db.session.add(product)
        logger.info("Product added: %s", entry["name"])

    db.session.commit()


@products_bp.route('/api/products/<int:product_id>', methods=['GET'])
def product_details(product_id):
    """
    Product detail with variants and aggregate rating
    ---
    tags:
      - Products
    parameters:
      - { name: product_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Product with variants, rating and reviewCount
      404:
        description: Product not found
    """
    try:
        product = db.session.get(Products, product_id)
        if not product:
            return failure("Product not found", 404)

        return success({
            "id": product.id,
            "name": product.name,
            "slug": product.slug,
            "description": product.description,
            "category": product.category.name if product.category else None,
            "basePrice": product.base_price,
            "imageUrl": resolve_image_url(product.image_url, request.host_url),
            "rating": product.rating,
            "reviewCount": product.review_count,
            "variants": [
                {
                    "id": v.id,
                    "sku": v.sku,
                    "weight": v.weight,
                    "price": v.price,
                    "originalPrice": v.original_price,
                    "inStock": v.in_stock,
                }
                for v in product.variants
                if v.is_active
            ],
        })
    except Exception:
        return internal_error("Get product")
