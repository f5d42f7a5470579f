from core.extensions import db
from core.imports import datetime


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)


class Products(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.String(1000), nullable=False, default="")
    base_price = db.Column(db.Float, nullable=False)
    image_url = db.Column(db.String(255), nullable=True)
    rating = db.Column(db.Float, default=0, nullable=False)
    review_count = db.Column(db.Integer, default=0, nullable=False)
    is_on_sale = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False)
    category = db.relationship("Category", backref="products")

    variants = db.relationship("ProductVariant", backref="product", cascade="all, delete-orphan")
    reviews = db.relationship("ProductReview", backref="product", cascade="all, delete-orphan")


class ProductVariant(db.Model):
    __tablename__ = "product_variants"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    sku = db.Column(db.String(255), unique=True, nullable=True)
    weight = db.Column(db.String(50), nullable=False)  # e.g. "500 gr", "1 kg"
    price = db.Column(db.Float, nullable=False)
    original_price = db.Column(db.Float, nullable=True)  # display-only, for strike-through pricing
    in_stock = db.Column(db.Boolean, default=True, nullable=False)
    stock_quantity = db.Column(db.Integer, default=0, nullable=False)
    manage_stock = db.Column(db.Boolean, default=False, nullable=False)
    min_order_quantity = db.Column(db.Integer, default=1, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
