from core.extensions import db
from core.imports import datetime

ORDER_STATUSES = ("pending", "confirmed", "processing", "delivered", "cancelled")
SHIPPING_METHODS = ("express", "pickup")
DELIVERY_DAYS = ("selasa", "kamis", "sabtu")
PAYMENT_METHODS = ("transfer", "cod")


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    # soft reference: deleting a customer keeps their order history
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)

    # recipient snapshot, copied at checkout
    customer_name = db.Column(db.String(255), nullable=False)
    customer_whatsapp = db.Column(db.String(20), nullable=False)
    customer_address = db.Column(db.String(1000), nullable=False)
    customer_coordinates = db.Column(db.String(100), nullable=True)

    shipping_method = db.Column(db.String(20), nullable=False)  # express, pickup
    delivery_day = db.Column(db.String(20), nullable=True)  # selasa, kamis, sabtu
    payment_method = db.Column(db.String(20), nullable=False)  # transfer, cod

    subtotal = db.Column(db.Float, nullable=False)
    shipping_cost = db.Column(db.Float, nullable=False, default=0)
    total_amount = db.Column(db.Float, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")
    notes = db.Column(db.String(1000), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    order_items = db.relationship(
        "OrderItem", backref="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )
    customer = db.relationship("Customers", backref="orders")

    def to_dict(self, include_items=False, image_base_url=None):
        data = {
            "id": self.id,
            "orderNumber": self.order_number,
            "customerId": self.customer_id,
            "customerName": self.customer_name,
            "customerWhatsapp": self.customer_whatsapp,
            "customerAddress": self.customer_address,
            "customerCoordinates": self.customer_coordinates,
            "shippingMethod": self.shipping_method,
            "deliveryDay": self.delivery_day,
            "paymentMethod": self.payment_method,
            "subtotal": self.subtotal,
            "shippingCost": self.shipping_cost,
            "totalAmount": self.total_amount,
            "status": self.status,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_items:
            data["orderItems"] = [item.to_dict(image_base_url) for item in self.order_items]
        return data


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    product_variant_id = db.Column(db.Integer, db.ForeignKey("product_variants.id"), nullable=False)

    # catalog snapshot at order time
    product_name = db.Column(db.String(255), nullable=False)
    product_variant_weight = db.Column(db.String(50), nullable=False)
    unit_price = db.Column(db.Float, nullable=False)

    quantity = db.Column(db.Integer, nullable=False)
    total_price = db.Column(db.Float, nullable=False)
    notes = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    product = db.relationship("Products")

    def to_dict(self, image_base_url=None):
        data = {
            "id": self.id,
            "orderId": self.order_id,
            "productId": self.product_id,
            "productVariantId": self.product_variant_id,
            "productName": self.product_name,
            "productVariantWeight": self.product_variant_weight,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "totalPrice": self.total_price,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if image_base_url is not None:
            data["productImageUrl"] = resolve_image_url(
                self.product.image_url if self.product else None, image_base_url
            )
        return data


def resolve_image_url(image_url, base_url):
    if not image_url:
        return None
    if image_url.startswith("http"):
        return image_url
    return f"{base_url.rstrip('/')}{image_url}"
