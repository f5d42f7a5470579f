import logging
from dataclasses import dataclass
from typing import Optional

from core.extensions import db
from core.errors import NotFoundError, InvalidStateError, ConflictError
from core.imports import IntegrityError, datetime, current_app
from models.orderModels import Order, OrderItem
from models.productModels import Products, ProductVariant
from models.userModel import Customers
from services.pricing import shipping_cost_for, line_total, order_totals, generate_order_number
from services.side_effects import run_side_effect

logger = logging.getLogger(__name__)


@dataclass
class ResolvedItem:
    product_id: int
    product_variant_id: int
    product_name: str
    variant_weight: str
    unit_price: float
    quantity: int
    notes: Optional[str] = None

    @property
    def total_price(self):
        return line_total(self.unit_price, self.quantity)


class OrderWorkflow:
    """Checkout, status changes and customer cancellation.

    ``notifier`` and ``mailer`` are the side-effect ports; anything they raise
    is logged and dropped once the order row is committed.
    """

    def __init__(self, notifier, mailer, express_fee=15000, number_attempts=5, number_generator=None):
        self.notifier = notifier
        self.mailer = mailer
        self.express_fee = express_fee
        self.number_attempts = number_attempts
        self.number_generator = number_generator or generate_order_number
        self.last_side_effects = []

    # -- checkout ---------------------------------------------------------

    def resolve_items(self, items):
        """Price every requested line against the live catalog, writing nothing."""
        resolved = []
        for item in items:
            row = (
                db.session.query(Products.name, ProductVariant.weight, ProductVariant.price)
                .join(ProductVariant, ProductVariant.product_id == Products.id)
                .filter(Products.id == item.product_id, ProductVariant.id == item.product_variant_id)
                .first()
            )
            if row is None:
                raise NotFoundError(f"Product with ID {item.product_id} not found")

            name, weight, price = row
            resolved.append(
                ResolvedItem(
                    product_id=item.product_id,
                    product_variant_id=item.product_variant_id,
                    product_name=name,
                    variant_weight=weight,
                    unit_price=price,
                    quantity=item.quantity,
                    notes=item.notes,
                )
            )
        return resolved

    def create_order(self, order_request, customer_id=None):
        customer = None
        if customer_id is not None:
            customer = db.session.get(Customers, customer_id)
            if customer is None:
                raise NotFoundError("Customer not found")

        resolved = self.resolve_items(order_request.items)
        shipping_cost = shipping_cost_for(order_request.shipping_method, self.express_fee)
        subtotal, total_amount = order_totals([r.total_price for r in resolved], shipping_cost)

        order = None
        for attempt in range(1, self.number_attempts + 1):
            order = Order(
                order_number=self._fresh_order_number(),
                customer_id=customer_id,
                customer_name=order_request.customer_name,
                customer_whatsapp=order_request.customer_whatsapp,
                customer_address=order_request.customer_address,
                customer_coordinates=order_request.customer_coordinates,
                shipping_method=order_request.shipping_method,
                delivery_day=order_request.delivery_day if order_request.shipping_method != "pickup" else None,
                payment_method=order_request.payment_method,
                subtotal=subtotal,
                shipping_cost=shipping_cost,
                total_amount=total_amount,
                status="pending",
                notes=order_request.notes,
            )
            order.order_items = [
                OrderItem(
                    product_id=r.product_id,
                    product_variant_id=r.product_variant_id,
                    product_name=r.product_name,
                    product_variant_weight=r.variant_weight,
                    unit_price=r.unit_price,
                    quantity=r.quantity,
                    total_price=r.total_price,
                    notes=r.notes,
                )
                for r in resolved
            ]
            db.session.add(order)
            try:
                db.session.commit()
                break
            except IntegrityError as exc:
                db.session.rollback()
                if "order_number" not in str(exc.orig):
                    raise
                logger.warning("Order number %s collided (attempt %d)", order.order_number, attempt)
        else:
            raise ConflictError("Could not allocate a unique order number, please retry")

        logger.info("Order %s created: subtotal=%s shipping=%s total=%s",
                    order.order_number, subtotal, shipping_cost, total_amount)

        effects = [run_side_effect("admin new-order notification", self.notifier.new_order, order)]
        if customer is not None:
            effects.append(run_side_effect("customer order notification", self.notifier.order_received, order))
            effects.append(run_side_effect("order confirmation email", self._send_confirmation, customer_id, order))
        self.last_side_effects = effects
        return order

    def _send_confirmation(self, customer_id, order):
        customer = db.session.get(Customers, customer_id)
        if customer is None or not customer.email:
            logger.warning("No email on file for customer %s, skipping confirmation of order %s",
                           customer_id, order.order_number)
            return False
        return self.mailer.send_order_confirmation(customer.email, order)

    def _fresh_order_number(self):
        number = self.number_generator()
        for _ in range(self.number_attempts - 1):
            if not db.session.query(Order.id).filter_by(order_number=number).first():
                break
            number = self.number_generator()
        return number

    # -- status -----------------------------------------------------------

    def update_status(self, order_id, status):
        order = db.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        order.status = status
        order.updated_at = datetime.utcnow()
        db.session.commit()
        logger.info("Order %s moved to %s", order.order_number, status)

        effects = []
        if order.customer_id and status != "pending":
            effects.append(
                run_side_effect("customer status notification", self.notifier.status_changed, order, status)
            )
        self.last_side_effects = effects
        return order

    def cancel_order(self, order_id, customer_id):
        order = db.session.query(Order).filter_by(id=order_id, customer_id=customer_id).first()
        if order is None:
            raise NotFoundError("Order not found")
        if order.status != "pending":
            raise InvalidStateError("Order cannot be cancelled. Only pending orders can be cancelled.")

        order.status = "cancelled"
        order.updated_at = datetime.utcnow()
        db.session.commit()
        logger.info("Order %s cancelled by customer %s", order.order_number, customer_id)

        self.last_side_effects = [
            run_side_effect("customer cancellation notification", self.notifier.cancelled_by_customer, order),
            run_side_effect("admin cancellation notification", self.notifier.customer_cancellation_alert, order),
        ]
        return order


def get_order_workflow():
    """Workflow bound to the current app's notifier/mailer ports and pricing config."""
    return OrderWorkflow(
        current_app.extensions["storefront_notifier"],
        current_app.extensions["storefront_mailer"],
        express_fee=current_app.config["EXPRESS_SHIPPING_FEE"],
        number_attempts=current_app.config["ORDER_NUMBER_ATTEMPTS"],
    )
