import logging

from core.extensions import db
from core.imports import Blueprint, request
from core.auth import admin_required, customer_required, current_principal_id, optional_customer_id
from core.errors import StoreError
from core.responses import success, failure, internal_error, paginate, page_args
from models.orderModels import Order, ORDER_STATUSES
from schemas.orderSchemas import CreateOrderRequest, UpdateOrderStatusRequest
from schemas.validation import validate_payload
from services.order_workflow import get_order_workflow

logger = logging.getLogger(__name__)

orders_bp = Blueprint("orders", __name__)


def _image_base_url():
    return request.host_url


@orders_bp.route('/api/orders', methods=['POST'])
def create_order():
    """
    Place a new order
    ---
    tags:
      - Orders
    summary: Checkout a cart as a guest or as the authenticated customer
    description: >
      Prices every line from the live catalog, adds the flat express fee when
      shippingMethod is "express" and stores the order with status "pending".
      Totals are always computed server-side.
    parameters:
      - name: Authorization
        in: header
        description: "Optional customer token: Bearer <token>"
        required: false
        type: string
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [customerName, customerWhatsapp, customerAddress, shippingMethod, paymentMethod, items]
          properties:
            customerName: { type: string, example: "Siti Aminah" }
            customerWhatsapp: { type: string, example: "081234567890" }
            customerAddress: { type: string, example: "Jl. Melati No. 5, Bandung" }
            customerCoordinates: { type: string, example: "-6.9175,107.6191" }
            shippingMethod: { type: string, enum: [express, pickup] }
            deliveryDay: { type: string, enum: [selasa, kamis, sabtu] }
            paymentMethod: { type: string, enum: [transfer, cod] }
            customerId: { type: integer, example: 3 }
            notes: { type: string }
            items:
              type: array
              items:
                type: object
                required: [productId, productVariantId, quantity]
                properties:
                  productId: { type: integer, example: 1 }
                  productVariantId: { type: integer, example: 2 }
                  quantity: { type: integer, minimum: 1, example: 2 }
                  notes: { type: string }
    responses:
      201:
        description: Order created
      400:
        description: Validation failed
      403:
        description: customerId does not belong to the caller
      404:
        description: A product/variant pair or the customer does not exist
      500:
        description: Unexpected server error
    """
    payload, error = validate_payload(CreateOrderRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    customer_id = optional_customer_id()
    if payload.customer_id is not None and payload.customer_id != customer_id:
        return failure("customerId does not match the authenticated customer", 403)

    try:
        order = get_order_workflow().create_order(payload, customer_id=customer_id)
        return success(order.to_dict(include_items=True), "Order created successfully", 201)
    except StoreError as e:
        return failure(e.message, e.status_code)
    except Exception:
        return internal_error("Create order")


@orders_bp.route('/api/admin/orders', methods=['GET'])
@admin_required
def list_orders():
    """
    List orders
    ---
    tags:
      - Admin Orders
    security:
      - Bearer: []
    parameters:
      - { name: page, in: query, type: integer, default: 1 }
      - { name: limit, in: query, type: integer, default: 10 }
      - { name: status, in: query, type: string, enum: [pending, confirmed, processing, delivered, cancelled] }
    responses:
      200:
        description: Paginated orders, newest first
      400:
        description: Unknown status filter
    """
    page, limit = page_args(request.args)
    status = request.args.get("status", "")
    if status and status not in ORDER_STATUSES:
        return failure("Invalid status filter", 400)

    try:
        query = Order.query
        if status:
            query = query.filter_by(status=status)
        orders, pagination = paginate(query.order_by(Order.created_at.desc(), Order.id.desc()), page, limit)
        return success({"orders": [o.to_dict() for o in orders], "pagination": pagination})
    except Exception:
        return internal_error("Get orders")


@orders_bp.route('/api/admin/orders/<int:order_id>', methods=['GET'])
@admin_required
def get_order(order_id):
    """
    Get one order with its line items
    ---
    tags:
      - Admin Orders
    security:
      - Bearer: []
    parameters:
      - { name: order_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Order with orderItems and productImageUrl per item
      404:
        description: Order not found
    """
    try:
        order = db.session.get(Order, order_id)
        if not order:
            return failure("Order not found", 404)
        return success(order.to_dict(include_items=True, image_base_url=_image_base_url()))
    except Exception:
        return internal_error("Get order")


@orders_bp.route('/api/admin/orders/<int:order_id>/status', methods=['PUT'])
@admin_required
def update_order_status(order_id):
    """
    Set an order's status
    ---
    tags:
      - Admin Orders
    security:
      - Bearer: []
    parameters:
      - { name: order_id, in: path, type: integer, required: true }
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            status: { type: string, enum: [pending, confirmed, processing, delivered, cancelled] }
    responses:
      200:
        description: Status updated; the customer is notified unless the new status is pending
      400:
        description: Invalid status
      404:
        description: Order not found
    """
    payload, error = validate_payload(UpdateOrderStatusRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    try:
        order = get_order_workflow().update_status(order_id, payload.status)
        return success(
            {"id": order.id, "status": order.status, "updatedAt": order.updated_at.isoformat()},
            "Order status updated successfully",
        )
    except StoreError as e:
        return failure(e.message, e.status_code)
    except Exception:
        return internal_error("Update order status")


@orders_bp.route('/api/orders/<int:order_id>/cancel', methods=['PUT'])
@customer_required
def cancel_order(order_id):
    """
    Cancel one of my pending orders
    ---
    tags:
      - Orders
    security:
      - Bearer: []
    parameters:
      - { name: order_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Order cancelled
      400:
        description: Order is no longer pending
      404:
        description: Order not found for this customer
    """
    try:
        order = get_order_workflow().cancel_order(order_id, current_principal_id())
        return success(
            {"id": order.id, "status": order.status, "updatedAt": order.updated_at.isoformat()},
            "Order cancelled successfully",
        )
    except StoreError as e:
        return failure(e.message, e.status_code)
    except Exception:
        return internal_error("Cancel order")


@orders_bp.route('/api/customers/orders', methods=['GET'])
@customer_required
def get_my_orders():
    """
    List my orders
    ---
    tags:
      - Orders
    security:
      - Bearer: []
    parameters:
      - { name: page, in: query, type: integer, default: 1 }
      - { name: limit, in: query, type: integer, default: 10 }
      - { name: status, in: query, type: string }
    responses:
      200:
        description: Paginated orders of the caller, each with its items
    """
    page, limit = page_args(request.args)
    status = request.args.get("status", "")

    try:
        query = Order.query.filter_by(customer_id=current_principal_id())
        if status:
            query = query.filter_by(status=status)
        orders, pagination = paginate(query.order_by(Order.created_at.desc(), Order.id.desc()), page, limit)
        base_url = _image_base_url()
        return success({
            "orders": [o.to_dict(include_items=True, image_base_url=base_url) for o in orders],
            "pagination": pagination,
        })
    except Exception:
        return internal_error("Get customer orders")


@orders_bp.route('/api/customers/orders/<int:order_id>', methods=['GET'])
@customer_required
def get_my_order(order_id):
    """
    Get one of my orders
    ---
    tags:
      - Orders
    security:
      - Bearer: []
    parameters:
      - { name: order_id, in: path, type: integer, required: true }
    responses:
      200:
        description: The order with its items
      404:
        description: Order not found for this customer
    """
    try:
        order = Order.query.filter_by(id=order_id, customer_id=current_principal_id()).first()
        if not order:
            return failure("Order not found", 404)
        return success(order.to_dict(include_items=True, image_base_url=_image_base_url()))
    except Exception:
        return internal_error("Get customer order")
