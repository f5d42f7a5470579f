import logging

from core.extensions import db
from core.imports import Blueprint, request, datetime
from core.auth import admin_required, customer_required, current_principal_id
from core.responses import success, failure, internal_error, paginate, page_args
from models.orderModels import Order, OrderItem
from models.productModels import Products
from models.reviewModels import ProductReview
from schemas.reviewSchemas import CreateReviewRequest, UpdateReviewRequest
from schemas.validation import validate_payload
from services.rating import recompute_product_rating

logger = logging.getLogger(__name__)

reviews_bp = Blueprint("reviews", __name__)


@reviews_bp.route('/api/reviews', methods=['POST'])
@customer_required
def create_review():
    """
    Review a product from one of my delivered orders
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [productId, orderId, rating, comment]
          properties:
            productId: { type: integer, example: 1 }
            orderId: { type: integer, example: 7 }
            rating: { type: integer, minimum: 1, maximum: 5, example: 5 }
            comment: { type: string, example: "Dagingnya segar!" }
    responses:
      201:
        description: Review created and product rating recomputed
      400:
        description: Validation failed or the product was already reviewed for this order
      404:
        description: Order not delivered/not mine, or product not in the order
    """
    payload, error = validate_payload(CreateReviewRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    customer_id = current_principal_id()
    try:
        order = Order.query.filter_by(id=payload.order_id, customer_id=customer_id, status="delivered").first()
        if not order:
            return failure("Order not found or not eligible for review", 404)

        in_order = OrderItem.query.filter_by(order_id=order.id, product_id=payload.product_id).first()
        if not in_order:
            return failure("Product not found in this order", 404)

        existing = ProductReview.query.filter_by(
            customer_id=customer_id, order_id=order.id, product_id=payload.product_id
        ).first()
        if existing:
            return failure("Review already exists for this product in this order", 400)

        review = ProductReview(
            product_id=payload.product_id,
            customer_id=customer_id,
            order_id=order.id,
            customer_name=order.customer_name or "Anonymous",
            rating=payload.rating,
            comment=payload.comment,
            date=datetime.utcnow().strftime("%Y-%m-%d"),
            verified=True,  # backed by a delivered order
        )
        db.session.add(review)
        db.session.commit()
        logger.info("Review %s added for product %s by customer %s", review.id, review.product_id, customer_id)
    except Exception:
        return internal_error("Create review")

    recompute_product_rating(review.product_id)
    return success(review.to_dict(), "Review created successfully", 201)


@reviews_bp.route('/api/reviews/check', methods=['GET'])
@customer_required
def check_review():
    """
    Check whether I already reviewed a product for an order
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - { name: productId, in: query, type: integer, required: true }
      - { name: orderId, in: query, type: integer, required: true }
    responses:
      200:
        description: "{exists, review}"
      400:
        description: Missing query parameters
    """
    product_id = request.args.get("productId", type=int)
    order_id = request.args.get("orderId", type=int)
    if not product_id or not order_id:
        return failure("Product ID and Order ID are required", 400)

    try:
        review = ProductReview.query.filter_by(
            customer_id=current_principal_id(), order_id=order_id, product_id=product_id
        ).first()
        return success(exists=review is not None, review=review.to_dict() if review else None)
    except Exception:
        return internal_error("Check review")


@reviews_bp.route('/api/reviews/product/<int:product_id>', methods=['GET'])
def get_product_reviews(product_id):
    """
    Public reviews of a product
    ---
    tags:
      - Reviews
    parameters:
      - { name: product_id, in: path, type: integer, required: true }
      - { name: page, in: query, type: integer, default: 1 }
      - { name: limit, in: query, type: integer, default: 10 }
    responses:
      200:
        description: Paginated reviews, newest first
    """
    page, limit = page_args(request.args)
    try:
        query = ProductReview.query.filter_by(product_id=product_id).order_by(
            ProductReview.created_at.desc(), ProductReview.id.desc()
        )
        reviews, pagination = paginate(query, page, limit)
        return success({"reviews": [r.to_dict() for r in reviews], "pagination": pagination})
    except Exception:
        return internal_error("Get reviews")


@reviews_bp.route('/api/reviews/customer/<int:customer_id>', methods=['GET'])
@admin_required
def get_customer_reviews(customer_id):
    """
    Reviews written by a customer
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - { name: customer_id, in: path, type: integer, required: true }
      - { name: page, in: query, type: integer, default: 1 }
      - { name: limit, in: query, type: integer, default: 10 }
    responses:
      200:
        description: Paginated reviews, newest first
    """
    page, limit = page_args(request.args)
    try:
        query = ProductReview.query.filter_by(customer_id=customer_id).order_by(
            ProductReview.created_at.desc(), ProductReview.id.desc()
        )
        reviews, pagination = paginate(query, page, limit)
        return success({"reviews": [r.to_dict() for r in reviews], "pagination": pagination})
    except Exception:
        return internal_error("Get customer reviews")


@reviews_bp.route('/api/reviews/<int:review_id>', methods=['PUT'])
@customer_required
def update_review(review_id):
    """
    Edit my review
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - { name: review_id, in: path, type: integer, required: true }
      - in: body
        name: body
        schema:
          type: object
          properties:
            rating: { type: integer, minimum: 1, maximum: 5 }
            comment: { type: string }
    responses:
      200:
        description: Review updated and product rating recomputed
      404:
        description: Review not found or not mine
    """
    payload, error = validate_payload(UpdateReviewRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    try:
        review = ProductReview.query.filter_by(id=review_id, customer_id=current_principal_id()).first()
        if not review:
            return failure("Review not found or you don't have permission to update it", 404)

        if payload.rating is not None:
            review.rating = payload.rating
        if payload.comment is not None:
            review.comment = payload.comment
        review.updated_at = datetime.utcnow()
        db.session.commit()
    except Exception:
        return internal_error("Update review")

    recompute_product_rating(review.product_id)
    return success(review.to_dict(), "Review updated successfully")


@reviews_bp.route('/api/reviews/<int:review_id>', methods=['DELETE'])
@admin_required
def delete_review(review_id):
    """
    Delete a review
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - { name: review_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Review deleted and product rating recomputed
      404:
        description: Review not found
    """
    try:
        review = db.session.get(ProductReview, review_id)
        if not review:
            return failure("Review not found", 404)

        product_id = review.product_id
        db.session.delete(review)
        db.session.commit()
    except Exception:
        return internal_error("Delete review")

    recompute_product_rating(product_id)
    return success(message="Review deleted successfully")


@reviews_bp.route('/api/reviews/<int:review_id>/verify', methods=['PATCH'])
@admin_required
def verify_review(review_id):
    """
    Mark a review as verified
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - { name: review_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Review verified
      404:
        description: Review not found
    """
    try:
        review = db.session.get(ProductReview, review_id)
        if not review:
            return failure("Review not found", 404)

        review.verified = True
        review.updated_at = datetime.utcnow()
        db.session.commit()
        return success(message="Review verified successfully")
    except Exception:
        return internal_error("Verify review")


@reviews_bp.route('/api/admin/reviews', methods=['GET'])
@admin_required
def list_all_reviews():
    """
    All reviews for moderation
    ---
    tags:
      - Reviews
    security:
      - Bearer: []
    parameters:
      - { name: page, in: query, type: integer, default: 1 }
      - { name: limit, in: query, type: integer, default: 10 }
      - { name: status, in: query, type: string, enum: [verified, unverified] }
    responses:
      200:
        description: Paginated reviews with productName and orderNumber
    """
    page, limit = page_args(request.args)
    status = request.args.get("status", "")

    try:
        query = (
            db.session.query(ProductReview, Products.name, Order.order_number)
            .outerjoin(Products, ProductReview.product_id == Products.id)
            .outerjoin(Order, ProductReview.order_id == Order.id)
        )
        if status == "verified":
            query = query.filter(ProductReview.verified.is_(True))
        elif status == "unverified":
            query = query.filter(ProductReview.verified.is_(False))

        rows, pagination = paginate(
            query.order_by(ProductReview.created_at.desc(), ProductReview.id.desc()), page, limit
        )
        reviews = []
        for review, product_name, order_number in rows:
            data = review.to_dict()
            data["productName"] = product_name
            data["orderNumber"] = order_number
            reviews.append(data)
        return success({"reviews": reviews, "pagination": pagination})
    except Exception:
        return internal_error("Get admin reviews")
