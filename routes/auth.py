import logging

from core.extensions import db, bcrypt
from core.imports import Blueprint, request, IntegrityError, current_app
from core.auth import ADMIN, CUSTOMER, admin_required, customer_required, current_principal_id, issue_token
from core.responses import success, failure, internal_error
from models.userModel import Admins, Customers
from schemas.authSchemas import LoginRequest, RegisterCustomerRequest
from schemas.validation import validate_payload
from services.side_effects import run_side_effect

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def seed_admin_account(username="admin", email="admin@pasarantar.com", password="admin123"):
    admin = Admins.query.filter_by(email=email).first()
    if not admin:
        admin = Admins(
            username=username,
            email=email,
            password=bcrypt.generate_password_hash(password).decode('utf-8'),
        )
        db.session.add(admin)
        db.session.commit()
        logger.info("Admin account created (email=%s)", email)
    else:
        logger.info("Admin account already exists (email=%s)", email)
    return admin


@auth_bp.route('/api/admin/login', methods=['POST'])
def admin_login():
    """
    Admin login
    ---
    tags:
      - Auth
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string, example: "admin@pasarantar.com" }
            password: { type: string, example: "admin123" }
    responses:
      200:
        description: "{token, admin}"
      401:
        description: Invalid credentials
    """
    payload, error = validate_payload(LoginRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    admin = Admins.query.filter_by(email=payload.email.lower()).first()
    if not admin or not bcrypt.check_password_hash(admin.password, payload.password):
        return failure("Invalid credentials", 401)

    return success({"token": issue_token(admin.id, ADMIN), "admin": admin.to_dict()}, "Login successful")


@auth_bp.route('/api/admin/me', methods=['GET'])
@admin_required
def admin_me():
    """
    Current admin
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: Admin profile
      404:
        description: Admin no longer exists
    """
    admin = db.session.get(Admins, current_principal_id())
    if not admin:
        return failure("Admin not found", 404)
    return success(admin.to_dict())


@auth_bp.route('/api/customers/register', methods=['POST'])
def register_customer():
    """
    Register a customer account
    ---
    tags:
      - Auth
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, email, password]
          properties:
            name: { type: string, example: "Siti Aminah" }
            email: { type: string, example: "siti@example.com" }
            password: { type: string, example: "rahasia123" }
            whatsapp: { type: string, example: "081234567890" }
    responses:
      201:
        description: "{token, customer}"
      409:
        description: Email already registered
    """
    payload, error = validate_payload(RegisterCustomerRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    email = payload.email.lower()
    if Customers.query.filter_by(email=email).first():
        return failure("Email already registered", 409)

    try:
        customer = Customers(
            name=payload.name,
            email=email,
            password=bcrypt.generate_password_hash(payload.password).decode('utf-8'),
            whatsapp=payload.whatsapp,
            provider="email",
        )
        db.session.add(customer)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return failure("Email already registered", 409)
    except Exception:
        return internal_error("Register")

    run_side_effect("admin registration notification",
                    current_app.extensions["storefront_notifier"].customer_registered, customer)
    run_side_effect("welcome email",
                    current_app.extensions["storefront_mailer"].send_welcome, customer.email, customer.name)

    return success(
        {"token": issue_token(customer.id, CUSTOMER), "customer": customer.to_dict()},
        "Registration successful",
        201,
    )


@auth_bp.route('/api/customers/login', methods=['POST'])
def customer_login():
    """
    Customer login
    ---
    tags:
      - Auth
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: "{token, customer}"
      401:
        description: Invalid credentials or social-login-only account
    """
    payload, error = validate_payload(LoginRequest, request.get_json(silent=True))
    if error:
        return failure(error, 400)

    customer = Customers.query.filter_by(email=payload.email.lower()).first()
    if not customer:
        return failure("Invalid email or password", 401)
    if not customer.password:
        return failure("This account uses social login. Please login with Google or Facebook.", 401)
    if not bcrypt.check_password_hash(customer.password, payload.password):
        return failure("Invalid email or password", 401)

    return success({"token": issue_token(customer.id, CUSTOMER), "customer": customer.to_dict()}, "Login successful")


@auth_bp.route('/api/customers/me', methods=['GET'])
@customer_required
def customer_me():
    """
    Current customer
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: Customer profile
      404:
        description: Customer no longer exists
    """
    customer = db.session.get(Customers, current_principal_id())
    if not customer:
        return failure("Customer not found", 404)
    return success(customer.to_dict())
