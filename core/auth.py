from functools import wraps

from core.imports import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request, current_app
from core.responses import failure

ADMIN = "admin"
CUSTOMER = "customer"


def issue_token(principal_id, role):
    expires = None
    if role == CUSTOMER:
        expires = current_app.config.get("CUSTOMER_TOKEN_EXPIRES")
    return create_access_token(
        identity=str(principal_id),
        additional_claims={"role": role},
        expires_delta=expires,
    )


def _role_required(role):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if get_jwt().get("role") != role:
                return failure("Forbidden", 403)
            return fn(*args, **kwargs)
        return wrapper
    return decorator


admin_required = _role_required(ADMIN)
customer_required = _role_required(CUSTOMER)


def current_principal_id():
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


def optional_customer_id():
    """Customer id from a bearer token if one was sent, else None (guest)."""
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is None or get_jwt().get("role") != CUSTOMER:
        return None
    return int(identity)


def register_jwt_callbacks(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return failure("Authorization token required", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return failure("Invalid or expired token", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return failure("Invalid or expired token", 401)
