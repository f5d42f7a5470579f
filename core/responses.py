import logging
from core.imports import jsonify
from core.extensions import db

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def success(data=None, message=None, status=200, **extra):
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def failure(message, status=400):
    return jsonify({"success": False, "message": message}), status


def internal_error(context):
    """Roll back the session, log the active exception and hide it from the client."""
    db.session.rollback()
    logger.exception("%s error", context)
    return failure(INTERNAL_ERROR, 500)


def paginate(query, page, limit):
    total = query.order_by(None).count()
    items = query.limit(limit).offset((page - 1) * limit).all()
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": -(-total // limit) if limit else 0,
    }


def page_args(args, default_limit=10):
    """Read ``page``/``limit`` query params, clamping nonsense to sane defaults."""
    try:
        page = max(int(args.get("page", 1)), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = max(int(args.get("limit", default_limit)), 1)
    except (TypeError, ValueError):
        limit = default_limit
    return page, min(limit, 100)
