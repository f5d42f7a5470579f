from core.extensions import db
from core.imports import Blueprint, datetime
from core.auth import admin_required, customer_required, current_principal_id
from core.responses import success, failure, internal_error
from models.notificationModels import AdminNotification, CustomerNotification

NOTIFICATION_LIMIT = 50

notifications_bp = Blueprint("notifications", __name__)
customer_notifications_bp = Blueprint("customer_notifications", __name__)


# =========================
# admin notifications
# =========================
@notifications_bp.route('/api/admin/notifications', methods=['GET'])
@admin_required
def get_admin_notifications():
    """
    Latest admin notifications
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    responses:
      200:
        description: Up to 50 notifications, newest first
    """
    try:
        notifications = (
            AdminNotification.query
            .order_by(AdminNotification.created_at.desc(), AdminNotification.id.desc())
            .limit(NOTIFICATION_LIMIT)
            .all()
        )
        return success([n.to_dict() for n in notifications])
    except Exception:
        return internal_error("Get notifications")


@notifications_bp.route('/api/admin/notifications/unread-count', methods=['GET'])
@admin_required
def get_admin_unread_count():
    """
    Unread admin notification count
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    responses:
      200:
        description: "{count}"
    """
    try:
        count = AdminNotification.query.filter_by(is_read=False).count()
        return success({"count": count})
    except Exception:
        return internal_error("Get unread count")


@notifications_bp.route('/api/admin/notifications/<int:notification_id>/read', methods=['PUT'])
@admin_required
def mark_admin_notification_read(notification_id):
    """
    Mark an admin notification as read
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    parameters:
      - { name: notification_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Marked as read
      404:
        description: Notification not found
    """
    try:
        notification = db.session.get(AdminNotification, notification_id)
        if not notification:
            return failure("Notification not found", 404)
        notification.is_read = True
        notification.updated_at = datetime.utcnow()
        db.session.commit()
        return success(message="Notification marked as read")
    except Exception:
        return internal_error("Mark notification as read")


@notifications_bp.route('/api/admin/notifications/mark-all-read', methods=['PUT'])
@admin_required
def mark_all_admin_notifications_read():
    """
    Mark every admin notification as read
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    responses:
      200:
        description: All marked as read
    """
    try:
        AdminNotification.query.filter_by(is_read=False).update(
            {"is_read": True, "updated_at": datetime.utcnow()}, synchronize_session=False
        )
        db.session.commit()
        return success(message="All notifications marked as read")
    except Exception:
        return internal_error("Mark all notifications as read")


@notifications_bp.route('/api/admin/notifications/<int:notification_id>', methods=['DELETE'])
@admin_required
def delete_admin_notification(notification_id):
    """
    Delete an admin notification
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    parameters:
      - { name: notification_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Deleted
      404:
        description: Notification not found
    """
    try:
        notification = db.session.get(AdminNotification, notification_id)
        if not notification:
            return failure("Notification not found", 404)
        db.session.delete(notification)
        db.session.commit()
        return success(message="Notification deleted")
    except Exception:
        return internal_error("Delete notification")


# =========================
# customer notifications
# =========================
def _own_notification(notification_id):
    return CustomerNotification.query.filter_by(
        id=notification_id, customer_id=current_principal_id()
    ).first()


@customer_notifications_bp.route('/api/customer-notifications', methods=['GET'])
@customer_required
def get_customer_notifications():
    """
    My latest notifications
    ---
    tags:
      - Customer Notifications
    security:
      - Bearer: []
    responses:
      200:
        description: Up to 50 notifications, newest first
    """
    try:
        notifications = (
            CustomerNotification.query
            .filter_by(customer_id=current_principal_id())
            .order_by(CustomerNotification.created_at.desc(), CustomerNotification.id.desc())
            .limit(NOTIFICATION_LIMIT)
            .all()
        )
        return success([n.to_dict() for n in notifications])
    except Exception:
        return internal_error("Get customer notifications")


@customer_notifications_bp.route('/api/customer-notifications/unread-count', methods=['GET'])
@customer_required
def get_customer_unread_count():
    """
    My unread notification count
    ---
    tags:
      - Customer Notifications
    security:
      - Bearer: []
    responses:
      200:
        description: "{count}"
    """
    try:
        count = CustomerNotification.query.filter_by(customer_id=current_principal_id(), is_read=False).count()
        return success({"count": count})
    except Exception:
        return internal_error("Get customer unread count")


@customer_notifications_bp.route('/api/customer-notifications/<int:notification_id>/read', methods=['PUT'])
@customer_required
def mark_customer_notification_read(notification_id):
    """
    Mark one of my notifications as read
    ---
    tags:
      - Customer Notifications
    security:
      - Bearer: []
    parameters:
      - { name: notification_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Marked as read
      404:
        description: Not found among my notifications
    """
    try:
        notification = _own_notification(notification_id)
        if not notification:
            return failure("Notification not found", 404)
        notification.is_read = True
        notification.updated_at = datetime.utcnow()
        db.session.commit()
        return success(message="Notification marked as read")
    except Exception:
        return internal_error("Mark customer notification as read")


@customer_notifications_bp.route('/api/customer-notifications/mark-all-read', methods=['PUT'])
@customer_required
def mark_all_customer_notifications_read():
    """
    Mark all of my notifications as read
    ---
    tags:
      - Customer Notifications
    security:
      - Bearer: []
    responses:
      200:
        description: All marked as read
    """
    try:
        CustomerNotification.query.filter_by(customer_id=current_principal_id(), is_read=False).update(
            {"is_read": True, "updated_at": datetime.utcnow()}, synchronize_session=False
        )
        db.session.commit()
        return success(message="All notifications marked as read")
    except Exception:
        return internal_error("Mark all customer notifications as read")


@customer_notifications_bp.route('/api/customer-notifications/<int:notification_id>', methods=['DELETE'])
@customer_required
def delete_customer_notification(notification_id):
    """
    Delete one of my notifications
    ---
    tags:
      - Customer Notifications
    security:
      - Bearer: []
    parameters:
      - { name: notification_id, in: path, type: integer, required: true }
    responses:
      200:
        description: Deleted
      404:
        description: Not found among my notifications
    """
    try:
        notification = _own_notification(notification_id)
        if not notification:
            return failure("Notification not found", 404)
        db.session.delete(notification)
        db.session.commit()
        return success(message="Notification deleted")
    except Exception:
        return internal_error("Delete customer notification")
