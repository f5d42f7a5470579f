import logging

from core.extensions import db
from models.notificationModels import (
    AdminNotification,
    CustomerNotification,
    ADMIN_NOTIFICATION_TYPES,
    CUSTOMER_NOTIFICATION_TYPES,
)
from services.pricing import format_rupiah

logger = logging.getLogger(__name__)

STATUS_NOTIFICATIONS = {
    "confirmed": (
        "order_confirmed",
        "Pesanan Dikonfirmasi",
        "Pesanan #{number} telah dikonfirmasi. Kami akan segera memproses pesanan Anda.",
    ),
    "processing": (
        "order_processing",
        "Pesanan Diproses",
        "Pesanan #{number} sedang diproses. Pesanan Anda akan segera dikirim.",
    ),
    "delivered": (
        "order_delivered",
        "Pesanan Selesai",
        "Pesanan #{number} telah selesai. Terima kasih telah berbelanja di toko kami!",
    ),
    "cancelled": (
        "order_cancelled",
        "Pesanan Dibatalkan",
        "Pesanan #{number} telah dibatalkan. Hubungi kami untuk informasi lebih lanjut.",
    ),
}


class Notifier:
    """Writes admin and customer notification rows in their own transaction."""

    def notify_admin(self, type_, title, message, related_id=None):
        if type_ not in ADMIN_NOTIFICATION_TYPES:
            raise ValueError(f"Unknown admin notification type: {type_}")
        return self._save(AdminNotification(type=type_, title=title, message=message, related_id=related_id))

    def notify_customer(self, customer_id, type_, title, message, related_id=None):
        if type_ not in CUSTOMER_NOTIFICATION_TYPES:
            raise ValueError(f"Unknown customer notification type: {type_}")
        return self._save(
            CustomerNotification(
                customer_id=customer_id, type=type_, title=title, message=message, related_id=related_id
            )
        )

    def _save(self, notification):
        try:
            db.session.add(notification)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        logger.debug("Created %s notification %s", notification.type, notification.id)
        return notification.id

    # order workflow messages

    def new_order(self, order):
        return self.notify_admin(
            "new_order",
            "Pesanan Baru Masuk",
            f"Pesanan #{order.order_number} dari {order.customer_name} sebesar {format_rupiah(order.total_amount)}",
            order.id,
        )

    def order_received(self, order):
        return self.notify_customer(
            order.customer_id,
            "order_pending",
            "Pesanan Diterima",
            f"Pesanan #{order.order_number} telah diterima. Kami akan segera mengkonfirmasi pesanan Anda.",
            order.id,
        )

    def status_changed(self, order, status):
        type_, title, template = STATUS_NOTIFICATIONS[status]
        return self.notify_customer(
            order.customer_id, type_, title, template.format(number=order.order_number), order.id
        )

    def cancelled_by_customer(self, order):
        return self.notify_customer(
            order.customer_id,
            "order_cancelled",
            "Pesanan Dibatalkan",
            f"Pesanan #{order.order_number} telah dibatalkan sesuai permintaan Anda.",
            order.id,
        )

    def customer_cancellation_alert(self, order):
        return self.notify_admin(
            "new_order",
            "Pesanan Dibatalkan Pelanggan",
            f"Pesanan #{order.order_number} telah dibatalkan oleh pelanggan",
            order.id,
        )

    def customer_registered(self, customer):
        return self.notify_admin(
            "user_registration",
            "User Baru Terdaftar",
            f"{customer.name} ({customer.email}) telah mendaftar sebagai pelanggan baru.",
            customer.id,
        )
