import logging

from core.imports import Message, render_template, current_app, datetime
from core.extensions import mail
from services.pricing import format_rupiah

logger = logging.getLogger(__name__)


class Mailer:
    """Transactional email over Flask-Mail.

    Every ``send_*`` method returns True when the message was handed to the
    SMTP server and False otherwise; it never raises for delivery problems.
    """

    def is_configured(self):
        config = current_app.config
        return bool(config.get("MAIL_SERVER") and config.get("MAIL_USERNAME"))

    def send(self, to, subject, html, text=None):
        if not self.is_configured():
            logger.warning("SMTP is not configured, skipping email %r to %s", subject, to)
            return False

        msg = Message(subject=subject, recipients=[to] if isinstance(to, str) else list(to))
        msg.html = html
        msg.body = text
        try:
            mail.send(msg)
        except Exception:
            logger.exception("Error sending email %r to %s", subject, to)
            return False
        logger.info("Email %r sent to %s", subject, to)
        return True

    def send_order_confirmation(self, email, order):
        items = [
            {
                "product_name": item.product_name,
                "weight": item.product_variant_weight,
                "quantity": item.quantity,
                "unit_price": format_rupiah(item.unit_price),
                "total_price": format_rupiah(item.total_price),
            }
            for item in order.order_items
        ]
        html = render_template(
            "order_confirmation.html",
            order_number=order.order_number,
            items=items,
            subtotal=format_rupiah(order.subtotal),
            shipping_cost=format_rupiah(order.shipping_cost),
            total_amount=format_rupiah(order.total_amount),
            year=datetime.now().year,
        )
        text = (
            f"Dear Customer,\n\nYour order {order.order_number} has been received and is being processed.\n"
            f"Total: {format_rupiah(order.total_amount)}\n\nThank you for shopping with us."
        )
        return self.send(email, f"Order Confirmation - {order.order_number}", html, text)

    def send_welcome(self, email, name):
        html = render_template("welcome.html", name=name, year=datetime.now().year)
        text = (
            f"Welcome to PasarAntar, {name}!\n\n"
            "Thank you for registering with PasarAntar. We're excited to have you on board!"
        )
        return self.send(email, f"Welcome to PasarAntar, {name}!", html, text)
