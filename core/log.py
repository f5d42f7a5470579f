import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(app):
    """Attach one stream handler to the root logger at the app's LOG_LEVEL."""
    level = app.config.get("LOG_LEVEL", "INFO")
    root = logging.getLogger()
    if not any(getattr(h, "_storefront", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True
        root.addHandler(handler)
    root.setLevel(level)
    app.logger.setLevel(level)
