from datetime import timedelta
import os
from dotenv import load_dotenv

load_dotenv()
class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///storefront.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "change-me-in-production")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    CUSTOMER_TOKEN_EXPIRES = timedelta(days=7)

    MAIL_SERVER = os.getenv("SMTP_HOST")
    MAIL_PORT = int(os.getenv("SMTP_PORT", 587))
    MAIL_USE_TLS = os.getenv("SMTP_SECURE", "false").lower() != "true"
    MAIL_USE_SSL = os.getenv("SMTP_SECURE", "false").lower() == "true"
    MAIL_USERNAME = os.getenv("SMTP_USER")
    MAIL_PASSWORD = os.getenv("SMTP_PASS")
    MAIL_DEFAULT_SENDER = ("PasarAntar", os.getenv("EMAIL_FROM", "noreply@pasarantar.com"))

    CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:5173")
    EXPRESS_SHIPPING_FEE = float(os.getenv("EXPRESS_SHIPPING_FEE", 15000))
    ORDER_NUMBER_ATTEMPTS = 5
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    MAIL_SUPPRESS_SEND = True
    MAIL_SERVER = "localhost"
    MAIL_USERNAME = "test@pasarantar.com"
    LOG_LEVEL = "DEBUG"
