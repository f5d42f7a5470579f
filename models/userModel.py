from core.extensions import db
from core.imports import datetime


class Admins(db.Model):
    __tablename__ = "admins"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Customers(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=True)  # null for social-login accounts
    whatsapp = db.Column(db.String(20), nullable=True)
    address = db.Column(db.String(1000), nullable=True)
    coordinates = db.Column(db.String(100), nullable=True)
    provider = db.Column(db.String(20), default="email", nullable=False)  # email, google, facebook
    email_verified = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    notifications = db.relationship("CustomerNotification", backref="customer", cascade="all, delete-orphan")
    reviews = db.relationship("ProductReview", backref="customer", cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "whatsapp": self.whatsapp,
            "address": self.address,
            "coordinates": self.coordinates,
            "provider": self.provider,
            "emailVerified": self.email_verified,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
