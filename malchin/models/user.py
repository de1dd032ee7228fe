"""User model."""

import uuid
from datetime import datetime
from flask_login import UserMixin
from malchin.extensions import db, bcrypt


class Role:
    """User roles."""
    CUSTOMER = 'customer'
    HERDER = 'herder'
    ADMIN = 'admin'

    ALL = (CUSTOMER, HERDER, ADMIN)
    SELF_REGISTER = (CUSTOMER, HERDER)


class User(UserMixin, db.Model):
    """User model for customers, herders, and admins."""
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), default='')
    location = db.Column(db.String(255), default='')
    role = db.Column(db.String(20), nullable=False, default=Role.CUSTOMER)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_admin(self):
        return self.role == Role.ADMIN

    def is_herder(self):
        return self.role == Role.HERDER

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'phoneNumber': self.phone or '',
            'location': self.location or '',
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.email}>'
