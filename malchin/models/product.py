"""Product model and moderation gate."""

import uuid
from datetime import datetime
from malchin.extensions import db


class Category:
    MEAT = 'meat'
    DAIRY = 'dairy'

    ALL = (MEAT, DAIRY)


class ProductStatus:
    """Moderation states. Only approved products are publicly listed."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    ALL = (PENDING, APPROVED, REJECTED)

    # Moderation is one-way: nothing leads back to pending.
    TRANSITIONS = {
        PENDING: (APPROVED, REJECTED),
        APPROVED: (),
        REJECTED: (),
    }

    @classmethod
    def can_transition(cls, current, target):
        return target in cls.TRANSITIONS.get(current, ())


class Product(db.Model):
    """Product listed by a herder."""
    __tablename__ = 'products'

    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    herder_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    herder_name = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, default='')
    price = db.Column(db.Integer, nullable=False)
    unit = db.Column(db.String(30), nullable=False)
    category = db.Column(db.String(20), nullable=False, index=True)
    sub_category = db.Column(db.String(50), default='')
    images = db.Column(db.JSON, default=list)
    quantity = db.Column(db.Integer, default=0)
    status = db.Column(db.String(20), nullable=False, default=ProductStatus.PENDING, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    herder = db.relationship('User', backref=db.backref('products', lazy='dynamic', passive_deletes='all'))

    @classmethod
    def public(cls):
        """Query of products visible in public listings."""
        return cls.query.filter(cls.status == ProductStatus.APPROVED)

    @property
    def is_public(self):
        return self.status == ProductStatus.APPROVED

    def is_in_stock(self):
        return self.quantity > 0

    def reduce_stock(self, quantity):
        """Reduce stock by given quantity, never below zero."""
        self.quantity = max(0, (self.quantity or 0) - quantity)

    def to_dict(self):
        return {
            'id': self.id,
            'herderId': self.herder_id,
            'herderName': self.herder_name,
            'title': self.title,
            'description': self.description or '',
            'price': self.price,
            'unit': self.unit,
            'category': self.category,
            'subCategory': self.sub_category or '',
            'images': list(self.images or []),
            'quantity': self.quantity,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_snapshot(self):
        """Compact document held in cart storage."""
        return {
            'id': self.id,
            'herderId': self.herder_id,
            'herderName': self.herder_name,
            'title': self.title,
            'price': self.price,
            'unit': self.unit,
            'category': self.category,
            'subCategory': self.sub_category or '',
            'images': list(self.images or [])[:1],
            'quantity': self.quantity,
        }

    def __repr__(self):
        return f'<Product {self.title}>'
