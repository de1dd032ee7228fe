"""Order model and status machine."""

import uuid
from datetime import datetime
from malchin.extensions import db
from malchin.models.user import Role


class OrderStatus:
    """Order lifecycle.

    pending -> confirmed -> shipped -> delivered, with cancelled reachable
    from pending or confirmed. delivered and cancelled are terminal.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    SHIPPED = 'shipped'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'

    ALL = (PENDING, CONFIRMED, SHIPPED, DELIVERED, CANCELLED)
    TERMINAL = (DELIVERED, CANCELLED)

    # The admin screens of the old web client called the confirmed state "processing".
    ALIASES = {'processing': CONFIRMED}

    TRANSITIONS = {
        PENDING: (CONFIRMED, CANCELLED),
        CONFIRMED: (SHIPPED, CANCELLED),
        SHIPPED: (DELIVERED,),
        DELIVERED: (),
        CANCELLED: (),
    }

    # Which of the legal transitions each role may trigger.
    ROLE_TRANSITIONS = {
        Role.ADMIN: TRANSITIONS,
        Role.HERDER: {
            PENDING: (CONFIRMED, CANCELLED),
            CONFIRMED: (SHIPPED,),
            SHIPPED: (DELIVERED,),
        },
        Role.CUSTOMER: {PENDING: (CANCELLED,)},
    }

    @classmethod
    def normalize(cls, status):
        if status is None:
            return None
        status = str(status).strip().lower()
        return cls.ALIASES.get(status, status)

    @classmethod
    def can_transition(cls, current, target, role=None):
        """Check a transition, optionally restricted to what ``role`` may do."""
        table = cls.TRANSITIONS if role is None else cls.ROLE_TRANSITIONS.get(role, {})
        return cls.normalize(target) in table.get(current, ())

    @classmethod
    def actions_for(cls, current, role):
        """Target statuses ``role`` may move an order to from ``current``."""
        return list(cls.ROLE_TRANSITIONS.get(role, {}).get(current, ()))


class Order(db.Model):
    """Order placed by a customer with one herder."""
    __tablename__ = 'orders'

    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    customer_id = db.Column(db.String(32), nullable=False, index=True)
    customer_name = db.Column(db.String(100), nullable=False)
    herder_id = db.Column(db.String(32), nullable=False, index=True)

    # Snapshot of [{productId, quantity, price, title}] taken at checkout
    products = db.Column(db.JSON, nullable=False, default=list)
    total_amount = db.Column(db.Integer, nullable=False)

    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING, index=True)

    contact_phone = db.Column(db.String(20), nullable=False)
    delivery_address = db.Column(db.String(500), nullable=False)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @staticmethod
    def compute_total(line_items):
        return sum(item['price'] * item['quantity'] for item in line_items)

    def to_dict(self, role=None):
        data = {
            'id': self.id,
            'customerId': self.customer_id,
            'customerName': self.customer_name,
            'herderId': self.herder_id,
            'products': [dict(item) for item in (self.products or [])],
            'totalAmount': self.total_amount,
            'status': self.status,
            'contactPhone': self.contact_phone,
            'deliveryAddress': self.delivery_address,
            'notes': self.notes or '',
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
        if role is not None:
            data['actions'] = OrderStatus.actions_for(self.status, role)
        return data

    def __repr__(self):
        return f'<Order {self.id} {self.status}>'
