"""Order placement and status changes."""

import logging
from datetime import datetime
from sqlalchemy import or_
from malchin.extensions import db
from malchin.errors import (NotFound, Forbidden, InvalidTransition, StaleState,
                            ValidationError)
from malchin.models import Order, OrderStatus, Product

logger = logging.getLogger(__name__)


def create_order(customer, items, contact_phone, delivery_address, notes=None, customer_name=None):
    """Place an order from ``items`` (``[{'productId', 'quantity'}]``).

    The herder is the owner of the first line's product. Titles and prices
    are copied from the products as they are right now, so later edits to
    a product never change an existing order. Stock is decremented once,
    floored at zero, in the same transaction as the order insert.
    """
    if not items:
        raise ValidationError('No products selected.')

    lines = []
    products = []
    for item in items:
        quantity = int(item['quantity'])
        if quantity < 1:
            raise ValidationError('Quantity must be at least 1.')
        product = db.session.get(Product, item['productId'])
        if product is None or not product.is_public:
            raise NotFound('Product not found.')
        products.append((product, quantity))
        lines.append({
            'productId': product.id,
            'quantity': quantity,
            'price': product.price,
            'title': product.title,
        })

    order = Order(
        customer_id=customer.id,
        customer_name=customer_name or customer.name,
        herder_id=products[0][0].herder_id,
        products=lines,
        total_amount=Order.compute_total(lines),
        status=OrderStatus.PENDING,
        contact_phone=contact_phone,
        delivery_address=delivery_address,
        notes=notes
    )
    db.session.add(order)

    now = datetime.utcnow()
    for product, quantity in products:
        product.reduce_stock(quantity)
        product.updated_at = now

    db.session.commit()
    logger.info('Order %s placed by %s: %d line(s), total %d',
                order.id, customer.id, len(lines), order.total_amount)
    return order


def get_order(order_id):
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFound('Order not found.')
    return order


def can_view(order, user):
    if user.is_admin():
        return True
    if user.is_herder():
        return order.herder_id == user.id
    return order.customer_id == user.id


def get_order_for(user, order_id):
    """Fetch an order the user is a party to (admins see everything)."""
    order = get_order(order_id)
    if not can_view(order, user):
        raise Forbidden()
    return order


def list_customer_orders(customer_id):
    return Order.query.filter_by(customer_id=customer_id).order_by(
        Order.created_at.desc()
    ).all()


def list_herder_orders(herder_id, status=None):
    query = Order.query.filter_by(herder_id=herder_id)
    if status:
        query = query.filter_by(status=OrderStatus.normalize(status))
    return query.order_by(Order.created_at.desc()).all()


def list_all_orders(status=None, search=None):
    query = Order.query
    if status:
        query = query.filter_by(status=OrderStatus.normalize(status))
    if search:
        term = f'%{search}%'
        query = query.filter(
            or_(
                Order.customer_name.ilike(term),
                Order.contact_phone.ilike(term),
                Order.id.ilike(term)
            )
        )
    return query.order_by(Order.created_at.desc()).all()


def update_order_status(order, status, actor):
    """Move ``order`` to ``status`` on behalf of ``actor``.

    Only transitions the actor's role may trigger are accepted, and the write
    only lands if the order is still in the status that was checked.
    """
    target = OrderStatus.normalize(status)
    if target not in OrderStatus.ALL:
        raise ValidationError(f'Unknown order status: {status}')
    if not can_view(order, actor):
        raise Forbidden()

    current = order.status
    if not OrderStatus.can_transition(current, target, actor.role):
        logger.warning('Rejected order %s transition %s -> %s by %s (%s)',
                       order.id, current, target, actor.id, actor.role)
        raise InvalidTransition(current, target)

    updated = Order.query.filter_by(id=order.id, status=current).update(
        {'status': target, 'updated_at': datetime.utcnow()},
        synchronize_session=False
    )
    if not updated:
        db.session.rollback()
        logger.warning('Order %s changed concurrently; %s -> %s dropped', order.id, current, target)
        raise StaleState()
    db.session.commit()
    db.session.refresh(order)
    logger.info('Order %s: %s -> %s by %s', order.id, current, target, actor.role)
    return order


def cancel_order(order, actor):
    return update_order_status(order, OrderStatus.CANCELLED, actor)


def count_by_status(orders):
    counts = {status: 0 for status in OrderStatus.ALL}
    for order in orders:
        counts[order.status] = counts.get(order.status, 0) + 1
    return counts

