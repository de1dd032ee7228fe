"""Customer order routes."""

from flask import Blueprint
from flask_login import current_user
from malchin.forms.orders import CheckoutForm
from malchin.services import orders as order_service
from malchin.services.cart import get_cart
from malchin.utils.decorators import customer_required
from malchin.utils.responses import success, failure, form_failure

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/checkout', methods=['POST'])
@customer_required
def checkout():
    """Turn the cart into an order. The cart is emptied only if the order is placed."""
    cart = get_cart(current_user)
    if not cart.items:
        return failure('Your cart is empty.')

    form = CheckoutForm()
    if not form.validate_on_submit():
        return form_failure(form)

    order = order_service.create_order(
        current_user,
        [{'productId': item['product']['id'], 'quantity': item['quantity']} for item in cart.items],
        contact_phone=form.contact_phone.data,
        delivery_address=form.delivery_address.data,
        notes=form.notes.data,
        customer_name=form.name.data
    )
    cart.clear_cart()
    return success(201, message='Order placed successfully!', order=order.to_dict(current_user.role))


@orders_bp.route('/')
@customer_required
def order_history():
    """Order history, newest first."""
    orders = order_service.list_customer_orders(current_user.id)
    return success(orders=[o.to_dict(current_user.role) for o in orders])


@orders_bp.route('/<order_id>')
@customer_required
def order_detail(order_id):
    order = order_service.get_order_for(current_user, order_id)
    return success(order=order.to_dict(current_user.role))


@orders_bp.route('/<order_id>/cancel', methods=['POST'])
@customer_required
def cancel_order(order_id):
    """Cancel a pending order."""
    order = order_service.get_order_for(current_user, order_id)
    order_service.cancel_order(order, current_user)
    return success(message='Order cancelled.', order=order.to_dict(current_user.role))
