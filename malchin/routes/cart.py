"""Cart routes."""

from flask import Blueprint
from flask_login import current_user
from malchin.errors import NotFound
from malchin.extensions import db
from malchin.models import Product
from malchin.services import products as catalog
from malchin.services.cart import get_cart
from malchin.utils.responses import success, failure
from . import request_data

cart_bp = Blueprint('cart', __name__)


def _quantity(data, default=None):
    try:
        return int(data.get('quantity', default))
    except (TypeError, ValueError):
        return None


@cart_bp.route('/')
def view_cart():
    """View shopping cart."""
    return success(cart=get_cart(current_user).to_dict())


@cart_bp.route('/add', methods=['POST'])
def add_to_cart():
    """Add product to cart."""
    data = request_data()
    quantity = _quantity(data, 1)
    if not data.get('product_id'):
        return failure('Product is required.')
    if quantity is None or quantity < 1:
        return failure('Quantity must be at least 1.')

    product = catalog.get_public_product(data.get('product_id'))
    cart = get_cart(current_user)

    # Stock is only checked here, the cart itself holds whatever it is given.
    if not product.is_in_stock():
        return failure('This product is out of stock.')
    if cart.quantity_of(product.id) + quantity > product.quantity:
        return failure(f'Only {product.quantity} {product.unit} available.')

    cart.add_to_cart(product, quantity)
    return success(message=f'{product.title} added to cart!', cart=cart.to_dict())


@cart_bp.route('/update', methods=['POST'])
def update_cart():
    """Update cart item quantity; zero or less removes the item."""
    data = request_data()
    product_id = data.get('product_id')
    quantity = _quantity(data)
    if quantity is None:
        return failure('Quantity is required.')

    cart = get_cart(current_user)
    if cart.get_item(product_id) is None:
        raise NotFound('Item not found in cart.')

    product = db.session.get(Product, product_id)
    if product is not None and quantity > product.quantity:
        return failure(f'Only {product.quantity} {product.unit} available.')

    cart.update_quantity(product_id, quantity)
    message = 'Cart updated.' if quantity > 0 else 'Item removed from cart.'
    return success(message=message, cart=cart.to_dict())


@cart_bp.route('/remove/<product_id>', methods=['POST'])
def remove_from_cart(product_id):
    """Remove item from cart."""
    cart = get_cart(current_user)
    cart.remove_from_cart(product_id)
    return success(message='Item removed from cart.', cart=cart.to_dict())


@cart_bp.route('/clear', methods=['POST'])
def clear_cart():
    """Clear all items from cart."""
    cart = get_cart(current_user)
    cart.clear_cart()
    return success(message='Cart cleared.', cart=cart.to_dict())
