"""Herder dashboard routes."""

from flask import Blueprint, request
from flask_login import current_user
from malchin.errors import NotFound
from malchin.forms.orders import OrderStatusForm
from malchin.forms.product import ProductForm
from malchin.models import Product, ProductStatus
from malchin.services import orders as order_service
from malchin.services import products as catalog
from malchin.utils.decorators import herder_required
from malchin.utils.responses import success, form_failure

herder_bp = Blueprint('herder', __name__)


def _own_product(product_id):
    product = Product.query.filter_by(id=product_id, herder_id=current_user.id).first()
    if product is None:
        raise NotFound('Product not found.')
    return product


def _own_order(order_id):
    order = order_service.get_order(order_id)
    if order.herder_id != current_user.id:
        raise NotFound('Order not found.')
    return order


@herder_bp.route('/dashboard')
@herder_required
def dashboard():
    """Product and order counts for the signed-in herder."""
    products = catalog.list_herder_products(current_user.id)
    orders = order_service.list_herder_orders(current_user.id)
    product_counts = {status: 0 for status in ProductStatus.ALL}
    for product in products:
        product_counts[product.status] = product_counts.get(product.status, 0) + 1
    return success(
        products=product_counts,
        orders=order_service.count_by_status(orders),
        recentOrders=[o.to_dict(current_user.role) for o in orders[:5]]
    )


# --- Products ---
@herder_bp.route('/products')
@herder_required
def products():
    """Every product of this herder, whatever its moderation status."""
    items = catalog.list_herder_products(current_user.id)
    return success(products=[p.to_dict() for p in items])


@herder_bp.route('/products/new', methods=['POST'])
@herder_required
def add_product():
    """Add new product. It waits for admin approval before it is listed."""
    form = ProductForm()
    if not form.validate_on_submit():
        return form_failure(form)

    product = catalog.add_product(current_user, form.product_data(), form.image_files())
    return success(201, message='Product submitted for approval.', product=product.to_dict())


@herder_bp.route('/products/<product_id>/edit', methods=['POST'])
@herder_required
def edit_product(product_id):
    """Edit product."""
    product = _own_product(product_id)
    form = ProductForm()
    if not form.validate_on_submit():
        return form_failure(form)

    catalog.update_product(product, form.product_data(), form.image_files())
    return success(message='Product updated successfully!', product=product.to_dict())


@herder_bp.route('/products/<product_id>/delete', methods=['POST'])
@herder_required
def delete_product(product_id):
    """Delete product."""
    catalog.delete_product(_own_product(product_id))
    return success(message='Product deleted.')


# --- Orders ---
@herder_bp.route('/orders')
@herder_required
def orders():
    """Orders placed with this herder."""
    items = order_service.list_herder_orders(current_user.id, status=request.args.get('status'))
    return success(orders=[o.to_dict(current_user.role) for o in items])


@herder_bp.route('/orders/<order_id>')
@herder_required
def order_detail(order_id):
    order = _own_order(order_id)
    return success(order=order.to_dict(current_user.role))


@herder_bp.route('/orders/<order_id>/status', methods=['POST'])
@herder_required
def update_order(order_id):
    """Move an order along: confirm, ship, deliver or cancel."""
    order = _own_order(order_id)
    form = OrderStatusForm()
    if not form.validate_on_submit():
        return form_failure(form)

    order_service.update_order_status(order, form.status.data, current_user)
    return success(message=f'Order {order.status}.', order=order.to_dict(current_user.role))
