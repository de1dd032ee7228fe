"""Admin panel routes."""

from flask import Blueprint, request
from flask_login import current_user
from malchin.forms.orders import OrderStatusForm
from malchin.models import ProductStatus
from malchin.services import accounts
from malchin.services import orders as order_service
from malchin.services import products as catalog
from malchin.utils.decorators import admin_required
from malchin.utils.responses import success, failure, form_failure
from . import request_data

admin_bp = Blueprint('admin', __name__)


# --- Product moderation ---
@admin_bp.route('/products')
@admin_required
def products():
    """All products, optionally filtered by moderation status."""
    status = request.args.get('status')
    if status == 'all':
        status = None
    items = catalog.list_all_products(status)
    return success(products=[p.to_dict() for p in items])


@admin_bp.route('/products/pending')
@admin_required
def pending_products():
    items = catalog.list_pending_products()
    return success(products=[p.to_dict() for p in items])


@admin_bp.route('/products/<product_id>/approve', methods=['POST'])
@admin_required
def approve_product(product_id):
    product = catalog.moderate_product(catalog.get_product(product_id), ProductStatus.APPROVED)
    return success(message=f'"{product.title}" has been approved!', product=product.to_dict())


@admin_bp.route('/products/<product_id>/reject', methods=['POST'])
@admin_required
def reject_product(product_id):
    product = catalog.moderate_product(catalog.get_product(product_id), ProductStatus.REJECTED)
    return success(message=f'"{product.title}" has been rejected.', product=product.to_dict())


@admin_bp.route('/products/<product_id>/delete', methods=['POST'])
@admin_required
def delete_product(product_id):
    catalog.delete_product(catalog.get_product(product_id))
    return success(message='Product deleted.')


# --- Order management ---
@admin_bp.route('/orders')
@admin_required
def orders():
    status = request.args.get('status')
    if status == 'all':
        status = None
    items = order_service.list_all_orders(status=status, search=request.args.get('search', ''))
    return success(orders=[o.to_dict(current_user.role) for o in items])


@admin_bp.route('/orders/<order_id>/status', methods=['POST'])
@admin_required
def update_order(order_id):
    order = order_service.get_order(order_id)
    form = OrderStatusForm()
    if not form.validate_on_submit():
        return form_failure(form)

    order_service.update_order_status(order, form.status.data, current_user)
    return success(message=f'Order {order.status}.', order=order.to_dict(current_user.role))


# --- User management ---
@admin_bp.route('/users')
@admin_required
def users():
    role = request.args.get('role')
    if role == 'all':
        role = None
    items = accounts.list_users(role=role, search=request.args.get('search', ''))
    return success(users=[u.to_dict() for u in items])


@admin_bp.route('/users/<user_id>/role', methods=['POST'])
@admin_required
def change_role(user_id):
    role = request_data().get('role')
    if not role:
        return failure('Role is required.')
    user = accounts.change_role(accounts.get_user(user_id), role)
    return success(message='Role updated.', user=user.to_dict())


@admin_bp.route('/users/<user_id>/delete', methods=['POST'])
@admin_required
def delete_user(user_id):
    accounts.delete_user(accounts.get_user(user_id), current_user)
    return success(message='User deleted.')
