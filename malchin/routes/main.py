"""Public catalog routes. Only approved products are ever listed."""

from flask import Blueprint, request
from malchin.models import Category
from malchin.services import products as catalog
from malchin.utils.responses import success, paginated

main_bp = Blueprint('main', __name__)


def _listing(category=None):
    pagination = catalog.list_approved_products(
        page=request.args.get('page', 1, type=int),
        per_page=request.args.get('per_page', type=int),
        category=category or request.args.get('category') or None,
        sub_category=request.args.get('sub_category') or None,
        search=request.args.get('search', '')
    )
    return success(**paginated(pagination, lambda p: p.to_dict()))


@main_bp.route('/')
def index():
    """Newest approved products."""
    pagination = catalog.list_approved_products(page=1, per_page=8)
    return success(products=[p.to_dict() for p in pagination.items])


@main_bp.route('/products')
def products():
    return _listing()


@main_bp.route('/products/meat')
def meat():
    return _listing(Category.MEAT)


@main_bp.route('/products/dairy')
def dairy():
    return _listing(Category.DAIRY)


@main_bp.route('/products/<product_id>')
def product_detail(product_id):
    product = catalog.get_public_product(product_id)
    return success(product=product.to_dict())
