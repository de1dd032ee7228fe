"""Product catalog and moderation."""

import logging
from datetime import datetime
from flask import current_app
from sqlalchemy import or_
from malchin.extensions import db
from malchin.errors import NotFound, InvalidTransition, StaleState, ValidationError
from malchin.models import Product, ProductStatus, Category
from malchin.services.images import upload_images

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ('title', 'description', 'price', 'unit', 'category',
                  'sub_category', 'quantity', 'images')


def _clean(data):
    values = {k: data[k] for k in CONTENT_FIELDS if k in data and data[k] is not None}
    if 'category' in values and values['category'] not in Category.ALL:
        raise ValidationError(f'Unknown category: {values["category"]}')
    for field in ('price', 'quantity'):
        if field in values:
            values[field] = int(values[field])
            if values[field] < 0:
                raise ValidationError(f'{field.capitalize()} cannot be negative.')
    return values


def add_product(herder, data, image_files=()):
    """Create a product for ``herder``; it stays out of public listings until approved."""
    values = _clean(data)
    image_urls = upload_images(image_files)
    values['images'] = list(values.get('images') or []) + image_urls

    product = Product(
        herder_id=herder.id,
        herder_name=herder.name,
        status=ProductStatus.PENDING,
        **values
    )
    db.session.add(product)
    db.session.commit()
    logger.info('Product %s added by herder %s', product.id, herder.id)
    return product


def update_product(product, data, image_files=()):
    """Change product content. Moderation status is left alone."""
    values = _clean(data)
    image_urls = upload_images(image_files)
    if image_urls:
        values['images'] = list(values.get('images', product.images) or []) + image_urls
    for field, value in values.items():
        setattr(product, field, value)
    product.updated_at = datetime.utcnow()
    db.session.commit()
    return product


def get_product(product_id):
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFound('Product not found.')
    return product


def get_public_product(product_id):
    product = db.session.get(Product, product_id)
    if product is None or not product.is_public:
        raise NotFound('Product not found.')
    return product


def list_herder_products(herder_id):
    return Product.query.filter_by(herder_id=herder_id).order_by(
        Product.created_at.desc()
    ).all()


def list_approved_products(page=1, per_page=None, category=None, sub_category=None, search=None):
    """Paginated public listing, newest first."""
    query = Product.public()

    if category:
        query = query.filter(Product.category == category)
        if sub_category:
            query = query.filter(Product.sub_category == sub_category)

    if search and search.strip():
        term = f'%{search.strip()}%'
        query = query.filter(
            or_(
                Product.title.ilike(term),
                Product.description.ilike(term),
                Product.herder_name.ilike(term)
            )
        )

    return query.order_by(Product.created_at.desc()).paginate(
        page=page,
        per_page=per_page or current_app.config.get('ITEMS_PER_PAGE', 12),
        max_per_page=current_app.config.get('MAX_ITEMS_PER_PAGE', 48),
        error_out=False
    )


def list_pending_products():
    return Product.query.filter_by(status=ProductStatus.PENDING).order_by(
        Product.created_at.desc()
    ).all()


def list_all_products(status=None):
    query = Product.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(Product.created_at.desc()).all()


def moderate_product(product, status):
    """Approve or reject a pending product."""
    if status not in ProductStatus.ALL:
        raise ValidationError(f'Unknown product status: {status}')
    current = product.status
    if not ProductStatus.can_transition(current, status):
        logger.warning('Rejected moderation of product %s: %s -> %s', product.id, current, status)
        raise InvalidTransition(current, status)

    # Compare-and-set on the status we validated against
    updated = Product.query.filter_by(id=product.id, status=current).update(
        {'status': status, 'updated_at': datetime.utcnow()},
        synchronize_session=False
    )
    if not updated:
        db.session.rollback()
        raise StaleState()
    db.session.commit()
    db.session.refresh(product)
    logger.info('Product %s moderated: %s -> %s', product.id, current, status)
    return product


def delete_product(product):
    """Hard delete. Orders keep their own line-item snapshots."""
    product_id = product.id
    db.session.delete(product)
    db.session.commit()
    logger.info('Product %s deleted', product_id)
