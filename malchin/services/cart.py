"""Shopping cart held in client-side storage, one slot per identity."""

import logging
from flask import session
from malchin.errors import ValidationError

logger = logging.getLogger(__name__)

ANONYMOUS_KEY = 'cart'


def storage_key(user_id=None):
    """Storage slot for an identity: ``cart_<userId>`` or the anonymous ``cart``."""
    return f'{ANONYMOUS_KEY}_{user_id}' if user_id else ANONYMOUS_KEY


class CartStorage:
    """Key/value slot store for serialized carts."""

    def get(self, key):
        raise NotImplementedError

    def set(self, key, items):
        raise NotImplementedError

    def remove(self, key):
        raise NotImplementedError


class SessionCartStorage(CartStorage):
    """Keeps carts in Flask's signed cookie session."""

    def get(self, key):
        return session.get(key)

    def set(self, key, items):
        session[key] = items
        session.modified = True

    def remove(self, key):
        session.pop(key, None)


class MemoryCartStorage(CartStorage):
    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, items):
        self.data[key] = items

    def remove(self, key):
        self.data.pop(key, None)


def _product_doc(product):
    if hasattr(product, 'to_snapshot'):
        return product.to_snapshot()
    return dict(product)


class Cart:
    """Line items of ``{product, quantity}`` plus derived totals.

    Every mutation rewrites the whole list to the identity's slot. An empty
    cart deletes the slot instead of storing ``[]``. Switching identity
    reads the other slot; anonymous and signed-in carts are never merged.
    """

    def __init__(self, storage, user_id=None):
        self.storage = storage
        self.user_id = user_id
        self.items = []
        self.total_items = 0
        self.total_price = 0
        self.load()

    @property
    def key(self):
        return storage_key(self.user_id)

    def load(self):
        raw = self.storage.get(self.key)
        items = []
        if raw:
            try:
                for entry in raw:
                    quantity = int(entry['quantity'])
                    product = dict(entry['product'])
                    if quantity >= 1 and 'id' in product and 'price' in product:
                        items.append({'product': product, 'quantity': quantity})
            except (KeyError, TypeError, ValueError):
                logger.warning('Discarding unreadable cart in slot %s', self.key)
                items = []
        self.items = items
        self._recompute()
        return self

    def switch_identity(self, user_id):
        """Point the cart at another identity's slot and load it."""
        self.user_id = user_id
        return self.load()

    def get_item(self, product_id):
        return next((item for item in self.items if item['product']['id'] == product_id), None)

    def quantity_of(self, product_id):
        item = self.get_item(product_id)
        return item['quantity'] if item else 0

    def add_to_cart(self, product, quantity=1):
        """Add ``quantity`` of ``product``, merging with an existing line."""
        quantity = int(quantity)
        if quantity < 1:
            raise ValidationError('Quantity must be at least 1.')
        doc = _product_doc(product)
        item = self.get_item(doc['id'])
        if item:
            item['quantity'] += quantity
        else:
            self.items.append({'product': doc, 'quantity': quantity})
        self._save()

    def remove_from_cart(self, product_id):
        remaining = [item for item in self.items if item['product']['id'] != product_id]
        if len(remaining) != len(self.items):
            self.items = remaining
            self._save()

    def update_quantity(self, product_id, quantity):
        """Overwrite a line's quantity; zero or less removes the line."""
        quantity = int(quantity)
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return
        item = self.get_item(product_id)
        if item:
            item['quantity'] = quantity
            self._save()

    def clear_cart(self):
        self.items = []
        self._save()

    def _recompute(self):
        self.total_items = sum(item['quantity'] for item in self.items)
        self.total_price = sum(item['product']['price'] * item['quantity'] for item in self.items)

    def _save(self):
        self._recompute()
        if self.items:
            self.storage.set(self.key, [
                {'product': dict(item['product']), 'quantity': item['quantity']}
                for item in self.items
            ])
        else:
            self.storage.remove(self.key)

    def to_dict(self):
        return {
            'items': [
                {'product': dict(item['product']), 'quantity': item['quantity']}
                for item in self.items
            ],
            'totalItems': self.total_items,
            'totalPrice': self.total_price,
        }


def get_cart(user=None):
    """Cart for the current request's identity, backed by the session."""
    user_id = user.id if user is not None and user.is_authenticated else None
    return Cart(SessionCartStorage(), user_id)
