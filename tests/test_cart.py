import random

import pytest

from malchin.errors import ValidationError
from malchin.services.cart import Cart, MemoryCartStorage, storage_key


def product(product_id, price):
    return {'id': product_id, 'title': f'Product {product_id}', 'price': price, 'quantity': 100}


@pytest.fixture
def storage():
    return MemoryCartStorage()


def test_storage_keys():
    assert storage_key(None) == 'cart'
    assert storage_key('abc') == 'cart_abc'


def test_adding_same_product_twice_merges_quantities(storage):
    cart = Cart(storage)
    cart.add_to_cart(product('a', 10000), 2)
    cart.add_to_cart(product('a', 10000), 3)

    assert len(cart.items) == 1
    assert cart.items[0]['quantity'] == 5
    assert cart.total_items == 5
    assert cart.total_price == 50000


def test_totals_follow_every_mutation(storage):
    cart = Cart(storage)
    cart.add_to_cart(product('a', 10000), 2)
    cart.add_to_cart(product('b', 2500), 4)
    assert (cart.total_items, cart.total_price) == (6, 30000)

    cart.update_quantity('b', 1)
    assert (cart.total_items, cart.total_price) == (3, 22500)

    cart.remove_from_cart('a')
    assert (cart.total_items, cart.total_price) == (1, 2500)


def test_update_to_zero_removes_line_and_storage_entry(storage):
    cart = Cart(storage)
    cart.add_to_cart(product('a', 100), 1)
    assert 'cart' in storage.data

    cart.update_quantity('a', 0)

    assert cart.items == []
    assert cart.total_items == 0
    assert cart.total_price == 0
    assert 'cart' not in storage.data


def test_negative_update_removes_line(storage):
    cart = Cart(storage)
    cart.add_to_cart(product('a', 100), 3)
    cart.add_to_cart(product('b', 100), 1)
    cart.update_quantity('a', -2)
    assert [item['product']['id'] for item in cart.items] == ['b']


def test_remove_missing_product_is_noop(storage):
    cart = Cart(storage)
    cart.add_to_cart(product('a', 100), 1)
    cart.remove_from_cart('zzz')
    cart.update_quantity('zzz', 4)
    assert cart.total_items == 1


def test_clear_cart_deletes_slot(storage):
    cart = Cart(storage, user_id='u1')
    cart.add_to_cart(product('a', 100), 1)
    assert 'cart_u1' in storage.data

    cart.clear_cart()
    assert 'cart_u1' not in storage.data


def test_add_rejects_non_positive_quantity(storage):
    cart = Cart(storage)
    with pytest.raises(ValidationError):
        cart.add_to_cart(product('a', 100), 0)
    assert 'cart' not in storage.data


def test_persisted_layout_is_list_of_product_and_quantity(storage):
    cart = Cart(storage, user_id='u1')
    cart.add_to_cart(product('a', 100), 2)

    assert storage.data['cart_u1'] == [{'product': product('a', 100), 'quantity': 2}]
    assert Cart(storage, user_id='u1').total_price == 200


def test_switching_identity_reads_other_slot_without_merging(storage):
    cart = Cart(storage)
    cart.add_to_cart(product('a', 100), 1)

    cart.switch_identity('u1')
    assert cart.items == []
    cart.add_to_cart(product('b', 50), 2)

    cart.switch_identity(None)
    assert [item['product']['id'] for item in cart.items] == ['a']
    assert storage.data['cart_u1'][0]['product']['id'] == 'b'


def test_unreadable_slot_loads_empty(storage):
    storage.data['cart'] = 'not a list of items'
    cart = Cart(storage)
    assert cart.items == []
    assert cart.total_items == 0


def test_random_sequences_keep_totals_consistent(storage):
    rng = random.Random(7)
    catalog = [product(str(i), rng.randint(1, 50) * 100) for i in range(5)]
    cart = Cart(storage)

    for _ in range(300):
        p = rng.choice(catalog)
        op = rng.choice(['add', 'remove', 'update'])
        if op == 'add':
            cart.add_to_cart(p, rng.randint(1, 4))
        elif op == 'remove':
            cart.remove_from_cart(p['id'])
        else:
            cart.update_quantity(p['id'], rng.randint(-1, 5))

        assert cart.total_items == sum(i['quantity'] for i in cart.items)
        assert cart.total_price == sum(i['product']['price'] * i['quantity'] for i in cart.items)
        assert all(i['quantity'] >= 1 for i in cart.items)
        assert len({i['product']['id'] for i in cart.items}) == len(cart.items)
        assert ('cart' in storage.data) == bool(cart.items)
