"""Shared fixtures: app, database and sample accounts/products."""

import pytest

from malchin import create_app
from malchin.extensions import db as _db
from malchin.models import User, Role, Product, ProductStatus, Category


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


def make_user(email, role, name=None, password='secret123'):
    user = User(email=email, name=name or email.split('@')[0].title(), role=role,
                phone='99112233', location='Ulaanbaatar')
    user.set_password(password)
    _db.session.add(user)
    _db.session.commit()
    return user


def make_product(herder, status=ProductStatus.APPROVED, **overrides):
    data = {
        'title': 'Mutton',
        'description': 'Free-range sheep',
        'price': 10000,
        'unit': 'kg',
        'category': Category.MEAT,
        'sub_category': 'mutton',
        'quantity': 10,
        'images': [],
    }
    data.update(overrides)
    product = Product(herder_id=herder.id, herder_name=herder.name, status=status, **data)
    _db.session.add(product)
    _db.session.commit()
    return product


@pytest.fixture
def customer(app):
    return make_user('customer@example.com', Role.CUSTOMER, 'Saraa')


@pytest.fixture
def herder(app):
    return make_user('herder@example.com', Role.HERDER, 'Batbayar')


@pytest.fixture
def other_herder(app):
    return make_user('other@example.com', Role.HERDER, 'Oyun')


@pytest.fixture
def admin(app):
    return make_user('admin@example.com', Role.ADMIN, 'Admin')


@pytest.fixture
def product(herder):
    return make_product(herder)


def login(client, user, password='secret123'):
    response = client.post('/auth/login', json={'email': user.email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response
