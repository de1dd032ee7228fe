import pytest

from malchin.commands import create_admin_user, seed_database
from malchin.errors import AuthError, Forbidden, ValidationError
from malchin.models import Product, Role, User
from malchin.services import accounts

from conftest import make_product


def test_register_and_authenticate(db):
    user = accounts.register_user('Herder@Example.com ', 'secret123', 'Bat', Role.HERDER,
                                  phone='99112233', location='Arkhangai')
    assert user.email == 'herder@example.com'
    assert user.role == Role.HERDER
    assert user.password_hash != 'secret123'
    assert accounts.authenticate('HERDER@example.com', 'secret123').id == user.id


@pytest.mark.parametrize('email, password, message', [
    ('not-an-email', 'secret123', accounts.INVALID_EMAIL),
    ('new@example.com', '123', accounts.WEAK_PASSWORD),
    ('customer@example.com', 'secret123', accounts.EMAIL_IN_USE),
])
def test_registration_errors(db, customer, email, password, message):
    with pytest.raises(AuthError) as excinfo:
        accounts.register_user(email, password, 'Someone')
    assert excinfo.value.message == message


def test_cannot_self_register_as_admin(db):
    with pytest.raises(ValidationError):
        accounts.register_user('boss@example.com', 'secret123', 'Boss', Role.ADMIN)


def test_login_errors(db, customer):
    with pytest.raises(AuthError) as excinfo:
        accounts.authenticate('nobody@example.com', 'secret123')
    assert excinfo.value.message == accounts.USER_NOT_FOUND

    with pytest.raises(AuthError) as excinfo:
        accounts.authenticate(customer.email, 'wrong-password')
    assert excinfo.value.message == accounts.WRONG_PASSWORD


def test_update_profile(db, customer):
    accounts.update_profile(customer, name='Saraa B.', phone='88001122', location='Erdenet')
    assert (customer.name, customer.phone, customer.location) == ('Saraa B.', '88001122', 'Erdenet')


def test_admin_user_management(db, admin, customer, herder):
    assert {u.id for u in accounts.list_users(role=Role.HERDER)} == {herder.id}
    assert {u.id for u in accounts.list_users(search='saraa')} == {customer.id}

    accounts.change_role(customer, Role.HERDER)
    assert customer.role == Role.HERDER
    with pytest.raises(ValidationError):
        accounts.change_role(customer, 'superuser')


def test_delete_herder_removes_their_products(db, admin, herder):
    make_product(herder)
    herder_id = herder.id
    accounts.delete_user(herder, admin)

    assert db.session.get(User, herder_id) is None
    assert Product.query.filter_by(herder_id=herder_id).count() == 0


def test_admin_cannot_delete_self(db, admin):
    with pytest.raises(Forbidden):
        accounts.delete_user(admin, admin)


def test_create_admin_promotes_existing_user(db, customer):
    user, created = create_admin_user(customer.email, 'ignored', 'Ignored')
    assert not created
    assert user.role == Role.ADMIN

    user, created = create_admin_user('root@example.com', 'secret123', 'Root')
    assert created
    assert user.check_password('secret123')


def test_seed_runs_once(db):
    assert seed_database() is True
    assert seed_database() is False
    assert User.query.filter_by(role=Role.HERDER).count() == 2
    assert Product.query.count() == 6
