"""User accounts: registration, sign-in, profiles and admin management."""

import logging
from sqlalchemy import or_
from malchin.extensions import db
from malchin.errors import AuthError, Forbidden, NotFound, ValidationError
from malchin.models import User, Role, Product

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

EMAIL_IN_USE = 'This email is already registered.'
INVALID_EMAIL = 'Please enter a valid email address.'
WEAK_PASSWORD = f'Password must be at least {MIN_PASSWORD_LENGTH} characters.'
USER_NOT_FOUND = 'No account found with this email.'
WRONG_PASSWORD = 'Incorrect password.'


def find_by_email(email):
    return User.query.filter_by(email=(email or '').strip().lower()).first()


def register_user(email, password, name, role=Role.CUSTOMER, phone='', location=''):
    """Create a customer or herder account. Admins are created from the CLI."""
    email = (email or '').strip().lower()
    if '@' not in email or email.startswith('@') or email.endswith('@'):
        raise AuthError(INVALID_EMAIL)
    if len(password or '') < MIN_PASSWORD_LENGTH:
        raise AuthError(WEAK_PASSWORD)
    if role not in Role.SELF_REGISTER:
        raise ValidationError(f'Cannot register with role: {role}')
    if find_by_email(email):
        raise AuthError(EMAIL_IN_USE)

    user = User(email=email, name=name, role=role, phone=phone or '', location=location or '')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info('Registered %s account %s', role, user.id)
    return user


def authenticate(email, password):
    user = find_by_email(email)
    if user is None:
        raise AuthError(USER_NOT_FOUND)
    if not user.check_password(password or ''):
        raise AuthError(WRONG_PASSWORD)
    return user


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found.')
    return user


def update_profile(user, name=None, phone=None, location=None):
    if name:
        user.name = name
    if phone is not None:
        user.phone = phone
    if location is not None:
        user.location = location
    db.session.commit()
    return user


def list_users(role=None, search=None):
    query = User.query
    if role:
        query = query.filter_by(role=role)
    if search:
        term = f'%{search}%'
        query = query.filter(
            or_(
                User.name.ilike(term),
                User.email.ilike(term),
                User.phone.ilike(term)
            )
        )
    return query.order_by(User.created_at.desc()).all()


def change_role(user, role):
    if role not in Role.ALL:
        raise ValidationError(f'Unknown role: {role}')
    previous = user.role
    user.role = role
    db.session.commit()
    logger.info('User %s role changed: %s -> %s', user.id, previous, role)
    return user


def delete_user(user, acting_admin):
    """Hard delete a user and the products they listed."""
    if user.id == acting_admin.id:
        raise Forbidden('You cannot delete your own account.')
    user_id = user.id
    Product.query.filter_by(herder_id=user_id).delete(synchronize_session=False)
    db.session.delete(user)
    db.session.commit()
    logger.info('User %s deleted by %s', user_id, acting_admin.id)
