"""Role-based access decorators."""

from functools import wraps
from flask import current_app
from flask_login import current_user
from malchin.errors import Forbidden


def role_required(*roles):
    """Require a signed-in user holding one of ``roles``.

    Anonymous requests go through Flask-Login's unauthorized handler.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return current_app.login_manager.unauthorized()
            if current_user.role not in roles:
                raise Forbidden()
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def customer_required(f):
    """Decorator to require customer role."""
    return role_required('customer')(f)


def herder_required(f):
    """Decorator to require herder role."""
    return role_required('herder')(f)


def admin_required(f):
    """Decorator to require admin role."""
    return role_required('admin')(f)
