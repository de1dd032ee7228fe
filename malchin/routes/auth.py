"""Authentication routes."""

from flask import Blueprint, current_app
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf
from malchin.errors import AuthError
from malchin.forms.auth import LoginForm, RegistrationForm, ProfileForm
from malchin.services import accounts
from malchin.services.cart import get_cart
from malchin.utils.responses import success, failure, form_failure

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/csrf')
def csrf_token():
    """Token for the X-CSRFToken header of state-changing requests."""
    return success(csrfToken=generate_csrf())


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login."""
    if current_user.is_authenticated:
        return failure('You are already logged in.', 400)
    
    form = LoginForm()
    if not form.validate_on_submit():
        return form_failure(form)

    try:
        user = accounts.authenticate(form.email.data, form.password.data)
    except AuthError as exc:
        current_app.logger.info('Failed login for %s: %s', form.email.data, exc.message)
        return failure(exc.message, 401)

    login_user(user, remember=form.remember.data)
    # The signed-in identity reads its own cart slot; the anonymous cart stays as it was.
    cart = get_cart(user)
    return success(user=user.to_dict(), cart=cart.to_dict())


@auth_bp.route('/register', methods=['POST'])
def register():
    """Customer or herder registration."""
    if current_user.is_authenticated:
        return failure('You are already logged in.', 400)
    
    form = RegistrationForm()
    if not form.validate_on_submit():
        return form_failure(form)

    user = accounts.register_user(
        email=form.email.data,
        password=form.password.data,
        name=form.name.data,
        role=form.role.data,
        phone=form.phone.data,
        location=form.location.data
    )
    login_user(user)
    return success(201, user=user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """User logout."""
    logout_user()
    return success(message='You have been logged out.')


@auth_bp.route('/profile', methods=['GET', 'POST'])
@login_required
def profile():
    """View or edit the signed-in user's profile."""
    form = ProfileForm()
    if form.is_submitted():
        if not form.validate():
            return form_failure(form)
        accounts.update_profile(
            current_user,
            name=form.name.data,
            phone=form.phone.data or '',
            location=form.location.data or ''
        )
    return success(user=current_user.to_dict())
