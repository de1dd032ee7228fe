"""Routes package - register all blueprints."""

from flask import Flask, request


def register_blueprints(app: Flask):
    """Register all blueprints with the application."""
    from .auth import auth_bp
    from .main import main_bp
    from .cart import cart_bp
    from .orders import orders_bp
    from .herder import herder_bp
    from .admin import admin_bp
    
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(main_bp)
    app.register_blueprint(cart_bp, url_prefix='/cart')
    app.register_blueprint(orders_bp, url_prefix='/orders')
    app.register_blueprint(herder_bp, url_prefix='/herder')
    app.register_blueprint(admin_bp, url_prefix='/admin')


def request_data():
    """Body of a JSON or form-encoded request."""
    return request.get_json(silent=True) or request.form
