"""Flask CLI commands: ``flask create-admin`` and ``flask seed``."""

import click
from flask import Flask
from malchin.extensions import db
from malchin.models import User, Role, Product, ProductStatus, Category


def create_admin_user(email, password, name, phone=''):
    """Create an admin, or promote the existing account with that email.

    Returns ``(user, created)``.
    """
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is not None:
        user.role = Role.ADMIN
        db.session.commit()
        return user, False

    user = User(email=email, name=name, phone=phone, role=Role.ADMIN)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user, True


HERDERS = [
    {
        'user': {
            'email': 'bat@example.com',
            'name': 'Batbayar',
            'phone': '99112233',
            'location': 'Arkhangai',
            'password': 'herder123'
        },
        'products': [
            {'title': 'Mutton, whole leg', 'price': 18000, 'unit': 'kg', 'category': Category.MEAT,
             'sub_category': 'mutton', 'quantity': 40,
             'description': 'Free-range sheep from the Khangai pastures.'},
            {'title': 'Beef brisket', 'price': 22000, 'unit': 'kg', 'category': Category.MEAT,
             'sub_category': 'beef', 'quantity': 25,
             'description': 'Grass-fed beef, cut to order.'},
            {'title': 'Airag', 'price': 8000, 'unit': 'litre', 'category': Category.DAIRY,
             'sub_category': 'fermented', 'quantity': 60,
             'description': 'Fermented mare\'s milk, summer batch.'},
        ]
    },
    {
        'user': {
            'email': 'oyun@example.com',
            'name': 'Oyunchimeg',
            'phone': '88114455',
            'location': 'Khuvsgul',
            'password': 'herder123'
        },
        'products': [
            {'title': 'Yak butter', 'price': 25000, 'unit': 'kg', 'category': Category.DAIRY,
             'sub_category': 'butter', 'quantity': 15,
             'description': 'Churned from yak milk.'},
            {'title': 'Aaruul', 'price': 12000, 'unit': 'kg', 'category': Category.DAIRY,
             'sub_category': 'curd', 'quantity': 30,
             'description': 'Sun-dried curds.'},
            {'title': 'Goat meat', 'price': 16000, 'unit': 'kg', 'category': Category.MEAT,
             'sub_category': 'goat', 'quantity': 0,
             'description': 'Sold out until autumn.'},
        ]
    },
]


def seed_database():
    """Seed the database with sample data. Returns False if already seeded."""
    db.create_all()

    if User.query.filter_by(email='admin@malchin.mn').first():
        return False

    create_admin_user('admin@malchin.mn', 'admin123', 'Admin User', '99000000')

    for entry in HERDERS:
        data = dict(entry['user'])
        password = data.pop('password')
        herder = User(role=Role.HERDER, **data)
        herder.set_password(password)
        db.session.add(herder)
        db.session.flush()

        for product_data in entry['products']:
            db.session.add(Product(
                herder_id=herder.id,
                herder_name=herder.name,
                status=ProductStatus.APPROVED,
                images=[],
                **product_data
            ))

    customer = User(email='customer@example.com', name='Saraa', phone='95556677',
                    location='Ulaanbaatar', role=Role.CUSTOMER)
    customer.set_password('customer123')
    db.session.add(customer)

    db.session.commit()
    return True


def register_commands(app: Flask):
    """Attach CLI commands to the app."""

    @app.cli.command('create-admin')
    @click.option('--email', prompt='Email')
    @click.option('--name', prompt='Full Name')
    @click.option('--phone', default='', prompt='Phone (optional)', show_default=False)
    @click.password_option()
    def create_admin_command(email, name, phone, password):
        """Create an admin user."""
        db.create_all()
        user, created = create_admin_user(email, password, name, phone)
        if created:
            click.echo(f'Admin user created: {user.email}')
        else:
            click.echo(f'User {user.email} already existed and is now an admin.')

    @app.cli.command('seed')
    def seed_command():
        """Populate the database with sample herders, products and a customer."""
        if seed_database():
            click.echo('Database seeded.')
        else:
            click.echo('Database already seeded!')
