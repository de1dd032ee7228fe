"""Checkout and order status forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField
from wtforms.validators import DataRequired, Length, Optional
from malchin.models import OrderStatus


class CheckoutForm(FlaskForm):
    name = StringField('Full Name', validators=[
        Optional(),
        Length(max=100)
    ])
    contact_phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required'),
        Length(min=6, max=20, message='Please enter a valid phone number')
    ])
    delivery_address = TextAreaField('Delivery Address', validators=[
        DataRequired(message='Delivery address is required'),
        Length(max=500)
    ])
    notes = TextAreaField('Notes', validators=[
        Optional(),
        Length(max=1000)
    ])


class OrderStatusForm(FlaskForm):
    status = SelectField('Status', choices=[
        (status, status) for status in OrderStatus.ALL + tuple(OrderStatus.ALIASES)
    ])
