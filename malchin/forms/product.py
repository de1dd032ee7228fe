"""Product form used by herders."""

from flask_wtf import FlaskForm
from flask_wtf.file import MultipleFileField
from wtforms import StringField, TextAreaField, IntegerField, SelectField
from wtforms.validators import DataRequired, Length, NumberRange, Optional
from malchin.models import Category


class ProductForm(FlaskForm):
    title = StringField('Title', validators=[
        DataRequired(message='Title is required'),
        Length(max=150)
    ])
    description = TextAreaField('Description', validators=[
        Optional(),
        Length(max=5000)
    ])
    price = IntegerField('Price', validators=[
        NumberRange(min=0, message='Price is required and cannot be negative')
    ])
    unit = StringField('Unit', validators=[
        DataRequired(message='Unit is required'),
        Length(max=30)
    ])
    category = SelectField('Category', choices=[
        (Category.MEAT, 'Meat'),
        (Category.DAIRY, 'Dairy'),
    ])
    sub_category = StringField('Sub-category', validators=[
        Optional(),
        Length(max=50)
    ])
    quantity = IntegerField('Quantity on hand', validators=[
        NumberRange(min=0, message='Quantity is required and cannot be negative')
    ])
    images = MultipleFileField('Images')

    def product_data(self):
        return {
            'title': self.title.data,
            'description': self.description.data or '',
            'price': self.price.data,
            'unit': self.unit.data,
            'category': self.category.data,
            'sub_category': self.sub_category.data or '',
            'quantity': self.quantity.data,
        }

    def image_files(self):
        return [f for f in (self.images.data or []) if getattr(f, 'filename', '')]
