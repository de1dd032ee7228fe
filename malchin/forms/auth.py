"""Authentication and profile forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SelectField
from wtforms.validators import DataRequired, Email, Length, EqualTo, ValidationError, Optional
from malchin.models import User, Role
from malchin.services.accounts import (MIN_PASSWORD_LENGTH, EMAIL_IN_USE, INVALID_EMAIL,
                                       WEAK_PASSWORD)


class LoginForm(FlaskForm):
    """Login form."""
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message=INVALID_EMAIL)
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    remember = BooleanField('Remember Me')


class RegistrationForm(FlaskForm):
    """Customer and herder registration form."""
    name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(min=2, max=100, message='Name must be between 2 and 100 characters')
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message=INVALID_EMAIL)
    ])
    role = SelectField('Account Type', choices=[
        (Role.CUSTOMER, 'Customer'),
        (Role.HERDER, 'Herder'),
    ], default=Role.CUSTOMER)
    phone = StringField('Phone Number', validators=[
        Optional(),
        Length(min=6, max=20, message='Please enter a valid phone number')
    ])
    location = StringField('Location', validators=[
        Optional(),
        Length(max=255)
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=MIN_PASSWORD_LENGTH, message=WEAK_PASSWORD)
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired(message='Please confirm your password'),
        EqualTo('password', message='Passwords must match')
    ])
    
    def validate_email(self, field):
        """Check if email already exists."""
        if User.query.filter_by(email=field.data.strip().lower()).first():
            raise ValidationError(EMAIL_IN_USE)


class ProfileForm(FlaskForm):
    """Profile edit form."""
    name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(min=2, max=100)
    ])
    phone = StringField('Phone Number', validators=[
        Optional(),
        Length(min=6, max=20)
    ])
    location = StringField('Location', validators=[
        Optional(),
        Length(max=255)
    ])
