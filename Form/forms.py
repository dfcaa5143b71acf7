from flask_wtf import FlaskForm
from wtforms import BooleanField, HiddenField, IntegerField, PasswordField, StringField
from wtforms.validators import (
    AnyOf,
    Email,
    EqualTo,
    InputRequired,
    Length,
    NumberRange,
)
from util.constant import MIN_PASSWORD_LENGTH, SELLER_TYPE


def field_errors(form, aliases=None):
    """Lỗi đầu tiên của mỗi field, key theo tên field trên form HTML."""
    aliases = aliases or {}
    errors = {}
    for field in form:
        if field.errors:
            key = aliases.get(field.name, field.name)
            errors.setdefault(key, field.errors[0])
    return errors


def first_field_error(form, aliases=None):
    """Chỉ trả về lỗi của field đầu tiên theo thứ tự khai báo trên form."""
    errors = field_errors(form, aliases)
    if not errors:
        return {}
    key = next(iter(errors))
    return {key: errors[key]}


class LoginForm(FlaskForm):
    email = StringField(
        "Email address",
        validators=[
            InputRequired(message="Email is required"),
            Email(message="Email is invalid"),
        ],
    )
    password = PasswordField(
        "Password", validators=[InputRequired(message="Password is required")]
    )
    redirect_to = HiddenField("Redirect to", name="redirectTo", default="/")
    remember = BooleanField("Remember me")


class RegisterForm(FlaskForm):
    name = StringField(
        "Name",
        validators=[InputRequired(message="Name is required"), Length(max=120)],
    )
    email = StringField(
        "Email",
        validators=[
            InputRequired(message="Email is invalid"),
            Email(message="Email is invalid"),
            Length(max=120, message="Email is invalid"),
        ],
    )
    password = PasswordField(
        "Password",
        validators=[
            InputRequired(message="Password is required"),
            Length(min=MIN_PASSWORD_LENGTH, message="Password is too short"),
        ],
    )
    confirm_password = PasswordField(
        "Confirm password",
        name="confirmPassword",
        validators=[
            InputRequired(message="Password is required"),
            Length(min=MIN_PASSWORD_LENGTH, message="Password is too short"),
            EqualTo("password", message="Passwords do not match"),
        ],
    )
    address = StringField(
        "Address", validators=[InputRequired(message="Address is required")]
    )
    phone_no = StringField(
        "Phone number",
        name="phoneNo",
        validators=[InputRequired(message="Phone Number is required")],
    )

    # confirmPassword dùng chung ô lỗi với password
    error_aliases = {"confirmPassword": "password"}


class SellerRegisterForm(RegisterForm):
    type = StringField(
        "Type",
        validators=[
            InputRequired(message="Type is required"),
            AnyOf([t.value for t in SELLER_TYPE], message="Type is invalid"),
        ],
    )
    address = StringField(
        "Address", validators=[InputRequired(message="Address is required")]
    )
    phone_no = StringField(
        "Phone number",
        name="phoneNo",
        validators=[InputRequired(message="Phone Number is required")],
    )


class ResetPasswordForm(FlaskForm):
    user_id = IntegerField(
        "User",
        name="userId",
        validators=[InputRequired(message="User is required"), NumberRange(min=1)],
    )
    password = PasswordField(
        "New password",
        validators=[
            InputRequired(message="Password is required"),
            Length(min=MIN_PASSWORD_LENGTH, message="Password is too short"),
        ],
    )
