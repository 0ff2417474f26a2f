from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email, Length, Optional


class RegisterForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=8)])
    firstName = StringField("First name", validators=[Optional(), Length(max=120)])
    lastName = StringField("Last name", validators=[Optional(), Length(max=120)])


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])


class ProfileForm(FlaskForm):
    firstName = StringField("First name", validators=[Optional(), Length(max=120)])
    lastName = StringField("Last name", validators=[Optional(), Length(max=120)])
