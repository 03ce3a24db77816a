from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Length


class ApiForm(FlaskForm):
    """Formulário alimentado pelo corpo JSON da requisição (sem CSRF)."""

    class Meta:
        csrf = False


class LoginForm(ApiForm):
    email = StringField('Email', validators=[DataRequired()])
    password = PasswordField('Senha', validators=[DataRequired()])


class SignupForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(), Length(max=120)])
    password = PasswordField('Senha', validators=[DataRequired()])
    name = StringField('Nome', validators=[DataRequired(), Length(max=100)])
