"""
Accounts Forms
"""

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password


class LoginForm(forms.Form):
    """Email + password sign in"""
    email = forms.EmailField(max_length=254)
    password = forms.CharField(strip=False)


class SignUpForm(forms.Form):
    """Rider sign up; the email doubles as the username"""
    email = forms.EmailField(max_length=150)
    password = forms.CharField(strip=False)

    def clean_email(self):
        email = self.cleaned_data['email'].lower()
        if get_user_model().objects.filter(username__iexact=email).exists():
            raise forms.ValidationError('An account with this email already exists.')
        return email

    def clean(self):
        cleaned_data = super().clean()
        email = cleaned_data.get('email')
        password = cleaned_data.get('password')

        if email and password:
            User = get_user_model()
            try:
                validate_password(password, user=User(username=email, email=email))
            except forms.ValidationError as e:
                self.add_error('password', e)

        return cleaned_data

    def save(self):
        email = self.cleaned_data['email']
        return get_user_model().objects.create_user(
            username=email,
            email=email,
            password=self.cleaned_data['password'],
        )
