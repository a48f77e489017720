"""Forms for the sign-in page."""

from __future__ import annotations

from django import forms

# Inputs keep the bare `user`/`pass` names and ids used by the page markup.
LOGIN_FORM_AUTO_ID = "%s"


class LoginForm(forms.Form):
    """Validate the username/password pair submitted from `#loginForm`.

    The password field is named `pass`, which cannot be a class attribute, so
    it is added in `__init__`.
    """

    user = forms.CharField(
        label="Username or email",
        max_length=255,
        widget=forms.TextInput(attrs={"autocomplete": "username", "autofocus": True}),
    )

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("auto_id", LOGIN_FORM_AUTO_ID)
        super().__init__(*args, **kwargs)
        self.fields["pass"] = forms.CharField(
            label="Password",
            strip=False,
            widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
        )

    @property
    def credentials(self) -> tuple[str, str]:
        """Return the cleaned (username, password) pair."""

        return self.cleaned_data["user"].strip(), self.cleaned_data["pass"]

    def first_error(self) -> str:
        """Return a single user-facing message for an invalid submission."""

        if "user" in self.errors:
            return "Please enter your username or email."
        if "pass" in self.errors:
            return "Please enter your password."
        return "Please check the form and try again."
