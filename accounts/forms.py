from django import forms
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.forms import AuthenticationForm

User = get_user_model()


class RegisterForm(forms.Form):
    display_name = forms.CharField(
        max_length=120,
        label="Lernname",
        help_text="Unter diesem Namen erscheinst du bei Fallbeispielen und auf Zertifikaten.",
    )

    def clean_display_name(self):
        value = self.cleaned_data["display_name"].strip()
        if not value:
            raise forms.ValidationError("Bitte gib einen Lernnamen ein.")
        return value


class AccessCodeLoginForm(forms.Form):
    access_code = forms.CharField(
        max_length=20,
        label="Zugangscode",
        widget=forms.TextInput(attrs={"placeholder": "XXXX-XXXX-XXXX", "autocomplete": "off"}),
    )

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        data = super().clean()
        code = data.get("access_code")
        if code:
            self.user_cache = authenticate(self.request, access_code=code)
            if self.user_cache is None:
                raise forms.ValidationError("Ungültiger Zugangscode")
        return data

    def get_user(self):
        return self.user_cache


class AdminLoginForm(AuthenticationForm):
    """Username/password login that also accepts the account's email address."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["username"].label = "E-Mail oder Benutzername"

    def clean(self):
        username = self.cleaned_data.get("username")
        if username and "@" in username:
            match = User.objects.filter(email__iexact=username).first()
            if match:
                self.cleaned_data["username"] = match.get_username()
        return super().clean()


class ProfileForm(forms.ModelForm):
    class Meta:
        model = User
        fields = ("display_name", "email")
        labels = {
            "display_name": "Lernname",
            "email": "E-Mail (optional)",
        }
