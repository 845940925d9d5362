from django import forms

from .models import TAG_OPTIONS, CaseExample


class CaseExampleForm(forms.ModelForm):
    class Meta:
        model = CaseExample
        fields = ("title", "description", "category")
        labels = {
            "title": "Titel",
            "description": "Beschreibung",
            "category": "Kategorie",
        }
        widgets = {
            "title": forms.TextInput(attrs={"maxlength": 100}),
            "description": forms.Textarea(attrs={"rows": 5, "maxlength": 500}),
        }


class CaseSearchForm(forms.Form):
    q = forms.CharField(label="Suche", required=False)
    tags = forms.MultipleChoiceField(
        label="Tags",
        required=False,
        choices=[(tag, tag) for tag in TAG_OPTIONS],
        widget=forms.CheckboxSelectMultiple,
    )


class AdminCommentForm(forms.Form):
    text = forms.CharField(
        label="Admin-Kommentar",
        widget=forms.Textarea(attrs={"rows": 3, "placeholder": "Kommentar... (Links: [Text](URL))"}),
    )
