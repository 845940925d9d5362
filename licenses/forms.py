from django import forms

from copyright_check.choices import CCLicense
from .models import CREATIVE_WORK_REASONS, EXPRESSION_FORMS, INDIVIDUAL_CHARACTER_REASONS, GeneratedLicense


def _reasons(label, options):
    return forms.MultipleChoiceField(
        label=label,
        required=False,
        choices=[(option, option) for option in options],
        widget=forms.CheckboxSelectMultiple,
    )


class LicenseForm(forms.ModelForm):
    creative_work_reasons = _reasons("Geistige Schöpfung", CREATIVE_WORK_REASONS)
    individual_character_reasons = _reasons("Individueller Charakter", INDIVIDUAL_CHARACTER_REASONS)
    expression_forms = _reasons("Form des Ausdrucks", EXPRESSION_FORMS)
    license = forms.ChoiceField(
        label="Creative Commons Lizenz",
        choices=CCLicense.choices,
        widget=forms.RadioSelect,
        error_messages={"required": "Bitte wähle eine Lizenz aus."},
    )

    # (reasons field, custom text field, message)
    JUSTIFICATION_GROUPS = (
        ("creative_work_reasons", "creative_work_custom", "Begründe, warum es eine geistige Schöpfung ist."),
        (
            "individual_character_reasons",
            "individual_character_custom",
            "Begründe den individuellen Charakter deines Werks.",
        ),
        ("expression_forms", "expression_custom", "Gib an, in welcher Form das Werk vorliegt."),
    )

    class Meta:
        model = GeneratedLicense
        fields = (
            "title",
            "media_type",
            "custom_media_type",
            "author_name",
            "description",
            "work_link",
            "creative_work_reasons",
            "creative_work_custom",
            "individual_character_reasons",
            "individual_character_custom",
            "expression_forms",
            "expression_custom",
            "license",
        )
        labels = {
            "title": "Titel des Werks",
            "media_type": "Art des Werks",
            "custom_media_type": "Andere Werkart",
            "author_name": "Urheber*in",
            "description": "Beschreibung",
            "work_link": "Link zum Werk (optional)",
            "creative_work_custom": "Eigene Begründung",
            "individual_character_custom": "Eigene Begründung",
            "expression_custom": "Andere Form",
        }
        widgets = {
            "description": forms.Textarea(attrs={"rows": 3}),
            "creative_work_custom": forms.Textarea(attrs={"rows": 2}),
            "individual_character_custom": forms.Textarea(attrs={"rows": 2}),
            "expression_custom": forms.Textarea(attrs={"rows": 2}),
        }

    def clean(self):
        data = super().clean()
        if data.get("media_type") == GeneratedLicense.WorkType.OTHER and not (data.get("custom_media_type") or "").strip():
            self.add_error("custom_media_type", "Bitte gib die Art des Werks an.")
        for reasons_field, custom_field, message in self.JUSTIFICATION_GROUPS:
            if not data.get(reasons_field) and not (data.get(custom_field) or "").strip():
                self.add_error(reasons_field, message)
        return data
