from django import forms

from .choices import CCLicense, MediaType, SourceType, UsageType, asks_exposure, contexts_for
from .wizard import WizardState

YES = "yes"
NO = "no"
UNKNOWN = "unknown"

YES_NO = [(YES, "Ja"), (NO, "Nein")]
YES_NO_UNKNOWN = YES_NO + [(UNKNOWN, "Weiss nicht")]


def parse_answer(value):
    """Map a radio value to the tri-state answer (True / False / None)."""
    if value == YES:
        return True
    if value == NO:
        return False
    return None


def answer_value(value):
    if value is True:
        return YES
    if value is False:
        return NO
    return None


def tri_state(label, allow_unknown=True, required=True, help_text=""):
    return forms.TypedChoiceField(
        label=label,
        choices=YES_NO_UNKNOWN if allow_unknown else YES_NO,
        coerce=parse_answer,
        empty_value=None,
        widget=forms.RadioSelect,
        required=required,
        help_text=help_text,
    )


class MediaTypeForm(forms.Form):
    media_type = forms.ChoiceField(label="Medientyp", choices=MediaType.choices, widget=forms.RadioSelect)


class AiCreationForm(forms.Form):
    is_ai_created = tri_state("Wurde das Werk mit KI (z.B. ChatGPT, Midjourney) erstellt?", allow_unknown=False)
    has_human_creativity = tri_state(
        "Hat ein Mensch wesentlich kreativ mitgewirkt?",
        allow_unknown=False,
        required=False,
        help_text="Rein KI-generierte Inhalte sind in der Schweiz in der Regel nicht urheberrechtlich geschützt.",
    )

    def clean(self):
        data = super().clean()
        if data.get("is_ai_created") and data.get("has_human_creativity") is None:
            self.add_error("has_human_creativity", "Bitte beantworte diese Frage.")
        return data


class SourceForm(forms.Form):
    source_type = forms.ChoiceField(label="Quelle", choices=SourceType.choices, widget=forms.RadioSelect)
    description = forms.CharField(
        label="Beschreibung (optional)",
        required=False,
        max_length=500,
        widget=forms.Textarea(attrs={"rows": 3, "placeholder": "z.B. Foto vom Matterhorn aus Wikipedia"}),
    )


class PublicDomainForm(forms.Form):
    public_domain = tri_state(
        "Ist das Werk gemeinfrei?",
        help_text="Gemeinfrei sind z.B. Werke, deren Urheber vor mehr als 70 Jahren gestorben ist.",
    )


class CCFlagForm(forms.Form):
    has_cc_license = tri_state("Steht das Werk unter einer Creative Commons Lizenz?")


class CCVariantForm(forms.Form):
    cc_license = forms.ChoiceField(
        label="CC-Lizenz",
        choices=CCLicense.choices + [("", "Weiss nicht")],
        required=False,
        widget=forms.RadioSelect,
    )

    def clean_cc_license(self):
        return self.cleaned_data.get("cc_license") or None


class UsageTypeForm(forms.Form):
    usage_type = forms.ChoiceField(label="Nutzung", choices=UsageType.choices, widget=forms.RadioSelect)


class ContextForm(forms.Form):
    """Last step; which questions are asked depends on the earlier answers."""

    def __init__(self, *args, answers=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.answers = answers
        usage_type = answers.usage_type if answers else None

        if not (answers and answers.public_domain):
            self.fields["is_commercial"] = tri_state("Ist die Nutzung kommerziell (Geld verdienen)?")
        if asks_exposure(usage_type):
            self.fields["is_public"] = tri_state("Wird das Ergebnis öffentlich zugänglich?")

        contexts = contexts_for(usage_type)
        if contexts:
            self.fields["usage_context"] = forms.ChoiceField(
                label="Wie nutzt du das Werk?",
                choices=[(c.value, c.label) for c in contexts] + [("", "Weiss nicht")],
                required=False,
                widget=forms.RadioSelect,
            )
        self.fields["has_license"] = tri_state("Hast du bereits eine Lizenz oder Erlaubnis vom Urheber?")

    def clean_usage_context(self):
        return self.cleaned_data.get("usage_context") or None


STEP_FORMS = {
    1: MediaTypeForm,
    2: AiCreationForm,
    3: SourceForm,
    4: PublicDomainForm,
    5: CCFlagForm,
    6: CCVariantForm,
    7: UsageTypeForm,
    8: ContextForm,
}


def _initial(state: WizardState) -> dict:
    answers, extras = state.answers, state.extras
    values = {
        "media_type": answers.media_type,
        "is_ai_created": answer_value(extras.is_ai_created),
        "has_human_creativity": answer_value(extras.has_human_creativity),
        "source_type": answers.source_type,
        "description": extras.description,
        "public_domain": answer_value(answers.public_domain),
        "has_cc_license": answer_value(answers.has_cc_license),
        "cc_license": answers.cc_license,
        "usage_type": answers.usage_type,
        "is_commercial": answer_value(answers.is_commercial),
        "is_public": answer_value(answers.is_public),
        "usage_context": answers.usage_context,
        "has_license": answer_value(answers.has_license),
    }
    return {key: value for key, value in values.items() if value is not None}


def form_for_step(state: WizardState, data=None) -> forms.Form:
    form_class = STEP_FORMS[state.step]
    kwargs = {"data": data, "initial": _initial(state)}
    if form_class is ContextForm:
        kwargs["answers"] = state.answers
    return form_class(**kwargs)
