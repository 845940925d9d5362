"""
Decision evaluator for the usage check.

Maps an :class:`AnswerSet` to an :class:`Outcome` by walking an ordered list of
rules; the first rule whose predicate matches produces the outcome. The
evaluator is pure: no I/O, no mutation, and it never raises for any
combination of answers. Unknown tri-state answers (``None``) fall back to the
more restrictive branch and set ``needs_review`` on the outcome.

The heuristics follow the Swiss Copyright Act (URG) in simplified form:
Art. 19 (private and classroom use) and Art. 25 (quotation right).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Callable, Mapping, NamedTuple, Optional

from .choices import CCLicense, MediaType, ONLINE_USAGES, SourceType, UsageContext, UsageType


class Category:
    ALLOWED = "allowed"
    CONDITIONAL = "conditional"
    FORBIDDEN = "forbidden"

    COLORS = {
        ALLOWED: "green",
        CONDITIONAL: "yellow",
        FORBIDDEN: "red",
    }


def normalize_choice(choices, value):
    """
    Resolve *value* to a choice value, accepting the stored value, its label
    or the label without its parenthesised hint ('Präsentation'), case-insensitively.
    Unrecognised values are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    wanted = value.strip().casefold()
    for choice in choices:
        label = str(choice.label)
        if wanted in (choice.value.casefold(), label.casefold(), label.split(" (")[0].casefold()):
            return choice.value
    return value


@dataclass(frozen=True)
class AnswerSet:
    media_type: Optional[str] = None
    source_type: Optional[str] = None
    public_domain: Optional[bool] = None
    has_cc_license: Optional[bool] = None
    cc_license: Optional[str] = None
    is_protected: Optional[bool] = None
    usage_type: Optional[str] = None
    is_public: Optional[bool] = None
    usage_context: Optional[str] = None
    has_license: Optional[bool] = None
    is_commercial: Optional[bool] = None

    # camelCase keys as stored by earlier versions of the check form
    _ALIASES = {
        "mediaType": "media_type",
        "sourceType": "source_type",
        "publicDomain": "public_domain",
        "isPublicDomain": "public_domain",
        "hasCCLicense": "has_cc_license",
        "ccLicense": "cc_license",
        "isProtected": "is_protected",
        "usageType": "usage_type",
        "isPublic": "is_public",
        "usageContext": "usage_context",
        "hasLicense": "has_license",
        "isCommercial": "is_commercial",
    }

    _CHOICES = {
        "media_type": MediaType,
        "source_type": SourceType,
        "cc_license": CCLicense,
        "usage_type": UsageType,
        "usage_context": UsageContext,
    }

    @classmethod
    def from_mapping(cls, data: Mapping) -> "AnswerSet":
        names = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = cls._ALIASES.get(key, key)
            if name not in names:
                continue
            if value == "":
                value = None
            elif name in cls._CHOICES:
                value = normalize_choice(cls._CHOICES[name], value)
            values[name] = value
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)

    def update(self, **changes) -> "AnswerSet":
        return replace(self, **changes)

    @property
    def commercial(self) -> bool:
        return self.is_commercial is True or self.usage_type == UsageType.COMMERCIAL

    @property
    def commercial_unknown(self) -> bool:
        return self.is_commercial is None and self.usage_type != UsageType.COMMERCIAL

    @property
    def license_variant(self) -> Optional[CCLicense]:
        try:
            return CCLicense(self.cc_license)
        except ValueError:
            return None


@dataclass(frozen=True)
class Outcome:
    category: str
    title: str
    message: str
    allowed_uses: tuple = ()
    restricted_uses: tuple = ()
    forbidden_uses: tuple = ()
    recommendations: tuple = ()
    needs_review: bool = False
    rule: str = field(default="", compare=False)

    @property
    def color(self) -> str:
        return Category.COLORS[self.category]

    @property
    def passed(self) -> bool:
        return self.category != Category.FORBIDDEN

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "color": self.color,
            "title": self.title,
            "message": self.message,
            "allowed_uses": list(self.allowed_uses),
            "restricted_uses": list(self.restricted_uses),
            "forbidden_uses": list(self.forbidden_uses),
            "recommendations": list(self.recommendations),
            "needs_review": self.needs_review,
            "rule": self.rule,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Outcome":
        return cls(
            category=data.get("category", Category.CONDITIONAL),
            title=data.get("title", ""),
            message=data.get("message", ""),
            allowed_uses=tuple(data.get("allowed_uses") or ()),
            restricted_uses=tuple(data.get("restricted_uses") or ()),
            forbidden_uses=tuple(data.get("forbidden_uses") or ()),
            recommendations=tuple(data.get("recommendations") or ()),
            needs_review=bool(data.get("needs_review", False)),
            rule=data.get("rule", ""),
        )


class Rule(NamedTuple):
    name: str
    applies: Callable[[AnswerSet], bool]
    produce: Callable[[AnswerSet], Outcome]


def _review(outcome: Outcome) -> Outcome:
    return replace(outcome, needs_review=True)


# --- top-level outcomes -----------------------------------------------------

def _public_domain(answers: AnswerSet) -> Outcome:
    return Outcome(
        category=Category.ALLOWED,
        title="Gemeinfrei: frei nutzbar",
        message="Das Werk ist gemeinfrei (Public Domain). Du darfst es für jeden Zweck nutzen.",
        allowed_uses=(
            "Alle Nutzungen erlaubt",
            "Keine Einschränkungen",
            "Quellenangabe empfohlen, aber nicht verpflichtend",
        ),
        recommendations=(
            "Du kannst das Werk kopieren, verändern und verbreiten",
            "Auch kommerzielle Nutzung ist erlaubt",
            "Gib trotzdem die Quelle an - wissenschaftlicher Standard",
        ),
    )


def _not_protected(answers: AnswerSet) -> Outcome:
    return Outcome(
        category=Category.ALLOWED,
        title="Nicht geschützt: frei nutzbar",
        message="Das Werk ist nicht urheberrechtlich geschützt.",
        allowed_uses=("Alle Nutzungen erlaubt",),
        recommendations=("Du kannst das Werk frei nutzen",),
    )


def needs_further_review() -> Outcome:
    return Outcome(
        category=Category.CONDITIONAL,
        title="Unklar: weitere Prüfung nötig",
        message="Die Situation ist komplex und lässt sich mit diesen Angaben nicht eindeutig beurteilen.",
        recommendations=(
            "Kontaktiere das IGE (www.ige.ch)",
            "Oder hole dir rechtliche Beratung",
            "Im Zweifel: Alternative nutzen",
        ),
        needs_review=True,
    )


# --- CC license sub-rule ----------------------------------------------------

def _cc_license(answers: AnswerSet) -> Outcome:
    variant = answers.license_variant
    if variant is CCLicense.CC0:
        return Outcome(
            category=Category.ALLOWED,
            title="CC0: frei nutzbar",
            message="Der Urheber hat auf alle Rechte verzichtet.",
            allowed_uses=("Alle Nutzungen erlaubt", "Keine Quellenangabe nötig", "Kommerziell erlaubt"),
            recommendations=("Gib trotzdem die Quelle an - gute Praxis",),
        )

    unknown = variant is None
    if unknown:
        variant = CCLicense.BY_NC_ND

    restrictions = ["Quellenangabe nach TASL-Formel erforderlich"]

    if variant.non_commercial and answers.commercial:
        outcome = Outcome(
            category=Category.FORBIDDEN,
            title="Nicht erlaubt!",
            message="Die CC-Lizenz verbietet kommerzielle Nutzung.",
            restricted_uses=tuple(restrictions),
            forbidden_uses=("Kommerzielle Nutzung nicht erlaubt",),
            recommendations=(
                "Kontaktiere den Urheber für eine kommerzielle Lizenz",
                "Oder nutze ein Werk mit kommerziell-freundlicher Lizenz (CC-BY, CC-BY-SA)",
            ),
        )
        return _review(outcome) if unknown else outcome

    if variant.no_derivatives:
        restrictions.append("Keine Bearbeitung erlaubt - nur unverändert nutzen")
    if variant.share_alike:
        restrictions.append("Bearbeitungen müssen unter gleicher Lizenz geteilt werden")

    allowed = ["Nutzen und Teilen erlaubt"]
    if not variant.no_derivatives:
        allowed.append("Bearbeitung erlaubt")
    if not variant.non_commercial:
        allowed.append("Kommerziell erlaubt")

    name = "unbekannter CC-Lizenz" if unknown else variant.value
    outcome = Outcome(
        category=Category.CONDITIONAL,
        title="Erlaubt mit Bedingungen",
        message=f"Das Werk ist unter {name} lizenziert.",
        allowed_uses=tuple(allowed),
        restricted_uses=tuple(restrictions),
        recommendations=(
            f'Quellenangabe: "Titel" von Autor, lizenziert unter {name}',
            "Prüfe die genauen Lizenzbedingungen auf creativecommons.org",
        ),
    )
    if unknown:
        outcome = _review(
            replace(
                outcome,
                recommendations=outcome.recommendations + ("Kläre ab, welche CC-Variante genau gilt",),
            )
        )
    elif variant.non_commercial and answers.commercial_unknown:
        outcome = _review(outcome)
    return outcome


# --- protected usage sub-rule -----------------------------------------------

def _commercial(answers: AnswerSet) -> Outcome:
    if answers.has_license is True:
        return Outcome(
            category=Category.ALLOWED,
            title="Erlaubt mit Lizenz!",
            message="Du hast eine Lizenz vom Urheber.",
            allowed_uses=("Nutzung gemäss Lizenzvertrag",),
            recommendations=("Halte dich an die Lizenzvereinbarung",),
        )
    outcome = Outcome(
        category=Category.FORBIDDEN,
        title="Lizenz erforderlich!",
        message="Für kommerzielle Nutzung brauchst du eine Lizenz.",
        forbidden_uses=("Kommerzielle Nutzung ohne Lizenz",),
        recommendations=(
            "Kontaktiere den Urheber",
            "Kaufe eine Lizenz (z.B. bei Stock-Foto-Agenturen)",
            "Nutze CC-lizenzierte oder gemeinfreie Alternativen",
        ),
    )
    return _review(outcome) if answers.has_license is None else outcome


def _written_private(answers: AnswerSet) -> Outcome:
    context = answers.usage_context
    if context == UsageContext.QUOTATION:
        return Outcome(
            category=Category.ALLOWED,
            title="Erlaubt als Zitat!",
            message="Zitatrecht (Art. 25 URG) gilt.",
            allowed_uses=("Als Zitat mit Quellenangabe", "Für Analyse/Erläuterung"),
            restricted_uses=("Nur angemessener Umfang", "Quelle vollständig angeben"),
            recommendations=(
                "Gib Autor, Titel, Jahr, Quelle an",
                "Zitat muss deiner Argumentation dienen",
                "Deine Arbeit muss überwiegen",
            ),
        )
    if context == UsageContext.MAIN_CONTENT:
        return Outcome(
            category=Category.CONDITIONAL,
            title="Grauzone",
            message="Eigengebrauch für Bildung (Art. 19 URG).",
            allowed_uses=("Für private Abgabe beim Lehrer",),
            restricted_uses=("Nicht öffentlich teilen", "Nur im Bildungskontext"),
            forbidden_uses=("Online-Publikation", "Weitergabe an Dritte"),
            recommendations=("Sicherer: Als Zitat verwenden", "Oder Erlaubnis vom Urheber einholen"),
        )
    if context == UsageContext.DERIVATIVE:
        return _derivative_forbidden()
    return needs_further_review()


def _derivative_forbidden() -> Outcome:
    return Outcome(
        category=Category.FORBIDDEN,
        title="Nicht erlaubt!",
        message="Bearbeitung braucht Erlaubnis des Urhebers.",
        forbidden_uses=("Bearbeitung ohne Erlaubnis",),
        recommendations=(
            "Kontaktiere den Urheber",
            "Oder nutze das Original als Zitat",
            "Oder schaffe freie Benutzung (völlig neu)",
        ),
    )


def _written_public(answers: AnswerSet) -> Outcome:
    context = answers.usage_context
    if context == UsageContext.QUOTATION:
        return Outcome(
            category=Category.ALLOWED,
            title="Erlaubt als Zitat!",
            message="Zitatrecht gilt auch bei Publikation.",
            allowed_uses=("Als Zitat mit Quellenangabe",),
            restricted_uses=("Nur angemessener Umfang", "Quelle vollständig angeben"),
            recommendations=(
                "Bei Bachelor-/Masterarbeiten im Repository: Zitat ist OK",
                "Komplette Bilder als Hauptcontent: problematisch",
            ),
        )
    if context == UsageContext.DERIVATIVE:
        return _derivative_forbidden()
    outcome = Outcome(
        category=Category.FORBIDDEN,
        title="Nicht erlaubt!",
        message="Öffentliche Nutzung braucht Lizenz oder muss Zitat sein.",
        forbidden_uses=("Als Hauptinhalt ohne Lizenz",),
        recommendations=(
            "Nutze nur als Zitat",
            "Oder hole Lizenz ein",
            "Oder nutze CC-lizenzierte Alternativen",
        ),
    )
    return _review(outcome) if context is None else outcome


def _written_work(answers: AnswerSet) -> Outcome:
    if answers.is_public is False:
        return _written_private(answers)
    outcome = _written_public(answers)
    return _review(outcome) if answers.is_public is None else outcome


def _presentation(answers: AnswerSet) -> Outcome:
    if answers.is_public is False:
        return Outcome(
            category=Category.ALLOWED,
            title="Erlaubt für Unterricht!",
            message="Unterrichtsausnahme (Art. 19 URG) gilt.",
            allowed_uses=("Im Klassenzimmer zeigen", "Auf Klassen-Moodle teilen"),
            restricted_uses=("Nur für konkrete Klasse", "Nicht öffentlich zugänglich"),
            forbidden_uses=("Auf Schulwebsite posten", "Online für alle teilen"),
            recommendations=(
                "Zeige es im Unterricht",
                "Oder teile es nur mit der Klasse (geschütztes LMS)",
            ),
        )
    outcome = Outcome(
        category=Category.FORBIDDEN,
        title="Nicht erlaubt!",
        message="Öffentliche Präsentationen brauchen Lizenz.",
        forbidden_uses=("Online für alle teilen",),
        recommendations=(
            "Hole Lizenz ein",
            "Oder nutze CC-lizenzierte Bilder",
            "Oder verlinke statt einzubetten",
        ),
    )
    return _review(outcome) if answers.is_public is None else outcome


def _online(answers: AnswerSet) -> Outcome:
    if answers.usage_context == UsageContext.QUOTATION:
        return Outcome(
            category=Category.CONDITIONAL,
            title="Erlaubt als Zitat",
            message="Zitatrecht gilt online, aber mit strengen Regeln.",
            allowed_uses=("Als Zitat mit Quellenangabe",),
            restricted_uses=("Nur zur Erläuterung", "Angemessener Umfang"),
            forbidden_uses=("Als Hauptbild ohne Bezug",),
            recommendations=(
                "Zitat muss deinem Text dienen",
                "Nicht nur dekorativ",
                "Quellenangabe vollständig",
            ),
        )
    outcome = Outcome(
        category=Category.FORBIDDEN,
        title="Lizenz erforderlich!",
        message="Online-Nutzung braucht Erlaubnis.",
        forbidden_uses=("Als Hauptbild ohne Lizenz",),
        recommendations=(
            "Hole Erlaubnis vom Urheber",
            "Nutze CC-lizenzierte Bilder (Unsplash, Pixabay)",
            "Oder nutze nur als Zitat",
        ),
    )
    return _review(outcome) if answers.usage_context is None else outcome


PROTECTED_USAGE_RULES = (
    Rule("commercial", lambda a: a.commercial, _commercial),
    Rule("written_work", lambda a: a.usage_type == UsageType.WRITTEN_WORK, _written_work),
    Rule("presentation", lambda a: a.usage_type == UsageType.PRESENTATION, _presentation),
    Rule("online", lambda a: a.usage_type in ONLINE_USAGES, _online),
)


def _protected_usage(answers: AnswerSet) -> Outcome:
    outcome = _first_match(PROTECTED_USAGE_RULES, answers)
    # Reached by falling through unanswered status questions.
    unsettled = None in (answers.public_domain, answers.has_cc_license, answers.is_protected)
    if unsettled or answers.commercial_unknown:
        return _review(outcome)
    return outcome


RULES = (
    Rule("public_domain", lambda a: a.public_domain is True, _public_domain),
    Rule("cc_license", lambda a: a.has_cc_license is True, _cc_license),
    Rule("not_protected", lambda a: a.is_protected is False, _not_protected),
    Rule("protected_usage", lambda a: True, _protected_usage),
)


def _first_match(rules, answers: AnswerSet) -> Outcome:
    for rule in rules:
        if rule.applies(answers):
            outcome = rule.produce(answers)
            if not outcome.rule:
                outcome = replace(outcome, rule=rule.name)
            return outcome
    return replace(needs_further_review(), rule="fallback")


def evaluate(answers: AnswerSet) -> Outcome:
    """Return the outcome of the first matching rule for *answers*."""
    return _first_match(RULES, answers)
