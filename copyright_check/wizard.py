"""
Step sequencing for the usage-check wizard.

A :class:`WizardState` is immutable: every transition returns a new state.
Views keep the state in the session via :meth:`WizardState.to_session` and
:meth:`WizardState.from_session`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .choices import PREMISES_USAGES, UsageContext
from .evaluator import AnswerSet

FIRST_STEP = 1
LAST_STEP = 8

STEP_TITLES = {
    1: "Was möchtest du nutzen?",
    2: "Wurde das Werk mit KI erstellt?",
    3: "Woher stammt das Werk?",
    4: "Ist das Werk gemeinfrei?",
    5: "Hat das Werk eine Creative Commons Lizenz?",
    6: "Welche CC-Lizenz?",
    7: "Wofür möchtest du es nutzen?",
    8: "Zusatzfragen",
}


@dataclass(frozen=True)
class Extras:
    """Answers that are recorded and displayed but do not drive the evaluator."""

    description: str = ""
    is_ai_created: Optional[bool] = None
    has_human_creativity: Optional[bool] = None


@dataclass(frozen=True)
class WizardState:
    step: int = FIRST_STEP
    history: tuple = ()
    answers: AnswerSet = field(default_factory=AnswerSet)
    extras: Extras = field(default_factory=Extras)
    check_id: Optional[int] = None
    finished: bool = False

    def answer(self, step: int, data: dict) -> "WizardState":
        """Apply cleaned form *data* for *step* and move to the following step."""
        if step != self.step:
            raise ValueError(f"Expected answers for step {self.step}, got step {step}.")

        answers, extras = self.answers, self.extras
        next_step = step + 1

        if step == 1:
            answers = answers.update(media_type=data["media_type"])
        elif step == 2:
            is_ai = data["is_ai_created"]
            extras = replace(
                extras,
                is_ai_created=is_ai,
                has_human_creativity=data.get("has_human_creativity") if is_ai else None,
            )
        elif step == 3:
            answers = answers.update(source_type=data["source_type"])
            extras = replace(extras, description=data.get("description", ""))
        elif step == 4:
            public_domain = data["public_domain"]
            answers = answers.update(public_domain=public_domain)
            if public_domain:
                answers = answers.update(has_cc_license=None, cc_license=None, is_protected=False)
                next_step = 7
        elif step == 5:
            has_cc = data["has_cc_license"]
            answers = answers.update(has_cc_license=has_cc)
            if has_cc:
                answers = answers.update(is_protected=None)
            else:
                # without a CC license the work is assumed to be protected
                answers = answers.update(cc_license=None, is_protected=True)
                next_step = 7
        elif step == 6:
            answers = answers.update(cc_license=data["cc_license"])
        elif step == 7:
            if data["usage_type"] != answers.usage_type:
                answers = answers.update(is_public=None, usage_context=None)
            answers = answers.update(usage_type=data["usage_type"])
        elif step == LAST_STEP:
            answers = self._apply_context(answers, data)
        else:
            raise ValueError(f"Unknown wizard step {step}.")

        finished = step == LAST_STEP
        return replace(
            self,
            answers=answers,
            extras=extras,
            history=self.history + (step,),
            step=LAST_STEP if finished else next_step,
            finished=finished,
        )

    @staticmethod
    def _apply_context(answers: AnswerSet, data: dict) -> AnswerSet:
        context = data.get("usage_context") or None
        is_public = data.get("is_public")
        if answers.usage_type in PREMISES_USAGES and context:
            is_public = context == UsageContext.PUBLIC
        return answers.update(
            is_commercial=None if answers.public_domain else data.get("is_commercial"),
            is_public=is_public,
            usage_context=context,
            has_license=data.get("has_license"),
        )

    def back(self) -> "WizardState":
        if not self.history:
            return self
        return replace(self, step=self.history[-1], history=self.history[:-1], finished=False)

    def goto(self, step: int) -> "WizardState":
        """Jump back to an already visited *step*."""
        if step not in self.history:
            return self
        index = self.history.index(step)
        return replace(self, step=step, history=self.history[:index], finished=False)

    @property
    def is_complete(self) -> bool:
        """All steps of the visited path are answered."""
        return self.finished and self.answers.media_type is not None and self.answers.usage_type is not None

    @property
    def progress(self) -> int:
        return int(self.step / LAST_STEP * 100)

    @property
    def title(self) -> str:
        return STEP_TITLES[self.step]

    def to_session(self) -> dict:
        return {
            "step": self.step,
            "history": list(self.history),
            "answers": self.answers.to_dict(),
            "extras": {
                "description": self.extras.description,
                "is_ai_created": self.extras.is_ai_created,
                "has_human_creativity": self.extras.has_human_creativity,
            },
            "check_id": self.check_id,
            "finished": self.finished,
        }

    @classmethod
    def from_session(cls, data: Optional[dict]) -> "WizardState":
        if not data:
            return cls()
        return cls(
            step=data.get("step", FIRST_STEP),
            history=tuple(data.get("history", ())),
            answers=AnswerSet.from_mapping(data.get("answers", {})),
            extras=Extras(**data.get("extras", {})),
            check_id=data.get("check_id"),
            finished=data.get("finished", False),
        )

    @classmethod
    def for_check(cls, check) -> "WizardState":
        """Start an edit run pre-filled with the answers of an existing check."""
        return cls(
            answers=check.answer_set(),
            extras=Extras(
                description=check.description,
                is_ai_created=check.is_ai_created,
                has_human_creativity=check.has_human_creativity,
            ),
            check_id=check.pk,
        )
