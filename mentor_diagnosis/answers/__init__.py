"""Answer records for the four diagnostic modules.

Each module has a frozen pydantic model whose defaults are the module's
initial answers, plus plain functions that return updated copies.
"""

from mentor_diagnosis.answers.base import FrozenModel, new_item_id, set_path
from mentor_diagnosis.answers.delivery import DeliveryAnswers
from mentor_diagnosis.answers.mentee import EmpathyMap, MenteeAnswers
from mentor_diagnosis.answers.mentor import MentorAnswers
from mentor_diagnosis.answers.method import MethodAnswers

__all__ = [
    "DeliveryAnswers",
    "EmpathyMap",
    "FrozenModel",
    "MenteeAnswers",
    "MentorAnswers",
    "MethodAnswers",
    "new_item_id",
    "set_path",
]
