"""Answer model for the Delivery module (the offer).

Three steps: group identity, mandatory delivery (meeting frequency,
engagement formats, community rules), and overdelivery (individual support
and accelerators).
"""

import logging
from typing import Literal

from pydantic import Field

from mentor_diagnosis.config import ENGAGEMENT_OPTIONS

from .base import FrozenModel, new_item_id, remove_item, replace_item

logger = logging.getLogger(__name__)


class Accelerator(FrozenModel):
    id: str
    pillar: str = ""
    acceleration: str = ""


def _default_accelerators() -> list[Accelerator]:
    return [
        Accelerator(
            id="1",
            pillar="Assistente de Vendas",
            acceleration=(
                "Inteligência Artificial que participa de reuniões comigo "
                "e preenche o CRM automaticamente"
            ),
        ),
        Accelerator(
            id="2",
            pillar="Plataforma de Conteúdo",
            acceleration='Acesso a um portal estilo "Netflix" com aulas gravadas',
        ),
        Accelerator(
            id="3",
            pillar="Suporte/Acompanhamento Individual",
            acceleration="Canal de atendimento rápido para resolver problemas",
        ),
    ]


class MandatoryDelivery(FrozenModel):
    frequency: Literal["2", "3", "4"] | None = None
    online_engagement: list[str] = Field(default_factory=list)
    other_engagement_text: str = ""
    community_rules: str = ""


class Overdelivery(FrozenModel):
    has_individual: Literal["yes", "no"] | None = None
    individual_details: str = ""
    frequency: str = ""
    accelerators: list[Accelerator] = Field(default_factory=_default_accelerators)


class DeliveryAnswers(FrozenModel):
    """All answers of the Delivery module."""

    group_name: str = ""
    unique_objective: str = ""
    mandatory: MandatoryDelivery = Field(default_factory=MandatoryDelivery)
    overdelivery: Overdelivery = Field(default_factory=Overdelivery)


def toggle_engagement(answers: DeliveryAnswers, option: str) -> DeliveryAnswers:
    if option not in ENGAGEMENT_OPTIONS:
        raise ValueError(f"Unknown engagement option: {option}")
    selected = answers.mandatory.online_engagement
    if option in selected:
        selected = [o for o in selected if o != option]
    else:
        selected = [*selected, option]
    mandatory = answers.mandatory.model_copy(update={"online_engagement": selected})
    return answers.model_copy(update={"mandatory": mandatory})


def _with_accelerators(
    answers: DeliveryAnswers, accelerators: list[Accelerator]
) -> DeliveryAnswers:
    overdelivery = answers.overdelivery.model_copy(update={"accelerators": accelerators})
    return answers.model_copy(update={"overdelivery": overdelivery})


def add_accelerator(answers: DeliveryAnswers) -> DeliveryAnswers:
    return _with_accelerators(
        answers, [*answers.overdelivery.accelerators, Accelerator(id=new_item_id())]
    )


def update_accelerator(
    answers: DeliveryAnswers,
    accelerator_id: str,
    pillar: str | None = None,
    acceleration: str | None = None,
) -> DeliveryAnswers:
    changes = {
        k: v for k, v in {"pillar": pillar, "acceleration": acceleration}.items() if v is not None
    }
    return _with_accelerators(
        answers, replace_item(answers.overdelivery.accelerators, accelerator_id, **changes)
    )


def remove_accelerator(answers: DeliveryAnswers, accelerator_id: str) -> DeliveryAnswers:
    accelerators = remove_item(answers.overdelivery.accelerators, accelerator_id)
    return _with_accelerators(answers, accelerators)


OPERATIONS = {
    "toggle_engagement": toggle_engagement,
    "add_accelerator": add_accelerator,
    "update_accelerator": update_accelerator,
    "remove_accelerator": remove_accelerator,
}
