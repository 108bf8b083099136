"""Form variants: which table a submission lands in and how its fields are shaped"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, Type

from sqlmodel import SQLModel

from form_intake.models.submission import (
    EvaluationResponse,
    ExpectationResponse,
    FormationResponse,
)

# Honeypot field; real users never fill it in
BOT_FIELD = "bot-field"

# Role values meaning "see autre_fonction"
OTHER_ROLE_VALUES = ("Other", "Autre")

REQUIRED_FIELDS = ("prenom", "nom", "email", "fonction")

SESSION_DEFAULTS = {
    "formation_titre": "Fiscalité minière – Sycamore",
    "formation_modalite": "En ligne",
    "formation_debut": "2025-10-20",
    "formation_fin": "2025-10-24",
}


@dataclass(frozen=True)
class RatingField:
    """A numeric rating accepted within an inclusive range"""

    name: str
    min_value: int = 1
    max_value: int = 5


@dataclass(frozen=True)
class FormProfile:
    """Field set and storage target for one form variant.

    - required_fields: must be non-blank after trimming
    - defaults: substituted when the submitted value is empty
    - text_fields: optional free text, empty becomes null
    - rating_fields: coerced to in-range integers or null
    - fold_other_role: replace fonction with autre_fonction when fonction is "Other"
    """

    name: str
    table: Type[SQLModel]
    required_fields: Tuple[str, ...] = REQUIRED_FIELDS
    defaults: Dict[str, str] = field(default_factory=lambda: dict(SESSION_DEFAULTS))
    text_fields: Tuple[str, ...] = ()
    rating_fields: Tuple[RatingField, ...] = ()
    fold_other_role: bool = False

    @property
    def table_name(self) -> str:
        return self.table.__tablename__

    @property
    def columns(self) -> Tuple[str, ...]:
        """Stored column names in display order"""
        return (
            tuple(self.defaults)
            + ("prenom", "nom", "email", "telephone", "fonction")
            + tuple(f for f in self.text_fields if f != "telephone")
            + tuple(r.name for r in self.rating_fields)
            + ("user_agent", "remote_addr")
        )


_EVALUATION_RATINGS = tuple(
    RatingField(name)
    for name in (
        "org_objectifs",
        "org_plateforme",
        "org_rythme",
        "org_outil",
        "cont_adequation",
        "cont_equilibre",
        "cont_supports",
        "t_rts",
        "t_vf",
        "t_tva",
        "t_tva_remb",
        "t_is",
        "t_rns",
        "t_pf",
        "anim_maitrise",
        "anim_interaction",
        "res_objectifs",
    )
) + (RatingField("nps", 0, 10),)

_EVALUATION_TEXT = (
    "telephone",
    "autre_fonction",
    "competences",
    "points_forts",
    "ameliorations",
    "besoins_suivi",
)

PROFILES: Dict[str, FormProfile] = {
    "evaluation": FormProfile(
        name="evaluation",
        table=EvaluationResponse,
        text_fields=_EVALUATION_TEXT,
        rating_fields=_EVALUATION_RATINGS,
    ),
    "reponses": FormProfile(
        name="reponses",
        table=FormationResponse,
        text_fields=_EVALUATION_TEXT,
        rating_fields=_EVALUATION_RATINGS,
    ),
    "attentes": FormProfile(
        name="attentes",
        table=ExpectationResponse,
        text_fields=(
            "telephone",
            "attentes",
            "objectifs_personnels",
            "thematiques_prioritaires",
            "contraintes",
        ),
        rating_fields=(
            RatingField("niveau_connaissance"),
            RatingField("interet_formation"),
        ),
        fold_other_role=True,
    ),
}


def get_profile(name: str) -> FormProfile:
    """Look up a form profile by name.

    Raises:
        ValueError: If no profile has that name
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown form profile '{name}'. Expected one of: {', '.join(PROFILES)}"
        ) from None
