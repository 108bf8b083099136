"""SQLModel tables receiving form submissions in the hosted store"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class SessionRespondentFields(SQLModel):
    """Columns shared by every form variant: training session, respondent, provenance"""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    # Training session metadata
    formation_titre: str
    formation_modalite: str
    formation_debut: str
    formation_fin: str

    # Respondent
    prenom: str
    nom: str
    email: str
    telephone: Optional[str] = None
    fonction: str

    # Request provenance, audit only
    user_agent: Optional[str] = None
    remote_addr: Optional[str] = None


class EvaluationFields(SessionRespondentFields):
    """End-of-training evaluation: ratings, free text and NPS"""

    autre_fonction: Optional[str] = None

    # Organisation & logistics (1-5)
    org_objectifs: Optional[int] = None
    org_plateforme: Optional[int] = None
    org_rythme: Optional[int] = None
    org_outil: Optional[int] = None

    # Content & pedagogy (1-5)
    cont_adequation: Optional[int] = None
    cont_equilibre: Optional[int] = None
    cont_supports: Optional[int] = None

    # Themes (1-5)
    t_rts: Optional[int] = None
    t_vf: Optional[int] = None
    t_tva: Optional[int] = None
    t_tva_remb: Optional[int] = None
    t_is: Optional[int] = None
    t_rns: Optional[int] = None
    t_pf: Optional[int] = None

    # Facilitation (1-5)
    anim_maitrise: Optional[int] = None
    anim_interaction: Optional[int] = None

    # Outcomes (1-5)
    res_objectifs: Optional[int] = None

    # Free text
    competences: Optional[str] = None
    points_forts: Optional[str] = None
    ameliorations: Optional[str] = None
    besoins_suivi: Optional[str] = None

    # Net promoter score (0-10)
    nps: Optional[int] = None


class EvaluationResponse(EvaluationFields, table=True):
    """Evaluation form responses"""

    __tablename__ = "evaluation_responses"


class FormationResponse(EvaluationFields, table=True):
    """Evaluation form responses, legacy table name"""

    __tablename__ = "reponses_formation"


class ExpectationResponse(SessionRespondentFields, table=True):
    """Pre-training expectations; other-role text is folded into fonction"""

    __tablename__ = "attentes_formation"

    niveau_connaissance: Optional[int] = None
    interet_formation: Optional[int] = None

    attentes: Optional[str] = None
    objectifs_personnels: Optional[str] = None
    thematiques_prioritaires: Optional[str] = None
    contraintes: Optional[str] = None
