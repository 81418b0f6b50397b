"""
Modèle SQLAlchemy pour la table students.
Les sous-documents (nom, tuteur, tuteur local) sont stockés en colonnes JSON ;
les contraintes d'unicité sur id et email font foi en cas de créations concurrentes.
"""

import uuid
from sqlalchemy import JSON, Column, DateTime, Enum, String, Uuid, func

from student_records.constants import ACCOUNT_STATUSES, BLOOD_GROUPS, DEFAULT_ACCOUNT_STATUS, GENDERS
from student_records.database import Base

# Nom du champ JSON → attribut du modèle
DOCUMENT_FIELDS = {
    "id": "id",
    "name": "name",
    "gender": "gender",
    "dateOfBirth": "date_of_birth",
    "email": "email",
    "contactNo": "contact_no",
    "emergencyContactNo": "emergency_contact_no",
    "bloodGroup": "blood_group",
    "presentAddress": "present_address",
    "permanentAddress": "permanent_address",
    "guardian": "guardian",
    "localGuardian": "local_guardian",
    "profileImg": "profile_img",
    "isActive": "is_active",
}


class Student(Base):
    __tablename__ = "students"

    # Identité de stockage, distincte de l'identifiant métier `id`
    pk = Column("_id", Uuid, primary_key=True, default=uuid.uuid4)
    id = Column(String, unique=True, nullable=False, index=True)
    name = Column(JSON, nullable=False)
    gender = Column(Enum(*GENDERS, name="student_gender", native_enum=False, create_constraint=True), nullable=False)
    date_of_birth = Column(String, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    contact_no = Column(String, nullable=False)
    emergency_contact_no = Column(String, nullable=False)
    blood_group = Column(
        Enum(*BLOOD_GROUPS, name="student_blood_group", native_enum=False, create_constraint=True),
        nullable=False,
    )
    present_address = Column(String, nullable=False)
    permanent_address = Column(String, nullable=False)
    guardian = Column(JSON, nullable=False)
    local_guardian = Column(JSON, nullable=False)
    profile_img = Column(String, nullable=False)
    is_active = Column(
        Enum(*ACCOUNT_STATUSES, name="student_account_status", native_enum=False, create_constraint=True),
        nullable=False,
        default=DEFAULT_ACCOUNT_STATUS,
    )
    created_at = Column(DateTime, server_default=func.now())

    @classmethod
    def from_document(cls, record: dict) -> "Student":
        """Construit une ligne à partir d'un enregistrement normalisé (clés camelCase)."""
        return cls(**{
            attr: record[key]
            for key, attr in DOCUMENT_FIELDS.items()
            if key in record
        })

    def to_document(self, include_meta: bool = False) -> dict:
        """Retourne l'élève sous forme de document JSON (clés camelCase)."""
        document = {key: getattr(self, attr) for key, attr in DOCUMENT_FIELDS.items()}
        if include_meta:
            document["_id"] = self.pk
            document["createdAt"] = self.created_at
        return document
