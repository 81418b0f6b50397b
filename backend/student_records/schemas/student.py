"""
Schémas pour les élèves.
- STUDENT_SCHEMA : arbre de validation des données entrantes (création)
- StudentCreateRequest : corps de la requête de création
- StudentResponse et enveloppes : schémas Pydantic de réponse (GET / POST)

Les noms de champs JSON (camelCase) constituent le contrat d'API.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from pydantic.alias_generators import to_camel

from student_records.constants import (
    ACCOUNT_STATUSES,
    BLOOD_GROUPS,
    DEFAULT_ACCOUNT_STATUS,
    FIRST_NAME_MAX_LENGTH,
    GENDERS,
)
from student_records.schemas.composite import Composite, Field
from student_records.validators import (
    alphabetic_only,
    capitalized_first_letter,
    email_shape,
    enum_member,
    max_length,
    required,
)


# --- Validation des données entrantes ---

NAME_SCHEMA = Composite({
    "firstName": Field((required, max_length(FIRST_NAME_MAX_LENGTH), capitalized_first_letter)),
    "middleName": Field(()),
    "lastName": Field((required, alphabetic_only)),
})

GUARDIAN_SCHEMA = Composite({
    "fatherName": Field(),
    "fatherOccupation": Field(),
    "fatherContactNo": Field(),
    "motherName": Field(),
    "motherOccupation": Field(),
    "motherContactNo": Field(),
})

LOCAL_GUARDIAN_SCHEMA = Composite({
    "name": Field(),
    "occupation": Field(),
    "contactNo": Field(),
    "address": Field(),
})

STUDENT_SCHEMA = Composite({
    "id": Field(),
    "name": NAME_SCHEMA,
    "gender": Field((required, enum_member(GENDERS))),
    "dateOfBirth": Field(),
    "email": Field((required, email_shape)),
    "contactNo": Field(),
    "emergencyContactNo": Field(),
    "bloodGroup": Field((required, enum_member(BLOOD_GROUPS))),
    "presentAddress": Field(),
    "permanentAddress": Field(),
    "guardian": GUARDIAN_SCHEMA,
    "localGuardian": LOCAL_GUARDIAN_SCHEMA,
    "profileImg": Field(),
    "isActive": Field((required, enum_member(ACCOUNT_STATUSES)), default=DEFAULT_ACCOUNT_STATUS),
})


# --- Requêtes ---

class StudentCreateRequest(BaseModel):
    """Corps de POST /create-student. Le contenu de `student` est validé par STUDENT_SCHEMA."""
    student: Optional[Any] = None


# --- Réponses ---

class WireModel(BaseModel):
    """Attributs Python en snake_case, sérialisés en camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NameResponse(WireModel):
    first_name: str
    middle_name: Optional[str] = None
    last_name: str


class GuardianResponse(WireModel):
    father_name: str
    father_occupation: str
    father_contact_no: str
    mother_name: str
    mother_occupation: str
    mother_contact_no: str


class LocalGuardianResponse(WireModel):
    name: str
    occupation: str
    contact_no: str
    address: str


class StudentResponse(WireModel):
    """Élève tel que stocké : champs métier + identité de stockage (_id) et date de création."""
    pk: uuid.UUID = PydanticField(alias="_id")
    id: str
    name: NameResponse
    gender: str
    date_of_birth: str
    email: str
    contact_no: str
    emergency_contact_no: str
    blood_group: str
    present_address: str
    permanent_address: str
    guardian: GuardianResponse
    local_guardian: LocalGuardianResponse
    profile_img: str
    is_active: str
    created_at: Optional[datetime] = None


class StudentEnvelope(BaseModel):
    success: bool = True
    message: str
    data: StudentResponse


class StudentListEnvelope(BaseModel):
    success: bool = True
    message: str
    data: List[StudentResponse]
