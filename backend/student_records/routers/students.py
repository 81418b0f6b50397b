"""
Router pour les élèves.
POST /api/v1/students/create-student : création
GET  /api/v1/students                : liste
GET  /api/v1/students/{student_id}   : détail par identifiant métier

Les champs nuls (ex. middleName absent) sont omis des réponses.
Les erreurs métier (ValidationFailed, DuplicateRecord, NotFound) sont
converties en réponses JSON par le handler déclaré dans main.py.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from student_records.database import get_db
from student_records.models.student import Student
from student_records.repositories.student_store import StudentStore
from student_records.schemas.student import (
    StudentCreateRequest,
    StudentEnvelope,
    StudentListEnvelope,
    StudentResponse,
)
from student_records.services import student_service

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])


def get_store(db: Session = Depends(get_db)) -> StudentStore:
    """Dépendance FastAPI : StudentStore lié à la session de la requête."""
    return StudentStore(db)


def _to_response(student: Student) -> StudentResponse:
    return StudentResponse.model_validate(student.to_document(include_meta=True))


@router.post(
    "/create-student",
    response_model=StudentEnvelope,
    response_model_exclude_none=True,
    status_code=201,
    summary="Créer un élève",
)
def create_student(data: StudentCreateRequest, store: StudentStore = Depends(get_store)):
    """
    Crée un élève. Le corps attendu est de la forme `{"student": {...}}`.
    Retourne 400 avec la liste des erreurs de champ, ou 409 si l'identifiant ou l'email existe déjà.
    """
    student = student_service.create_record(store, data.student)
    return StudentEnvelope(message="Élève créé avec succès.", data=_to_response(student))


@router.get(
    "",
    response_model=StudentListEnvelope,
    response_model_exclude_none=True,
    summary="Lister tous les élèves",
)
def list_students(store: StudentStore = Depends(get_store)):
    students = student_service.list_records(store)
    return StudentListEnvelope(
        message="Élèves récupérés avec succès.",
        data=[_to_response(s) for s in students],
    )


@router.get(
    "/{student_id}",
    response_model=StudentEnvelope,
    response_model_exclude_none=True,
    summary="Détail d'un élève",
)
def get_student(student_id: str, store: StudentStore = Depends(get_store)):
    student = student_service.get_record(store, student_id)
    return StudentEnvelope(message="Élève récupéré avec succès.", data=_to_response(student))
