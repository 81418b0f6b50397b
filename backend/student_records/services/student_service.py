"""
Service métier pour les élèves.
Valide les données entrantes puis délègue au StudentStore.
"""

import logging
from typing import Any, List

from student_records.errors import DuplicateKeyError, DuplicateRecord, NotFound
from student_records.models.student import Student
from student_records.repositories.student_store import StudentStore
from student_records.schemas.composite import validate
from student_records.schemas.student import STUDENT_SCHEMA

logger = logging.getLogger(__name__)


def create_record(store: StudentStore, payload: Any) -> Student:
    """
    Crée un élève.

    Étapes :
    1. Valider le payload → ValidationFailed (aucun accès à la base)
    2. Vérifier que l'identifiant n'est pas déjà pris → DuplicateRecord
    3. Insérer ; une violation d'unicité à ce stade (création concurrente
       ou email déjà utilisé) est aussi convertie en DuplicateRecord
    """
    record = validate(STUDENT_SCHEMA, payload, root="student")

    if store.find_by_business_key(record["id"]) is not None:
        logger.warning("Création refusée : l'élève %s existe déjà", record["id"])
        raise DuplicateRecord(f"Un élève avec l'identifiant '{record['id']}' existe déjà.")

    try:
        student = store.create(record)
    except DuplicateKeyError as e:
        logger.warning("Création refusée par la base pour l'élève %s", record["id"])
        raise DuplicateRecord(str(e)) from e

    logger.info("Élève créé : %s (%s)", student.id, student.email)
    return student


def list_records(store: StudentStore) -> List[Student]:
    """Retourne tous les élèves."""
    return store.find_all()


def get_record(store: StudentStore, student_id: str) -> Student:
    """Retourne un élève par son identifiant métier. Lève NotFound s'il n'existe pas."""
    student = store.find_by_business_key(student_id)
    if student is None:
        raise NotFound(f"Élève '{student_id}' introuvable.")
    return student
