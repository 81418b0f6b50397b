"""
Accès aux données des élèves (couche de stockage).
Seules trois opérations sont exposées : création, liste, lecture par identifiant métier.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from student_records.errors import DuplicateKeyError
from student_records.models.student import Student

logger = logging.getLogger(__name__)

# Code SQLSTATE PostgreSQL : unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Distingue une violation d'unicité (PostgreSQL ou SQLite) des autres erreurs d'intégrité."""
    code = getattr(error.orig, "pgcode", None) or getattr(error.orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(error.orig)


class StudentStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, record: dict) -> Student:
        """
        Insère un élève déjà validé.
        Lève DuplicateKeyError si l'identifiant ou l'email existe déjà (contrainte d'unicité).
        Les autres violations d'intégrité (NOT NULL, CHECK) sont propagées telles quelles.
        """
        student = Student.from_document(record)
        self.db.add(student)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                raise
            logger.debug("Contrainte d'unicité violée pour l'élève %s : %s", record.get("id"), e.orig)
            raise DuplicateKeyError(
                f"Un élève avec l'identifiant '{record.get('id')}' ou l'email '{record.get('email')}' existe déjà."
            ) from e
        self.db.refresh(student)
        return student

    def find_all(self) -> List[Student]:
        """Retourne tous les élèves dans l'ordre de stockage."""
        return list(self.db.execute(select(Student)).scalars().all())

    def find_by_business_key(self, student_id: str) -> Optional[Student]:
        """Retourne l'élève dont le champ `id` vaut student_id, ou None."""
        return self.db.execute(
            select(Student).where(Student.id == student_id)
        ).scalar_one_or_none()
