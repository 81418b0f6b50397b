"""
Hiérarchie des erreurs métier.
Chaque erreur porte un code et un statut HTTP ; le handler global de main.py
les convertit en réponse JSON {success, message, errors}.
"""

from typing import List

from student_records.validators import ValidationIssue


class StudentRecordsError(Exception):
    """Base de toutes les erreurs métier remontées à l'appelant."""
    code = "ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"success": False, "message": self.message, "errors": []}


class ValidationFailed(StudentRecordsError):
    """Une ou plusieurs erreurs de champ, levée avant toute écriture en base."""
    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, issues: List[ValidationIssue]):
        super().__init__("Les données de l'élève sont invalides.")
        self.issues = list(issues)

    @property
    def paths(self) -> List[str]:
        return [issue.path for issue in self.issues]

    def to_response(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "errors": [issue.as_dict() for issue in self.issues],
        }


class DuplicateRecord(StudentRecordsError):
    """Identifiant ou email déjà utilisé par un autre élève."""
    code = "DUPLICATE_RECORD"
    http_status = 409


class NotFound(StudentRecordsError):
    code = "NOT_FOUND"
    http_status = 404


class DuplicateKeyError(Exception):
    """Violation d'une contrainte d'unicité, levée par la couche de stockage."""
