"""
Règles de validation élémentaires appliquées aux champs scalaires.

Chaque règle est une fonction pure : elle reçoit une valeur et retourne la
valeur normalisée, ou lève une FieldError typée. Les règles sont composées
par le schéma (voir schemas/composite.py) dans l'ordre où elles doivent
s'appliquer ; la première règle en échec l'emporte pour un champ donné.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from email_validator import EmailNotValidError, validate_email

ALPHA_REGEX = re.compile(r"^[A-Za-z]+$")

Rule = Callable[[Any], str]


class ErrorKind(str, Enum):
    """Nature d'un échec de validation sur un champ."""
    MISSING_FIELD = "MissingField"
    TOO_LONG = "TooLong"
    NOT_CAPITALIZED = "NotCapitalized"
    INVALID_FORMAT = "InvalidFormat"


class FieldError(ValueError):
    """Échec d'une règle sur une valeur scalaire (le chemin est ajouté par le schéma)."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class ValidationIssue:
    """Erreur rattachée à un chemin de champ, ex. name.firstName."""
    path: str
    kind: ErrorKind
    message: str

    def as_dict(self) -> dict:
        return {"path": self.path, "kind": self.kind.value, "message": self.message}

    def __str__(self) -> str:
        return f"{self.path}: {self.kind.value}"


def text(value: Any) -> str:
    """Exige une chaîne de caractères et retire les espaces en bordure."""
    if not isinstance(value, str):
        raise FieldError(ErrorKind.INVALID_FORMAT, "La valeur doit être une chaîne de caractères.")
    return value.strip()


def required(value: Any) -> str:
    """Champ obligatoire : absent, nul ou vide après trim → MissingField."""
    if value is None:
        raise FieldError(ErrorKind.MISSING_FIELD, "Ce champ est obligatoire.")
    value = text(value)
    if not value:
        raise FieldError(ErrorKind.MISSING_FIELD, "Ce champ est obligatoire.")
    return value


def max_length(limit: int) -> Rule:
    def rule(value: str) -> str:
        if len(value) > limit:
            raise FieldError(ErrorKind.TOO_LONG, f"{limit} caractères maximum.")
        return value
    rule.__name__ = f"max_length_{limit}"
    return rule


def capitalized_first_letter(value: str) -> str:
    """
    La valeur doit être identique à sa forme capitalisée :
    'John' est accepté, 'john' et 'JOHN' sont refusés.
    """
    if value != value.capitalize():
        raise FieldError(ErrorKind.NOT_CAPITALIZED, f"'{value}' n'est pas au format capitalisé.")
    return value


def alphabetic_only(value: str) -> str:
    if not ALPHA_REGEX.match(value):
        raise FieldError(ErrorKind.INVALID_FORMAT, f"'{value}' ne doit contenir que des lettres.")
    return value


def enum_member(values: Iterable[str]) -> Rule:
    allowed = tuple(values)
    choices = ", ".join(f'"{v}"' for v in allowed)

    def rule(value: str) -> str:
        if value not in allowed:
            raise FieldError(ErrorKind.INVALID_FORMAT, f"'{value}' n'est pas valide. Valeurs acceptées : {choices}.")
        return value
    rule.__name__ = "enum_member"
    return rule


def email_shape(value: str) -> str:
    """Vérifie la syntaxe de l'adresse (sans résolution DNS). La valeur saisie est conservée telle quelle."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise FieldError(ErrorKind.INVALID_FORMAT, f"'{value}' n'est pas une adresse email valide.")
    return value
