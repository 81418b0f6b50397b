"""
Schéma composite : arbre explicite de nœuds de validation.

Deux types de nœuds :
- Field     : champ scalaire, liste ordonnée de règles (voir validators.py)
- Composite : objet imbriqué, dictionnaire nom → nœud

La validation parcourt tout l'arbre et collecte toutes les erreurs dans
l'ordre de déclaration des champs. Pour un même champ, seule la première
règle en échec est retenue. Les champs inconnus sont ignorés.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from student_records.errors import ValidationFailed
from student_records.validators import ErrorKind, FieldError, Rule, ValidationIssue, required, text

# Marque un champ optionnel absent : il n'apparaît pas dans l'enregistrement normalisé.
_ABSENT = object()


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class Field:
    rules: Tuple[Rule, ...] = (required,)
    default: Optional[str] = None

    @property
    def is_required(self) -> bool:
        return required in self.rules

    def normalize(self, raw: Any, path: str, issues: List[ValidationIssue]) -> Any:
        if raw is None and self.default is not None:
            return self.default
        if not self.is_required and _is_blank(raw):
            return _ABSENT

        # Un champ optionnel doit tout de même être une chaîne
        rules = self.rules if self.is_required else (text,) + self.rules
        value = raw
        try:
            for rule in rules:
                value = rule(value)
        except FieldError as e:
            issues.append(ValidationIssue(path, e.kind, e.message))
            return _ABSENT
        return value


@dataclass(frozen=True)
class Composite:
    fields: Dict[str, "Node"] = field(default_factory=dict)
    required: bool = True

    def normalize(self, raw: Any, path: str, issues: List[ValidationIssue]) -> Any:
        if raw is None:
            if self.required:
                issues.append(ValidationIssue(path, ErrorKind.MISSING_FIELD, "Ce champ est obligatoire."))
            return _ABSENT
        if not isinstance(raw, Mapping):
            issues.append(ValidationIssue(path, ErrorKind.INVALID_FORMAT, "La valeur doit être un objet."))
            return _ABSENT

        result = {}
        for name, node in self.fields.items():
            value = node.normalize(raw.get(name), _join(path, name), issues)
            if value is not _ABSENT:
                result[name] = value
        return result


Node = Union[Field, Composite]


def collect_issues(schema: Composite, payload: Any, root: str = "") -> Tuple[Optional[dict], List[ValidationIssue]]:
    """
    Valide le payload sans lever d'exception.
    Retourne (enregistrement normalisé, []) ou (None, erreurs).
    `root` nomme le chemin signalé lorsque le payload lui-même est absent ou n'est pas un objet.
    """
    issues: List[ValidationIssue] = []
    path = "" if isinstance(payload, Mapping) else root
    record = schema.normalize(payload, path, issues)
    if issues:
        return None, issues
    return record, []


def validate(schema: Composite, payload: Any, root: str = "") -> dict:
    """Retourne l'enregistrement normalisé ou lève ValidationFailed avec la liste ordonnée des erreurs."""
    record, issues = collect_issues(schema, payload, root)
    if issues:
        raise ValidationFailed(issues)
    return record
