# Valeurs énumérées partagées par le schéma de validation et le modèle SQLAlchemy.

GENDERS = ("male", "female", "other")

BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

ACCOUNT_STATUSES = ("active", "blocked")
DEFAULT_ACCOUNT_STATUS = "active"

FIRST_NAME_MAX_LENGTH = 20
