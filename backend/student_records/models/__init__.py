# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant l'appel à init_db() (create_all).

from student_records.models.student import Student  # noqa: F401
