"""
Tests unitaires pour le service des élèves.
- avec un StudentStore mocké : enchaînement validation → pré-contrôle → insertion
- avec une base SQLite en mémoire : contraintes d'unicité réelles
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from conftest import VALID_PAYLOAD, make_payload
from student_records.errors import DuplicateKeyError, DuplicateRecord, NotFound, ValidationFailed
from student_records.models.student import Student
from student_records.services.student_service import create_record, get_record, list_records


# --- Helpers ---

def make_store_mock(existing=None):
    store = MagicMock()
    store.find_by_business_key.return_value = existing
    store.find_all.return_value = []
    store.create.side_effect = lambda record: Student.from_document(record)
    return store


# ============================================================
# Store mocké
# ============================================================

class TestCreateRecordMock:
    def test_creation_succes(self, payload):
        store = make_store_mock()

        student = create_record(store, payload)

        store.find_by_business_key.assert_called_once_with("S-001")
        store.create.assert_called_once_with(VALID_PAYLOAD)
        assert student.id == "S-001"

    def test_validation_echouee_base_intacte(self, payload):
        """Payload invalide → ValidationFailed, le store n'est jamais sollicité."""
        del payload["email"]
        store = make_store_mock()

        with pytest.raises(ValidationFailed) as exc:
            create_record(store, payload)

        assert exc.value.paths == ["email"]
        store.find_by_business_key.assert_not_called()
        store.create.assert_not_called()

    def test_identifiant_deja_utilise(self, payload):
        store = make_store_mock(existing=MagicMock(spec=Student))

        with pytest.raises(DuplicateRecord, match="S-001"):
            create_record(store, payload)
        store.create.assert_not_called()

    def test_contrainte_unicite_en_base(self, payload):
        """Création concurrente : le pré-contrôle passe mais la base refuse → DuplicateRecord."""
        store = make_store_mock()
        store.create.side_effect = DuplicateKeyError("doublon")

        with pytest.raises(DuplicateRecord):
            create_record(store, payload)

    def test_erreur_infrastructure_propagee(self, payload):
        store = make_store_mock()
        store.create.side_effect = OperationalError("INSERT", None, Exception("connexion perdue"))

        with pytest.raises(OperationalError):
            create_record(store, payload)


class TestReadRecordsMock:
    def test_liste_vide(self):
        assert list_records(make_store_mock()) == []

    def test_liste_deleguee(self):
        store = make_store_mock()
        students = [MagicMock(spec=Student), MagicMock(spec=Student)]
        store.find_all.return_value = students
        assert list_records(store) is students

    def test_liste_erreur_propagee(self):
        store = make_store_mock()
        store.find_all.side_effect = OperationalError("SELECT", None, Exception("timeout"))
        with pytest.raises(OperationalError):
            list_records(store)

    def test_detail_introuvable(self):
        with pytest.raises(NotFound, match="S-404"):
            get_record(make_store_mock(), "S-404")

    def test_detail_trouve(self):
        student = MagicMock(spec=Student)
        store = make_store_mock(existing=student)
        assert get_record(store, "S-001") is student
        store.find_by_business_key.assert_called_once_with("S-001")


# ============================================================
# Base SQLite en mémoire
# ============================================================

class TestStudentServiceSqlite:
    def test_creation_retourne_enregistrement_normalise(self, store):
        payload = make_payload(id="  S-001  ")
        del payload["isActive"]

        student = create_record(store, payload)

        assert student.to_document() == VALID_PAYLOAD
        assert student.pk is not None

    def test_meme_identifiant_deux_fois(self, store, payload):
        create_record(store, payload)

        with pytest.raises(DuplicateRecord):
            create_record(store, make_payload(email="autre@school.be", contactNo="0499999999"))

        assert len(list_records(store)) == 1

    def test_meme_email_autre_identifiant(self, store, payload):
        create_record(store, payload)

        with pytest.raises(DuplicateRecord):
            create_record(store, make_payload(id="S-002"))

        assert [s.id for s in list_records(store)] == ["S-001"]

    def test_course_entre_pre_controle_et_insertion(self, store, payload):
        """La contrainte de la base fait foi même si le pré-contrôle ne voit pas le doublon."""
        create_record(store, payload)

        with patch.object(store, "find_by_business_key", return_value=None):
            with pytest.raises(DuplicateRecord):
                create_record(store, make_payload(email="autre@school.be"))

        assert len(store.find_all()) == 1

    def test_validation_echouee_base_vide(self, store, payload):
        payload["name"]["firstName"] = "john"
        with pytest.raises(ValidationFailed):
            create_record(store, payload)
        assert list_records(store) == []

    def test_lecture_apres_creation(self, store, payload):
        create_record(store, payload)
        create_record(store, make_payload(id="S-002", email="jane@school.be"))

        assert get_record(store, "S-002").email == "jane@school.be"
        assert [s.id for s in list_records(store)] == ["S-001", "S-002"]

    def test_detail_base_vide(self, store):
        with pytest.raises(NotFound):
            get_record(store, "S-404")

    def test_liste_base_vide(self, store):
        assert list_records(store) == []
