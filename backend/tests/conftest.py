"""
Configuration partagée pour tous les tests.
- client : dépendance get_db remplacée par un MagicMock (aucune connexion réelle)
- db_session / store : base SQLite en mémoire, pour tester les contraintes d'unicité réelles
"""

import copy
import os

# Doit précéder l'import de l'application : le moteur est créé à l'import.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock

from student_records.database import Base, get_db
from student_records.main import app
from student_records.repositories.student_store import StudentStore

VALID_PAYLOAD = {
    "id": "S-001",
    "name": {"firstName": "John", "middleName": "Paul", "lastName": "Doe"},
    "gender": "male",
    "dateOfBirth": "2010-04-12",
    "email": "john.doe@school.be",
    "contactNo": "0470123456",
    "emergencyContactNo": "0470654321",
    "bloodGroup": "O+",
    "presentAddress": "Rue de la Loi 16, Bruxelles",
    "permanentAddress": "Rue Royale 1, Bruxelles",
    "guardian": {
        "fatherName": "Richard Doe",
        "fatherOccupation": "Ingénieur",
        "fatherContactNo": "0470000001",
        "motherName": "Jane Doe",
        "motherOccupation": "Médecin",
        "motherContactNo": "0470000002",
    },
    "localGuardian": {
        "name": "Marie Martin",
        "occupation": "Enseignante",
        "contactNo": "0470000003",
        "address": "Avenue Louise 50, Bruxelles",
    },
    "profileImg": "https://cdn.school.be/students/S-001.png",
    "isActive": "active",
}


def make_payload(**overrides) -> dict:
    """Copie profonde du payload valide avec les champs de premier niveau remplacés."""
    payload = copy.deepcopy(VALID_PAYLOAD)
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Session sur une base SQLite en mémoire, tables créées à partir des modèles."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def store(db_session):
    return StudentStore(db_session)


@pytest.fixture
def sqlite_client(db_session):
    """Client HTTP de test branché sur la base SQLite en mémoire."""
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
