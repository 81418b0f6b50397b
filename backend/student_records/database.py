"""
Configuration de la connexion à la base de données.
Utilise SQLAlchemy avec un moteur synchrone et une session par requête.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from student_records.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dépendance FastAPI : fournit une session BDD par requête.
    Toute transaction restée ouverte après une exception est annulée avant fermeture.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Crée les tables manquantes. Les modèles doivent être importés au préalable."""
    Base.metadata.create_all(bind=engine)
