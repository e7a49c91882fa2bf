from vocab_progress.db.base import Base
from vocab_progress.db.session import engine
from vocab_progress.db.models import User, VocabularyWord  # noqa: F401

if __name__ == "__main__":
    print("Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created.")
