from codeseek.config.settings import Settings
from codeseek.db.vector.base import VectorDB


def create_vector_db(settings: Settings) -> VectorDB:
    """Create the VectorDB selected by settings.vector_store ("chroma" or "memory")."""
    if settings.vector_store == "chroma":
        from codeseek.db.vector.chroma import ChromaVectorDB
        return ChromaVectorDB(storage_path=settings.chroma_dir)

    if settings.vector_store == "memory":
        from codeseek.db.vector.memory import InMemoryVectorDB
        return InMemoryVectorDB()

    raise ValueError(
        f"Unknown vector store: {settings.vector_store}. "
        f"Expected one of: 'chroma', 'memory'."
    )
