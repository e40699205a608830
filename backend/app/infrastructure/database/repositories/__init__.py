from .knowledge_repository import SQLAlchemyKnowledgeRepository

__all__ = [
    "SQLAlchemyKnowledgeRepository",
]
