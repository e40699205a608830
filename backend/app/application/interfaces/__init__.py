from .knowledge_repository import KnowledgeRepository

__all__ = [
    "KnowledgeRepository",
]
