from .in_memory_knowledge_repository import InMemoryKnowledgeRepository

__all__ = ["InMemoryKnowledgeRepository"]
