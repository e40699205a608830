"""Default categories and starter articles loaded into an empty store.

Seeding goes through the application services, so sample articles get real
slugs, version 1 and an initial revision like any other article.
"""

import logging

from app.application.schemas import ArticleCreate, CategoryCreate
from app.application.services import KnowledgeArticleService, KnowledgeCategoryService
from app.infrastructure.storage.knowledge_storage import KnowledgeStorage

logger = logging.getLogger(__name__)

SAMPLE_AUTHOR_ID = "1"

SAMPLE_CATEGORIES: list[dict] = [
    {
        "name": "Workflows & Processes",
        "description": "Standard operating procedures and workflow documentation",
        "color": "#3b82f6",
        "icon": "Workflow",
        "sort_order": 1,
    },
    {
        "name": "Policies & Compliance",
        "description": "Company policies, compliance guidelines, and regulatory information",
        "color": "#ef4444",
        "icon": "Shield",
        "sort_order": 2,
    },
    {
        "name": "Country-Specific Processes",
        "description": "Regional procedures and country-specific requirements",
        "color": "#10b981",
        "icon": "Globe",
        "sort_order": 3,
    },
    {
        "name": "Proof of Concepts",
        "description": "Technical proofs of concept and experimental procedures",
        "color": "#f59e0b",
        "icon": "Lightbulb",
        "sort_order": 4,
    },
    {
        "name": "Training & Onboarding",
        "description": "Training materials and onboarding procedures",
        "color": "#8b5cf6",
        "icon": "GraduationCap",
        "sort_order": 5,
    },
    {
        "name": "Technical Documentation",
        "description": "API documentation, technical guides, and system information",
        "color": "#06b6d4",
        "icon": "Code",
        "sort_order": 6,
    },
]

# ``category`` refers to a SAMPLE_CATEGORIES name.
SAMPLE_ARTICLES: list[dict] = [
    {
        "category": "Workflows & Processes",
        "title": "Client Onboarding Workflow",
        "content": (
            "# Client Onboarding Workflow\n\n"
            "## Overview\n"
            "Standard process for onboarding new clients with consistent service "
            "delivery and documentation.\n\n"
            "## Onboarding Process\n"
            "- Week 1: welcome call, system access, requirements gathering\n"
            "- Week 2: configuration and initial training\n"
            "- Week 3: user acceptance testing\n"
            "- Week 4: go-live and handover to support\n\n"
            "## Post-Onboarding\n"
            "30-day check-in call, performance review and feedback collection."
        ),
        "excerpt": "Complete workflow for onboarding new clients with step-by-step procedures and timelines.",
        "status": "published",
        "priority": "high",
        "tags": ["onboarding", "workflow", "client-management", "process"],
        "search_keywords": "client onboarding workflow process setup configuration",
        "is_featured": True,
    },
    {
        "category": "Policies & Compliance",
        "title": "Data Privacy and GDPR Compliance Policy",
        "content": (
            "# Data Privacy and GDPR Compliance Policy\n\n"
            "## Purpose\n"
            "Ensures the organization complies with GDPR and other data protection "
            "regulations.\n\n"
            "## Data Breach Response\n"
            "1. Detection and assessment (within 24 hours)\n"
            "2. Containment and investigation (within 48 hours)\n"
            "3. Notification to authorities (within 72 hours)\n"
            "4. Communication to data subjects (without undue delay)\n\n"
            "## Compliance Monitoring\n"
            "Monthly privacy audits, quarterly training and annual policy reviews."
        ),
        "excerpt": "GDPR compliance policy covering data protection principles and breach response procedures.",
        "status": "published",
        "priority": "critical",
        "tags": ["gdpr", "privacy", "compliance", "data-protection", "policy"],
        "search_keywords": "gdpr data privacy compliance policy regulation",
        "is_featured": True,
    },
    {
        "category": "Country-Specific Processes",
        "title": "EU Market Entry Process",
        "content": (
            "# EU Market Entry Process\n\n"
            "## Key Regulations\n"
            "CE marking, REACH, the Medical Device Regulation and the General "
            "Product Safety Directive.\n\n"
            "## Market Entry Steps\n"
            "1. Market research\n"
            "2. Regulatory compliance and product certification\n"
            "3. Distribution strategy\n\n"
            "## Country-Specific Requirements\n"
            "Germany (WEEE, packaging ordinance), France (AFNOR, language "
            "requirements), Netherlands (VAT registration)."
        ),
        "excerpt": "Guide for entering EU markets with regulatory requirements and country-specific procedures.",
        "status": "published",
        "priority": "medium",
        "tags": ["eu", "market-entry", "compliance", "international", "regulation"],
        "search_keywords": "eu europe market entry regulatory compliance international",
    },
    {
        "category": "Proof of Concepts",
        "title": "AI-Powered Customer Service POC",
        "content": (
            "# AI-Powered Customer Service Proof of Concept\n\n"
            "## Objective\n"
            "Evaluate AI chatbots for first-level customer support.\n\n"
            "## Implementation Plan\n"
            "- Phase 1: knowledge base and basic conversation flows\n"
            "- Phase 2: CRM integration and escalation workflows\n"
            "- Phase 3: internal testing and limited beta\n\n"
            "## Success Criteria\n"
            "Response accuracy above 85%, resolution rate above 70% for tier 1 issues."
        ),
        "excerpt": "Proof of concept for AI chatbots handling first-level customer support.",
        "status": "draft",
        "priority": "medium",
        "tags": ["ai", "poc", "customer-service", "chatbot"],
        "search_keywords": "ai chatbot customer service proof of concept automation",
    },
]


async def seed_sample_data(storage: KnowledgeStorage) -> bool:
    """Load the sample categories and articles if the store has no categories.

    Returns True when data was written.
    """
    async with storage.session() as repository:
        categories = KnowledgeCategoryService(repository)
        if await categories.list_categories():
            logger.debug("Knowledge store already populated, skipping sample data")
            return False

        category_ids: dict[str, int] = {}
        for fields in SAMPLE_CATEGORIES:
            category = await categories.create_category(CategoryCreate(**fields))
            category_ids[category.name] = category.id

        articles = KnowledgeArticleService(repository)
        for sample in SAMPLE_ARTICLES:
            fields = {k: v for k, v in sample.items() if k != "category"}
            data = ArticleCreate(category_id=category_ids[sample["category"]], **fields)
            await articles.create_article(data, author_id=SAMPLE_AUTHOR_ID)

    logger.info(
        "Seeded %d categories and %d sample articles",
        len(SAMPLE_CATEGORIES),
        len(SAMPLE_ARTICLES),
    )
    return True
