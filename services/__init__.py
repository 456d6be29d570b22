"""
Services module - Business Logic Layer.

Contains application services that sit between the API layer (routes) and
the data layer (repositories).

Services handle:
- Schema reconciliation at startup
- Saving the content tree and returning the stored result

Usage:
    from services import ContentService, SchemaReconciler

    SchemaReconciler(engine).run()
    tree = ContentService(engine).get_content()
"""

from services.content_service import ContentService
from services.schema_reconciler import SchemaReconciler, ReconciliationReport

__all__ = [
    "ContentService",
    "SchemaReconciler",
    "ReconciliationReport",
]
