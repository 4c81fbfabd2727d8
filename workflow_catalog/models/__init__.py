from workflow_catalog.models.category import Category
from workflow_catalog.models.collection import Collection, CollectionCategory, CollectionWorkflow
from workflow_catalog.models.template import Template, TemplateCategory
from workflow_catalog.models.user import User

__all__ = [
    "Category",
    "Collection",
    "CollectionCategory",
    "CollectionWorkflow",
    "Template",
    "TemplateCategory",
    "User",
]
