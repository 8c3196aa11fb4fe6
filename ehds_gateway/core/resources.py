"""Declarative registry of resources served by the data gateway.

Each resource maps to a fixed column projection and fetch strategy. Adding or
auditing a resource is a change to RESOURCES only; the resolver never selects
columns that are not declared here.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

METADATA_RESOURCE = "metadata"


@dataclass(frozen=True)
class ResourceDescriptor:
    """Static description of a public resource.

    ``table`` is None for resources built without a store query.
    ``singleton_key`` is the column used for lookups by id; resources without
    one always return the full ordered collection.
    """

    name: str
    description: str
    table: Optional[str] = None
    columns: Tuple[str, ...] = ()
    order_by: Optional[str] = None
    singleton_key: Optional[str] = None

    @property
    def is_static(self) -> bool:
        return self.table is None

    @property
    def supports_singleton(self) -> bool:
        return self.singleton_key is not None

    def select_clause(self) -> str:
        """PostgREST select string for the projection."""
        return ", ".join(self.columns)

    def project(self, row: Dict) -> Dict:
        """Restrict a store row to the declared columns, in declared order."""
        return {column: row.get(column) for column in self.columns}


RESOURCES: Dict[str, ResourceDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (
        ResourceDescriptor(
            name="articles",
            description="All articles of the EHDS Regulation",
            table="articles",
            columns=("article_number", "title", "content", "chapter_id", "section_id"),
            order_by="article_number",
            singleton_key="article_number",
        ),
        ResourceDescriptor(
            name="recitals",
            description="All recitals of the EHDS Regulation",
            table="recitals",
            columns=("recital_number", "content", "related_articles"),
            order_by="recital_number",
            singleton_key="recital_number",
        ),
        ResourceDescriptor(
            name="definitions",
            description="Defined terms from Article 2",
            table="definitions",
            columns=("term", "definition", "source_article"),
            order_by="term",
        ),
        ResourceDescriptor(
            name="chapters",
            description="Chapter structure",
            table="chapters",
            columns=("chapter_number", "title", "description"),
            order_by="chapter_number",
        ),
        ResourceDescriptor(
            name="implementing-acts",
            description="Implementing and delegated acts",
            table="implementing_acts",
            columns=(
                "id",
                "title",
                "description",
                "type",
                "theme",
                "status",
                "article_reference",
                "related_articles",
                "feedback_deadline",
            ),
            order_by="title",
        ),
        ResourceDescriptor(
            name=METADATA_RESOURCE,
            description="Regulation and API metadata",
        ),
    )
}

ALLOWED_RESOURCES: Tuple[str, ...] = tuple(RESOURCES)


def get_resource(name: str) -> Optional[ResourceDescriptor]:
    """Look up a resource descriptor by its public name."""
    return RESOURCES.get(name)


def resource_columns() -> Dict[str, Tuple[str, ...]]:
    """Projected columns per store-backed resource."""
    return {name: d.columns for name, d in RESOURCES.items() if not d.is_static}
