"""Intent input models: the loose, human/AI-authored side of the pipeline."""

from .fields import (
    FieldApiSpec,
    FieldAttribute,
    FieldRelation,
    FieldSpec,
    ForeignKey,
    INVERSE_RELATION_KIND,
    RelationKind,
    ReverseRelationSpec,
)
from .models import (
    AddCapabilityIntent,
    AddComponentIntent,
    AddEndpointIntent,
    AddEntityIntent,
    AddFieldIntent,
    AddRelationIntent,
    IndexSpec,
    RelationSpec,
    RemoveEntityIntent,
    RemoveFieldIntent,
    RenameEntityIntent,
    RenameFieldIntent,
    SeedSpec,
    UpdateEndpointIntent,
)
from .document import IntentDocument, compute_intent_id

__all__ = [
    "FieldApiSpec",
    "FieldAttribute",
    "FieldRelation",
    "FieldSpec",
    "ForeignKey",
    "INVERSE_RELATION_KIND",
    "RelationKind",
    "ReverseRelationSpec",
    "AddCapabilityIntent",
    "AddComponentIntent",
    "AddEndpointIntent",
    "AddEntityIntent",
    "AddFieldIntent",
    "AddRelationIntent",
    "IndexSpec",
    "RelationSpec",
    "RemoveEntityIntent",
    "RemoveFieldIntent",
    "RenameEntityIntent",
    "RenameFieldIntent",
    "SeedSpec",
    "UpdateEndpointIntent",
    "IntentDocument",
    "compute_intent_id",
]
