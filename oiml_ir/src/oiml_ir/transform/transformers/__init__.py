"""One transformer per intent kind."""

from .add_capability import transform_add_capability
from .add_component import transform_add_component
from .add_endpoint import transform_add_endpoint
from .add_entity import transform_add_entity
from .add_field import transform_add_field
from .add_relation import transform_add_relation
from .remove_entity import transform_remove_entity
from .remove_field import transform_remove_field
from .rename_entity import transform_rename_entity
from .rename_field import transform_rename_field
from .update_endpoint import transform_update_endpoint

__all__ = [
    "transform_add_capability",
    "transform_add_component",
    "transform_add_endpoint",
    "transform_add_entity",
    "transform_add_field",
    "transform_add_relation",
    "transform_remove_entity",
    "transform_remove_field",
    "transform_rename_entity",
    "transform_rename_field",
    "transform_update_endpoint",
]
