"""OIML Intermediate Representation (IR) models, version 1.0.0.

The IR resolves ambiguities in human-authored intents into a closed,
deterministic format that code generators consume.
"""

from .common import IR_VERSION, Diagnostic, IRModel, Provenance
from .types import (
    ArrayType,
    EnumType,
    FieldType,
    JsonType,
    ReferenceType,
    ReverseRelation,
    ScalarType,
)
from .field import FieldAPIConfig, FieldIR
from .storage import (
    CompositePrimaryKey,
    IndexConstraint,
    RelationalTableStorage,
    SinglePrimaryKey,
    TenantScope,
    UniqueConstraint,
)
from .seed import SeedIR
from .entity import EntityIR
from .data import (
    AddEntityIR,
    AddFieldIR,
    AddRelationIR,
    RelationIR,
    RemoveEntityIR,
    RemoveFieldIR,
    RenameEntityIR,
    RenameFieldIR,
)
from .api import AddEndpointIR, EndpointIR, UpdateEndpointIR
from .capability import AddCapabilityIR, CapabilityIR
from .ui import AddComponentIR, ComponentIR
from .union import IR_KINDS, IntentIR, ir_json_schema, parse_ir, parse_ir_list

__all__ = [
    "IR_VERSION",
    "IR_KINDS",
    "IRModel",
    "Diagnostic",
    "Provenance",
    "ScalarType",
    "JsonType",
    "EnumType",
    "ArrayType",
    "ReferenceType",
    "ReverseRelation",
    "FieldType",
    "FieldIR",
    "FieldAPIConfig",
    "SinglePrimaryKey",
    "CompositePrimaryKey",
    "TenantScope",
    "RelationalTableStorage",
    "UniqueConstraint",
    "IndexConstraint",
    "SeedIR",
    "EntityIR",
    "AddEntityIR",
    "AddFieldIR",
    "AddRelationIR",
    "RelationIR",
    "RemoveEntityIR",
    "RemoveFieldIR",
    "RenameEntityIR",
    "RenameFieldIR",
    "AddEndpointIR",
    "EndpointIR",
    "UpdateEndpointIR",
    "AddCapabilityIR",
    "CapabilityIR",
    "AddComponentIR",
    "ComponentIR",
    "IntentIR",
    "parse_ir",
    "parse_ir_list",
    "ir_json_schema",
]
