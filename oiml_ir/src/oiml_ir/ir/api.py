"""IR envelopes for api-scope intents (endpoints)."""

from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field

from .common import Diagnostic, IRModel, Provenance
from .field import FieldIR

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
PATH_PATTERN = r"^/"


class EndpointAuth(IRModel):
    required: bool
    roles: Optional[List[str]] = None


class EndpointIR(IRModel):
    """A resolved HTTP endpoint."""

    method: HttpMethod
    path: str = Field(pattern=PATH_PATTERN)
    description: Optional[str] = None
    entity: Optional[str] = None
    response_fields: Optional[List[FieldIR]] = None
    request_fields: Optional[List[FieldIR]] = None
    auth: Optional[EndpointAuth] = None


class AddEndpointIR(IRModel):
    """IR envelope for an ``add_endpoint`` intent."""

    kind: Literal["AddEndpoint"] = "AddEndpoint"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    endpoint: EndpointIR
    diagnostics: List[Diagnostic]


class RelationSource(IRModel):
    type: Literal["relation"] = "relation"
    relation: str = Field(min_length=1)
    field: Optional[str] = None


class FieldSource(IRModel):
    type: Literal["field"] = "field"
    entity: str = Field(min_length=1)
    field: str = Field(min_length=1)


class ComputedSource(IRModel):
    type: Literal["computed"] = "computed"
    expression: str = Field(min_length=1)


class JoinSource(IRModel):
    type: Literal["join"] = "join"
    foreign_key: str = Field(min_length=1)
    target_entity: str = Field(min_length=1)
    target_field: str = Field(min_length=1)


ResponseFieldSource = Annotated[
    Union[RelationSource, FieldSource, ComputedSource, JoinSource],
    Field(discriminator="type"),
]


class AddFieldUpdate(IRModel):
    """A field added to an endpoint response, with where its data comes from."""

    name: str = Field(min_length=1)
    source: ResponseFieldSource


class EndpointUpdates(IRModel):
    add_fields: Optional[List[AddFieldUpdate]] = None
    remove_fields: Optional[List[Annotated[str, Field(min_length=1)]]] = None


class UpdateEndpointIR(IRModel):
    """IR envelope for an ``update_endpoint`` intent."""

    kind: Literal["UpdateEndpoint"] = "UpdateEndpoint"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    method: HttpMethod
    path: str = Field(pattern=PATH_PATTERN)
    updates: EndpointUpdates
    diagnostics: List[Diagnostic]
