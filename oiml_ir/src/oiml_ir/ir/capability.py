"""IR envelope for ``add_capability`` intents and the capability overlays."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import Field

from .api import HttpMethod, PATH_PATTERN
from .common import Diagnostic, IRModel, Provenance

CapabilityType = Literal[
    "auth",
    "email",
    "storage",
    "billing",
    "file_upload",
    "file_stream",
    "sse",
    "websocket",
]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CapabilityEndpoint(IRModel):
    """An endpoint (or route group) a capability creates or protects."""

    method: Optional[HttpMethod] = None
    path: Optional[str] = Field(default=None, pattern=PATH_PATTERN)
    group: Optional[str] = None
    description: Optional[str] = None


# Email


class EmailTemplate(IRModel):
    name: str  # e.g. "welcome", "password-reset"
    subject: str
    format: Literal["html", "text", "react"]
    source: str


class SmtpAuth(IRModel):
    user: str
    # Field name "pass" is a keyword
    password: str = Field(alias="pass")


class SmtpConfig(IRModel):
    host: str
    port: int
    secure: Optional[bool] = None
    auth: Optional[SmtpAuth] = None


class EmailWebhooks(IRModel):
    events: List[str]
    endpoint: str
    verify_signature: Optional[bool] = None


class EmailSender(IRModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    name: Optional[str] = None


class EmailOverlay(IRModel):
    type: Literal["email"] = "email"
    templates: Optional[List[EmailTemplate]] = None
    smtp: Optional[SmtpConfig] = None
    webhooks: Optional[EmailWebhooks] = None
    from_: Optional[EmailSender] = Field(default=None, alias="from")


# Storage


class StorageBucket(IRModel):
    name: str
    public: bool
    file_size_limit: Optional[int] = None  # bytes
    allowed_mime_types: Optional[List[str]] = None
    cache_control: Optional[str] = None


class ImageQuality(IRModel):
    default: Optional[int] = Field(default=None, ge=1, le=100)
    min: Optional[int] = Field(default=None, ge=1, le=100)
    max: Optional[int] = Field(default=None, ge=1, le=100)


class ImageTransformations(IRModel):
    enabled: bool
    formats: Optional[List[Literal["webp", "avif", "jpeg", "png"]]] = None
    quality: Optional[ImageQuality] = None


class CdnConfig(IRModel):
    enabled: bool
    custom_domain: Optional[str] = None


class StorageOverlay(IRModel):
    type: Literal["storage"] = "storage"
    buckets: List[StorageBucket]
    image_transformations: Optional[ImageTransformations] = None
    cdn: Optional[CdnConfig] = None


# Auth

AuthStrategy = Literal["jwt", "session", "oauth", "magic-link", "passwordless"]


class SessionCookie(IRModel):
    name: str
    http_only: Optional[bool] = None
    secure: Optional[bool] = None
    same_site: Optional[Literal["strict", "lax", "none"]] = None


class SessionConfig(IRModel):
    duration: int  # seconds
    storage: Literal["cookie", "localStorage", "database"]
    cookie: Optional[SessionCookie] = None


class OAuthProvider(IRModel):
    provider: Literal["google", "github", "facebook", "twitter", "apple"]
    client_id: str
    client_secret: str
    scopes: Optional[List[str]] = None


class PasswordPolicy(IRModel):
    min_length: Optional[int] = None
    require_uppercase: Optional[bool] = None
    require_lowercase: Optional[bool] = None
    require_numbers: Optional[bool] = None
    require_special_chars: Optional[bool] = None


class AuthOverlay(IRModel):
    type: Literal["auth"] = "auth"
    strategies: List[AuthStrategy]
    session: Optional[SessionConfig] = None
    oauth_providers: Optional[List[OAuthProvider]] = None
    password: Optional[PasswordPolicy] = None


# Billing


class BillingPlan(IRModel):
    id: str
    name: str
    price: float  # smallest currency unit, e.g. cents
    currency: str = Field(min_length=3, max_length=3)
    interval: Literal["month", "year", "week", "day", "one-time"]
    features: Optional[List[str]] = None


class BillingWebhooks(IRModel):
    events: List[str]
    endpoint: str


class TaxConfig(IRModel):
    enabled: bool
    provider: Optional[Literal["stripe", "taxjar", "avalara"]] = None


class BillingOverlay(IRModel):
    type: Literal["billing"] = "billing"
    provider: Literal["stripe", "paypal", "square", "braintree"]
    plans: List[BillingPlan]
    webhooks: Optional[BillingWebhooks] = None
    tax: Optional[TaxConfig] = None


# File upload


class VirusScanning(IRModel):
    enabled: bool
    provider: Optional[str] = None


class FileUploadOverlay(IRModel):
    type: Literal["file_upload"] = "file_upload"
    max_file_size: int  # bytes
    allowed_types: List[str]
    destination: Literal["local", "s3", "gcs", "azure", "cloudinary"]
    destination_config: Optional[Dict[str, Any]] = None
    resumable: Optional[bool] = None
    virus_scanning: Optional[VirusScanning] = None


CapabilityOverlay = Annotated[
    Union[EmailOverlay, StorageOverlay, AuthOverlay, BillingOverlay, FileUploadOverlay],
    Field(discriminator="type"),
]


class CapabilityIR(IRModel):
    """A resolved capability module (auth, email, storage, ...)."""

    type: CapabilityType
    framework: str = Field(min_length=1)
    provider: Optional[str] = None
    entity: Optional[str] = None
    config: Optional[Dict[str, Any]] = None  # free-form, kept for older generators
    endpoints: Optional[List[CapabilityEndpoint]] = None
    overlay: Optional[CapabilityOverlay] = None


class AddCapabilityIR(IRModel):
    """IR envelope for an ``add_capability`` intent."""

    kind: Literal["AddCapability"] = "AddCapability"
    ir_version: Literal["1.0.0"] = "1.0.0"
    provenance: Provenance
    capability: CapabilityIR
    diagnostics: List[Diagnostic]
