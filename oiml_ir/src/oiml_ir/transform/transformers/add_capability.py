"""``add_capability`` -> AddCapability IR, with per-capability overlays.

An overlay spells out the defaults a generator would otherwise have to guess:
session lifetime, password policy, webhook events and so on. Each inferred
default is reported as a CAPxxx info note.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from oiml_ir.config.logging import get_logger
from oiml_ir.intent.models import AddCapabilityIntent
from oiml_ir.ir.capability import AddCapabilityIR
from ..builders import check_entity_exists, coerce_intent, envelope, finalize
from ..types import DiagnosticCollector, TransformContext

logger = get_logger(__name__)

EMAIL_WEBHOOK_EVENTS = [
    "email.sent",
    "email.delivered",
    "email.bounced",
    "email.opened",
    "email.clicked",
    "email.complained",
    "email.delivery_delayed",
]

BILLING_WEBHOOK_EVENTS = [
    "payment.succeeded",
    "payment.failed",
    "subscription.created",
    "subscription.updated",
    "subscription.canceled",
]

DEFAULT_SESSION = {
    "duration": 86400,  # 24h
    "storage": "cookie",
    "cookie": {"name": "session", "httpOnly": True, "secure": True, "sameSite": "lax"},
}

DEFAULT_PASSWORD_POLICY = {
    "minLength": 8,
    "requireUppercase": True,
    "requireLowercase": True,
    "requireNumbers": True,
    "requireSpecialChars": False,
}

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


def _pick(item: Mapping[str, Any], snake: str, camel: str) -> Any:
    """Value of a key that intents may spell in snake_case or camelCase."""
    value = item.get(snake)
    return value if value is not None else item.get(camel)


def _webhook_path(intent: AddCapabilityIntent) -> Optional[str]:
    for endpoint in intent.endpoints or []:
        if endpoint.path and "webhook" in endpoint.path:
            return endpoint.path
    return None


def build_email_overlay(intent: AddCapabilityIntent, diagnostics: DiagnosticCollector) -> Dict[str, Any]:
    overlay: Dict[str, Any] = {"type": "email"}
    config = intent.config or {}

    if config.get("from_email"):
        overlay["from"] = {"email": config["from_email"], "name": config.get("from_name") or "Your App"}
        diagnostics.info("CAP001", "Configured default sender from intent config", "$.config.from_email")
    else:
        diagnostics.info("CAP001", "No default sender configured - using environment defaults", "$.config")

    webhook = _webhook_path(intent)
    if webhook:
        overlay["webhooks"] = {
            "events": list(EMAIL_WEBHOOK_EVENTS),
            "endpoint": webhook,
            "verifySignature": True,
        }
        diagnostics.info("CAP002", "Inferred webhook configuration from endpoint", "$.endpoints")

    if intent.provider and intent.provider != "resend":
        diagnostics.info(
            "CAP003",
            f"Custom provider '{intent.provider}' detected - SMTP configuration may be needed",
            "$.provider",
        )
    return overlay


def build_storage_overlay(intent: AddCapabilityIntent, diagnostics: DiagnosticCollector) -> Dict[str, Any]:
    overlay: Dict[str, Any] = {"type": "storage", "buckets": []}

    if intent.buckets:
        buckets = []
        for bucket in intent.buckets:
            data = {
                "name": bucket.get("name"),
                "public": bucket.get("public") is not False,
                "cacheControl": _pick(bucket, "cache_control", "cacheControl") or "3600",
            }
            size_limit = _pick(bucket, "file_size_limit", "fileSizeLimit")
            if size_limit is not None:
                data["fileSizeLimit"] = size_limit
            mime_types = _pick(bucket, "allowed_mime_types", "allowedMimeTypes")
            if mime_types is not None:
                data["allowedMimeTypes"] = mime_types
            buckets.append(data)
        overlay["buckets"] = buckets
        diagnostics.info("CAP004", f"Configured {len(buckets)} storage bucket(s)", "$.buckets")
    else:
        diagnostics.warn("CAP005", "No buckets configured - you'll need to create them manually", "$.buckets")

    if intent.provider == "supabase":
        overlay["imageTransformations"] = {
            "enabled": True,
            "formats": ["webp", "avif", "jpeg", "png"],
            "quality": {"default": 80, "min": 50, "max": 100},
        }
        diagnostics.info("CAP006", "Enabled image transformations for Supabase provider", "$.provider")
        overlay["cdn"] = {"enabled": True}
        diagnostics.info("CAP007", "Supabase Storage includes built-in CDN", "$.provider")
    return overlay


def build_auth_overlay(intent: AddCapabilityIntent, diagnostics: DiagnosticCollector) -> Dict[str, Any]:
    config = intent.config or {}
    strategies = config.get("strategies")
    if strategies:
        diagnostics.info(
            "CAP008", f"Configured auth strategies: {', '.join(map(str, strategies))}", "$.config.strategies"
        )
    else:
        strategies = ["jwt"]
        diagnostics.info("CAP008", "Using default JWT authentication strategy", "$.config")

    overlay = {
        "type": "auth",
        "strategies": list(strategies),
        "session": DEFAULT_SESSION,
        "password": DEFAULT_PASSWORD_POLICY,
    }
    diagnostics.info("CAP009", "Using default session configuration (24h, cookie-based)", "$.config")
    diagnostics.info("CAP010", "Using default password requirements", "$.config")
    return overlay


def build_billing_overlay(intent: AddCapabilityIntent, diagnostics: DiagnosticCollector) -> Dict[str, Any]:
    overlay: Dict[str, Any] = {"type": "billing", "provider": intent.provider or "stripe", "plans": []}

    if intent.plans:
        overlay["plans"] = [dict(plan) for plan in intent.plans]
        diagnostics.info("CAP011", f"Configured {len(intent.plans)} pricing plan(s)", "$.plans")
    else:
        diagnostics.warn("CAP012", "No pricing plans configured", "$.plans")

    webhook = _webhook_path(intent)
    if webhook:
        overlay["webhooks"] = {"events": list(BILLING_WEBHOOK_EVENTS), "endpoint": webhook}
        diagnostics.info("CAP013", "Inferred webhook configuration for billing events", "$.endpoints")
    return overlay


def build_file_upload_overlay(intent: AddCapabilityIntent, diagnostics: DiagnosticCollector) -> Dict[str, Any]:
    config = intent.config or {}
    overlay = {
        "type": "file_upload",
        "maxFileSize": config.get("max_file_size") or DEFAULT_MAX_FILE_SIZE,
        "allowedTypes": config.get("allowed_types") or ["*/*"],
        "destination": config.get("destination") or "local",
        "virusScanning": {"enabled": False},
    }
    diagnostics.info("CAP014", f"File upload destination: {overlay['destination']}", "$.config.destination")
    diagnostics.info("CAP015", "Virus scanning disabled by default - enable for production", "$.config")
    return overlay


OVERLAY_BUILDERS: Dict[str, Callable[[AddCapabilityIntent, DiagnosticCollector], Dict[str, Any]]] = {
    "email": build_email_overlay,
    "storage": build_storage_overlay,
    "auth": build_auth_overlay,
    "billing": build_billing_overlay,
    "file_upload": build_file_upload_overlay,
}


def transform_add_capability(
    intent: Union[Mapping[str, Any], AddCapabilityIntent],
    context: TransformContext,
) -> AddCapabilityIR:
    """
    Transform an ``add_capability`` intent into an AddCapability IR envelope.

    Capabilities without an overlay builder (file_stream, sse, websocket)
    are passed through with a CAP100 note.
    """
    intent = coerce_intent(AddCapabilityIntent, intent)
    diagnostics = DiagnosticCollector()

    capability: Dict[str, Any] = {"type": intent.capability, "framework": intent.framework}
    if intent.provider:
        capability["provider"] = intent.provider
    if intent.entity:
        check_entity_exists(intent.entity, context, diagnostics, "$.entity", fatal=False)
        capability["entity"] = intent.entity
    if intent.config:
        capability["config"] = dict(intent.config)

    endpoints: List[Dict[str, Any]] = [
        endpoint.model_dump(exclude_none=True) for endpoint in intent.endpoints or []
    ]
    if endpoints:
        capability["endpoints"] = endpoints

    builder = OVERLAY_BUILDERS.get(intent.capability)
    if builder is None:
        diagnostics.info(
            "CAP100", f"No overlay builder for capability type '{intent.capability}'", "$.capability"
        )
    else:
        capability["overlay"] = builder(intent, diagnostics)
        diagnostics.info(
            "CAP000", f"Built {intent.capability} capability overlay with defaults", "$.capability"
        )
        logger.debug(f"add_capability: built {intent.capability} overlay for {intent.framework}")

    payload = envelope("AddCapability", context, capability=capability)
    return finalize(AddCapabilityIR, payload, diagnostics)
