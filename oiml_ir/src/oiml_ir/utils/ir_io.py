"""Utilities for loading intent documents and loading/saving IR JSON files."""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import yaml

from oiml_ir.intent.document import compute_intent_id
from oiml_ir.ir.union import IntentIR, parse_ir, parse_ir_list
from oiml_ir.transform.errors import IntentLoadError

YAML_SUFFIXES = (".yaml", ".yml")

__all__ = [
    "compute_intent_id",
    "load_intent_document",
    "load_ir_from_json",
    "save_ir_to_json",
]


def load_intent_document(path: Path) -> Dict[str, Any]:
    """
    Load a raw intent document from a YAML or JSON file.

    The format follows the file suffix: ``.yaml``/``.yml`` are read with
    ``yaml.safe_load``, everything else as JSON.

    Args:
        path: Path to the intent file

    Returns:
        The decoded document mapping (not yet validated)

    Raises:
        IntentLoadError: If the file is missing, empty, unparsable or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise IntentLoadError(f"Intent file not found: {path}")

    content = path.read_text(encoding="utf-8")
    if not content.strip():
        raise IntentLoadError(f"Intent file is empty: {path}")

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except yaml.YAMLError as e:
        raise IntentLoadError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise IntentLoadError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise IntentLoadError(
            f"Intent file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def load_ir_from_json(ir_path: Path) -> Union[IntentIR, List[IntentIR]]:
    """
    Load IR envelopes from a JSON file.

    Args:
        ir_path: Path to a JSON file holding one envelope or a list of them

    Returns:
        A single envelope, or a list when the file holds a list

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not valid JSON
        ValidationError: If an envelope does not match any IR kind
    """
    ir_path = Path(ir_path)
    if not ir_path.exists():
        raise FileNotFoundError(f"IR file not found: {ir_path}")

    file_content = ir_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"IR file is empty: {ir_path}")

    try:
        data = json.loads(file_content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to load IR from {ir_path}: {e}") from e

    if isinstance(data, list):
        return parse_ir_list(data)
    return parse_ir(data)


def save_ir_to_json(irs: Union[IntentIR, Sequence[IntentIR]], ir_path: Path) -> None:
    """
    Save one IR envelope, or a list of them, to a JSON file.

    Args:
        irs: Envelope or list of envelopes
        ir_path: Path where to save the JSON file

    Note:
        Creates parent directories if they don't exist.
    """
    if isinstance(irs, (list, tuple)):
        data: Any = [ir.to_json_dict() for ir in irs]
    else:
        data = irs.to_json_dict()

    ir_path = Path(ir_path)
    ir_path.parent.mkdir(parents=True, exist_ok=True)
    ir_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
