import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from merkle_core.hashing import from_hex
from merkle_core.models import ProofModel


def verify_proof(proof_json: Dict[str, Any], root_hex: Optional[str] = None) -> bool:
    """Return True if the JSON inclusion proof folds up to the expected root.

    The document is validated against ``ProofModel``. When ``root_hex`` is
    given the fold is compared with it; otherwise with the document's own
    ``root`` field, which only checks internal consistency.
    Malformed documents yield False.
    """
    try:
        model = ProofModel.model_validate(proof_json)
    except (ValidationError, TypeError, ValueError):
        return False
    try:
        expected = from_hex(root_hex if root_hex is not None else model.root)
    except ValueError:
        return False
    return model.to_proof().verify(expected)


def verify_proof_file(
    path: Union[str, Path], root_hex: Optional[str] = None
) -> bool:
    try:
        obj = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    if not isinstance(obj, dict):
        return False
    return verify_proof(obj, root_hex)
