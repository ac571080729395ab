"""Source patchers for ogen-generated code. Each one is a pure `(bytes) -> (bytes, count)` pass."""

import importlib

from ogenfix import Patcher

_PATCHER_MAPPING = {
    "fixnull": "ogenfix.patchers.null_decode.fix_opt_decode_null_handling",
    "fixerror": "ogenfix.patchers.error_body.fix_unexpected_status_code_body",
}


def get_patcher(spec: str) -> Patcher:
    """Resolve a short patcher name or a dotted import path to the patch function."""
    full_path = _PATCHER_MAPPING.get(spec, spec)
    try:
        module_name, func_name = full_path.rsplit(".", 1)
        module = importlib.import_module(module_name)
        return getattr(module, func_name)
    except (ValueError, ImportError, AttributeError):
        msg = f"Unknown patcher: {spec} (resolved to {full_path}, available: {list(_PATCHER_MAPPING)})"
        raise ValueError(msg)


__all__ = ["get_patcher"]
