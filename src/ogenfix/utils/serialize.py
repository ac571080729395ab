UNSET = object()
"""Sentinel for command line options that were not given and must not override config values."""


def recursive_merge(*dictionaries: dict | None) -> dict:
    """Merge multiple dictionaries recursively.

    Later dictionaries take precedence over earlier ones.
    Nested dictionaries are merged recursively, all other values are replaced.
    Values that are `UNSET` are skipped at any depth.
    """
    if not dictionaries:
        return {}
    result: dict = {}
    for d in dictionaries:
        if d is None:
            continue
        for key, value in d.items():
            if value is UNSET:
                continue
            if isinstance(value, dict):
                base = result.get(key)
                result[key] = recursive_merge(base if isinstance(base, dict) else {}, value)
            else:
                result[key] = value
    return result
