"""
General helpers shared across layers.
"""

from typing import Dict, Any


def omit_none(obj: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop keys whose value is None.

    The interchange form omits absent optional fields rather than writing
    null, so every to_object() passes its result through here.
    """
    return {key: value for key, value in obj.items() if value is not None}
