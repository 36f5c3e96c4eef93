"""
JSON encoding for the interchange form, backed by orjson.
"""

from typing import Any, Union

import orjson


def dumps(obj: Any, pretty: bool = False, sort_keys: bool = False) -> bytes:
    """
    Encode a plain serialized tree.

    Args:
        obj: Output of Serializer.to_object()
        pretty: Indent with two spaces
        sort_keys: Emit object keys in sorted order
    """
    option = 0
    if pretty:
        option |= orjson.OPT_INDENT_2
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS
    return orjson.dumps(obj, option=option)


def loads(data: Union[bytes, str]) -> Any:
    return orjson.loads(data)
