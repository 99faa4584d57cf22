from __future__ import annotations

import base64
import json
from typing import Dict

from starlette.datastructures import URL


# PUBLIC_INTERFACE
def encode_token(offset: int) -> str:
    """Opaque pagination cursor for the given offset."""
    raw = json.dumps({"offset": offset}).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


# PUBLIC_INTERFACE
def decode_token(token: str) -> int:
    """
    Return the offset stored in a cursor.

    Raises:
        ValueError: if the token was not produced by encode_token.
    """
    try:
        data = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
        offset = int(data["offset"])
    except (ValueError, KeyError, TypeError) as e:
        raise ValueError("Invalid pagination token") from e
    if offset < 0:
        raise ValueError("Invalid pagination token")
    return offset


# PUBLIC_INTERFACE
def pagination_headers(url: URL, total: int, offset: int, returned: int) -> Dict[str, str]:
    """
    Build the Total-Records header and, when records remain after this page,
    the Next-Page header: the request URL with its _token replaced.
    """
    headers = {"Total-Records": str(int(total))}
    next_offset = offset + returned
    if returned > 0 and next_offset < total:
        headers["Next-Page"] = str(url.include_query_params(_token=encode_token(next_offset)))
    return headers
