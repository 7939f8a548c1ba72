"""
Response representation negotiation: JSON by default, XML when the client prefers it.
"""

import xml.etree.ElementTree as ET
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from app.core.errors import pascal_case

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPES = ("application/xml", "text/xml")


def _accept_entries(accept: str) -> list[tuple[str, float]]:
    entries = []
    for part in accept.split(","):
        media, *params = [p.strip() for p in part.split(";")]
        if not media:
            continue
        q = 1.0
        for param in params:
            if param.startswith("q="):
                try:
                    q = float(param[2:])
                except ValueError:
                    q = 0.0
        entries.append((media.lower(), q))
    # sorted() is stable: equal q keeps the client's order
    return sorted(entries, key=lambda entry: entry[1], reverse=True)


def preferred_media_type(request: Request) -> str:
    """Pick application/json or application/xml for this request's Accept header."""
    accept = request.headers.get("accept")
    if not accept:
        return JSON_MEDIA_TYPE
    for media, q in _accept_entries(accept):
        if q <= 0:
            continue
        if media in XML_MEDIA_TYPES or media.endswith("+xml"):
            return "application/xml"
        if media in (JSON_MEDIA_TYPE, "*/*", "application/*") or media.endswith("+json"):
            return JSON_MEDIA_TYPE
    return JSON_MEDIA_TYPE


def content_type_for(request: Request) -> str:
    """Full Content-Type header value of the negotiated representation."""
    return f"{preferred_media_type(request)}; charset=utf-8"


def _element(tag: str, value: Any) -> ET.Element:
    elem = ET.Element(tag)
    if isinstance(value, BaseModel):
        for name, field_value in value:
            elem.append(_element(pascal_case(name), field_value))
    elif isinstance(value, (list, tuple)):
        for item in value:
            elem.append(_element(type(item).__name__ if isinstance(item, BaseModel) else "Item", item))
    elif isinstance(value, dict):
        for key, item in value.items():
            elem.append(_element(pascal_case(str(key)), item))
    elif value is not None:
        elem.text = str(value)
    return elem


def _root_tag(content: Any, root: str | None) -> str:
    if root:
        return root
    if isinstance(content, BaseModel):
        return type(content).__name__
    if isinstance(content, (list, tuple)) and content and isinstance(content[0], BaseModel):
        return f"ArrayOf{type(content[0]).__name__}"
    return "Result"


def to_xml(content: Any, root: str | None = None) -> str:
    """Render content under root. A one-key mapping named like root renders as that element."""
    if root and isinstance(content, dict) and list(content) == [root]:
        content = content[root]
    return ET.tostring(_element(_root_tag(content, root), content), encoding="unicode")


def render(
    request: Request,
    content: Any,
    *,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    root: str | None = None,
) -> Response:
    """Serialize content in the representation the client asked for."""
    content_type = content_type_for(request)
    if content_type.startswith(JSON_MEDIA_TYPE):
        return JSONResponse(
            jsonable_encoder(content, by_alias=True),
            status_code=status_code,
            headers=headers,
            media_type=content_type,
        )
    return Response(to_xml(content, root), status_code=status_code, headers=headers, media_type=content_type)
