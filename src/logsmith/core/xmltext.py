"""Helpers shared by the XML writers."""

from __future__ import annotations


def escape_carriage_returns(document: str) -> str:
    """Write ``\\r`` as a character reference.

    XML parsers normalize a literal carriage return to ``\\n``; the reference
    survives parsing unchanged. ElementTree leaves ``\\r`` in element text
    as is, so this runs over the serialized document.
    """
    return document.replace("\r", "&#13;")
