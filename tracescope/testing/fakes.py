"""Fake request handles for testing."""

from typing import Any, Dict, Optional


class FakeRequest:
    """
    In-memory implementation of the RequestHandle protocol.

    Header lookups are case-insensitive, attributes are a plain dict, and
    lookups are counted so tests can assert a header was not re-parsed.

    Example:
        request = FakeRequest(headers={"X-Cloud-Trace-Context": "abc/1"})
        tracker.enter_scope(None, request)
        assert request.attributes["x-cloud-trace-context"] == "abc"
    """

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        attributes: Optional[Dict[str, Any]] = None,
        name: str = "request",
    ) -> None:
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self.name = name
        self.header_reads = 0

    def get_header(self, name: str) -> Optional[str]:
        self.header_reads += 1
        return self.headers.get(name.lower())

    def get_attribute(self, key: str) -> Any:
        return self.attributes.get(key)

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def __repr__(self) -> str:
        return f"FakeRequest({self.name})"
