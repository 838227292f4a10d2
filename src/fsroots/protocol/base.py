"""
Base message types for the roots protocol.

Models use snake_case attributes in Python and camelCase on the wire.
`to_protocol()` produces the payload without the JSON-RPC envelope
(`jsonrpc`, `id`), and `from_protocol()` accepts either form.
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class ProtocolModel(BaseModel):
    """Base for every protocol type."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    def to_protocol(self) -> dict[str, Any]:
        """Serialize to wire format, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Request(ProtocolModel):
    """
    A message that expects a response from the peer.
    """

    method: str
    metadata: dict[str, Any] | None = Field(default=None, alias="_meta")

    def to_protocol(self) -> dict[str, Any]:
        params = self.model_dump(
            by_alias=True, exclude_none=True, exclude={"method"}, mode="json"
        )
        payload: dict[str, Any] = {"method": self.method}
        if params:
            payload["params"] = params
        return payload

    @classmethod
    def from_protocol(cls, data: dict[str, Any]) -> Self:
        params = data.get("params") or {}
        return cls.model_validate({"method": data["method"], **params})


class Notification(Request):
    """
    A one-way message. The peer never responds.
    """


class Result(ProtocolModel):
    """
    Successful response payload for a request.
    """

    metadata: dict[str, Any] | None = Field(default=None, alias="_meta")

    @classmethod
    def from_protocol(cls, data: dict[str, Any]) -> Self:
        payload = data["result"] if "result" in data else data
        return cls.model_validate(payload)
