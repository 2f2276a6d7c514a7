from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class RawResponse(BaseModel):
    """What the transport saw for one request attempt."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    content_type: str | None = None
    body: bytes | None = None
    content_length: int | None = None
    headers: dict[str, str] = Field(default_factory=dict)


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    response: RawResponse


class ClientError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["client_error"] = "client_error"
    status: int
    body: bytes | None = None


class ServerError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["server_error"] = "server_error"
    status: int


class UnexpectedStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unexpected_status"] = "unexpected_status"
    status: int


class TransportFailure(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["transport_failure"] = "transport_failure"
    cause: BaseException


ClassifiedOutcome = Annotated[
    Success | ClientError | ServerError | UnexpectedStatus | TransportFailure,
    Field(discriminator="kind"),
]


class ErrorDetail(BaseModel):
    """Error document the service sends with 4xx responses."""

    error: str | None = None
    code: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.error is not None and self.code is not None
