from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class PostalCodeRequest(BaseModel):
    cep: str = ""

    @field_validator("cep", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_body(cls, body: bytes) -> PostalCodeRequest:
        """Decode a request body; a JSON `null` body counts as an empty request."""
        request = _REQUEST_BODY.validate_json(body)
        return request if request is not None else cls()


_REQUEST_BODY: TypeAdapter[PostalCodeRequest | None] = TypeAdapter(PostalCodeRequest | None)


class DirectoryRecord(BaseModel):
    """ViaCEP lookup payload. Unknown CEPs come back as `{"erro": true}`."""

    cep: str = ""
    localidade: str = ""
    uf: str = ""
    erro: bool = False

    @property
    def city(self) -> str:
        return self.localidade

    @property
    def is_not_found(self) -> bool:
        return self.erro or not self.cep


class WeatherLocation(BaseModel):
    name: str = ""


class WeatherCurrent(BaseModel):
    temp_c: float


class WeatherRecord(BaseModel):
    location: WeatherLocation
    current: WeatherCurrent


class WeatherResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city: str
    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")
