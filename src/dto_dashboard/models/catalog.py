"""Processed-document records as served by the remote catalog."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChunkRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    page: int | str | None = None
    path: str | None = None
    note: str | None = None


class OcrRawEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str = ""
    source: str | None = None
    chunk_type: str | None = None
    key_values: list[Any] | None = None


class ParameterValue(BaseModel):
    """One extracted parameter, with the model's confidence when it gave one."""

    value: Any = None
    confidence: float | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "ParameterValue":
        # The catalog stores either a bare scalar or {"value": ..., "confidence": ...}
        if isinstance(raw, dict) and "value" in raw:
            confidence = raw.get("confidence")
            if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
                confidence = None
            return cls(value=raw["value"], confidence=confidence)
        return cls(value=raw)


class CatalogRecord(BaseModel):
    # Store metadata (_rid, _etag, _ts, ...) is not part of the record
    model_config = ConfigDict(extra="ignore")

    id: str
    file_name: str = ""
    source_blob: str | None = None
    ingested_at: str | None = None
    chunks: list[ChunkRef] = Field(default_factory=list)
    ocr_samples: str | None = None
    ocr_raw: list[OcrRawEntry] | None = None
    llm_description: str | None = None
    llm_motivation: str | None = None
    llm_raw: str | None = None
    parameters: dict[str, ParameterValue] = Field(default_factory=dict)

    @field_validator("chunks", mode="before")
    @classmethod
    def _chunks_or_empty(cls, value: Any) -> Any:
        return value if value is not None else []

    @field_validator("parameters", mode="before")
    @classmethod
    def _normalize_parameters(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("parameters must be an object")
        return {
            key: raw if isinstance(raw, ParameterValue) else ParameterValue.from_raw(raw)
            for key, raw in value.items()
        }

    @property
    def file_type(self) -> str:
        if self.chunks and self.chunks[0].type:
            return self.chunks[0].type
        return "unknown"

    @property
    def is_success(self) -> bool:
        return bool(self.llm_description)
