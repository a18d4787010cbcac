"""Document detail view: parameters, OCR lines and AI insights of one record."""

import re
from typing import Any

from pydantic import BaseModel

from dto_dashboard.models import CatalogRecord, ParameterValue
from dto_dashboard.rows import round_half_up

OCR_PREVIEW_SIZE = 6
NO_DESCRIPTION = "No description available."
NO_MOTIVATION = "No motivation available."

LABELS = {
    "detected_type": "Detected Type",
    "detection_confidence": "Detection Confidence",
    "rated_current": "Rated Current",
    "no_of_poles": "No Of Poles",
}


class ParameterField(BaseModel):
    key: str
    label: str
    value: str
    confidence: float | None = None


class DocumentDetail(BaseModel):
    id: str
    file_name: str
    file_type: str
    ingested_at: str | None = None
    description: str
    motivation: str
    parameters: list[ParameterField]
    extraction_percentage: int | None = None
    detection_percentage: int | None = None
    ocr_fields: list[str]
    ocr_preview: list[str]
    ocr_more_count: int


def ocr_fields(ocr_samples: str | None) -> list[str]:
    """Non-blank OCR lines, without bare page/line numbers."""
    if not ocr_samples:
        return []
    lines = (line.strip() for line in re.split(r"\r?\n", ocr_samples))
    return [line for line in lines if line and not line.isdigit()]


def label_for(key: str) -> str:
    if key in LABELS:
        return LABELS[key]
    return re.sub(r"\b\w", lambda m: m.group().upper(), key.replace("_", " "))


def display_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parameter_fields(parameters: dict[str, ParameterValue]) -> list[ParameterField]:
    return [
        ParameterField(
            key=key,
            label=label_for(key),
            value=display_value(param.value),
            confidence=param.confidence,
        )
        for key, param in parameters.items()
    ]


def extraction_percentage(fields: list[ParameterField]) -> int | None:
    confidences = [f.confidence for f in fields if f.confidence is not None]
    if not confidences:
        return None
    return round_half_up(sum(confidences) / len(confidences) * 100)


def detection_percentage(parameters: dict[str, ParameterValue]) -> int | None:
    param = parameters.get("detection_confidence")
    if param is None:
        return None
    raw = param.value
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        match = re.match(r"\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?", raw)
        if match is None:
            return None
        raw = float(match.group())
    if not isinstance(raw, (int, float)):
        return None
    # Fractions are scaled, anything above 1 is already a percentage
    return round_half_up(raw * 100 if raw <= 1 else raw)


def build_detail(record: CatalogRecord) -> DocumentDetail:
    fields = parameter_fields(record.parameters)
    lines = ocr_fields(record.ocr_samples)
    preview = lines[:OCR_PREVIEW_SIZE]
    return DocumentDetail(
        id=record.id,
        file_name=record.file_name,
        file_type=record.file_type,
        ingested_at=record.ingested_at,
        description=record.llm_description or NO_DESCRIPTION,
        motivation=record.llm_motivation or NO_MOTIVATION,
        parameters=fields,
        extraction_percentage=extraction_percentage(fields),
        detection_percentage=detection_percentage(record.parameters),
        ocr_fields=lines,
        ocr_preview=preview,
        ocr_more_count=len(lines) - len(preview),
    )
