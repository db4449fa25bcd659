from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from reporting.schema import ReportPayload


# --------- Common ---------
class ErrorDetail(BaseModel):
    field: Optional[str] = None
    issue: Optional[str] = None


class ErrorEnvelope(BaseModel):
    code: str = Field(default="SERVER_ERROR")
    message: str
    details: Optional[List[ErrorDetail]] = None


class ErrorResponse(BaseModel):
    error: ErrorEnvelope


# --------- Inputs ---------
class ReportRequest(ReportPayload):
    """Calculation results to render, as sent by the calculator screens."""
    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {
                "title": "Cooling Load",
                "subtitle": "",
                "finalResults": [
                    {"label": "Total Load", "value": "4.2", "unit": "kW"},
                    {"label": "Refrigeration", "value": "1.19", "unit": "TR"},
                ],
                "sections": [
                    {
                        "title": "Zone A",
                        "items": [
                            {"label": "Sensible Heat", "value": "1200", "unit": "W", "isHighlighted": True},
                            {"label": "Latent Heat", "value": "300", "unit": "W"},
                        ],
                    }
                ],
                "inputs": [
                    {"title": "Room", "items": [{"label": "Area", "value": "24", "unit": "m²"}]},
                ],
            }
        ]
    })


# --------- Outputs ---------
class ExportNotice(BaseModel):
    title: str
    message: str


class ExportData(BaseModel):
    ok: bool
    fileName: Optional[str] = None
    notices: List[ExportNotice] = Field(default_factory=list)


class ExportOut(BaseModel):
    data: ExportData
