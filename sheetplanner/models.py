"""
Modelos de dados da API do SheetPlanner
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Modelo base: campos em snake_case no Python e camelCase no JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class CutSpec(WireModel):
    """Item da lista de cortes"""
    width: float = Field(..., gt=0, description="Largura da peça (mm)")
    height: float = Field(..., gt=0, description="Altura da peça (mm)")
    quantity: int = Field(..., ge=1, description="Quantidade necessária")
    rotatable: bool = Field(True, description="Permitir rotação de 90 graus")


class PackingRequest(WireModel):
    """Requisição de empacotamento"""
    sheet_width: float = Field(..., gt=0, description="Largura da chapa (mm)")
    sheet_height: float = Field(..., gt=0, description="Altura da chapa (mm)")
    cuts: List[CutSpec] = Field(..., min_length=1, description="Lista de cortes")
    kerf: float = Field(0, ge=0, description="Espessura do corte (mm)")


class PlacementReport(WireModel):
    """Peça posicionada, como reportada ao cliente"""
    id: int
    requested_width: float
    requested_height: float
    placed_width: float
    placed_height: float
    x: float
    y: float
    rotated: bool
    label: str


class SheetReport(WireModel):
    """Plano de corte de uma chapa"""
    sheet_number: int
    strategy: str = Field(..., description="Estratégia que produziu a chapa (exhaustive/greedy)")
    utilization_percent: float
    placements: List[PlacementReport]


class PackingMetrics(WireModel):
    """Métricas agregadas do empacotamento"""
    utilization_percent: float
    sheet_count: int
    total_pieces_placed: int
    strategy: str
    processing_time_ms: float = 0.0


class PackingResult(WireModel):
    """Resultado completo do empacotamento"""
    sheet_count: int
    sheet_width: float
    sheet_height: float
    kerf: float = 0.0
    sheets: List[SheetReport]
    metrics: PackingMetrics


class SuccessResponse(WireModel):
    status: Literal["success"] = "success"
    result: PackingResult


class ErrorResponse(WireModel):
    status: Literal["error"] = "error"
    error_type: Literal["validation", "piece_too_large", "internal"]
    message: str


class JobStatus(WireModel):
    """Estado de um job enviado ao worker"""
    job_id: str
    state: Literal["pending", "done"]
    response: Optional[Union[SuccessResponse, ErrorResponse]] = None
