"""
SheetPlanner - Plano de Corte de Chapas por Guilhotina

Distribui peças retangulares em chapas de tamanho fixo, minimizando a
quantidade de chapas com busca exaustiva limitada por tempo e um
preenchimento guloso como fallback.
"""

from .core import SheetPlanner
from .config import PlannerConfig
from .exceptions import InvalidRequestError, PieceTooLargeError, SheetPlannerError
from .models import CutSpec, PackingRequest, PackingResult, SheetReport, PlacementReport
from .worker import PackingWorker, handle_message

__version__ = "1.0.0"
__author__ = "SheetPlanner Team"

__all__ = [
    "SheetPlanner",
    "PlannerConfig",
    "PackingWorker",
    "handle_message",
    "CutSpec",
    "PackingRequest",
    "PackingResult",
    "SheetReport",
    "PlacementReport",
    "SheetPlannerError",
    "PieceTooLargeError",
    "InvalidRequestError",
]
