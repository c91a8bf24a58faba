"""
Núcleo do SheetPlanner: orquestração multi-chapa e adaptação da requisição
"""

import logging
import time
from typing import List, Optional

from .config import PlannerConfig
from .exceptions import PieceTooLargeError
from .geometry import Piece, Placement, SheetLayout, format_dimension
from .models import (
    CutSpec, PackingMetrics, PackingRequest, PackingResult,
    PlacementReport, SheetReport,
)
from .solvers import Clock, Deadline, greedy_pack_as_many, try_pack_all

logger = logging.getLogger(__name__)

STRATEGY_NAME = "exhaustive_guillotine"
EXHAUSTIVE = "exhaustive"
GREEDY = "greedy"


class SheetPlanner:
    """
    Sistema principal de empacotamento de peças em chapas
    """

    def __init__(self, config: Optional[PlannerConfig] = None, clock: Clock = time.monotonic):
        """
        Inicializa o planejador

        Args:
            config: Configuração de execução
            clock: Relógio usado pelos prazos de busca (segundos)
        """
        self.config = config or PlannerConfig()
        self.clock = clock

    def optimize(self, request: PackingRequest) -> PackingResult:
        """
        Empacota as peças da requisição e monta o relatório

        Args:
            request: Requisição validada

        Returns:
            Resultado do empacotamento

        Raises:
            PieceTooLargeError: se alguma peça não couber na chapa vazia
        """
        start_time = time.perf_counter()

        pieces = self.expand_cuts(request.cuts)
        sheets = self.pack(pieces, request.sheet_width, request.sheet_height, request.kerf)

        result = self._build_result(request, pieces, sheets)
        result.metrics.processing_time_ms = (time.perf_counter() - start_time) * 1000
        return result

    @staticmethod
    def expand_cuts(cuts: List[CutSpec]) -> List[Piece]:
        """Expande cada item da lista de cortes em peças com ids sequenciais"""
        pieces = []
        next_id = 1
        for cut in cuts:
            for _ in range(cut.quantity):
                pieces.append(Piece(next_id, cut.width, cut.height, cut.rotatable))
                next_id += 1
        return pieces

    def pack(self, pieces: List[Piece], sheet_width: float, sheet_height: float, kerf: float = 0) -> List[SheetLayout]:
        """
        Distribui as peças em quantas chapas forem necessárias

        Para cada chapa tenta primeiro a busca exaustiva com todas as peças
        restantes; se ela falhar, a chapa é preenchida pelo algoritmo guloso
        e o processo recomeça com as peças que sobraram.
        """
        for piece in pieces:
            if not piece.fits_in(sheet_width, sheet_height):
                raise PieceTooLargeError(piece, sheet_width, sheet_height)

        remaining = list(pieces)
        sheets: List[SheetLayout] = []

        while remaining:
            deadline = Deadline(self.config.time_limit_per_sheet_ms, self.clock)
            attempt = try_pack_all(
                remaining, sheet_width, sheet_height, kerf, deadline,
                max_depth=self.config.max_exhaustive_pieces,
            )
            if attempt is not None and len(attempt) == len(remaining):
                sheets.append(SheetLayout(tuple(attempt), EXHAUSTIVE))
                logger.debug("Chapa %d: %d peças (busca exaustiva)", len(sheets), len(attempt))
                break

            logger.info(
                "Chapa %d: busca exaustiva sem solução para %d peças, usando preenchimento guloso",
                len(sheets) + 1, len(remaining),
            )
            outcome = greedy_pack_as_many(remaining, sheet_width, sheet_height, kerf)
            if not outcome.placed:
                raise PieceTooLargeError(remaining[0], sheet_width, sheet_height)

            sheets.append(SheetLayout(tuple(outcome.placed), GREEDY))
            logger.debug("Chapa %d: %d peças (guloso)", len(sheets), len(outcome.placed))

            placed_ids = {p.piece.id for p in outcome.placed}
            remaining = [p for p in remaining if p.id not in placed_ids]

        return sheets

    def _build_result(self, request: PackingRequest, pieces: List[Piece], sheets: List[SheetLayout]) -> PackingResult:
        """Converte as chapas internas para o formato de resposta"""
        sheet_area = request.sheet_width * request.sheet_height
        reports = [
            SheetReport(
                sheet_number=number,
                strategy=sheet.strategy,
                utilization_percent=sheet.used_area / sheet_area * 100,
                placements=[self._placement_report(p) for p in sheet.placements],
            )
            for number, sheet in enumerate(sheets, 1)
        ]

        total_piece_area = sum(p.area for p in pieces)
        total_sheet_area = len(sheets) * sheet_area
        utilization = (total_piece_area / total_sheet_area) * 100 if total_sheet_area > 0 else 0

        return PackingResult(
            sheet_count=len(sheets),
            sheet_width=request.sheet_width,
            sheet_height=request.sheet_height,
            kerf=request.kerf,
            sheets=reports,
            metrics=PackingMetrics(
                utilization_percent=utilization,
                sheet_count=len(sheets),
                total_pieces_placed=sum(s.piece_count for s in sheets),
                strategy=STRATEGY_NAME,
            ),
        )

    @staticmethod
    def _placement_report(placement: Placement) -> PlacementReport:
        rect = placement.rect
        label = f"{format_dimension(rect.width)}x{format_dimension(rect.height)}"
        if placement.rotated:
            label += " (R)"
        return PlacementReport(
            id=placement.piece.id,
            requested_width=placement.piece.width,
            requested_height=placement.piece.height,
            placed_width=rect.width,
            placed_height=rect.height,
            x=rect.x,
            y=rect.y,
            rotated=placement.rotated,
            label=label,
        )
