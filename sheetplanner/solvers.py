"""
Algoritmos de empacotamento de uma chapa: busca exaustiva e fallback guloso
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .exceptions import SearchTimeout
from .freespace import prune_free_list, split_free_rect
from .geometry import Piece, Placement, Rect

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Deadline:
    """
    Prazo de parede para a busca exaustiva

    O relógio é injetável para permitir testes determinísticos.
    """

    def __init__(self, time_limit_ms: float, clock: Clock = time.monotonic):
        self.clock = clock
        self.expires_at = clock() + time_limit_ms / 1000.0

    def expired(self) -> bool:
        return self.clock() > self.expires_at


@dataclass
class GreedyOutcome:
    """Resultado do preenchimento guloso de uma chapa"""
    placed: List[Placement]
    remaining: List[Piece]


def _by_area_desc(pieces: Sequence[Piece]) -> List[Piece]:
    return sorted(pieces, key=lambda p: p.area, reverse=True)


def _place(free_rects: List[Rect], index: int, placed: Rect, kerf: float) -> List[Rect]:
    """Substitui o retângulo livre usado pelas sobras do corte e poda a lista"""
    free_rect = free_rects[index]
    new_free = free_rects[:index] + free_rects[index + 1:]
    new_free.extend(split_free_rect(free_rect, placed, kerf))
    return prune_free_list(new_free)


def try_pack_all(
    pieces: Sequence[Piece],
    sheet_width: float,
    sheet_height: float,
    kerf: float,
    deadline: Deadline,
    max_depth: Optional[int] = None,
) -> Optional[List[Placement]]:
    """
    Tenta posicionar todas as peças em uma única chapa por backtracking

    As peças são ordenadas por área decrescente e, para cada peça, os
    retângulos livres são testados do menor para o maior (melhor encaixe
    primeiro). A primeira solução completa encontrada é retornada.

    Args:
        pieces: Peças a posicionar (não são modificadas)
        sheet_width: Largura da chapa
        sheet_height: Altura da chapa
        kerf: Espessura do corte
        deadline: Prazo da busca
        max_depth: Quantidade máxima de peças aceitas pela busca

    Returns:
        Lista de posicionamentos para todas as peças, ou None se não houver
        solução completa ou se o prazo esgotar
    """
    ordered = _by_area_desc(pieces)
    if max_depth is not None and len(ordered) > max_depth:
        logger.debug("Busca exaustiva ignorada: %d peças excedem o limite de %d", len(ordered), max_depth)
        return None

    def recurse(index: int, free_rects: List[Rect]) -> Optional[List[Placement]]:
        if deadline.expired():
            raise SearchTimeout()
        if index >= len(ordered):
            return []

        piece = ordered[index]
        candidates = sorted(enumerate(free_rects), key=lambda item: item[1].area())

        for free_index, free_rect in candidates:
            for width, height, rotated in piece.orientations():
                if width > free_rect.width or height > free_rect.height:
                    continue
                placed = Rect(free_rect.x, free_rect.y, width, height)
                result = recurse(index + 1, _place(free_rects, free_index, placed, kerf))
                if result is not None:
                    result.insert(0, Placement(piece, placed, rotated))
                    return result
        return None

    try:
        return recurse(0, [Rect(0, 0, sheet_width, sheet_height)])
    except SearchTimeout:
        logger.debug("Prazo da busca exaustiva esgotado com %d peças", len(ordered))
        return None


def greedy_pack_as_many(
    pieces: Sequence[Piece],
    sheet_width: float,
    sheet_height: float,
    kerf: float,
) -> GreedyOutcome:
    """
    Preenche uma chapa com o maior número possível de peças (best fit)

    A cada passo todas as combinações (peça, retângulo livre, orientação)
    são avaliadas e a de menor desperdício é escolhida. Após cada
    posicionamento a varredura recomeça da primeira peça restante.
    """
    remaining = _by_area_desc(pieces)
    placed_list: List[Placement] = []
    free_rects = [Rect(0, 0, sheet_width, sheet_height)]

    while remaining:
        best = None
        best_waste = None
        for piece_index, piece in enumerate(remaining):
            for free_index, free_rect in enumerate(free_rects):
                for width, height, rotated in piece.orientations():
                    if width > free_rect.width or height > free_rect.height:
                        continue
                    waste = free_rect.area() - width * height
                    if best_waste is None or waste < best_waste:
                        best_waste = waste
                        best = (piece_index, free_index, width, height, rotated)

        if best is None:
            break

        piece_index, free_index, width, height, rotated = best
        free_rect = free_rects[free_index]
        placed = Rect(free_rect.x, free_rect.y, width, height)
        placed_list.append(Placement(remaining[piece_index], placed, rotated))
        free_rects = _place(free_rects, free_index, placed, kerf)
        del remaining[piece_index]

    return GreedyOutcome(placed=placed_list, remaining=remaining)
