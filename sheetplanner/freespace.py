"""
Gerenciamento dos retângulos livres de uma chapa (corte guilhotina)
"""

from typing import List

from .geometry import Rect


def split_free_rect(free_rect: Rect, placed: Rect, kerf: float = 0) -> List[Rect]:
    """
    Divide o retângulo livre onde uma peça foi posicionada

    Gera no máximo dois retângulos: um à direita da peça, com a altura total
    do retângulo livre, e um abaixo dela, com a largura da peça. A espessura
    do corte (kerf) é descontada entre a peça e cada sobra.

    Args:
        free_rect: Retângulo livre que recebeu a peça
        placed: Retângulo ocupado pela peça (na origem de free_rect)
        kerf: Espessura do corte

    Returns:
        Novos retângulos livres com dimensões estritamente positivas
    """
    new_rects = []

    right_width = free_rect.width - placed.width - kerf
    if right_width > 0:
        new_rects.append(Rect(placed.x + placed.width + kerf, placed.y, right_width, free_rect.height))

    bottom_height = free_rect.height - placed.height - kerf
    if bottom_height > 0:
        new_rects.append(Rect(placed.x, placed.y + placed.height + kerf, placed.width, bottom_height))

    return new_rects


def prune_free_list(free_rects: List[Rect]) -> List[Rect]:
    """
    Remove retângulos degenerados ou contidos em outro retângulo da lista

    Retângulos idênticos são tratados como um só: o primeiro é mantido.
    """
    clean = [r for r in free_rects if r.width > 0 and r.height > 0]
    pruned = []
    for i, rect in enumerate(clean):
        contained = False
        for j, other in enumerate(clean):
            if i == j or not other.contains(rect):
                continue
            # duplicata exata: só a primeira ocorrência sobrevive
            if other == rect and j > i:
                continue
            contained = True
            break
        if not contained:
            pruned.append(rect)
    return pruned
