"""
Modelo geométrico do SheetPlanner: peças, retângulos e posicionamentos
"""

from dataclasses import dataclass
from typing import Tuple


def format_dimension(value: float) -> str:
    """Formata uma medida sem perder precisão (1200.0 -> 1200, 1200.125 -> 1200.125)"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Piece:
    """Peça retangular a ser cortada (uma unidade de um item da lista de cortes)"""
    id: int
    width: float
    height: float
    rotatable: bool = True

    @property
    def area(self) -> float:
        return self.width * self.height

    def orientations(self) -> Tuple[Tuple[float, float, bool], ...]:
        """Orientações válidas como (largura, altura, rotacionada)"""
        if self.rotatable and self.width != self.height:
            return ((self.width, self.height, False), (self.height, self.width, True))
        return ((self.width, self.height, False),)

    def fits_in(self, width: float, height: float) -> bool:
        """Se a peça cabe numa área vazia width x height em alguma orientação"""
        return any(w <= width and h <= height for w, h, _ in self.orientations())


@dataclass(frozen=True)
class Rect:
    """Retângulo alinhado aos eixos em coordenadas locais da chapa"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def area(self) -> float:
        return self.width * self.height

    def contains(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and self.right >= other.right
            and self.bottom >= other.bottom
        )

    def intersection_area(self, other: "Rect") -> float:
        overlap_w = min(self.right, other.right) - max(self.x, other.x)
        overlap_h = min(self.bottom, other.bottom) - max(self.y, other.y)
        if overlap_w <= 0 or overlap_h <= 0:
            return 0.0
        return overlap_w * overlap_h


@dataclass(frozen=True)
class Placement:
    """Peça posicionada numa chapa"""
    piece: Piece
    rect: Rect
    rotated: bool = False


@dataclass(frozen=True)
class SheetLayout:
    """Chapa selada: posicionamentos e a estratégia que os produziu"""
    placements: Tuple[Placement, ...]
    strategy: str

    @property
    def used_area(self) -> float:
        return sum(p.rect.area() for p in self.placements)

    @property
    def piece_count(self) -> int:
        return len(self.placements)
