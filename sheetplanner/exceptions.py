"""
Exceções do SheetPlanner
"""

from .geometry import Piece, format_dimension


class SheetPlannerError(Exception):
    """Erro base do sistema"""


class InvalidRequestError(SheetPlannerError):
    """Requisição malformada, rejeitada antes de qualquer empacotamento"""


class PieceTooLargeError(SheetPlannerError):
    """Uma peça não cabe na chapa vazia em nenhuma orientação"""

    def __init__(self, piece: Piece, sheet_width: float, sheet_height: float):
        self.piece = piece
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        super().__init__(
            f"A peça {format_dimension(piece.width)}x{format_dimension(piece.height)} "
            f"(id {piece.id}) não cabe na chapa "
            f"{format_dimension(sheet_width)}x{format_dimension(sheet_height)}, "
            f"nem rotacionada"
        )


class SearchTimeout(SheetPlannerError):
    """Prazo da busca exaustiva esgotado (uso interno dos solvers)"""
