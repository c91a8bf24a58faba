"""
Utilitários para visualização e relatórios do SheetPlanner
"""

import json
import logging
from typing import List, Optional
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import numpy as np
import pandas as pd

from .geometry import format_dimension
from .models import PackingResult

logger = logging.getLogger(__name__)

PLACEMENT_COLUMNS = [
    "sheet_number", "strategy", "id", "requested_width", "requested_height",
    "placed_width", "placed_height", "x", "y", "rotated", "label",
]


class SheetPlannerVisualizer:
    """Classe para visualização dos planos de corte"""

    def __init__(self, result: PackingResult):
        """
        Inicializa o visualizador

        Args:
            result: Resultado do empacotamento
        """
        self.result = result
        self.colors = plt.cm.Set3(np.linspace(0, 1, 12))

    def plot_sheets(self, save_path: Optional[str] = None, show: bool = False) -> None:
        """Plota cada chapa com as peças posicionadas"""
        if not self.result.sheets:
            logger.info("Nenhuma chapa para visualizar")
            return

        count = len(self.result.sheets)
        fig, axes = plt.subplots(1, count, figsize=(6 * count, 6), squeeze=False)
        width = self.result.sheet_width
        height = self.result.sheet_height

        for ax, sheet in zip(axes[0], self.result.sheets):
            ax.set_xlim(0, width)
            ax.set_ylim(height, 0)  # origem no canto superior esquerdo
            ax.set_aspect("equal")
            ax.set_title(f"Chapa {sheet.sheet_number} ({sheet.strategy})\n"
                         f"Aproveitamento: {sheet.utilization_percent:.1f}%")
            ax.set_xlabel("Largura (mm)")
            ax.set_ylabel("Altura (mm)")

            ax.add_patch(Rectangle((0, 0), width, height,
                                   facecolor="lightgray", edgecolor="black", linewidth=2))

            for j, placement in enumerate(sheet.placements):
                color = self.colors[j % len(self.colors)]
                ax.add_patch(Rectangle((placement.x, placement.y),
                                       placement.placed_width, placement.placed_height,
                                       facecolor=color, edgecolor="black", linewidth=1))
                ax.text(placement.x + placement.placed_width / 2,
                        placement.y + placement.placed_height / 2,
                        f"#{placement.id}\n{placement.label}",
                        ha="center", va="center", fontsize=7)

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        if show:
            plt.show()

        plt.close(fig)


class SheetPlannerReporter:
    """Classe para geração de relatórios"""

    def __init__(self, result: PackingResult):
        self.result = result

    def generate_text_report(self) -> str:
        """Gera relatório em formato texto"""
        metrics = self.result.metrics
        report = []
        report.append("=" * 60)
        report.append("RELATÓRIO DE PLANO DE CORTE")
        report.append("=" * 60)
        report.append("")

        report.append("RESUMO GERAL:")
        report.append(f"  • Chapa: {format_dimension(self.result.sheet_width)} x "
                      f"{format_dimension(self.result.sheet_height)} mm "
                      f"(kerf {format_dimension(self.result.kerf)} mm)")
        report.append(f"  • Chapas Utilizadas: {metrics.sheet_count}")
        report.append(f"  • Peças Posicionadas: {metrics.total_pieces_placed}")
        report.append(f"  • Aproveitamento: {metrics.utilization_percent:.2f}%")
        report.append(f"  • Estratégia: {metrics.strategy}")
        report.append(f"  • Tempo de Processamento: {metrics.processing_time_ms:.1f} ms")
        report.append("")

        report.append("DETALHES POR CHAPA:")
        report.append("-" * 40)

        for sheet in self.result.sheets:
            report.append(f"\nChapa {sheet.sheet_number} ({sheet.strategy}):")
            report.append(f"   • Aproveitamento: {sheet.utilization_percent:.1f}%")
            report.append(f"   • Peças: {len(sheet.placements)}")
            for placement in sheet.placements:
                report.append(f"     #{placement.id}: {placement.label} "
                              f"(pos: {format_dimension(placement.x)}, {format_dimension(placement.y)})")

        report.append("\n" + "=" * 60)

        return "\n".join(report)

    def to_dataframe(self) -> pd.DataFrame:
        """Uma linha por peça posicionada"""
        rows = []
        for sheet in self.result.sheets:
            for placement in sheet.placements:
                row = placement.model_dump()
                row["sheet_number"] = sheet.sheet_number
                row["strategy"] = sheet.strategy
                rows.append(row)
        return pd.DataFrame(rows, columns=PLACEMENT_COLUMNS)

    def generate_csv_report(self, file_path: str) -> None:
        """Gera relatório em formato CSV"""
        self.to_dataframe().to_csv(file_path, index=False, encoding="utf-8")

    def generate_json_report(self, file_path: str) -> None:
        """Gera relatório em formato JSON"""
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.result.to_wire(), f, indent=2, ensure_ascii=False)


def export_result(result: PackingResult, output_dir: str, formats: List[str] = None) -> None:
    """
    Exporta resultado em múltiplos formatos

    Args:
        result: Resultado do empacotamento
        output_dir: Diretório de saída
        formats: Lista de formatos (txt, csv, json)
    """
    if formats is None:
        formats = ["txt", "csv", "json"]

    Path(output_dir).mkdir(parents=True, exist_ok=True)

    reporter = SheetPlannerReporter(result)
    base_path = Path(output_dir) / "plano_de_corte"

    if "txt" in formats:
        with open(f"{base_path}.txt", "w", encoding="utf-8") as f:
            f.write(reporter.generate_text_report())

    if "csv" in formats:
        reporter.generate_csv_report(f"{base_path}.csv")

    if "json" in formats:
        reporter.generate_json_report(f"{base_path}.json")

    logger.info("Relatórios exportados para: %s", output_dir)


def create_visualization(result: PackingResult, output_dir: str, show: bool = False) -> None:
    """
    Cria a visualização das chapas

    Args:
        result: Resultado do empacotamento
        output_dir: Diretório de saída
        show: Se deve mostrar os gráficos
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)

    visualizer = SheetPlannerVisualizer(result)
    visualizer.plot_sheets(str(Path(output_dir) / "plano_de_corte.png"), show=show)

    logger.info("Visualizações salvas em: %s", output_dir)
