#!/usr/bin/env python3
"""
Script principal para executar o sistema SheetPlanner
"""

import sys
import json
import argparse
import logging
from pathlib import Path

from sheetplanner import PackingRequest, PackingResult, PlannerConfig, handle_message
from sheetplanner.config import configure_logging
from sheetplanner.geometry import format_dimension
from sheetplanner.utils import export_result, create_visualization

logger = logging.getLogger("sheetplanner.run")


def create_sample_request() -> PackingRequest:
    """Cria uma requisição de exemplo para demonstração"""
    return PackingRequest(
        sheet_width=2440,
        sheet_height=1830,
        kerf=3,
        cuts=[
            {"width": 800, "height": 600, "quantity": 6},
            {"width": 600, "height": 400, "quantity": 8},
            {"width": 1200, "height": 300, "quantity": 3, "rotatable": False},
        ],
    )


def load_request(path: str) -> PackingRequest:
    """Carrega uma requisição de um arquivo JSON"""
    with open(path, "r", encoding="utf-8") as f:
        return PackingRequest.model_validate(json.load(f))


def run_pack(request: PackingRequest, config: PlannerConfig):
    """Executa o empacotamento e exibe o resumo"""

    print("🔧 SheetPlanner - Plano de Corte")
    print("=" * 60)
    print(f"✓ Chapa: {format_dimension(request.sheet_width)} x {format_dimension(request.sheet_height)} mm, kerf {format_dimension(request.kerf)} mm")
    print(f"✓ {sum(c.quantity for c in request.cuts)} peças em {len(request.cuts)} tipos")

    print("\n🔄 Executando empacotamento...")
    response = handle_message(request.to_wire(), config)

    if response["status"] != "success":
        print(f"❌ Falha no empacotamento: {response['message']}")
        return None

    result = PackingResult.model_validate(response["result"])
    metrics = result.metrics
    print(f"\n✅ Empacotamento concluído!")
    print(f"📊 Aproveitamento: {metrics.utilization_percent:.1f}%")
    print(f"📦 Chapas utilizadas: {metrics.sheet_count}")
    print(f"⚡ Tempo de processamento: {metrics.processing_time_ms:.1f}ms")

    print(f"\n📋 Resumo das chapas:")
    for sheet in result.sheets:
        print(f"  {sheet.sheet_number}. {len(sheet.placements)} peças, "
              f"aproveitamento {sheet.utilization_percent:.1f}% ({sheet.strategy})")

    return result


def run_api_server():
    """Inicia o servidor da API"""

    print("🚀 Iniciando servidor da API SheetPlanner...")

    import uvicorn

    print("✓ Servidor iniciado em http://localhost:8000")
    print("✓ Documentação da API: http://localhost:8000/docs")
    print("\nPressione Ctrl+C para parar o servidor")

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )


def run_tests():
    """Executa os testes do sistema"""

    print("🧪 Executando testes do SheetPlanner...")

    import unittest

    loader = unittest.TestLoader()
    start_dir = Path(__file__).parent / 'tests'
    suite = loader.discover(str(start_dir), pattern='test_*.py', top_level_dir=str(Path(__file__).parent))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    if result.wasSuccessful():
        print("\n✅ Todos os testes passaram!")
        return True

    print(f"\n❌ {len(result.failures) + len(result.errors)} testes falharam")
    return False


def main():
    """Função principal"""

    parser = argparse.ArgumentParser(
        description="SheetPlanner - Plano de Corte de Chapas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos de uso:
  python run.py demo                          # Executa demonstração
  python run.py pack --input pedido.json      # Empacota uma requisição
  python run.py api                           # Inicia servidor da API
  python run.py test                          # Executa testes
  python run.py demo --export results         # Executa demo e exporta resultados
        """
    )

    parser.add_argument(
        'command',
        choices=['demo', 'pack', 'api', 'test'],
        help='Comando a executar'
    )

    parser.add_argument(
        '--input',
        metavar='FILE',
        help='Arquivo JSON com a requisição (comando pack)'
    )

    parser.add_argument(
        '--time-limit',
        type=float,
        metavar='MS',
        help='Prazo da busca exaustiva por chapa (ms)'
    )

    parser.add_argument(
        '--export',
        metavar='DIR',
        help='Diretório para exportar resultados'
    )

    parser.add_argument(
        '--visualization',
        action='store_true',
        help='Criar visualizações dos resultados'
    )

    args = parser.parse_args()

    overrides = {}
    if args.time_limit is not None:
        overrides["time_limit_per_sheet_ms"] = args.time_limit
    config = PlannerConfig.from_env(**overrides)
    configure_logging(config.log_level)

    try:
        if args.command in ('demo', 'pack'):
            if args.command == 'pack':
                if not args.input:
                    parser.error("o comando pack requer --input")
                request = load_request(args.input)
            else:
                request = create_sample_request()

            result = run_pack(request, config)
            if result is None:
                sys.exit(1)

            if args.export:
                print(f"\n📁 Exportando resultados para: {args.export}")
                export_result(result, args.export)

                if args.visualization:
                    print("🎨 Criando visualizações...")
                    create_visualization(result, args.export)

                print("✅ Exportação concluída!")

        elif args.command == 'api':
            run_api_server()

        elif args.command == 'test':
            success = run_tests()
            sys.exit(0 if success else 1)

    except KeyboardInterrupt:
        print("\n\n👋 Sistema interrompido pelo usuário")
    except Exception as e:
        logger.exception("Erro na execução")
        print(f"\n❌ Erro: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
