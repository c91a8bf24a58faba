"""
Execução do empacotamento em segundo plano, por troca de mensagens
"""

import logging
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .config import PlannerConfig
from .core import SheetPlanner
from .exceptions import InvalidRequestError, PieceTooLargeError
from .models import ErrorResponse, PackingRequest, SuccessResponse

logger = logging.getLogger(__name__)


def _validation_message(error: ValidationError) -> str:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        details.append(f"{location}: {item['msg']}")
    return "Requisição inválida: " + "; ".join(details)


def parse_request(message: Dict[str, Any]) -> PackingRequest:
    """
    Valida uma mensagem de entrada

    Raises:
        InvalidRequestError: se a mensagem for malformada
    """
    try:
        return PackingRequest.model_validate(message)
    except ValidationError as e:
        raise InvalidRequestError(_validation_message(e)) from e


def handle_message(message: Dict[str, Any], config: Optional[PlannerConfig] = None) -> Dict[str, Any]:
    """
    Processa uma mensagem de empacotamento e devolve a mensagem de resposta

    Nunca lança exceção: falhas são convertidas em respostas de erro.

    Args:
        message: Requisição no formato JSON (camelCase)
        config: Configuração do planejador

    Returns:
        Resposta de sucesso ou de erro, pronta para serialização
    """
    try:
        request = parse_request(message)
        result = SheetPlanner(config).optimize(request)
        return SuccessResponse(result=result).to_wire()
    except InvalidRequestError as e:
        logger.warning("%s", e)
        return ErrorResponse(error_type="validation", message=str(e)).to_wire()
    except PieceTooLargeError as e:
        logger.warning("Erro fatal no empacotamento: %s", e)
        return ErrorResponse(error_type="piece_too_large", message=str(e)).to_wire()
    except Exception as e:
        logger.exception("Erro inesperado no worker de empacotamento")
        return ErrorResponse(error_type="internal", message=str(e)).to_wire()


class PackingWorker:
    """
    Worker em segundo plano para requisições de empacotamento

    Cada mensagem é processada de forma independente; nenhum estado é
    compartilhado entre execuções.
    """

    def __init__(self, config: Optional[PlannerConfig] = None):
        self.config = config or PlannerConfig()
        self._executor: Optional[Executor] = None

    @property
    def executor(self) -> Executor:
        if self._executor is None:
            if self.config.worker_mode == "process":
                self._executor = ProcessPoolExecutor(max_workers=self.config.max_workers)
            else:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers, thread_name_prefix="sheetplanner"
                )
            logger.debug("Executor %s iniciado com %d workers", self.config.worker_mode, self.config.max_workers)
        return self._executor

    def submit(self, message: Dict[str, Any]) -> "Future[Dict[str, Any]]":
        """Envia uma mensagem ao worker e retorna o futuro da resposta"""
        return self.executor.submit(handle_message, message, self.config)

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def __enter__(self) -> "PackingWorker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
