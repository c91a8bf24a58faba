"""
Configuração do SheetPlanner
"""

import logging
import os
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "SHEETPLANNER_"


class PlannerConfig(BaseModel):
    """Parâmetros de execução do motor de empacotamento"""
    time_limit_per_sheet_ms: float = Field(5000, gt=0, description="Prazo da busca exaustiva por chapa (ms)")
    # a busca exaustiva usa um nível de recursão por peça
    max_exhaustive_pieces: int = Field(400, ge=1, le=800, description="Máximo de peças para tentar a busca exaustiva")
    worker_mode: Literal["thread", "process"] = Field("thread", description="Tipo de executor em segundo plano")
    max_workers: int = Field(2, ge=1, description="Quantidade de workers em segundo plano")
    log_level: str = Field("INFO", description="Nível de log")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Nível de log desconhecido: {v}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> "PlannerConfig":
        """
        Carrega a configuração das variáveis de ambiente SHEETPLANNER_*

        Args:
            environ: Mapeamento de variáveis (padrão: os.environ)
            overrides: Valores que têm precedência sobre o ambiente
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        values.update(overrides)
        return cls(**values)


def configure_logging(level: str = "INFO") -> None:
    """Configura o logging da aplicação"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
