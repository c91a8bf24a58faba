"""
Servidor FastAPI principal para o SheetPlanner
"""

import asyncio
import uuid
from concurrent.futures import Future
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import uvicorn

from sheetplanner import PackingWorker, PlannerConfig, __version__
from sheetplanner.config import configure_logging
from sheetplanner.models import JobStatus, PackingResult
from sheetplanner.utils import SheetPlannerReporter

config = PlannerConfig.from_env()
configure_logging(config.log_level)

# Worker global: cada requisição é uma mensagem independente
worker = PackingWorker(config)
jobs: Dict[str, Future] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    worker.shutdown(wait=False)


app = FastAPI(
    title="SheetPlanner API",
    description="API para plano de corte de chapas (guilhotina)",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _respond(response: dict) -> JSONResponse:
    status_code = 200 if response["status"] == "success" else 422
    if response.get("errorType") == "internal":
        status_code = 500
    return JSONResponse(status_code=status_code, content=response)


@app.get("/")
async def root():
    """Página inicial da API"""
    return {
        "message": "SheetPlanner API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health")
async def health_check():
    """Verificação de saúde da API"""
    return {
        "status": "healthy",
        "service": "SheetPlanner API",
        "version": __version__
    }


@app.post("/pack")
async def pack(message: Dict[str, Any] = Body(...)):
    """
    Empacota as peças e aguarda o resultado

    A mensagem é validada e processada pelo worker em segundo plano; erros
    de validação voltam no mesmo formato das demais respostas de erro.
    """
    response = await asyncio.wrap_future(worker.submit(message))
    return _respond(response)


@app.post("/jobs")
async def create_job(message: Dict[str, Any] = Body(...)):
    """Envia uma requisição para processamento e retorna o id do job"""
    job_id = uuid.uuid4().hex
    jobs[job_id] = worker.submit(message)
    return {"jobId": job_id}


@app.get("/jobs/{job_id}")
async def get_job(job_id: str):
    """Consulta o estado de um job; jobs concluídos são removidos após a leitura"""
    future = jobs.get(job_id)
    if future is None:
        raise HTTPException(status_code=404, detail=f"Job {job_id} não encontrado")

    if not future.done():
        return JobStatus(job_id=job_id, state="pending").to_wire()

    jobs.pop(job_id, None)
    return JobStatus(job_id=job_id, state="done", response=future.result()).to_wire()


@app.post("/report/text", response_class=PlainTextResponse)
async def text_report(result: PackingResult):
    """Gera o relatório em texto de um resultado"""
    return SheetPlannerReporter(result).generate_text_report()


@app.get("/examples")
async def get_example():
    """Retorna exemplo de requisição"""
    return {
        "sheetWidth": 2440,
        "sheetHeight": 1830,
        "kerf": 3,
        "cuts": [
            {"width": 800, "height": 600, "quantity": 4},
            {"width": 400, "height": 300, "quantity": 6},
            {"width": 1200, "height": 250, "quantity": 2, "rotatable": False}
        ]
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
