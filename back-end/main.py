import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from agents.agent import EstimationPipeline, build_pipeline
from models.errors import InputValidationError
from models.schemas import EstimateResponse, PipelineSnapshot, RawInputs, ValidationErrorResponse
from tools.notifications import LoggingNotifier

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

notifier = LoggingNotifier()
pipeline = build_pipeline(notifier=notifier)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # Let any background insight requests land before shutdown
    await pipeline.wait_for_pending()


app = FastAPI(title="SolarIQ Performance API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_pipeline() -> EstimationPipeline:
    return pipeline


@app.exception_handler(InputValidationError)
async def input_validation_handler(_request: Request, exc: InputValidationError):
    body = ValidationErrorResponse(
        error=exc.code,
        message=exc.message,
        fields=exc.fields,
        notices=exc.notices,
    )
    return JSONResponse(status_code=422, content=body.model_dump(mode="json"))


@app.get("/")
async def root():
    """Root endpoint - health check"""
    return {"message": "SolarIQ Performance API is running", "status": "healthy"}


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "solariq-backend"}


@app.post("/api/estimate", response_model=EstimateResponse)
async def estimate_performance(
    data: RawInputs,
    wait: bool = True,
    pipeline: EstimationPipeline = Depends(get_pipeline),
):
    """Estimate panel performance and request improvement suggestions.

    - wait=true (default): respond once the insight request has settled.
    - wait=false: respond with the numeric result immediately; poll GET /api/insight,
      which also carries any notice raised by that request.
    """
    if wait:
        report = await pipeline.run(data)
        return EstimateResponse(
            sequence=report.sequence,
            result=report.result,
            insight=report.insight,
            state=report.state,
            notices=report.notices,
            message="Estimation completed",
        )

    sequence, result, _task = pipeline.submit(data)
    return EstimateResponse(
        sequence=sequence,
        result=result,
        state=pipeline.snapshot.insight,
        message="Estimation completed; insight pending",
    )


@app.get("/api/insight", response_model=PipelineSnapshot)
async def current_insight(pipeline: EstimationPipeline = Depends(get_pipeline)):
    return pipeline.snapshot


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
