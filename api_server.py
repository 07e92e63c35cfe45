# api_server.py
import asyncio
import enum
import logging
from contextlib import asynccontextmanager, suppress
from typing import List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

import models
from config import Settings, load_settings
from embeddings import EmptyCandidateSet
from rag import ANSWERS, AnswerIndex

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Missing input, or the model is not ready yet."""


class State(str, enum.Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class AppContext:
    """
    Everything the handlers read: the model and the cached answer embeddings.
    Written once by initialize(), read-only afterwards.
    """

    def __init__(self, settings: Settings, loader=models.load, answers=ANSWERS):
        self.settings = settings
        self.loader = loader
        self.answers = tuple(answers)
        self.state = State.LOADING
        self.model = None
        self.index: Optional[AnswerIndex] = None
        self.error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.state is State.READY

    async def _load(self):
        model = await self.loader(self.settings.model_name)
        index = await asyncio.to_thread(AnswerIndex.build, model, self.answers)
        return model, index

    async def initialize(self) -> None:
        try:
            model, index = await asyncio.wait_for(
                self._load(), timeout=self.settings.load_timeout
            )
        except asyncio.TimeoutError:
            logger.error("Model load timed out after %.0fs", self.settings.load_timeout)
            self.state, self.error = State.FAILED, "timeout"
            return
        except Exception as e:
            logger.exception("Model load failed")
            self.state, self.error = State.FAILED, str(e) or type(e).__name__
            return
        self.model, self.index = model, index
        self.state = State.READY
        logger.info("Model and answer embeddings loaded (%d answers)", len(index))

    def require_ready(self):
        if not self.ready:
            raise BadRequest(f"model is {self.state.value}")
        return self.model, self.index


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def _required(value: Optional[str]) -> str:
    if not value:
        raise BadRequest("missing field")
    return value


# ------------------ API ROUTES ------------------

class EmbedRequest(BaseModel):
    text: Optional[str] = Field(None, examples=["Hello, world!"])


class EmbedResponse(BaseModel):
    embeddings: List[float]


class AnswerRequest(BaseModel):
    question: Optional[str] = Field(None, examples=["What is the capital of France?"])


class AnswerResponse(BaseModel):
    answer: str


router = APIRouter()


@router.get("/")
def root(ctx: AppContext = Depends(get_context)):
    return {
        "status": ctx.state.value,
        "model": ctx.settings.model_name,
        "answers": len(ctx.answers),
    }


@router.post("/embed", response_model=EmbedResponse, summary="Get embeddings for input text")
def embed(req: EmbedRequest, ctx: AppContext = Depends(get_context)):
    text = _required(req.text)
    model, _ = ctx.require_ready()
    return {"embeddings": model.embed([text])[0]}


@router.post(
    "/answer",
    response_model=AnswerResponse,
    summary="Get the most similar answer for the input question",
)
def answer(req: AnswerRequest, ctx: AppContext = Depends(get_context)):
    question = _required(req.question)
    model, index = ctx.require_ready()
    return {"answer": index.make_answer(model, question)}


async def _empty_400(request: Request, exc: Exception) -> Response:
    logger.debug("400 on %s: %s", request.url.path, exc)
    return Response(status_code=400)


def create_app(
    settings: Optional[Settings] = None,
    loader=models.load,
    context: Optional[AppContext] = None,
) -> FastAPI:
    settings = settings or load_settings()
    ctx = context or AppContext(settings, loader)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if ctx.state is State.LOADING:
            task = asyncio.create_task(ctx.initialize())
        yield
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    app = FastAPI(
        title="Universal Sentence Encoder API",
        version="1.0.0",
        description="API documentation for the sentence encoder QA service",
        servers=[{"url": f"http://localhost:{settings.port}"}],
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.context = ctx
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for exc_type in (BadRequest, EmptyCandidateSet, RequestValidationError):
        app.add_exception_handler(exc_type, _empty_400)
    app.include_router(router)
    return app


app = create_app()


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server is running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
