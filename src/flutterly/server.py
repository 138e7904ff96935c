"""FastAPI HTTP server for the split-view page.

Routes:

    GET  /                   -> split-view.html
    GET  /check-bedrock      -> trimmed output of the check script
    POST /configure-bedrock  <- {"token": "..."}

Anything else gets a plain-text 404.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from flutterly.bedrock import BedrockScripts, ScriptError
from flutterly.config.settings import ServerConfig

logger = logging.getLogger(__name__)


class ConfigureResponse(BaseModel):
    ok: bool
    error: str | None = None


def _configure_reply(status_code: int, error: str | None = None) -> JSONResponse:
    body = ConfigureResponse(ok=error is None, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _require_bare_url(request: Request) -> None:
    # Routes match the whole request target, so any query string is unknown.
    if request.url.query:
        raise StarletteHTTPException(status_code=404)


def _reject_constant(name: str) -> None:
    raise ValueError(f"Unexpected JSON constant {name}")


def _extract_token(raw: bytes) -> str:
    """Pull a usable token out of a configure request body.

    Raises:
        ValueError: With the client-facing error message.
    """
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise ValueError("Invalid JSON") from e
    if parsed is None:
        raise ValueError("Invalid JSON")

    token = parsed.get("token") if isinstance(parsed, dict) else None
    if not isinstance(token, str) or not token.strip():
        raise ValueError("Token is required")
    return token.strip()


def create_app(
    config: ServerConfig | None = None,
    scripts: BedrockScripts | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Server configuration. If None, uses the defaults.
        scripts: Optional pre-configured BedrockScripts (for testing).
    """
    if config is None:
        config = ServerConfig()
    if scripts is None:
        scripts = BedrockScripts(
            check_script=config.check_script_path,
            configure_script=config.configure_script_path,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("flutterly server listening on %s:%d", config.host, config.port)
        yield
        logger.info("flutterly server stopped")

    app = FastAPI(
        title="flutterly",
        description="Local split-view page server with bedrock token helpers",
        version="0.1.0",
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        dependencies=[Depends(_require_bare_url)],
    )
    app.state.config = config
    app.state.scripts = scripts

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException) -> Response:
        # Unknown paths and known paths with the wrong method look the same.
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/")
    async def split_view() -> Response:
        html_path: Path = app.state.config.html_path
        try:
            html = await asyncio.to_thread(html_path.read_bytes)
        except OSError as e:
            logger.error("Failed to read %s: %s", html_path, e)
            return PlainTextResponse(f"Failed to read {html_path.name}", status_code=500)
        return Response(content=html, media_type="text/html")

    @app.get("/check-bedrock")
    async def check_bedrock() -> Response:
        s: BedrockScripts = app.state.scripts
        try:
            output = await s.check()
        except ScriptError:
            return PlainTextResponse("not-configured", status_code=500)
        return PlainTextResponse(output)

    @app.post("/configure-bedrock")
    async def configure_bedrock(request: Request) -> JSONResponse:
        s: BedrockScripts = app.state.scripts
        try:
            token = _extract_token(await request.body())
        except ValueError as e:
            return _configure_reply(400, str(e))
        try:
            await s.configure(token)
        except ScriptError as e:
            return _configure_reply(500, e.detail)
        return _configure_reply(200)

    return app


def main(config: ServerConfig | None = None) -> None:
    """Entry point for running the server standalone."""
    if config is None:
        config = ServerConfig()
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
