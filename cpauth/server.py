"""FastAPI transport for the Chaum-Pedersen verifier."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .encoding import hex_to_bytes
from .errors import AuthError
from .params import GroupParameters
from .service import VerifierService

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    username: str
    y1: str
    y2: str


class RegisterResponse(BaseModel):
    pass


class ChallengeRequest(BaseModel):
    username: str
    r1: str
    r2: str


class ChallengeResponse(BaseModel):
    auth_id: str
    c: str


class VerifyRequest(BaseModel):
    auth_id: str
    s: str


class VerifyResponse(BaseModel):
    session_id: str


class ParametersResponse(BaseModel):
    p: str
    q: str
    alpha: str
    beta: str


def create_app(service: VerifierService | None = None) -> FastAPI:
    """Build the HTTP app around ``service`` (a fresh in-memory verifier by default)."""

    if service is None:
        service = VerifierService(GroupParameters.default())

    app = FastAPI(
        title="cpauth",
        description="Password authentication with the Chaum-Pedersen protocol",
    )
    app.state.service = service

    @app.exception_handler(AuthError)
    async def _auth_error(request: Request, exc: AuthError) -> JSONResponse:
        logger.info("%s %s failed: %s", request.method, request.url.path, exc.kind)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.kind, "detail": exc.detail},
        )

    @app.get("/parameters", response_model=ParametersResponse)
    def parameters() -> ParametersResponse:
        return ParametersResponse(**service.params.to_dict())

    @app.post("/register", response_model=RegisterResponse)
    def register(request: RegisterRequest) -> RegisterResponse:
        service.register(
            request.username,
            hex_to_bytes(request.y1, "y1"),
            hex_to_bytes(request.y2, "y2"),
        )
        return RegisterResponse()

    @app.post("/challenge", response_model=ChallengeResponse)
    def challenge(request: ChallengeRequest) -> ChallengeResponse:
        auth_id, c = service.create_challenge(
            request.username,
            hex_to_bytes(request.r1, "r1"),
            hex_to_bytes(request.r2, "r2"),
        )
        return ChallengeResponse(auth_id=auth_id, c=c.hex())

    @app.post("/verify", response_model=VerifyResponse)
    def verify(request: VerifyRequest) -> VerifyResponse:
        session_id = service.verify_response(request.auth_id, hex_to_bytes(request.s, "s"))
        return VerifyResponse(session_id=session_id)

    return app


__all__ = ["create_app"]
