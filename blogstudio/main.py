import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogstudio.config import FRONTEND_URL, LOG_LEVEL
from blogstudio.auth import (
    AuthService, UserCreate, UserLogin, Token, UserResponse, get_current_user,
)
from blogstudio.auth.database import init_db, get_db
from blogstudio.drafts import drafts_router
from blogstudio.posts import posts_router
from blogstudio.generation import generation_router, build_gateway

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and the generation gateway once per process."""
    await init_db()
    app.state.gateway = build_gateway()
    logger.info(
        "Startup complete (generation backend %s)",
        "configured" if app.state.gateway.client else "not configured, fallback only",
    )
    yield


app = FastAPI(
    title="Blog Studio API",
    description="Draft, generate, publish and rate short-form articles",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(drafts_router)
app.include_router(posts_router)
app.include_router(generation_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are client errors (400), not 422."""
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


# --- Auth endpoints (no auth required) ---

@app.post("/api/auth/register", response_model=Token, status_code=201)
async def register(user: UserCreate):
    db = await get_db()
    try:
        existing = await AuthService.get_user_by_username(db, user.username)
        if existing:
            raise HTTPException(status_code=400, detail="Username already taken")
        user_id = await AuthService.create_user(db, user.username, user.password)
        token = AuthService.create_token(user_id, user.username)
        return Token(access_token=token, user_id=user_id, username=user.username)
    finally:
        await db.close()


@app.post("/api/auth/login", response_model=Token)
async def login(user: UserLogin):
    db = await get_db()
    try:
        db_user = await AuthService.get_user_by_username(db, user.username)
        if not db_user or not AuthService.verify_password(user.password, db_user["hashed_password"]):
            raise HTTPException(status_code=401, detail="Invalid username or password")
        token = AuthService.create_token(db_user["id"], db_user["username"])
        return Token(access_token=token, user_id=db_user["id"], username=db_user["username"])
    finally:
        await db.close()


@app.get("/api/auth/me", response_model=UserResponse)
async def me(current_user: dict = Depends(get_current_user)):
    db = await get_db()
    try:
        row = await AuthService.get_user_by_id(db, current_user["user_id"])
    finally:
        await db.close()
    if not row:
        raise HTTPException(status_code=401, detail="Unknown user")
    return UserResponse(user_id=row["id"], username=row["username"])


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
