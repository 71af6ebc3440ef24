from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.entrypoints.routers import users
from user_service.services.config import load_seed_users, settings
from user_service.services.user_store import UserStore


class API(FastAPI):
    def __init__(self, store: Optional[UserStore] = None) -> None:
        super().__init__(title="User Service API", description="Operations for users", debug=bool(settings.DEBUG))

        self.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        if store is None:
            store = UserStore(id_seed=settings.USER_SERVICE_ID_SEED)
            store.seed(load_seed_users(settings.USER_SERVICE_SEED_PATH))
        self.state.store = store

        @self.get("/health")
        async def health() -> dict[str, str]:
            return {"status": "ok"}

        self.include_router(users.router, prefix=settings.USER_SERVICE_URL_PREFIX, tags=["users"])


app = API()
