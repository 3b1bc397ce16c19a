"""
Application FastAPI — Point d'entrée
====================================

Rôle
----
- Instancie l'app FastAPI, configure le CORS pour le front,
- Monte les routeurs REST (santé, catégories, sessions),
- Configure le logging et affiche la liste des routes au démarrage.

Notes
-----
- Les importations des routeurs sont explicites pour éviter les surprises d'auto-discovery.
- Garder `settings.ALLOWED_ORIGINS` en phase avec les URLs du front.
- ⚠️ Le middleware CORS doit être ajouté AVANT les include_router.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routes.categories import router as categories_router
from app.routes.health import router as health_router
from app.routes.session import router as session_router

from app.config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Au démarrage:
    - affiche le service et la banque de mots configurée,
    - liste les routes (path + méthodes) dans les logs (diagnostic).
    """
    logger.info("== %s == word bank: %s", settings.APP_NAME, settings.word_bank_path)
    for r in app.routes:
        methods = getattr(r, "methods", None)
        logger.info("route %s %s", getattr(r, "path", r), sorted(methods) if methods else "")
    yield


# --- App FastAPI principale ---
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ===========================
# CORS
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,  # ← whitelist des frontends autorisés
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# Montage des routers
# ===========================
app.include_router(health_router)
app.include_router(categories_router)
app.include_router(session_router)


# --- Racine utile pour "ping" simple (sans /health) ---
@app.get("/")
async def root():
    """Ping basique : permet de vérifier que l'app tourne."""
    return {"ok": True, "service": "impostor-backend"}
