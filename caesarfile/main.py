from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from caesarfile.routers.cipher import router as cipher_router
from caesarfile.utils import settings

app = FastAPI(title="Caesarfile API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(cipher_router, prefix="/api")
