from datetime import datetime

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {
        "status": "ok",
        "message": "Servidor funcionando corretamente",
        "timestamp": datetime.now().isoformat(),
    }
