from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException

from consultoria.application.dtos.consulta_dto import ConsultaDTO, ConsultaManualDTO
from consultoria.application.dtos.score_dto import ScoreDTO
from consultoria.application.services.consulta_cnpj_service import ConsultaCNPJService
from consultoria.application.services.score_service import calcular_score_estimado
from consultoria.infrastructure.log import log
from consultoria.interfaces.api.dependencies import get_consulta_service

router = APIRouter()


@router.get("/consulta-cnpj/{cnpj_raw:path}", response_model=ConsultaManualDTO)
def consultar_cnpj(
    cnpj_raw: str,
    service: ConsultaCNPJService = Depends(get_consulta_service),  # noqa: B008
) -> ConsultaManualDTO:
    """Consulta manual do dashboard administrativo: dados do CNPJ + score."""
    if len(cnpj_raw) < 14:
        raise HTTPException(status_code=400, detail="CNPJ inválido")

    log(f"Consulta manual de CNPJ: {cnpj_raw}")
    consulta = service.consultar(cnpj_raw)
    score = calcular_score_estimado(consulta, date.today())
    return ConsultaManualDTO(
        success=True,
        cnpj=cnpj_raw,
        dados=ConsultaDTO.from_domain(consulta),
        score=ScoreDTO.from_domain(score),
        consultado_em=datetime.now(),
    )
