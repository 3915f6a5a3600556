from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from consultoria.domain.score.score import ScoreEstimado


class ScoreDTO(BaseModel):
    score: int
    classificacao: str
    cor: str
    fatores: list[str]
    detalhes: dict[str, int]
    recomendacao: str
    calculado_em: datetime

    @classmethod
    def from_domain(cls, score: ScoreEstimado) -> ScoreDTO:
        return cls(
            score=score.valor,
            classificacao=score.classificacao.value,
            cor=score.cor,
            fatores=list(score.fatores),
            detalhes=score.detalhes,
            recomendacao=score.recomendacao,
            calculado_em=score.calculado_em,
        )
