from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from consultoria.domain.empresa.entities import ResultadoConsulta

from .score_dto import ScoreDTO


class EnderecoDTO(BaseModel):
    logradouro: str
    numero: str
    complemento: str
    bairro: str
    municipio: str
    uf: str
    cep: str


class SocioDTO(BaseModel):
    nome: str
    qualificacao: str
    data_entrada: str


class ConsultaDTO(BaseModel):
    success: bool
    fonte: str
    oficial: bool
    consultado_em: datetime
    erro: str | None = None
    cnpj: str | None = None
    razao_social: str | None = None
    nome_fantasia: str | None = None
    situacao: str | None = None
    data_situacao: str | None = None
    motivo_situacao: str | None = None
    data_abertura: date | None = None
    natureza_juridica: str | None = None
    porte: str | None = None
    capital_social: str | None = None
    endereco: EnderecoDTO | None = None
    telefone: str | None = None
    email: str | None = None
    atividade_principal: str | None = None
    atividades_secundarias: list[str] = []
    socios: list[SocioDTO] = []

    @classmethod
    def from_domain(cls, consulta: ResultadoConsulta) -> ConsultaDTO:
        p = consulta.perfil
        if p is None:
            return cls(
                success=False,
                fonte=consulta.fonte,
                oficial=consulta.oficial,
                consultado_em=consulta.consultado_em,
                erro=consulta.erro,
            )
        e = p.endereco
        return cls(
            success=True,
            fonte=consulta.fonte,
            oficial=consulta.oficial,
            consultado_em=consulta.consultado_em,
            cnpj=p.cnpj,
            razao_social=p.razao_social,
            nome_fantasia=p.nome_fantasia,
            situacao=p.situacao,
            data_situacao=p.data_situacao,
            motivo_situacao=p.motivo_situacao,
            data_abertura=p.data_abertura,
            natureza_juridica=p.natureza_juridica,
            porte=p.porte,
            capital_social=str(p.capital_social) if p.capital_social is not None else None,
            endereco=EnderecoDTO(
                logradouro=e.logradouro,
                numero=e.numero,
                complemento=e.complemento,
                bairro=e.bairro,
                municipio=e.municipio,
                uf=e.uf,
                cep=e.cep,
            ),
            telefone=p.telefone,
            email=p.email,
            atividade_principal=p.atividade_principal,
            atividades_secundarias=list(p.atividades_secundarias),
            socios=[
                SocioDTO(nome=s.nome, qualificacao=s.qualificacao, data_entrada=s.data_entrada)
                for s in p.socios
            ],
        )


class ConsultaManualDTO(BaseModel):
    """Resposta do dashboard administrativo: dados + score."""

    success: bool
    cnpj: str
    dados: ConsultaDTO
    score: ScoreDTO
    consultado_em: datetime
