from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from html import escape

from consultoria.domain.empresa.entities import ResultadoConsulta
from consultoria.domain.link.entities import ArquivoRef
from consultoria.domain.score.score import ScoreEstimado
from consultoria.domain.solicitacao.entities import SolicitacaoConsultoria

_ESTILO = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 680px; margin: 0 auto; padding: 20px; }
    h2 { border-bottom: 2px solid #021748; padding-bottom: 8px; color: #021748; }
    .field { margin-bottom: 8px; }
    .label { font-weight: bold; }
"""


def _campo(rotulo: str, valor: object) -> str:
    texto = "" if valor is None else str(valor)
    return f'<div class="field"><span class="label">{escape(rotulo)}:</span> {escape(texto)}</div>'


def assunto_email_equipe(solicitacao: SolicitacaoConsultoria, consulta: ResultadoConsulta | None) -> str:
    sufixo = ""
    if consulta is not None and consulta.perfil is not None and consulta.perfil.situacao:
        sufixo = f" - {consulta.perfil.situacao}"
    return f"Nova Solicitação de Consultoria - {solicitacao.empresa}{sufixo}"


def _secao_cnpj(consulta: ResultadoConsulta | None) -> str:
    if consulta is None or consulta.perfil is None:
        erro = consulta.erro if consulta is not None else "CNPJ não consultado"
        return f"<h2>Dados do CNPJ</h2><p>{escape(erro or '')}</p>"

    p = consulta.perfil
    origem = "Oficial" if consulta.oficial else "Terceiros"
    e = p.endereco
    endereco = ", ".join(v for v in (e.logradouro, e.numero, e.complemento, e.bairro) if v)
    cidade = " / ".join(v for v in (e.municipio, e.uf) if v)
    linhas = [
        "<h2>Dados oficiais do CNPJ</h2>",
        f"<p><small>Fonte: {escape(consulta.fonte)} ({origem}) | "
        f"Consultado em: {consulta.consultado_em:%d/%m/%Y %H:%M}</small></p>",
        _campo("Razão Social", p.razao_social),
        _campo("Nome Fantasia", p.nome_fantasia or "Não informado"),
        _campo("Situação", p.situacao),
        _campo("Data de Abertura", f"{p.data_abertura:%d/%m/%Y}" if p.data_abertura else "Não informada"),
        _campo("Natureza Jurídica", p.natureza_juridica),
        _campo("Porte", p.porte),
        _campo("Capital Social", f"R$ {p.capital_social:,.2f}" if p.capital_social is not None else "Não informado"),
        _campo("Endereço", f"{endereco} - {cidade} - CEP {e.cep}"),
        _campo("Telefone", p.telefone),
        _campo("Email", p.email),
        _campo("Atividade Principal", p.atividade_principal),
    ]
    if p.socios:
        socios = "".join(
            f"<li>{escape(s.nome)} ({escape(s.qualificacao)})</li>" for s in p.socios
        )
        linhas.append(f'<div class="field"><span class="label">Sócios:</span><ul>{socios}</ul></div>')
    return "\n".join(linhas)


def _secao_score(score: ScoreEstimado | None) -> str:
    if score is None:
        return ""
    fatores = "".join(f"<li>{escape(f)}</li>" for f in score.fatores)
    return (
        "<h2>Score estimado</h2>"
        f'<p style="font-size: 22px; color: {score.cor};"><strong>{score.valor}/100</strong> '
        f"- {escape(score.classificacao.value)}</p>"
        f"<ul>{fatores}</ul>"
        f"<p><em>{escape(score.recomendacao)}</em></p>"
    )


def _secao_documentos(arquivos: Sequence[ArquivoRef], url_download: str | None) -> str:
    if not arquivos:
        return "<h2>Documentos</h2><p>Nenhum documento anexado.</p>"
    itens = "".join(
        f"<li>{escape(a.nome_original)} ({a.tamanho / 1024 / 1024:.2f} MB)</li>" for a in arquivos
    )
    link = ""
    if url_download:
        link = f'<p>Download temporário: <a href="{escape(url_download)}">{escape(url_download)}</a></p>'
    return f"<h2>Documentos</h2><ul>{itens}</ul>{link}"


def html_email_equipe(
    solicitacao: SolicitacaoConsultoria,
    consulta: ResultadoConsulta | None,
    score: ScoreEstimado | None,
    arquivos: Sequence[ArquivoRef],
    url_download: str | None,
) -> str:
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="UTF-8"><style>{_ESTILO}</style></head>
<body>
<div class="container">
<h2>Dados do solicitante</h2>
{_campo("Nome", solicitacao.nome_completo)}
{_campo("Email", solicitacao.email)}
{_campo("Telefone", solicitacao.telefone)}
<h2>Empresa</h2>
{_campo("Empresa", solicitacao.empresa)}
{_campo("CNPJ", solicitacao.cnpj)}
{_campo("Tempo de existência", solicitacao.tempo_existencia)}
{_campo("Faturamento anual", solicitacao.faturamento_anual)}
<h2>Consultoria</h2>
{_campo("Tipo", solicitacao.tipo_consultoria_rotulo)}
{_campo("Mensagem", solicitacao.mensagem)}
{_secao_cnpj(consulta)}
{_secao_score(score)}
{_secao_documentos(arquivos, url_download)}
</div>
</body>
</html>"""


def html_email_confirmacao(
    solicitacao: SolicitacaoConsultoria,
    qtd_arquivos: int,
    agora: datetime,
) -> str:
    documentos = ""
    if qtd_arquivos > 0:
        documentos = f"<p>✅ {qtd_arquivos} arquivo(s) anexado(s) com sucesso</p>"
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="UTF-8"><style>{_ESTILO}</style></head>
<body>
<div class="container">
<h2>Olá, {escape(solicitacao.nome_completo)}!</h2>
<p>Recebemos sua solicitação de consultoria financeira e nossa equipe já está analisando.</p>
{_campo("Empresa", solicitacao.empresa)}
{_campo("CNPJ", solicitacao.cnpj)}
{_campo("Tipo de Consultoria", solicitacao.tipo_consultoria_rotulo)}
{_campo("Data da Solicitação", f"{agora:%d/%m/%Y %H:%M}")}
{documentos}
<p>Entraremos em contato em até <strong>24 horas úteis</strong>.</p>
<p><small>Este é um email automático. Por favor, não responda diretamente a esta mensagem.</small></p>
</div>
</body>
</html>"""
