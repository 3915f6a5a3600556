"""Mensagens pre-preenchidas e deep links wa.me. Funcoes puras, zero IO."""

from __future__ import annotations

import re
from datetime import datetime
from urllib.parse import quote

from consultoria.domain.solicitacao.entities import SolicitacaoConsultoria


def url_whatsapp(telefone: str, mensagem: str) -> str:
    """Assume Brasil (+55) quando o numero nao traz o codigo do pais."""
    digitos = re.sub(r"\D", "", telefone)
    completo = digitos if digitos.startswith("55") else f"55{digitos}"
    return f"https://wa.me/{completo}?text={quote(mensagem, safe='')}"


def mensagem_whatsapp_cliente(solicitacao: SolicitacaoConsultoria, qtd_arquivos: int) -> str:
    """Versao enviada pelo cliente. Nunca inclui o link de download."""
    if qtd_arquivos > 0:
        documentos = f"📋 *DOCUMENTOS:*\n✅ {qtd_arquivos} arquivo(s) enviados por email"
    else:
        documentos = "📄 *DOCUMENTOS:* Nenhum documento anexado"

    return (
        "🏢 Olá, *Aporte Capital*!\n\n"
        "Estou entrando em contato para solicitar uma análise de crédito e consultoria financeira.\n\n"
        "👤 *MEUS DADOS:*\n"
        f"• Nome: {solicitacao.nome_completo}\n"
        f"• Email: {solicitacao.email}\n"
        f"• Telefone: {solicitacao.telefone}\n\n"
        "🏭 *DADOS DA EMPRESA:*\n"
        f"• Razão Social: {solicitacao.empresa}\n"
        f"• CNPJ: {solicitacao.cnpj}\n"
        f"• Faturamento Mensal: {solicitacao.faturamento_anual}\n"
        f"• Tempo de Atividade: {solicitacao.tempo_existencia}\n\n"
        "💼 *TIPO DE CONSULTORIA:*\n"
        f"• Modalidade: {solicitacao.tipo_consultoria_rotulo}\n"
        f"• Observações: {solicitacao.mensagem}\n\n"
        f"{documentos}\n\n"
        "Aguardo retorno para darmos continuidade ao processo.\n\n"
        "Atenciosamente,\n"
        f"*{solicitacao.nome_completo}*"
    )


def mensagem_whatsapp_empresa(
    solicitacao: SolicitacaoConsultoria,
    url_download: str | None,
    qtd_arquivos: int,
    agora: datetime,
    max_downloads: int = 5,
    ttl_horas: int = 48,
) -> str:
    """Versao interna da equipe, com o link de download quando houver arquivos."""
    if qtd_arquivos > 0 and url_download:
        documentos = (
            "📋 *DOCUMENTOS ENVIADOS:*\n"
            f"✅ {qtd_arquivos} arquivo(s) enviado(s) por EMAIL\n"
            "✅ Disponíveis para download em:\n"
            f"🔗 {url_download}\n\n"
            f"⏰ Link válido por {ttl_horas} horas\n"
            f"🔢 Máximo {max_downloads} downloads\n\n"
            "📧 Verifique também seu email para detalhes completos!"
        )
    else:
        documentos = "📄 *DOCUMENTOS:* Nenhum documento anexado"

    return (
        "🏢 *APORTE CAPITAL - NOVA SOLICITAÇÃO*\n\n"
        "🚨 *ATENÇÃO EQUIPE:* Nova solicitação recebida!\n\n"
        "👤 *DADOS DO SOLICITANTE:*\n"
        f"• Nome: {solicitacao.nome_completo}\n"
        f"• Email: {solicitacao.email}\n"
        f"• Telefone: {solicitacao.telefone}\n\n"
        "🏭 *INFORMAÇÕES DA EMPRESA:*\n"
        f"• Razão Social: {solicitacao.empresa}\n"
        f"• CNPJ: {solicitacao.cnpj}\n"
        f"• Faturamento Anual: {solicitacao.faturamento_anual}\n"
        f"• Tempo de Existência: {solicitacao.tempo_existencia}\n\n"
        "💼 *TIPO DE CONSULTORIA:*\n"
        f"• Serviço: {solicitacao.tipo_consultoria_rotulo}\n"
        f"• Descrição: {solicitacao.mensagem}\n\n"
        f"{documentos}\n\n"
        "⚡ *AÇÃO NECESSÁRIA:*\n"
        "• Analisar solicitação\n"
        "• Baixar documentos (se houver)\n"
        "• Entrar em contato em até 24h\n\n"
        f"⏰ *Enviado em:* {agora:%d/%m/%Y %H:%M}\n\n"
        "---\n"
        "*Mensagem automática - Aporte Capital*"
    )
