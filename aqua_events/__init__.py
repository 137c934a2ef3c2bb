"""Pacote do relay de eventos de auditoria da Aqua -> Slack.

Este pacote contém:
- constants: variáveis de ambiente e metadados fixos da mensagem
- models: registro de auditoria, dados de política e mensagem renderizada
- utils: formatação de timestamps e helpers
- detection: classificação do registro em um template
- formatters: renderização do texto de cada template
- suppression: filtro por lista de resultados ignorados
- services: integração com serviços externos (Slack)
- dispatcher: orquestra formatação, filtro e entrega
- controller: criação do Flask app e endpoints
"""
