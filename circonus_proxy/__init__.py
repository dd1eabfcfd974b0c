"""Proxy de webhooks do Circonus para serviços sem suporte nativo (HipChat).

Este pacote contém:
- constants: variáveis de ambiente e valores padrão
- errors: tipos de erro convertidos em respostas HTTP pelo handler
- circonus: modelo e decodificação do payload do webhook
- templates: renderização das mensagens de alerta/recuperação
- hipchat: cliente da API v1 do HipChat
- handlers: handlers de webhook (um por serviço de destino)
- controller: criação do Flask app e endpoints
- cli: ajuda de uso e inicialização do servidor
"""
