class ProxyError(Exception):
    """Erro base do proxy. Tudo que o handler converte em resposta HTTP herda daqui."""


class DecodeError(ProxyError):
    """Corpo da requisição não é JSON válido ou não tem o formato do payload do Circonus."""


class TimeParseError(DecodeError):
    """Timestamp fora do formato 'Mon, 02 Jan 2006 15:04:05'."""


class RenderError(ProxyError):
    """Falha ao executar o template da mensagem."""


class SendError(ProxyError):
    """Falha ao enviar a mensagem para a API do HipChat."""


class ConfigError(ProxyError):
    """Configuração inválida na inicialização (timezone, template ou cor). Fatal."""
