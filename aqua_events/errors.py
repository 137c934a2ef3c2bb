class AquaEventsError(Exception):
    pass


class UnclassifiedRecordError(AquaEventsError):
    """Registro com código de resultado fora de 1..4."""

    def __init__(self, result):
        self.result = result
        super().__init__(f"resultado de auditoria não reconhecido: {result!r}")


class DeliveryError(AquaEventsError):
    """Falha ao entregar a mensagem no webhook."""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)
