import logging
from enum import Enum
from typing import Callable, Iterable, Optional

from .constants import SLACK_WEBHOOK_URL
from .errors import DeliveryError, UnclassifiedRecordError
from .formatters import render_audit
from .models import AuditRecord, RenderedMessage
from .services import send_slack_payload
from .suppression import SuppressionFilter

logger = logging.getLogger(__name__)


class DispatchOutcome(str, Enum):
    SENT = "sent"
    SUPPRESSED = "suppressed"
    UNCLASSIFIED = "unclassified"
    FAILED = "failed"


class AuditDispatcher:
    """
    Formata, filtra e entrega um registro de auditoria por vez.

    Entrega no máximo uma vez: falhas são registradas em log e descartadas,
    nunca propagadas para quem chamou.
    """

    def __init__(self, webhook_url: Optional[str] = None, ignore_list: Optional[Iterable[str]] = None,
                 sender: Optional[Callable[..., object]] = None):
        self.webhook_url = webhook_url or SLACK_WEBHOOK_URL
        self.suppression = SuppressionFilter(ignore_list)
        self.sender = sender or send_slack_payload

    def format(self, record: AuditRecord) -> RenderedMessage:
        return render_audit(record)

    def process_audit(self, record: AuditRecord) -> DispatchOutcome:
        try:
            message = self.format(record)
        except UnclassifiedRecordError as exc:
            logger.warning(f"Descartando registro não classificado: {exc}")
            return DispatchOutcome.UNCLASSIFIED
        except Exception:
            logger.exception(f"Erro ao formatar registro result={record.result!r}; descartando")
            return DispatchOutcome.FAILED

        if self.suppression.is_suppressed(record.result):
            return DispatchOutcome.SUPPRESSED

        try:
            self.sender(message, webhook_url=self.webhook_url)
        except DeliveryError as exc:
            logger.warning(f"Falha ao enviar attachment ao Slack: {exc}")
            return DispatchOutcome.FAILED

        logger.debug(f"Attachment {message.template} enviado (result={record.result})")
        return DispatchOutcome.SENT
