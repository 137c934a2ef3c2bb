import logging
from typing import Optional

import requests

from .constants import SLACK_TIMEOUT_SECONDS, SLACK_WEBHOOK_URL
from .errors import DeliveryError
from .models import RenderedMessage

logger = logging.getLogger(__name__)


def send_slack_payload(message: RenderedMessage, webhook_url: Optional[str] = None, timeout: Optional[int] = None):
    url = webhook_url or SLACK_WEBHOOK_URL
    if not url:
        raise DeliveryError("SLACK_WEBHOOK_URL não configurada")

    try:
        resp = requests.post(url, json=message.to_payload(), timeout=timeout or SLACK_TIMEOUT_SECONDS)
    except requests.RequestException as exc:
        raise DeliveryError(f"falha ao enviar attachment ao Slack: {exc}") from exc

    logger.debug(f"Slack response: {resp.status_code}")
    if resp.status_code >= 400:
        logger.debug(f"Response content: {resp.text}")
        raise DeliveryError(f"Slack respondeu {resp.status_code}", status_code=resp.status_code)
    return resp
