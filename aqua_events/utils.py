import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import DISPLAY_TIMEZONE, TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


def _display_zone(name: Optional[str] = None):
    name = DISPLAY_TIMEZONE if name is None else name
    if not name:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def format_timestamp(unix_seconds: Union[int, float, None], tz_name: Optional[str] = None) -> str:
    """Formata segundos unix como RFC-822 com fuso numérico (ex: 14 Nov 23 22:13 +0000)."""
    try:
        moment = datetime.fromtimestamp(int(unix_seconds or 0), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        # Fora do intervalo suportado pelo datetime: mostra o valor bruto
        logger.warning(f"Timestamp fora do intervalo: {unix_seconds!r} ({exc})")
        return str(unix_seconds)
    zone = _display_zone(tz_name)
    # Sem fuso configurado usa o fuso local do processo
    moment = moment.astimezone(zone) if zone else moment.astimezone()
    return moment.strftime(TIMESTAMP_FORMAT)


def join_controls(controls: Iterable[str]) -> str:
    return ", ".join(c for c in controls if c)


def normalize_keyword(value: Optional[str]) -> str:
    if not value:
        return ""
    return str(value).strip()
