import logging
from typing import Iterable, Optional

from .constants import IGNORE_LIST
from .models import ResultCode
from .utils import normalize_keyword

logger = logging.getLogger(__name__)


def result_keyword(result) -> Optional[str]:
    """Palavra-chave da lista de ignorados para o código de resultado (None se desconhecido)."""
    try:
        return ResultCode(result).keyword
    except ValueError:
        return None


class SuppressionFilter:
    """
    Suprime eventos cujo resultado está na lista de ignorados.

    A comparação é exata e sensível a maiúsculas; espaços nas pontas são
    removidos tanto da chave quanto das entradas da lista.
    """

    def __init__(self, ignore_list: Optional[Iterable[str]] = None):
        entries = IGNORE_LIST if ignore_list is None else ignore_list
        self.ignore_list = frozenset(normalize_keyword(e) for e in entries if normalize_keyword(e))

    def is_suppressed(self, result) -> bool:
        keyword = result_keyword(result)
        if keyword is None:
            return False
        if normalize_keyword(keyword) in self.ignore_list:
            logger.info(f"Ignorando eventos {keyword} (lista de ignorados)")
            return True
        return False
