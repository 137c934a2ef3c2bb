from enum import Enum
from typing import Tuple

from .constants import RESULT_COLORS, RUNTIME_CATEGORIES
from .errors import UnclassifiedRecordError
from .models import AuditRecord, ResultCode


class Template(str, Enum):
    ADMINISTRATION = "administration"
    CLEAN_SCAN = "clean_scan"
    HOST_ACTION = "host_action"
    VULNERABILITY_SUMMARY = "vulnerability_summary"
    RUNTIME_DETECT = "runtime_detect"
    RUNTIME_BLOCK = "runtime_block"
    POLICY_VIOLATION = "policy_violation"
    FALLBACK = "fallback"


# Regras avaliadas em ordem dentro de cada resultado; a primeira que casar vence.
# Cada regra: (campos do registro comparados, valores aceitos, template)
CLASSIFICATION_RULES = {
    ResultCode.SUCCESS: [
        (("type",), ("Administration",), Template.ADMINISTRATION),
        (("type", "category"), ("CVE",), Template.CLEAN_SCAN),
        (("type",), ("Docker",), Template.HOST_ACTION),
        (("category",), ("container", "image"), Template.HOST_ACTION),
    ],
    ResultCode.DETECT: [
        (("category",), ("CVE",), Template.VULNERABILITY_SUMMARY),
        (("category",), RUNTIME_CATEGORIES, Template.RUNTIME_DETECT),
    ],
    ResultCode.BLOCK: [
        (("category",), RUNTIME_CATEGORIES, Template.RUNTIME_BLOCK),
    ],
    ResultCode.ALERT: [
        (("category",), ("image",), Template.POLICY_VIOLATION),
    ],
}


def _matches(record: AuditRecord, rule_fields: Tuple[str, ...], accepted: Tuple[str, ...]) -> bool:
    return any(getattr(record, name) in accepted for name in rule_fields)


def classify(record: AuditRecord) -> Template:
    code = record.result_code
    if code is None:
        raise UnclassifiedRecordError(record.result)

    for rule_fields, accepted, template in CLASSIFICATION_RULES[code]:
        if _matches(record, rule_fields, accepted):
            return template
    return Template.FALLBACK


def color_for(result) -> str:
    color = RESULT_COLORS.get(result)
    if color is None:
        raise UnclassifiedRecordError(result)
    return color
