import json
import logging
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from .constants import (
    AUTHOR_ICON,
    AUTHOR_LINK,
    AUTHOR_NAME,
    AUTHOR_SUBNAME,
    FALLBACK,
    RESULT_KEYWORDS,
)

logger = logging.getLogger(__name__)


class ResultCode(IntEnum):
    SUCCESS = 1
    BLOCK = 2
    DETECT = 3
    ALERT = 4

    @property
    def keyword(self) -> str:
        return RESULT_KEYWORDS[self.value]


def _wire(key: str):
    # Nome do campo no JSON quando difere do atributo
    return field(default="", metadata={"wire": key})


def _coerce_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (ValueError, TypeError, OverflowError):
        try:
            return int(float(value))
        except (ValueError, TypeError, OverflowError):
            logger.debug(f"Valor numérico inválido ignorado: {value!r}")
            return 0


def _coerce_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _coerce_bool(value: Any, name: str) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    logger.warning(f"Valor booleano inválido em {name}: {value!r}; usando False")
    return False


@dataclass
class PolicyData:
    """Resultado da avaliação de política embutido em eventos de alerta."""
    policy_id: int = 0
    policy_name: str = ""
    registry: str = ""
    repository: str = ""
    blocking: bool = False
    pending: bool = False
    controls: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PolicyData":
        controls = payload.get("controls") or []
        if not isinstance(controls, list):
            controls = [controls]
        return cls(
            policy_id=_coerce_int(payload.get("policy_id")),
            policy_name=_coerce_str(payload.get("policy_name")),
            registry=_coerce_str(payload.get("registry")),
            repository=_coerce_str(payload.get("repository")),
            blocking=_coerce_bool(payload.get("blocking"), "blocking"),
            pending=_coerce_bool(payload.get("pending"), "pending"),
            controls=[str(c) for c in controls if c is not None],
        )


def parse_policy_data(raw: Union[str, bytes, Dict[str, Any], None]) -> PolicyData:
    """
    Interpreta o campo `data` de um registro de auditoria.

    O campo chega como um documento JSON dentro do JSON (string) ou já
    decodificado (dict). Qualquer falha é registrada em log e resulta em
    um PolicyData vazio; o processamento continua.
    """
    if raw is None or raw == "" or raw == {}:
        return PolicyData()

    document = raw
    if isinstance(raw, (str, bytes)):
        try:
            document = json.loads(raw)
        except ValueError as exc:
            logger.warning(f"Erro ao interpretar o campo data do alerta: {exc}")
            return PolicyData()

    if not isinstance(document, dict):
        logger.warning(f"Campo data do alerta não é um objeto JSON: {type(document).__name__}")
        return PolicyData()

    return PolicyData.from_dict(document)


@dataclass
class AuditRecord:
    """
    Um evento de auditoria emitido pela plataforma Aqua.

    Todos os campos são opcionais. A ordem de declaração é a ordem de
    serialização em `to_dict`.
    """
    action: str = ""
    adjective: str = ""
    application_scopes: List[str] = field(default_factory=list)
    category: str = ""
    command: str = ""
    container: str = ""
    containerid: str = ""
    control: str = ""
    create_time: int = 0
    critical: int = 0
    data: Union[str, Dict[str, Any]] = ""
    date: int = 0
    description: str = ""
    euid: str = ""
    euser: str = ""
    high: int = 0
    host: str = ""
    hostgroup: str = ""
    hostid: str = ""
    hostip: str = ""
    id: str = ""
    image: str = ""
    imagehash: str = ""
    imageid: str = ""
    k8s_cluster: str = ""
    level: str = ""
    low: int = 0
    medium: int = 0
    pid: int = 0
    poddeployment: str = ""
    podname: str = ""
    podnamespace: str = ""
    podtype: str = ""
    process: str = ""
    reason: str = ""
    registry: str = ""
    resource: str = ""
    resource_digest: str = ""
    resource_name: str = ""
    # A plataforma envia esta chave com a grafia "resoure_type"
    resource_type: str = _wire("resoure_type")
    result: int = 0
    rule: str = ""
    rule_type: str = ""
    secret: str = ""
    source_address: str = ""
    start_time: int = 0
    subtype: str = ""
    time: int = 0
    type: str = ""
    uid: str = ""
    user: str = ""
    vm_group: str = ""
    vm_id: str = ""
    vm_location: str = ""
    vm_name: str = ""

    @staticmethod
    def _wire_key(f) -> str:
        return f.metadata.get("wire", f.name)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AuditRecord":
        kwargs = {}
        for f in fields(cls):
            key = cls._wire_key(f)
            if key not in payload or payload[key] is None:
                continue
            value = payload[key]
            if f.name == "data":
                kwargs[f.name] = value if isinstance(value, (str, dict)) else json.dumps(value)
            elif f.name == "application_scopes":
                kwargs[f.name] = [str(v) for v in value] if isinstance(value, list) else [str(value)]
            elif f.type is int or f.type == "int":
                kwargs[f.name] = _coerce_int(value)
            else:
                kwargs[f.name] = _coerce_str(value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Forma serializada: chaves do wire, valores vazios omitidos."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value in ("", 0, None) or value == [] or value == {}:
                continue
            out[self._wire_key(f)] = value
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @property
    def result_code(self) -> Optional[ResultCode]:
        try:
            return ResultCode(self.result)
        except ValueError:
            return None

    @property
    def severity_total(self) -> int:
        return self.critical + self.high + self.medium + self.low

    @property
    def policy_data(self) -> PolicyData:
        return parse_policy_data(self.data)


@dataclass
class RenderedMessage:
    """Attachment pronto para envio ao webhook do Slack."""
    color: str
    text: str
    caption: str = AUTHOR_SUBNAME
    template: Optional[str] = None
    ts: int = 0
    author_name: str = AUTHOR_NAME
    fallback: str = FALLBACK
    author_icon: str = AUTHOR_ICON
    author_link: str = AUTHOR_LINK

    def to_attachment(self) -> Dict[str, Any]:
        return {
            "color": self.color,
            "fallback": self.fallback,
            "author_name": self.author_name,
            "author_subname": self.caption,
            "author_link": self.author_link,
            "author_icon": self.author_icon,
            "text": self.text,
            "ts": self.ts,
        }

    def to_payload(self) -> Dict[str, Any]:
        return {"attachments": [self.to_attachment()]}
