import logging
import time
from typing import Callable, Dict, Optional, Tuple

from .constants import AUTHOR_SUBNAME
from .detection import Template, classify, color_for
from .models import AuditRecord, RenderedMessage
from .utils import format_timestamp, join_controls

logger = logging.getLogger(__name__)

ALREADY_RUNNING = "non-compliant container(s) already running"
NON_COMPLIANT = "non-compliant"


def _lines(*pairs) -> str:
    return "".join(f"{label}: {value}\n" for label, value in pairs)


def format_administration(record: AuditRecord) -> Tuple[str, str]:
    target = f"{record.category} {record.adjective}"
    text = _lines(
        ("Type", record.type),
        ("Action", record.action),
        ("Performed On", target),
        ("Performed By", record.user),
        ("Aqua Response", "Success"),
        ("Timestamp", format_timestamp(record.time)),
    )
    caption = f"User {record.user} performed {record.action} on {target}"
    return text, caption


def format_clean_scan(record: AuditRecord) -> Tuple[str, str]:
    # A plataforma só informa um horário; início e fim do scan usam o mesmo valor
    stamp = format_timestamp(record.time)
    text = _lines(
        ("Image", record.image),
        ("Image Hash", record.imagehash),
        ("Registry", record.registry),
        ("Image added by user", record.user),
        ("Image scan start time", stamp),
        ("Image scan end time", stamp),
        ("Aqua Response", "Success"),
        ("Timestamp", stamp),
    )
    caption = f"Scan of image {record.image} from registry {record.registry} revealed no security issues"
    return text, caption


def format_host_action(record: AuditRecord) -> Tuple[str, str]:
    text = _lines(
        ("Host", record.host),
        ("Host IP", record.hostip),
        ("Image Name", record.image),
        ("Container Name", record.container),
        ("Action", record.action),
        ("Kubernetes Cluster", record.k8s_cluster),
        ("VM Location", record.vm_location),
        ("Aqua Response", "Success"),
        ("Aqua Policy", record.rule),
        ("Details", record.reason),
        ("Enforcer Group", record.hostgroup),
        ("Time Stamp", format_timestamp(record.time)),
    )
    caption = f"User ran action {record.action} on host {record.host}"
    return text, caption


def format_vulnerability_summary(record: AuditRecord) -> Tuple[str, str]:
    stamp = format_timestamp(record.time)
    text = _lines(
        ("Image", record.image),
        ("Registry", record.registry),
        ("Image was added by user", record.user),
        ("Image scan start time", stamp),
        ("Image scan end time", stamp),
        ("Aqua Response", "Detect"),
        ("Time Stamp", stamp),
    )
    caption = (
        f"Scan of image {record.image} from registry {record.registry} "
        f"revealed {record.severity_total} total vulnerabilities"
    )
    return text, caption


def _format_runtime(record: AuditRecord, response: str) -> Tuple[str, str]:
    text = _lines(
        ("Host", record.host),
        ("Host IP", record.hostip),
        ("Image Name", record.image),
        ("Container Name", record.container),
        ("Action", record.action),
        ("Kubernetes Cluster", record.k8s_cluster),
        ("Pod Name", record.podname),
        ("Pod Namespace", record.podnamespace),
        ("VM Location", record.vm_location),
        ("Aqua Response", response),
        ("Aqua Policy", record.rule),
        ("Resource", record.resource),
        ("Command", record.command),
        ("Security Control", record.control),
        ("Details", record.reason),
        ("Enforcer Group", record.hostgroup),
        ("Time Stamp", format_timestamp(record.time)),
    )
    caption = f"User ran command {record.action} on host {record.host}"
    return text, caption


def format_runtime_detect(record: AuditRecord) -> Tuple[str, str]:
    return _format_runtime(record, "Detect")


def format_runtime_block(record: AuditRecord) -> Tuple[str, str]:
    return _format_runtime(record, "Block")


def control_status(blocking: bool, pending: bool) -> str:
    if blocking and pending:
        return ALREADY_RUNNING
    return NON_COMPLIANT


def format_policy_violation(record: AuditRecord) -> Tuple[str, str]:
    policy = record.policy_data
    text = _lines(
        ("Entity", "Image"),
        ("Image", record.image),
        ("Action taken", record.action),
        ("Policy", policy.policy_name),
        ("Failed Controls", join_controls(policy.controls)),
        ("Registry", policy.registry),
        ("Aqua Response", "Alert"),
        ("Time Stamp", format_timestamp(record.time)),
    )
    caption = f"Image {record.image} is {control_status(policy.blocking, policy.pending)}"
    return text, caption


def format_fallback(record: AuditRecord) -> Tuple[str, str]:
    return record.to_json(), AUTHOR_SUBNAME


TEMPLATE_FORMATTERS: Dict[Template, Callable[[AuditRecord], Tuple[str, str]]] = {
    Template.ADMINISTRATION: format_administration,
    Template.CLEAN_SCAN: format_clean_scan,
    Template.HOST_ACTION: format_host_action,
    Template.VULNERABILITY_SUMMARY: format_vulnerability_summary,
    Template.RUNTIME_DETECT: format_runtime_detect,
    Template.RUNTIME_BLOCK: format_runtime_block,
    Template.POLICY_VIOLATION: format_policy_violation,
    Template.FALLBACK: format_fallback,
}


def render_audit(record: AuditRecord, template: Optional[Template] = None, now: Optional[int] = None) -> RenderedMessage:
    """
    Monta o attachment do Slack para um registro de auditoria.

    Se o template não for informado, o registro é classificado antes.
    Levanta UnclassifiedRecordError quando o resultado não é 1..4.
    """
    if template is None:
        template = classify(record)
    color = color_for(record.result)
    text, caption = TEMPLATE_FORMATTERS[template](record)
    logger.debug(f"Registro result={record.result} category={record.category!r} type={record.type!r} -> template {template.value}")
    return RenderedMessage(
        color=color,
        text=text,
        caption=caption,
        template=template.value,
        ts=int(time.time()) if now is None else now,
    )
