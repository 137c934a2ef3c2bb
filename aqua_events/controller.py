import logging

from flask import Flask, request

from .dispatcher import AuditDispatcher
from .models import AuditRecord

logger = logging.getLogger(__name__)


def create_app(dispatcher=None):
    app = Flask(__name__)
    # Configuração lida uma vez; cada requisição é independente
    audit_dispatcher = dispatcher or AuditDispatcher()

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'aqua-events'}, 200

    @app.route('/audit', methods=['POST'])
    def audit():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            logger.debug(f"Payload inválido recebido: {request.get_data(as_text=True)[:500]!r}")
            return {'error': 'expected a JSON object'}, 400

        logger.debug(f"Received data: {data}")
        record = AuditRecord.from_dict(data)
        outcome = audit_dispatcher.process_audit(record)
        return {'status': outcome.value}, 200

    return app
