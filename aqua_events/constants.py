import os

# Configurações globais de ambiente
SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
SLACK_TIMEOUT_SECONDS = int(os.getenv("SLACK_TIMEOUT_SECONDS", "10"))

# Fuso usado nos timestamps do texto (vazio = fuso local do processo)
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "").strip()

# Resultados que não devem ser enviados (ex: IGNORE_LIST="success,detect")
_ignore_list_env = os.getenv("IGNORE_LIST", "").strip()
IGNORE_LIST = [s for s in _ignore_list_env.split(",") if s.strip()]

# Metadados fixos do attachment
AUTHOR_NAME = "aqua-events"
FALLBACK = "Aqua Security Audit Events"
AUTHOR_SUBNAME = "AquaEvents"
AUTHOR_LINK = "https://github.com/BryanKMorrow/aqua-events-go"
AUTHOR_ICON = "https://www.aquasec.com/wp-content/themes/aqua3/favicon.ico"

# Cor do attachment por código de resultado
RESULT_COLORS = {
    1: "good",
    2: "danger",
    3: "warning",
    4: "danger",
}

# Palavra-chave da lista de ignorados por código de resultado
RESULT_KEYWORDS = {
    1: "success",
    2: "block",
    3: "detect",
    4: "alert",
}

# Categorias de eventos de runtime (detect/block)
RUNTIME_CATEGORIES = ("container", "file", "secret")

TIMESTAMP_FORMAT = "%d %b %y %H:%M %z"
