from pathlib import Path
from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 8090)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "127.0.0.1")

# Timeout configuration for outbound signed calls (no retries)
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for one relayed call
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 120.0)

# Treat non-2xx remote responses as transport errors instead of relaying them
ENFORCE_HTTP_STATUS = config.get("ENFORCE_HTTP_STATUS", False)

# OAuth 1.0a signing
NONCE_LENGTH = config.get("NONCE_LENGTH", 32)

# Credential list (JSON array of {realm, consumer, token}); keep admin-readable only
CREDENTIALS_FILE = config.get("CREDENTIALS_FILE", str(Path.home() / ".realm-relay" / "credentials.json"))

# Remote accounts (JSON array string of {description, account, url})
REMOTE_ACCOUNTS = config.get("REMOTE_ACCOUNTS", "")
