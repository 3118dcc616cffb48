"""
Configuration settings for the Odoo RPC client
"""
import os
from typing import Dict, Any
from dataclasses import dataclass, field

from odoo_rpc.adapters.adapter_factory import AdapterType
from odoo_rpc.types import Credentials

DEFAULT_MODEL = "res.users"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ClientConfig:
    """Connection, protocol and telemetry settings for one client"""
    url: str
    db: str
    username: str
    password: str = field(repr=False)
    adapter_type: str = AdapterType.JSONRPC  # jsonrpc, xmlrpc
    default_model: str = DEFAULT_MODEL
    timeout_ms: int = 30000
    connect_timeout_ms: int = 5000
    
    # Tracing configuration
    enable_tracing: bool = False
    service_name: str = "odoo_rpc"
    otlp_endpoint: str = "localhost:4317"
    
    def __post_init__(self):
        self.adapter_type = self.adapter_type.lower()
        if self.adapter_type not in AdapterType.ALL:
            raise ValueError(f"Unsupported protocol: {self.adapter_type}")
    
    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from environment variables"""
        required = {
            "ODOO_DB": os.getenv("ODOO_DB"),
            "ODOO_USERNAME": os.getenv("ODOO_USERNAME"),
            "ODOO_PASSWORD": os.getenv("ODOO_PASSWORD"),
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
        
        return cls(
            url=os.getenv("ODOO_URL", "http://localhost:8069"),
            db=required["ODOO_DB"],
            username=required["ODOO_USERNAME"],
            password=required["ODOO_PASSWORD"],
            adapter_type=os.getenv("ODOO_PROTOCOL", AdapterType.JSONRPC),
            default_model=os.getenv("ODOO_MODEL", DEFAULT_MODEL),
            timeout_ms=int(os.getenv("ODOO_TIMEOUT_MS", "30000")),
            connect_timeout_ms=int(os.getenv("ODOO_CONNECT_TIMEOUT_MS", "5000")),
            enable_tracing=_env_flag("ODOO_ENABLE_TRACING"),
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "localhost:4317"),
        )
    
    def credentials(self) -> Credentials:
        return Credentials(url=self.url, db=self.db, username=self.username, password=self.password)
    
    def adapter_config(self) -> Dict[str, Any]:
        """Keyword configuration for AdapterFactory"""
        return {
            "base_url": self.url,
            "timeout_ms": self.timeout_ms,
            "connect_timeout_ms": self.connect_timeout_ms,
        }
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging; the password is masked"""
        return {
            "url": self.url,
            "db": self.db,
            "username": self.username,
            "password": "***",
            "protocol": self.adapter_type,
            "default_model": self.default_model,
            "timeout_ms": self.timeout_ms,
            "connect_timeout_ms": self.connect_timeout_ms,
            "enable_tracing": self.enable_tracing,
        }
