import os
from dataclasses import dataclass, field
from typing import Dict

from dotenv import load_dotenv

from passportx.lib.logger import configure_logger

logger = configure_logger(__name__)

load_dotenv()


@dataclass
class APIConfig:
    base_url: str = os.getenv("PASSPORTX_BASEURL", "http://localhost:3010")
    webhook_auth: str = os.getenv("PASSPORTX_WEBHOOK_AUTH_TOKEN", "Bearer 1234567890")


@dataclass
class NetworkConfig:
    network: str = os.getenv("NETWORK", "testnet")


@dataclass
class ChainhookConfig:
    """Upstream chainhook settings.

    These values describe the webhook source and are passed through as-is;
    the dispatch layer does not act on them.
    """

    enabled: bool = os.getenv("PASSPORTX_CHAINHOOK_ENABLED", "true").lower() == "true"
    node_url: str = os.getenv("PASSPORTX_CHAINHOOK_NODE_URL", "https://api.testnet.hiro.so")
    max_retries: int = int(os.getenv("PASSPORTX_CHAINHOOK_MAX_RETRIES", "3"))
    retry_delay_ms: int = int(os.getenv("PASSPORTX_CHAINHOOK_RETRY_DELAY_MS", "1000"))
    timeout_ms: int = int(os.getenv("PASSPORTX_CHAINHOOK_TIMEOUT_MS", "30000"))
    predicates: Dict[str, str] = field(
        default_factory=lambda: {
            "badge-mint": os.getenv(
                "PASSPORTX_PREDICATE_BADGE_MINT", "passportx-badge-mint"
            ),
            "badge-revoke": os.getenv(
                "PASSPORTX_PREDICATE_BADGE_REVOKE", "passportx-badge-revoke"
            ),
            "community-creation": os.getenv(
                "PASSPORTX_PREDICATE_COMMUNITY_CREATE", "passportx-community-create"
            ),
        }
    )


@dataclass
class Config:
    api: APIConfig = field(default_factory=APIConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    chainhook: ChainhookConfig = field(default_factory=ChainhookConfig)

    @classmethod
    def load(cls) -> "Config":
        """Load and validate configuration"""
        config = cls()
        logger.info("Configuration loaded successfully")
        return config


# Global configuration instance
config = Config.load()
