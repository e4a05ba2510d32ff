# config.py
"""
Centralized configuration management.
Reads process environment variables, optionally seeded from a local .env file.
"""

import logging
import os
from pathlib import Path
from typing import Optional


class Config:
    """Configuration manager that handles environment variables."""

    def __init__(self, env_file: Optional[Path] = None):
        """Initialize configuration by loading environment variables."""
        # Try to load .env.local if it exists (for local development)
        self._load_env_file(env_file or Path(__file__).parent.parent / ".env.local")

    def _load_env_file(self, env_file: Path):
        """Load environment variables from a dotenv-style file if it exists."""
        if not env_file.exists():
            return
        try:
            with open(env_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        # Only set if not already in environment
                        if key.strip() not in os.environ:
                            os.environ[key.strip()] = value.strip().strip('"')
        except OSError as e:
            logging.warning(f"Could not load {env_file}: {e}")

    # Database Configuration
    @property
    def database_url(self) -> str:
        """Get database connection URL."""
        return os.environ.get("DATABASE_URL") or os.environ.get("DB_CONNECTION_STRING", "")

    # LLM Configuration
    @property
    def llm_provider(self) -> str:
        """Get LLM provider ('openai' or 'azure')."""
        return os.environ.get("LLM_PROVIDER", "openai").lower()

    @property
    def openai_api_key(self) -> str:
        """Get OpenAI (direct) API key."""
        return os.environ.get("OPENAI_API_KEY", "")

    @property
    def openai_model(self) -> str:
        """Get OpenAI (direct) model name."""
        return os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo")

    @property
    def openai_endpoint(self) -> str:
        """Get Azure OpenAI endpoint."""
        return os.environ.get("OPENAI_ENDPOINT", "")

    @property
    def openai_key(self) -> str:
        """Get Azure OpenAI API key."""
        return os.environ.get("OPENAI_KEY", "")

    @property
    def openai_deployment(self) -> str:
        """Get Azure OpenAI deployment name."""
        return os.environ.get("OPENAI_DEPLOYMENT", "gpt-4o")

    @property
    def openai_api_version(self) -> str:
        """Get Azure OpenAI API version."""
        return os.environ.get("OPENAI_API_VERSION", "2024-12-01-preview")

    # Document parsing
    @property
    def document_parser(self) -> str:
        """Get document parser name ('pymupdf' or 'azure')."""
        return os.environ.get("DOCUMENT_PARSER", "pymupdf").lower()

    @property
    def di_endpoint(self) -> str:
        """Get Document Intelligence endpoint."""
        return os.environ.get("DI_ENDPOINT", "")

    @property
    def di_key(self) -> str:
        """Get Document Intelligence API key."""
        return os.environ.get("DI_KEY", "")

    # Blockchain Configuration
    @property
    def ethereum_rpc_url(self) -> str:
        """Get Ethereum Sepolia RPC endpoint."""
        return os.environ.get("ETHEREUM_SEPOLIA_RPC_URL", "")

    @property
    def polygon_rpc_url(self) -> str:
        """Get Polygon testnet RPC endpoint."""
        return os.environ.get("POLYGON_MUMBAI_RPC_URL") or os.environ.get("POLYGON_AMOY_RPC_URL", "")

    @property
    def deployer_private_key(self) -> str:
        """Get the private key used to sign deployment transactions."""
        return os.environ.get("DEPLOYER_PRIVATE_KEY", "")

    @property
    def solc_version(self) -> str:
        """Get the solc compiler version used for compilation."""
        return os.environ.get("SOLC_VERSION", "0.8.20")

    # Uploads
    @property
    def upload_dir(self) -> str:
        """Get directory where registered uploads are kept."""
        return os.environ.get("UPLOAD_DIR", str(Path(__file__).parent.parent / "uploads"))

    @property
    def max_upload_bytes(self) -> int:
        """Get maximum accepted upload size in bytes."""
        return int(os.environ.get("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

    # Timeouts
    @property
    def request_timeout(self) -> float:
        """Get timeout in seconds for LLM and RPC requests."""
        return float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "60"))

    @property
    def deploy_confirm_timeout(self) -> float:
        """Get timeout in seconds to wait for a deployment receipt."""
        return float(os.environ.get("DEPLOY_CONFIRM_TIMEOUT_SECONDS", "180"))

    # Logging Configuration
    @property
    def log_level(self) -> str:
        """Get logging level."""
        return os.environ.get("LOG_LEVEL", "INFO")

    def validate(self, deploy: bool = False) -> tuple[bool, list[str]]:
        """
        Validate that required configuration is present.

        Args:
            deploy: Also require the settings needed to deploy contracts

        Returns:
            Tuple of (is_valid, list of missing keys)
        """
        missing = []

        if not self.database_url:
            missing.append("DATABASE_URL or DB_CONNECTION_STRING")

        if self.document_parser == "azure":
            if not self.di_endpoint:
                missing.append("DI_ENDPOINT")
            if not self.di_key:
                missing.append("DI_KEY")

        if deploy:
            if not self.deployer_private_key:
                missing.append("DEPLOYER_PRIVATE_KEY")
            if not (self.ethereum_rpc_url or self.polygon_rpc_url):
                missing.append("ETHEREUM_SEPOLIA_RPC_URL or POLYGON_MUMBAI_RPC_URL")

        return len(missing) == 0, missing

    def print_config(self, hide_secrets: bool = True):
        """Print current configuration (for debugging)."""
        def show(value: str) -> str:
            return self._mask(value) if hide_secrets else value

        print("=" * 60)
        print("Configuration:")
        print("=" * 60)
        print(f"Log Level: {self.log_level}")
        print(f"Database URL: {show(self.database_url)}")
        print(f"LLM Provider: {self.llm_provider}")
        print(f"OpenAI Model: {self.openai_model}")
        print(f"OpenAI Key: {show(self.openai_api_key)}")
        print(f"Azure OpenAI Endpoint: {self.openai_endpoint}")
        print(f"Azure OpenAI Deployment: {self.openai_deployment}")
        print(f"Document Parser: {self.document_parser}")
        print(f"Ethereum RPC: {show(self.ethereum_rpc_url)}")
        print(f"Polygon RPC: {show(self.polygon_rpc_url)}")
        print(f"Deployer Key: {show(self.deployer_private_key)}")
        print(f"Solc Version: {self.solc_version}")
        print("=" * 60)

    @staticmethod
    def _mask(value: str, show_chars: int = 4) -> str:
        """Mask sensitive values for display."""
        if not value or len(value) <= show_chars * 2:
            return "***"
        return value[:show_chars] + "..." + value[-show_chars:]


def configure_logging(level: Optional[str] = None):
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=getattr(logging, (level or config.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global config instance
config = Config()
