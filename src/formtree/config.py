"""
Configuration module for formtree.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class FormTreeConfig:
    """Configuration settings for formtree."""

    # Logging
    log_level: str = "INFO"

    # Validation output
    include_suggestions: bool = True
    indent_json_output: int = 2

    # Guardrail settings
    enable_guardrails: bool = True

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8080

    @classmethod
    def from_env(cls) -> "FormTreeConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            log_level=os.getenv("FORMTREE_LOG_LEVEL", _defaults.log_level).upper(),
            include_suggestions=_env_flag("FORMTREE_INCLUDE_SUGGESTIONS", _defaults.include_suggestions),
            indent_json_output=int(os.getenv("FORMTREE_JSON_INDENT", str(_defaults.indent_json_output))),
            enable_guardrails=_env_flag("FORMTREE_ENABLE_GUARDRAILS", _defaults.enable_guardrails),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_host=os.getenv("MCP_HOST", _defaults.mcp_host),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
        )


config = FormTreeConfig.from_env()


def get_config() -> FormTreeConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormTreeConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
