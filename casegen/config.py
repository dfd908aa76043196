import os
import re
import yaml
import logging
from typing import Dict, Any, Optional, List
from dotenv import load_dotenv

from .models import Credentials
from .prompts import Prompts

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"

# Used when no configuration file exists so that environment-only setups still work
DEFAULT_CONFIG_TEMPLATE = """
linear:
  api_url: ${LINEAR_API_URL:https://api.linear.app/graphql}
  api_key: ${LINEAR_API_KEY:}
  timeout_seconds: ${LINEAR_TIMEOUT_SECONDS:30}
llm:
  provider: openai
  openai_api_key: ${OPENAI_API_KEY:}
  openai_model: ${OPENAI_MODEL:gpt-4o-mini}
  temperature: 0.3
  timeout_seconds: ${LLM_TIMEOUT_SECONDS:60}
  max_tokens: ${LLM_MAX_TOKENS:}
processing:
  error_detail_max_length: 200
"""


class Config:
    """Configuration manager for the test case generator"""

    def __init__(self, config_path: Optional[str] = None):
        load_dotenv()
        self.config_path = config_path or os.getenv("CASEGEN_CONFIG", DEFAULT_CONFIG_PATH)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file with environment variable substitution"""
        if os.path.exists(self.config_path):
            with open(self.config_path, 'r', encoding='utf-8') as file:
                config_content = file.read()
        else:
            logger.info(f"Configuration file {self.config_path} not found, using environment defaults")
            config_content = DEFAULT_CONFIG_TEMPLATE

        config_content = self._substitute_env_vars(config_content)

        return yaml.safe_load(config_content) or {}

    def _substitute_env_vars(self, content: str) -> str:
        """Replace ${VAR_NAME} and ${VAR_NAME:default} with environment variables"""

        def replace_var(match):
            var_expr = match.group(1)
            if ':' in var_expr:
                var_name, default_value = var_expr.split(':', 1)
                return os.getenv(var_name) or default_value
            else:
                return os.getenv(var_expr, '')

        return re.sub(r'\$\{([^}]+)\}', replace_var, content)

    @property
    def linear(self) -> Dict[str, Any]:
        return self._config.get('linear') or {}

    @property
    def llm(self) -> Dict[str, Any]:
        return self._config.get('llm') or {}

    @property
    def processing(self) -> Dict[str, Any]:
        return self._config.get('processing') or {}

    @property
    def linear_api_url(self) -> str:
        return self.linear.get('api_url') or 'https://api.linear.app/graphql'

    @property
    def linear_timeout(self) -> float:
        return self._to_float(self.linear.get('timeout_seconds'), 30.0)

    @property
    def default_model(self) -> str:
        return self.llm.get('openai_model') or 'gpt-4o-mini'

    @property
    def error_detail_max_length(self) -> int:
        return int(self.processing.get('error_detail_max_length', 200))

    @property
    def has_openai_key(self) -> bool:
        return bool(self.llm.get('openai_api_key'))

    @property
    def has_linear_key(self) -> bool:
        return bool(self.linear.get('api_key'))

    @staticmethod
    def _to_float(value: Any, default: float) -> float:
        if value is None or (isinstance(value, str) and not value.strip()):
            return default
        try:
            return float(value)
        except (ValueError, TypeError):
            logger.warning(f"Invalid numeric config value {value!r}, using {default}")
            return default

    def resolve_credentials(self, openai_api_key: Optional[str] = None,
                            linear_api_key: Optional[str] = None) -> Credentials:
        """Per-request credentials win over the configured defaults"""
        return Credentials(
            openai_api_key=openai_api_key or self.llm.get('openai_api_key') or None,
            linear_api_key=linear_api_key or self.linear.get('api_key') or None
        )

    def get_supported_providers(self) -> List[str]:
        """Get list of supported LLM providers"""
        return ['openai']

    def validate_llm_provider(self, provider: str) -> bool:
        """Validate if the provider is supported"""
        return provider in self.get_supported_providers()

    def get_llm_config(self, api_key: Optional[str] = None, model: Optional[str] = None) -> Dict[str, Any]:
        """Get configuration for the LLM client, with optional key and model overrides"""
        provider = self.llm.get('provider', 'openai')

        if not self.validate_llm_provider(provider):
            raise ValueError(f"Unsupported LLM provider: {provider}. Supported providers: {self.get_supported_providers()}")

        max_tokens_config = self.llm.get('max_tokens')
        max_tokens = None
        if max_tokens_config is None or (isinstance(max_tokens_config, str) and not max_tokens_config.strip()):
            logger.debug("max_tokens not set in config, using provider defaults")
        else:
            try:
                max_tokens = int(max_tokens_config)
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid max_tokens config value: {max_tokens_config}, using provider defaults. Error: {e}")

        return {
            'provider': provider,
            'api_key': api_key or self.llm.get('openai_api_key'),
            'model': model or self.default_model,
            'system_prompt': self.llm.get('system_prompt') or Prompts.get_test_case_system_prompt(),
            'temperature': self._to_float(self.llm.get('temperature'), 0.3),
            'timeout': self._to_float(self.llm.get('timeout_seconds'), 60.0),
            'max_tokens': max_tokens
        }

    def validate(self) -> bool:
        """Check that the configuration can serve requests without per-request keys"""
        errors = []

        if not self.validate_llm_provider(self.llm.get('provider', 'openai')):
            errors.append(f"Unsupported LLM provider: {self.llm.get('provider')}")
        if not self.has_openai_key:
            errors.append("Missing OPENAI_API_KEY (requests must supply openaiApiKey)")
        if not self.has_linear_key:
            errors.append("Missing LINEAR_API_KEY (requests must supply linearApiKey or a description)")

        for error in errors:
            logger.warning(f"Configuration: {error}")

        return not errors
