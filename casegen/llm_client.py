from abc import ABC, abstractmethod
from typing import Optional
import logging

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No content returned from model."


class EmptyCompletionError(Exception):
    """Raised when the completion service returns no text"""

    def __init__(self, message: str = NO_CONTENT_MESSAGE):
        super().__init__(message)


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    def __init__(self, api_key: str, model: str, system_prompt: str, temperature: float = 0.3,
                 max_tokens: Optional[int] = None, timeout: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.config_max_tokens = max_tokens  # None = use provider defaults
        self.timeout = timeout

    @abstractmethod
    def generate_content(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        """Send one prompt and return the raw text of the first completion"""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider"""

    def __init__(self, api_key: str, model: str, system_prompt: str, temperature: float = 0.3,
                 max_tokens: Optional[int] = None, timeout: Optional[float] = None):
        # GPT-5 variants only support temperature=1.0, override if needed
        if OpenAIProvider._is_gpt5_variant(model):
            if temperature != 1.0:
                logger.warning(f"GPT-5 variant '{model}' only supports temperature=1.0. Overriding temperature from {temperature} to 1.0")
            temperature = 1.0

        super().__init__(api_key, model, system_prompt, temperature, max_tokens=max_tokens, timeout=timeout)
        from openai import OpenAI
        client_kwargs = {'api_key': api_key, 'max_retries': 0}
        if timeout is not None:
            client_kwargs['timeout'] = timeout
        self.client = OpenAI(**client_kwargs)

    @staticmethod
    def _is_gpt5_variant(model: str) -> bool:
        """Check if model is a GPT-5 variant that requires temperature=1.0"""
        model_lower = model.lower()
        return any(gpt5_variant in model_lower for gpt5_variant in ['gpt-5', 'gpt5'])

    def generate_content(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        logger.info(f"🤖 Requesting completion from OpenAI model {self.model} (temperature={self.temperature})")
        logger.debug(f"📋 SYSTEM PROMPT:\n{self.system_prompt}")
        logger.debug(f"👤 USER PROMPT:\n{prompt}")

        request_kwargs = {
            'model': self.model,
            'messages': [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt}
            ],
            'temperature': self.temperature
        }
        tokens = max_tokens if max_tokens is not None else self.config_max_tokens
        if tokens is not None:
            request_kwargs['max_completion_tokens'] = tokens

        try:
            response = self.client.chat.completions.create(**request_kwargs)
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        result = response.choices[0].message.content if response.choices else None
        if not result:
            logger.error("🚨 OPENAI RETURNED EMPTY RESPONSE!")
            raise EmptyCompletionError()

        finish_reason = response.choices[0].finish_reason
        if finish_reason == 'length':
            logger.warning("⚠️ OpenAI response was truncated (finish_reason=length). Consider increasing max_tokens.")
        logger.info(f"🤖 OPENAI RESPONSE LENGTH: {len(result)} characters, finish_reason: {finish_reason}")
        return result


class LLMClient:
    """Factory class for LLM providers"""

    def __init__(self, config: dict):
        self.default_max_tokens = config.get('max_tokens')
        self.provider = self._create_provider(config)

    def _create_provider(self, config: dict) -> LLMProvider:
        """Create the appropriate LLM provider"""
        provider = config['provider'].lower()

        if provider == "openai":
            return OpenAIProvider(
                config['api_key'],
                config['model'],
                config['system_prompt'],
                config.get('temperature', 0.3),
                max_tokens=config.get('max_tokens'),
                timeout=config.get('timeout')
            )
        else:
            raise ValueError(f"Unsupported LLM provider: {provider}")

    def generate_content(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        """
        Generate content using the configured provider

        Args:
            prompt: The prompt to send to the LLM
            max_tokens: Maximum tokens to generate (default: config max_tokens or provider default)

        Raises:
            EmptyCompletionError: if the provider returned no text
        """
        if max_tokens is None:
            max_tokens = self.default_max_tokens
        return self.provider.generate_content(prompt, max_tokens=max_tokens)
