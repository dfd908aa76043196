"""
Shared Dependencies
Configuration and services shared across all routes
"""
from typing import Optional
from casegen.config import Config
from casegen.pipeline import TestCaseGenerator
import logging

logger = logging.getLogger(__name__)

# Global instances (initialized on startup or on first use)
config: Optional[Config] = None
test_case_generator: Optional[TestCaseGenerator] = None


def get_config() -> Config:
    """Get Config instance, loading it on first use"""
    global config
    if config is None:
        config = Config()
    return config


def get_test_case_generator() -> TestCaseGenerator:
    """Get TestCaseGenerator instance"""
    global test_case_generator
    if test_case_generator is None:
        test_case_generator = TestCaseGenerator(get_config())
    return test_case_generator


def initialize_services():
    """Load configuration and build the generation pipeline"""
    global config, test_case_generator

    try:
        config = Config()
        config.validate()
        test_case_generator = TestCaseGenerator(config)
        logger.info(
            f"Services initialized (default model: {config.default_model}, "
            f"OpenAI key configured: {config.has_openai_key}, Linear key configured: {config.has_linear_key})"
        )
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")
        raise
