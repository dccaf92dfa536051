#!/usr/bin/env python3
"""
Configuration Manager for Leanpub Login Automation
Description:
Handles configuration loading from the environment (and an optional .env
file), validation and default values for the login workflow.
"""

import os
import logging
from typing import List, Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

from base_exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOGIN_URL = "https://leanpub.com/login"
PUBLISHED_URL = "https://leanpub.com/author_dashboard/books/published"
PUBLISHED_TITLE = "Leanpub - Your Books"

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class Credentials:
    """Login credentials; the password never appears in repr or logs"""
    email: str = ""
    password: str = field(default="", repr=False)

    def is_complete(self) -> bool:
        return bool(self.email) and bool(self.password)

    def missing_variables(self) -> List[str]:
        missing = []
        if not self.email:
            missing.append('LEANPUB_EMAIL')
        if not self.password:
            missing.append('LEANPUB_PASSWORD')
        return missing

    def get_summary(self) -> str:
        """
        Get a summary of the credentials for logging.

        Returns:
            str: Summary string with the password masked.
        """
        password_state = "********" if self.password else "<missing>"
        return f"Credentials: email={self.email or '<missing>'} password={password_state}"


@dataclass
class BrowserModeConfig:
    """Configuration for the browser session"""
    headless: bool = True
    slow_motion: int = 0  # milliseconds
    navigation_timeout: int = 30000  # milliseconds


@dataclass
class PollConfig:
    """Bounded fixed-interval polling settings"""
    max_attempts: int
    interval_ms: int = 500


@dataclass
class LeanpubSiteConfig:
    """The parts of the Leanpub site the workflow depends on"""
    login_url: str = LOGIN_URL
    published_url: str = PUBLISHED_URL
    published_title: str = PUBLISHED_TITLE
    email_selector: str = "input[name='session[email]']"
    password_selector: str = "input[name='session[password]']"
    submit_selector: str = "input[type=submit],button[type=submit]"
    token_selector: str = (
        "input[name^='g-recaptcha-response'], "
        "textarea[name='g-recaptcha-response'], "
        "input[name^='g-recaptcha-response-data']"
    )
    authenticated_url_markers: List[str] = field(default_factory=lambda: ["author_dashboard", "/u/"])
    user_menu_selectors: List[str] = field(default_factory=lambda: ['[data-test="user-menu"]', '.user-menu'])
    book_path_suffix: str = "/overview"
    settle_delay_ms: int = 2000


@dataclass
class LoginWorkflowConfig:
    """Complete configuration for one run of the login workflow"""
    credentials: Credentials = field(default_factory=Credentials)
    browser: BrowserModeConfig = field(default_factory=BrowserModeConfig)
    site: LeanpubSiteConfig = field(default_factory=LeanpubSiteConfig)
    token_poll: PollConfig = field(default_factory=lambda: PollConfig(max_attempts=30))
    auth_poll: PollConfig = field(default_factory=lambda: PollConfig(max_attempts=20))
    log_level: str = "INFO"
    enable_performance_monitoring: bool = True


class ConfigurationManager:
    """
    Loads, validates and hands out the workflow configuration.
    Environment variables are the only source; a .env file in the working
    directory is read first without overriding variables already set.
    """

    def __init__(self, use_dotenv: bool = True):
        self.use_dotenv = use_dotenv
        self.logger = logging.getLogger(f"{__name__}.ConfigurationManager")
        self._config: Optional[LoginWorkflowConfig] = None

    def load_configuration(self) -> LoginWorkflowConfig:
        """Load configuration from the environment and validate it"""
        if self.use_dotenv:
            load_dotenv()

        config = self._load_from_environment(LoginWorkflowConfig())
        self._validate_configuration(config)

        self._config = config
        self.logger.debug("Configuration loaded successfully")
        return config

    def get_configuration(self) -> LoginWorkflowConfig:
        if not self._config:
            self.load_configuration()
        return self._config

    def _load_from_environment(self, config: LoginWorkflowConfig) -> LoginWorkflowConfig:
        """Override configuration with environment variables"""
        config.credentials = Credentials(
            email=os.getenv('LEANPUB_EMAIL', ''),
            password=os.getenv('LEANPUB_PASSWORD', ''),
        )

        config.browser.headless = self._get_env_bool('LEANPUB_HEADLESS', config.browser.headless)
        config.browser.slow_motion = self._get_env_int('LEANPUB_SLOW_MOTION', config.browser.slow_motion)
        config.browser.navigation_timeout = self._get_env_int(
            'LEANPUB_NAVIGATION_TIMEOUT', config.browser.navigation_timeout
        )
        config.log_level = os.getenv('LEANPUB_LOG_LEVEL', config.log_level).upper()
        return config

    def _validate_configuration(self, config: LoginWorkflowConfig) -> None:
        """Validate configuration and raise for values the workflow cannot run with"""
        errors = []

        if config.browser.navigation_timeout < 1000:
            errors.append("LEANPUB_NAVIGATION_TIMEOUT must be at least 1000ms")

        if config.browser.slow_motion < 0:
            errors.append("LEANPUB_SLOW_MOTION must be non-negative")

        for name, poll in (('token_poll', config.token_poll), ('auth_poll', config.auth_poll)):
            if poll.max_attempts < 1:
                errors.append(f"{name}.max_attempts must be at least 1")
            if poll.interval_ms < 0:
                errors.append(f"{name}.interval_ms must be non-negative")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LEANPUB_LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if errors:
            error_message = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors)
            self.logger.error(error_message)
            raise ConfigurationError(error_message)

    def _get_env_bool(self, key: str, default: bool) -> bool:
        """Get boolean value from environment variable"""
        value = os.getenv(key, str(default)).lower()
        return value in ('true', '1', 'yes', 'on')

    def _get_env_int(self, key: str, default: int) -> int:
        """Get integer value from environment variable"""
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            self.logger.warning(f"Invalid integer value for {key}, using default: {default}")
            return default
