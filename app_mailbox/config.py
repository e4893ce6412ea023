"""
Mailbox application configuration

Values are read from the layered .env files of the project root
(see common.utils.env_util.load_env).
"""
from pathlib import Path
from typing import Dict

from common.exceptions.configuration_error_exception import ConfigurationErrorException
from common.utils.env_util import load_env

# database alias every mailbox query runs on
MAILBOX_DB_ALIAS = "mailbox_rw"

# app_mailbox/config.py -> app_mailbox -> project root
BASE_DIR = Path(__file__).resolve().parent.parent


def get_app_config() -> Dict:
    """
    Get mailbox configuration from environment variables.

    Returns:
        Dictionary with 'mail_domain', the domain of generated message ids

    Raises:
        ConfigurationErrorException: If configuration values are invalid
    """
    env = load_env(BASE_DIR)

    mail_domain = env("MAIL_DOMAIN", default="localhost").strip().lower()
    if not mail_domain or "@" in mail_domain or " " in mail_domain:
        raise ConfigurationErrorException(f"MAIL_DOMAIN is not a valid domain: '{mail_domain}'")

    return {
        "mail_domain": mail_domain,
    }
