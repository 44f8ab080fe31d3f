"""Authentication of a Vault client by token or AppRole."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from vaultdiff.client import VaultClient

APPROLE_LOGIN_PATH = "auth/approle/login"


class AuthError(Exception):
    """Raised when a client cannot be authenticated."""


class AuthMethod(str, Enum):
    """Supported Vault authentication methods."""

    TOKEN = "token"
    APPROLE = "approle"


@dataclass
class AuthConfig:
    """Credentials for authenticating to Vault."""

    method: AuthMethod | str = AuthMethod.TOKEN
    token: str = ""
    role_id: str = ""
    secret_id: str = ""


def auth_config_from_env(environ: Mapping[str, str] | None = None) -> AuthConfig:
    """Build an AuthConfig from VAULT_TOKEN, VAULT_ROLE_ID and VAULT_SECRET_ID.

    AppRole is chosen when both a role id and a secret id are present.
    """
    env = os.environ if environ is None else environ
    config = AuthConfig(
        method=AuthMethod.TOKEN,
        token=env.get("VAULT_TOKEN", ""),
        role_id=env.get("VAULT_ROLE_ID", ""),
        secret_id=env.get("VAULT_SECRET_ID", ""),
    )
    if config.role_id and config.secret_id:
        config.method = AuthMethod.APPROLE
    return config


def _login_approle(client: VaultClient, config: AuthConfig) -> None:
    response = client.write(
        APPROLE_LOGIN_PATH,
        {"role_id": config.role_id, "secret_id": config.secret_id},
    )
    auth = response.get("auth") if response else None
    if not isinstance(auth, dict):
        raise AuthError("approle login returned no auth info")
    client.token = str(auth.get("client_token", ""))


def authenticate(client: VaultClient, config: AuthConfig) -> None:
    """Apply ``config`` to ``client``, logging in first for AppRole."""
    try:
        method = AuthMethod(config.method)
    except ValueError:
        raise AuthError(f"unsupported auth method: {config.method}") from None

    if method is AuthMethod.TOKEN:
        if not config.token:
            raise AuthError("vault token is required (set VAULT_TOKEN)")
        client.token = config.token
    else:
        _login_approle(client, config)