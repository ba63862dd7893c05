"""Passenger request loading from a YAML file."""

import os
import re
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ConfigurationError
from ..models import PassengerRequest

ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively replace ``${VAR_NAME}`` in string values with environment values.

    Numbers are turned into strings as well: YAML reads unquoted dates,
    phone numbers and passwords as ints, but every request field is text.
    """
    if isinstance(value, str):
        for name in ENV_VAR_PATTERN.findall(value):
            env_value = os.getenv(name)
            if env_value is None:
                logger.warning(f"Environment variable '{name}' not set, using empty string")
                env_value = ""
            value = value.replace(f"${{{name}}}", env_value)
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def load_request_file(path: Union[str, Path]) -> PassengerRequest:
    """
    Build a passenger request from a YAML file.

    Expected layout::

        trip:
          departure_station: 수서
          arrival_station: 부산
          departure_time: "10:37"
          arrival_time: "13:10"
          travel_date: "20250622"
        identity:
          mode: unregistered        # or "login"
          name: 홍길동
          phone: "01012345678"
          password: ${SRT_GUEST_PASSWORD}
        notification:
          enabled: true
          email: me@example.com

    Times must be quoted: YAML 1.1 reads ``10:37`` as a base-60 number.

    Raises:
        ConfigurationError: File missing, unreadable, or fails validation
    """
    request_file = Path(path)
    if not request_file.exists():
        raise ConfigurationError(f"Request file not found: {request_file}")

    logger.info(f"Loading passenger request from {request_file}")
    try:
        with open(request_file, "r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {request_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Request file {request_file} must contain a mapping")

    payload: Dict[str, Any] = substitute_env_vars(data)
    try:
        return PassengerRequest.model_validate(payload)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid passenger request in {request_file}: {problems}",
            details={"errors": len(e.errors())},
        ) from e
