"""Environment variable configuration loading (``GEMINI_*``)."""

import os
from typing import Any

from pydantic import ValidationError

from .schema import BridgeSettings


class EnvironmentConfigLoader:
    """Reads only the ``GEMINI_*`` variables that are actually set."""

    def env_var_names(self) -> dict[str, str]:
        """Map each environment variable name to its settings field."""
        prefix = BridgeSettings.model_config.get("env_prefix", "")
        return {f"{prefix}{name}".upper(): name for name in BridgeSettings.model_fields}

    def load_env_config(self) -> dict[str, Any]:
        """Return coerced values for the variables present in the environment.

        Raises:
            ValueError: If a variable holds a value its field rejects.
        """
        names = self.env_var_names()
        raw = {field: os.environ[var] for var, field in names.items() if var in os.environ}
        if not raw:
            return {}

        try:
            settings = BridgeSettings(**raw)
        except ValidationError as e:
            shown = ", ".join(
                f"{var}=[REDACTED]" if field == "api_key" else f"{var}={os.environ[var]}"
                for var, field in names.items()
                if field in raw
            )
            raise ValueError(
                f"Invalid environment variable values: {shown}. Error: {e}"
            ) from e

        return {field: getattr(settings, field) for field in raw}
