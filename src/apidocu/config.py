from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler

ENV_COMPONENT = "APIDOCU_COMPONENT"
ENV_OUTPUT_TYPE = "APIDOCU_OUTPUT_TYPE"
ENV_LOG_LEVEL = "APIDOCU_LOG_LEVEL"


class Settings(BaseModel):
    component_name: str = "misaka"
    default_output_type: str = "pdf"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            component_name=env.get(ENV_COMPONENT) or defaults.component_name,
            default_output_type=env.get(ENV_OUTPUT_TYPE) or defaults.default_output_type,
            log_level=(env.get(ENV_LOG_LEVEL) or defaults.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        # stdout carries the rendered document
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
