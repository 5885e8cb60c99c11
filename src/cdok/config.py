"""Scanner and storage settings.

Every value can be overridden from the environment (``CDOK_*``) or from
the command line.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

DOCS_FILENAME = ".project_docs.txt"

# env var -> settings field
_ENV_FIELDS = {
    "CDOK_DOCS_FILE": "docs_filename",
    "CDOK_MAX_FILES": "max_files",
    "CDOK_MAX_FUNCTIONS": "max_functions_per_file",
    "CDOK_MAX_PARAMETERS": "max_parameters",
    "CDOK_MAX_PARAMETER_TOKENS": "max_parameter_tokens",
    "CDOK_ENCODING": "encoding",
}


class Settings(BaseModel):
    """Soft limits and file locations for a scan pass.

    The caps are truncate-not-fail: reaching one stops collecting items of
    that kind, the scan itself still succeeds.
    """

    model_config = ConfigDict(frozen=True)

    docs_filename: str = Field(default=DOCS_FILENAME, min_length=1)
    extensions: tuple[str, ...] = (".c", ".h")
    header_suffix: str = ".h"
    max_files: int = Field(default=200, gt=0)
    max_functions_per_file: int = Field(default=200, gt=0)
    max_parameters: int = Field(default=20, gt=0)
    max_parameter_tokens: int = Field(default=10, gt=0)
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "Settings":
        """Build settings from CDOK_* environment variables.

        Keyword overrides that are not None win over the environment.
        """
        environ = os.environ if environ is None else environ
        values = {
            field: environ[var] for var, field in _ENV_FIELDS.items() if environ.get(var)
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
