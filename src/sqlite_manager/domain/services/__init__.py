"""Domain services.

Pure functions that turn caller requests into executable statements. They
never touch a connection.
"""

from sqlite_manager.domain.services.translator import (
    Statement,
    parameter_name,
    prepare,
    translate,
    translate_many,
)
from sqlite_manager.domain.services import statements

__all__ = [
    "Statement",
    "parameter_name",
    "prepare",
    "statements",
    "translate",
    "translate_many",
]
