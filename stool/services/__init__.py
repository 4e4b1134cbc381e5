"""Core services: catalog, selection, credential resolution, script
building and session execution.
"""

from stool.services.builder import SessionScriptBuilder
from stool.services.catalog import TargetCatalog
from stool.services.executor import SessionExecutor, classify
from stool.services.resolver import CredentialResolver
from stool.services.selector import (
    Cancelled,
    Chosen,
    InteractiveSelector,
    Manual,
    SelectionResult,
    TransferMode,
)

__all__ = [
    "Cancelled",
    "Chosen",
    "classify",
    "CredentialResolver",
    "InteractiveSelector",
    "Manual",
    "SelectionResult",
    "SessionExecutor",
    "SessionScriptBuilder",
    "TargetCatalog",
    "TransferMode",
]
