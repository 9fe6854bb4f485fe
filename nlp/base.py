"""
NLP Base Classes
================
Common interface for integrations with external language services.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

__version__ = "1.0.0"


class NLPIntegrationBase(ABC):
    """
    Abstract base class for language-service integrations.

    Subclasses report availability and a status dictionary; they must
    never raise from get_status().
    """

    INTEGRATION_NAME: str = "NLP Integration"
    INTEGRATION_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the integration is available and working."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Last recorded error, if any."""
        return self._error

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the integration."""
        pass
