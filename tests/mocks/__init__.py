# Mock Services Package
# Provides mock implementations of external services for testing

from .ai_provider import MOCK_INTERACTIONS, MOCK_SUMMARY, MockProvider, failing_provider, pharmacy_responder
from .label_client import MockLabelClient

__all__ = [
    # AI provider mocks
    "MockProvider",
    "failing_provider",
    "pharmacy_responder",
    "MOCK_SUMMARY",
    "MOCK_INTERACTIONS",
    # Label client mocks
    "MockLabelClient",
]
