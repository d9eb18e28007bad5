"""Pytest configuration and shared fixtures for BrickQuote tests."""

import copy
import os
import sys
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from typing import Dict, Any


# ============================================================================
# Ensure local imports work (brickquote/, tests/fixtures/)
# ============================================================================
#
# With importlib import mode the repository root may not be on sys.path
# during collection. Tests import `brickquote...` and `tests.fixtures...`.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tests.fixtures.mock_estimate_data import (  # noqa: E402
    BRICKWORK_INPUTS,
    GARDEN_WALL_ESTIMATE,
    ZERO_AREA_ESTIMATE,
    as_response_text,
)


# ============================================================================
# Firebase Mocks
# ============================================================================

@pytest.fixture
def mock_firestore_client():
    """Mock Firestore client."""
    client = MagicMock()

    # Set up chain: client.collection().document()
    collection_mock = MagicMock()
    document_mock = MagicMock()
    client.collection.return_value = collection_mock
    collection_mock.document.return_value = document_mock

    # Mock async methods
    document_mock.get = AsyncMock(return_value=MagicMock(exists=False))
    document_mock.set = AsyncMock()
    document_mock.delete = AsyncMock()

    # Query chain: collection().where().order_by().limit().get()
    query_mock = MagicMock()
    collection_mock.where.return_value = query_mock
    query_mock.order_by.return_value = query_mock
    query_mock.limit.return_value = query_mock
    query_mock.get = AsyncMock(return_value=[])

    return client


@pytest.fixture
def mock_job_store(mock_firestore_client):
    """JobStore with mocked client."""
    from brickquote.services.job_store import JobStore

    return JobStore(db=mock_firestore_client)


# ============================================================================
# LLM Mocks
# ============================================================================

@pytest.fixture
def mock_chat_openai():
    """Mock ChatOpenAI client returning a usable estimate."""
    mock = AsyncMock()
    mock.ainvoke.return_value = MagicMock(
        content=as_response_text(GARDEN_WALL_ESTIMATE),
        response_metadata={"token_usage": {"total_tokens": 850}}
    )
    return mock


@pytest.fixture
def mock_llm_service(mock_chat_openai):
    """LLMService wired to the mocked client."""
    from brickquote.services.llm_service import LLMService

    with patch('brickquote.services.llm_service.ChatOpenAI', return_value=mock_chat_openai):
        service = LLMService(api_key="test-api-key")
        service._client = mock_chat_openai
        return service


# ============================================================================
# Sample Data Fixtures
# ============================================================================

@pytest.fixture
def sample_job_inputs_data() -> Dict[str, Any]:
    """camelCase job inputs as sent by the app."""
    return dict(BRICKWORK_INPUTS)


@pytest.fixture
def sample_job_inputs(sample_job_inputs_data):
    """Validated JobInputs for a 4.5m brick wall."""
    from brickquote.models.job import JobInputs

    return JobInputs.model_validate(sample_job_inputs_data)


@pytest.fixture
def sample_estimate_data() -> Dict[str, Any]:
    """Well-formed, usable model answer."""
    return copy.deepcopy(GARDEN_WALL_ESTIMATE)


@pytest.fixture
def degenerate_estimate_data() -> Dict[str, Any]:
    """Well-formed model answer with no usable numbers."""
    return copy.deepcopy(ZERO_AREA_ESTIMATE)


@pytest.fixture
def sample_estimate(sample_estimate_data):
    """Typed EstimateResult."""
    from brickquote.models.estimate import EstimateResult

    return EstimateResult.model_validate(sample_estimate_data)


@pytest.fixture
def sample_saved_job(sample_job_inputs, sample_estimate):
    """Saved job owned by user-1."""
    from brickquote.models.job import SavedJob

    return SavedJob(
        id="1718000000000-abc1234",
        user_id="user-1",
        created_at=datetime(2024, 6, 10, 9, 30, tzinfo=timezone.utc),
        inputs=sample_job_inputs,
        outputs=sample_estimate,
    )


@pytest.fixture
def sample_profile():
    """Company profile for quote rendering."""
    from brickquote.models.profile import QuoteProfile

    return QuoteProfile(
        company_name="Smith & Sons Brickwork",
        phone="07700 900123",
        email="quotes@smithbrick.co.uk",
        address="12 Mill Lane\nLeeds\nLS1 4AB",
        vat_registered=True,
    )
