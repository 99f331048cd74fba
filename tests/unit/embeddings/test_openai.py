from unittest.mock import AsyncMock, Mock, patch

import pytest
from openai import APITimeoutError

from vector_kit.embeddings.base import Embedding
from vector_kit.embeddings.openai import OpenAIEmbeddingsClient
from vector_kit.errors import InternalError
from vector_kit.observability import RecordingMetricsHook, names


def _mock_response(num_embeddings: int) -> Mock:
    """Create a mock response with the given number of embeddings."""
    return Mock(
        data=[
            Mock(embedding=[0.1 * i, 0.2, 0.3], index=i) for i in range(num_embeddings)
        ]
    )


@pytest.mark.asyncio
async def test_embed_returns_one_vector_per_input() -> None:
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model")

    mock_client = AsyncMock()
    mock_client.embeddings.create.return_value = _mock_response(3)
    client._client = mock_client

    embeddings = await client.embed(["a", "b", "c"])

    assert len(embeddings) == 3
    assert all(isinstance(e, Embedding) for e in embeddings)
    assert all(isinstance(e.vector, list) for e in embeddings)
    assert embeddings[0].dimensions == 3


@pytest.mark.asyncio
async def test_embed_respects_batch_size() -> None:
    """Test that texts are batched according to batch_size parameter."""
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model", batch_size=2)

    mock_client = AsyncMock()
    mock_client.embeddings.create.side_effect = [
        _mock_response(2),
        _mock_response(2),
        _mock_response(1),
    ]
    client._client = mock_client

    embeddings = await client.embed(["a", "b", "c", "d", "e"])

    assert len(embeddings) == 5
    calls = mock_client.embeddings.create.call_args_list
    assert [len(call.kwargs["input"]) for call in calls] == [2, 2, 1]


@pytest.mark.asyncio
async def test_embed_orders_by_response_index() -> None:
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model")

    mock_client = AsyncMock()
    mock_client.embeddings.create.return_value = Mock(
        data=[Mock(embedding=[2.0], index=1), Mock(embedding=[1.0], index=0)]
    )
    client._client = mock_client

    embeddings = await client.embed(["first", "second"])

    assert [e.vector for e in embeddings] == [[1.0], [2.0]]


@pytest.mark.asyncio
async def test_embed_passes_dimensions() -> None:
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model", dimensions=256)

    mock_client = AsyncMock()
    mock_client.embeddings.create.return_value = _mock_response(1)
    client._client = mock_client

    await client.embed(["a"])

    mock_client.embeddings.create.assert_called_once_with(
        model="fake-model", input=["a"], dimensions=256
    )


@pytest.mark.asyncio
async def test_embed_omits_dimensions_by_default() -> None:
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model")

    mock_client = AsyncMock()
    mock_client.embeddings.create.return_value = _mock_response(1)
    client._client = mock_client

    await client.embed(["a"])

    assert "dimensions" not in mock_client.embeddings.create.call_args.kwargs


@pytest.mark.asyncio
async def test_embed_raises_on_timeout() -> None:
    hook = RecordingMetricsHook()
    client = OpenAIEmbeddingsClient(
        api_key="fake", model="fake-model", max_attempts=1, metrics_hook=hook
    )

    mock_client = AsyncMock()
    mock_client.embeddings.create.side_effect = APITimeoutError(request=Mock())  # type: ignore[arg-type]
    client._client = mock_client

    with pytest.raises(APITimeoutError):
        await client.embed(["test"])
    assert hook.counters[names.EMBEDDINGS_ERRORS_TOTAL] == 1


@pytest.mark.asyncio
async def test_embed_retries_transient_errors() -> None:
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model")

    mock_client = AsyncMock()
    mock_client.embeddings.create.side_effect = [
        APITimeoutError(request=Mock()),  # type: ignore[arg-type]
        _mock_response(1),
    ]
    client._client = mock_client

    with patch("asyncio.sleep", new=AsyncMock()):
        embeddings = await client.embed(["test"])

    assert len(embeddings) == 1
    assert mock_client.embeddings.create.call_count == 2


@pytest.mark.asyncio
async def test_embed_raises_on_count_mismatch() -> None:
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model")

    mock_client = AsyncMock()
    mock_client.embeddings.create.return_value = _mock_response(1)
    client._client = mock_client

    with pytest.raises(InternalError, match="1 embeddings for 2 texts"):
        await client.embed(["a", "b"])


@pytest.mark.asyncio
async def test_embed_with_empty_input() -> None:
    """Test that empty input list returns empty embeddings list."""
    client = OpenAIEmbeddingsClient(api_key="fake", model="fake-model")

    mock_client = AsyncMock()
    client._client = mock_client

    embeddings = await client.embed([])

    assert embeddings == []
    mock_client.embeddings.create.assert_not_called()
