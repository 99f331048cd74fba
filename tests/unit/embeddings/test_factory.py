# tests/unit/embeddings/test_factory.py

from unittest.mock import patch

import pytest

from vector_kit.embeddings import EmbeddingsConfig, create_embeddings_client
from vector_kit.embeddings.local import LocalEmbeddingsClient
from vector_kit.embeddings.openai import OpenAIEmbeddingsClient


class TestFactory:
    def test_create_openai_client(self) -> None:
        with patch("vector_kit.embeddings.openai.AsyncOpenAI") as mock_openai:
            config = EmbeddingsConfig(
                provider="openai",
                model="text-embedding-3-small",
                api_key="my-key",
                timeout=12.0,
                dimensions=256,
            )
            client = create_embeddings_client(config)

            assert isinstance(client, OpenAIEmbeddingsClient)
            assert client._dimensions == 256
            mock_openai.assert_called_once_with(api_key="my-key", timeout=12.0)

    def test_create_local_client(self) -> None:
        with patch("vector_kit.embeddings.local.SentenceTransformer"):
            config = EmbeddingsConfig(
                provider="local", model="all-MiniLM-L6-v2", batch_size=8, normalize=True
            )
            client = create_embeddings_client(config)

            assert isinstance(client, LocalEmbeddingsClient)
            assert client._batch_size == 8
            assert client._normalize is True

    def test_unknown_provider_raises(self) -> None:
        config = EmbeddingsConfig(provider="unknown", model="model")  # type: ignore
        with pytest.raises(ValueError, match="Unknown embeddings provider"):
            create_embeddings_client(config)


class TestEmbeddingsConfig:
    def test_invalid_batch_size(self) -> None:
        with pytest.raises(ValueError, match="batch_size"):
            EmbeddingsConfig(provider="openai", model="m", batch_size=0)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VECTOR_KIT_EMBEDDINGS_PROVIDER", "local")
        monkeypatch.setenv("VECTOR_KIT_EMBEDDINGS_MODEL", "all-MiniLM-L6-v2")
        monkeypatch.setenv("VECTOR_KIT_EMBEDDINGS_BATCH_SIZE", "16")
        monkeypatch.setenv("VECTOR_KIT_EMBEDDINGS_DIMENSIONS", "384")

        config = EmbeddingsConfig.from_env()

        assert config.provider == "local"
        assert config.model == "all-MiniLM-L6-v2"
        assert config.batch_size == 16
        assert config.dimensions == 384
