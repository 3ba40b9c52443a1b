"""Amazon Bedrock embedding strategy."""

import json

import boto3
import botocore

from media_catalog.config.embedding.models import EmbeddingConfig
from media_catalog.config.settings import get_settings
from media_catalog.services.embedder.base import BaseEmbeddingStrategy


class BedrockEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Amazon Bedrock Titan embeddings. Titan v2 accepts a requested dimension (256, 512 or 1024).
    Uses IAM credentials (profile/env/instance). Region from config.region or settings.aws_region.
    """

    @property
    def strategy_name(self) -> str:
        return "bedrock"

    def _request_body(self, text: str, config: EmbeddingConfig) -> str:
        body: dict = {"inputText": text}
        if "titan-embed-text-v2" in config.model:
            body["dimensions"] = config.dimension
        return json.dumps(body)

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        if not texts:
            return []
        region = config.region or get_settings().aws_region or None
        client = boto3.client("bedrock-runtime", region_name=region)
        results: list[list[float]] = []
        for text in texts:
            try:
                response = client.invoke_model(
                    modelId=config.model,
                    contentType="application/json",
                    accept="application/json",
                    body=self._request_body(text, config),
                )
            except botocore.exceptions.ClientError as e:
                raise ValueError(f"Bedrock invoke_model failed: {e}") from e
            payload = json.loads(response["body"].read().decode("utf-8"))
            emb = payload.get("embedding")
            if emb is None:
                by_type = payload.get("embeddingsByType") or {}
                emb = by_type.get("float") or (list(by_type.values())[0] if by_type else None)
            if not emb:
                raise ValueError("Bedrock response contained no embedding")
            results.append([float(x) for x in emb])
        return results
