import json
from typing import List

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import Embedder, EmbeddingError
from ..utils.debug import DebugLogger


class BedrockEmbedder(Embedder):
    def __init__(self, model_id: str, region: str, dimension: int = 1024):
        self.client = boto3.client('bedrock-runtime', region_name=region)
        self.model_id = model_id
        self._dimension = dimension

    def embed(self, text: str) -> List[float]:
        # Amazon Titan Embed Text v2 request body
        request_body = {
            "inputText": text,
            "dimensions": self._dimension,
        }

        request_id = None
        if DebugLogger.is_enabled():
            request_id = DebugLogger.log_request("bedrock", {
                "modelId": self.model_id,
                "body": request_body
            })

        try:
            response = self.client.invoke_model(
                modelId=self.model_id,
                body=json.dumps(request_body)
            )
            response_body = json.loads(response['body'].read())
        except (ClientError, BotoCoreError) as e:
            raise EmbeddingError(f"Bedrock embedding request failed: {e}", "bedrock") from e

        embedding = response_body.get('embedding')
        if not embedding:
            raise EmbeddingError("Bedrock response contained no embedding", "bedrock")

        if DebugLogger.is_enabled():
            DebugLogger.log_response("bedrock", {
                "embedding_dimension": len(embedding),
                "model_id": self.model_id,
                "input_token_count": response_body.get('inputTextTokenCount'),
            }, request_id)

        return embedding

    @property
    def dimension(self) -> int:
        return self._dimension
