"""Query parameter models for asking questions about an indexed codebase."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config.settings import DEFAULT_TOP_K


class AskParams(BaseModel):
    """Parameters for a retrieval query.

    Attributes:
        query: Natural-language question
        top_k: Number of nearest chunks to retrieve (1-100)
    """

    query: str = Field(..., description="Natural-language question about the codebase")
    top_k: int = Field(
        default=DEFAULT_TOP_K, ge=1, le=100, description="Number of chunks to retrieve"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "query": "Where is the release version persisted?",
                "top_k": 5,
            }
        }
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Reject blank queries and strip surrounding whitespace.

        Raises:
            ValueError: If query is empty
        """
        if not v or len(v.strip()) == 0:
            raise ValueError("Query cannot be empty")
        return v.strip()
